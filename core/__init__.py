# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the domain logic:
# - database/: SQLModel engine, sessions and table entities
# - models/: Pydantic schemas for request/response validation
# - repositories/: Data access for books, users and roles
# - services/: Product, todo, book and auth services
#
# Code in this package should NOT import from Celery.
# Background jobs are queued through workers/ with lazy imports.
# =============================================================================
