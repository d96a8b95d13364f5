# =============================================================================
# workers/ - Celery Background Task Workers
# =============================================================================
# This package contains the Celery configuration, task definitions and the
# periodic schedule.
#
# Components:
# - celery_app.py: Celery application configuration
# - tasks.py: Task definitions (welcome email, scheduled jobs)
# - config.py: Worker settings and beat schedule
#
# Usage:
#   # Start worker
#   celery -A workers.celery_app worker --loglevel=info
#
#   # Start scheduler
#   celery -A workers.celery_app beat --loglevel=info
#
#   # Submit task (from API)
#   from workers.tasks import send_welcome_email
#   result = send_welcome_email.delay(user_id, username, email)
# =============================================================================

from .celery_app import celery_app
from . import tasks

__all__ = [
    "celery_app",
    "tasks",
]
