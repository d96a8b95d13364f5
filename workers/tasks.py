# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Async tasks (queued by the API with .delay()):
# - send_welcome_email: Greet a newly registered user
#
# Scheduled tasks (run by celery beat, see workers/config.py):
# - report_current_time: Log the time and push it to the "system" topic
# - log_book_inventory: Log how many books are stored
# - evict_all_caches: Drop cached book reads
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from celery import shared_task

logger = logging.getLogger(__name__)


# =============================================================================
# Async Tasks
# =============================================================================

@shared_task(bind=True, name="workers.tasks.send_welcome_email")
def send_welcome_email(self, user_id: int, username: str, email: str) -> dict[str, Any]:
    """
    Send the welcome email for a new account.

    The demo has no mail server; the email is written to the log.

    Args:
        user_id: Id of the new user
        username: Username to greet
        email: Recipient address

    Returns:
        Dict with recipient and subject
    """
    subject = f"Welcome to the Demo Project, {username}!"
    logger.info(f"Sending welcome email to {email} (user {user_id}): {subject}")

    return {
        "success": True,
        "user_id": user_id,
        "to": email,
        "subject": subject,
    }


# =============================================================================
# Scheduled Tasks
# =============================================================================

@shared_task(bind=True, name="workers.tasks.report_current_time")
def report_current_time(self) -> dict[str, Any]:
    """
    Log the current time and broadcast it to WebSocket subscribers.
    """
    from app.websocket.broadcast import publish_server_time

    now = datetime.now(timezone.utc).isoformat()
    logger.info(f"The time is now {now}")

    published = publish_server_time(now)
    return {"timestamp": now, "published": published}


@shared_task(bind=True, name="workers.tasks.log_book_inventory")
def log_book_inventory(self) -> dict[str, Any]:
    """
    Count stored books and log the figure.
    """
    from core.database import session_scope
    from core.repositories import BookRepository

    with session_scope() as session:
        total = BookRepository(session).count()

    logger.info(f"Book inventory: {total} books")
    return {"books_total": total}


@shared_task(bind=True, name="workers.tasks.evict_all_caches")
def evict_all_caches(self) -> dict[str, Any]:
    """
    Drop every cached book entry.
    """
    from core.services.book_service import BOOK_LISTS_CACHE, BOOKS_CACHE
    from lib.cache import evict

    removed = evict(BOOKS_CACHE, BOOK_LISTS_CACHE)
    logger.info(f"Evicted {removed} cache entries")
    return {"evicted": removed}
