# =============================================================================
# workers/config.py - Celery Worker Configuration
# =============================================================================
# Settings specific to Celery workers and the beat scheduler.
# =============================================================================

from celery.schedules import crontab

from app.config import settings


class CeleryConfig:
    """
    Celery configuration settings.

    These are applied to the Celery app via app.config_from_object().
    """

    # -------------------------------------------------------------------------
    # Broker Settings (Redis)
    # -------------------------------------------------------------------------

    broker_url = settings.REDIS_URL
    result_backend = settings.REDIS_URL

    # -------------------------------------------------------------------------
    # Task Settings
    # -------------------------------------------------------------------------

    # Run tasks inline (tests, local runs without a worker)
    task_always_eager = settings.CELERY_TASK_ALWAYS_EAGER
    task_eager_propagates = True

    # Acknowledge tasks after they complete (not before)
    task_acks_late = True

    # Only prefetch one task at a time
    worker_prefetch_multiplier = 1

    # Fixed-size worker pool for async tasks
    worker_concurrency = settings.CELERY_WORKER_CONCURRENCY

    # Task results expire after 1 hour
    result_expires = 3600

    # Default task timeout (5 minutes), soft timeout (4 minutes)
    task_time_limit = 300
    task_soft_time_limit = 240

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]

    # -------------------------------------------------------------------------
    # Task Routing
    # -------------------------------------------------------------------------

    task_queues = {
        "default": {
            "exchange": "default",
            "routing_key": "default",
        },
        "notifications": {
            "exchange": "notifications",
            "routing_key": "notifications",
        },
    }

    task_routes = {
        "workers.tasks.send_welcome_email": {"queue": "notifications"},
    }

    task_default_queue = "default"

    # -------------------------------------------------------------------------
    # Scheduled Tasks (celery beat)
    # -------------------------------------------------------------------------

    beat_schedule = {
        "report-current-time": {
            "task": "workers.tasks.report_current_time",
            "schedule": settings.SCHEDULER_REPORT_INTERVAL_SECONDS,
        },
        "log-book-inventory": {
            "task": "workers.tasks.log_book_inventory",
            "schedule": crontab(minute="*"),
        },
        "evict-all-caches": {
            "task": "workers.tasks.evict_all_caches",
            "schedule": crontab(minute=0, hour=0),
        },
    }

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    worker_send_task_events = True
    task_send_sent_event = True

    # -------------------------------------------------------------------------
    # Timezone
    # -------------------------------------------------------------------------

    timezone = "UTC"
    enable_utc = True
