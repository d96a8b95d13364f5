# =============================================================================
# workers/celery_app.py - Celery Application Configuration
# =============================================================================
# This module creates and configures the Celery application instance.
#
# Usage:
#   # Start worker (async tasks)
#   celery -A workers.celery_app worker --loglevel=info
#
#   # Start scheduler (periodic tasks)
#   celery -A workers.celery_app beat --loglevel=info
#
#   # Check status
#   celery -A workers.celery_app status
# =============================================================================

import logging
import time

from celery import Celery
from celery.signals import task_failure, task_postrun, task_prerun, worker_ready
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from app.config import settings  # noqa: E402

# Set up logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _redacted(url: str) -> str:
    return url.split("@")[-1] if "@" in url else url


def create_celery_app() -> Celery:
    """
    Create and configure Celery application.

    Returns:
        Configured Celery app instance
    """
    app = Celery(
        "demo_project_worker",
        broker=settings.REDIS_URL,
        backend=settings.REDIS_URL,
        include=["workers.tasks"],  # Auto-discover tasks
    )

    # Load configuration (includes the beat schedule)
    app.config_from_object("workers.config:CeleryConfig")

    logger.info(f"Celery app created with broker: {_redacted(settings.REDIS_URL)}")

    return app


# Create the Celery app instance
celery_app = create_celery_app()


@celery_app.task(bind=True, name="workers.healthcheck")
def healthcheck(self):
    """
    Simple healthcheck task to verify worker is running.

    Usage:
        from workers.celery_app import healthcheck
        result = healthcheck.delay()
        print(result.get(timeout=5))  # Should return "OK"
    """
    return "OK"


# =============================================================================
# Celery Signals (Lifecycle Hooks)
# =============================================================================

# task_id -> monotonic start time, for duration logging
_task_started_at: dict[str, float] = {}


@worker_ready.connect
def worker_ready_handler(sender=None, **extra):
    """Log the pool size and the periodic jobs this deployment schedules."""
    jobs = ", ".join(sorted(celery_app.conf.beat_schedule))
    logger.info(f"Worker ready (concurrency={celery_app.conf.worker_concurrency}); beat jobs: {jobs}")


@task_prerun.connect
def task_prerun_handler(sender=None, task_id=None, task=None, **extra):
    _task_started_at[task_id] = time.monotonic()
    logger.info(f"Running {task.name} [{task_id}]")


@task_postrun.connect
def task_postrun_handler(sender=None, task_id=None, task=None, state=None, **extra):
    started = _task_started_at.pop(task_id, None)
    elapsed = f"{time.monotonic() - started:.3f}s" if started is not None else "n/a"
    logger.info(f"Finished {task.name} [{task_id}] in {elapsed} ({state})")


@task_failure.connect
def task_failure_handler(sender=None, task_id=None, exception=None, **extra):
    logger.error(f"{sender.name} [{task_id}] raised {type(exception).__name__}: {exception}")


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    celery_app.start()
