# =============================================================================
# app/routers/tasks.py - Task Status Endpoints
# =============================================================================
# Provides endpoints for checking background task status and results.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, status
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class TaskStatusResponse(BaseModel):
    """Response model for task status."""
    task_id: str
    status: str
    progress: int | None = None
    message: str | None = None
    result: dict | str | None = None
    error: str | None = None


class TaskSubmitResponse(BaseModel):
    """Response model for task submission."""
    task_id: str
    status: str
    message: str


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/healthcheck", response_model=TaskSubmitResponse, status_code=status.HTTP_202_ACCEPTED)
def submit_healthcheck():
    """
    Queue the worker healthcheck task.

    Poll GET /api/tasks/{task_id} to see whether a worker picked it up.
    """
    from workers.celery_app import healthcheck

    try:
        result = healthcheck.delay()
    except Exception as e:
        logger.error(f"Could not queue healthcheck: {e}")
        raise HTTPException(status_code=503, detail=f"Task broker unavailable: {e}")

    return TaskSubmitResponse(
        task_id=result.id,
        status=result.status,
        message="Healthcheck queued",
    )


@router.get("/{task_id}", response_model=TaskStatusResponse)
def get_task_status(
    task_id: Annotated[str, Path(description="Celery task ID")]
):
    """
    Get the status of a background task.

    Returns the current state of the task:
    - PENDING: Task is waiting in queue (or unknown)
    - STARTED: Task has been picked up by a worker
    - SUCCESS: Task completed successfully
    - FAILURE: Task failed
    """
    try:
        from workers.celery_app import celery_app

        result = celery_app.AsyncResult(task_id)

        response = TaskStatusResponse(
            task_id=task_id,
            status=result.status,
        )

        if result.status == "SUCCESS":
            response.result = result.result
            response.progress = 100
            response.message = "Complete"

        elif result.status == "FAILURE":
            response.error = str(result.result) if result.result else "Unknown error"
            response.message = "Failed"

        elif result.status == "PENDING":
            response.progress = 0
            response.message = "Waiting in queue..."

        elif result.status == "STARTED":
            response.progress = 0
            response.message = "Starting..."

        return response

    except Exception as e:
        logger.error(f"Error getting task status: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to get task status: {e}")


@router.get("/{task_id}/result")
def get_task_result(
    task_id: Annotated[str, Path(description="Celery task ID")]
):
    """
    Get the result of a completed task.

    Returns 409 while the task has not finished successfully.
    """
    from workers.celery_app import celery_app

    try:
        result = celery_app.AsyncResult(task_id)
        task_status = result.status
    except Exception as e:
        logger.error(f"Error getting task result: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to get task result: {e}")

    if task_status != "SUCCESS":
        raise HTTPException(
            status_code=409,
            detail=f"Task {task_id} is not complete (status: {task_status})",
        )

    return {"task_id": task_id, "status": task_status, "result": result.result}
