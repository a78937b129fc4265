# =============================================================================
# app/routers/tasks.py - Task Status Endpoints
# =============================================================================
# Poll background tasks (taste updates queued by likes).
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()

_STATE_MESSAGES = {
    "PENDING": "Waiting in queue...",
    "STARTED": "Starting...",
    "SUCCESS": "Complete",
    "FAILURE": "Failed",
    "RETRY": "Retrying...",
}


class TaskStatusResponse(BaseModel):
    task_id: str
    status: str
    message: str | None = None
    result: dict | None = None
    error: str | None = None


@router.get("/{task_id}", response_model=TaskStatusResponse)
async def get_task_status(
    task_id: Annotated[str, Path(description="Celery task ID")]
):
    """
    Status of a background task.

    SUCCESS includes the task's result dict; a task that handled its own
    error still succeeds with {"success": false, "error": ...}. FAILURE
    includes the exception message.
    """
    try:
        from workers.celery_app import celery_app

        result = celery_app.AsyncResult(task_id)
        response = TaskStatusResponse(
            task_id=task_id,
            status=result.status,
            message=_STATE_MESSAGES.get(result.status),
        )

        if result.status == "SUCCESS" and isinstance(result.result, dict):
            response.result = result.result
        elif result.status == "FAILURE":
            response.error = str(result.result) if result.result else "Unknown error"

        return response

    except Exception as e:
        logger.error(f"Error getting task status: {e}")
        raise HTTPException(status_code=503, detail=f"Failed to get task status. Is Redis running? Error: {e}")
