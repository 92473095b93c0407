"""Task endpoints. Every route acts on the authenticated user's tasks only."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query

from src.auth import User
from src.task_tracker.exceptions import InternalError, NotFoundError
from src.tasks import TaskDraft, TaskFilter, TaskStatus

from ..dependencies import get_current_user, get_task_service, serialize_task
from ..schemas import DeleteResponse, TaskCreateRequest, TaskResponse, TaskStatusUpdateRequest

logger = logging.getLogger(__name__)


def register_task_routes(app: FastAPI) -> None:
    """Register task CRUD endpoints."""

    @app.get("/tasks", response_model=List[TaskResponse])
    async def list_tasks(
        status: Optional[TaskStatus] = None,
        search: Optional[str] = Query(default=None, min_length=1),
        user: User = Depends(get_current_user),
    ) -> List[TaskResponse]:
        """List the user's tasks, optionally filtered by status and search text."""
        service = get_task_service()
        try:
            tasks = await service.get_tasks(TaskFilter(status=status, search=search), user)
            return [serialize_task(task) for task in tasks]
        except InternalError as exc:
            logger.exception("Failed to list tasks: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to list tasks") from exc

    @app.get("/tasks/{task_id}", response_model=TaskResponse)
    async def get_task(task_id: int, user: User = Depends(get_current_user)) -> TaskResponse:
        """Fetch one task by id."""
        service = get_task_service()
        try:
            task = await service.get_task_by_id(task_id, user)
            return serialize_task(task)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.post("/tasks", status_code=201, response_model=TaskResponse)
    async def create_task(
        request: TaskCreateRequest, user: User = Depends(get_current_user)
    ) -> TaskResponse:
        """Create a new task in OPEN status."""
        service = get_task_service()
        try:
            task = await service.create_task(
                TaskDraft(title=request.title, description=request.description), user
            )
            return serialize_task(task)
        except InternalError as exc:
            logger.exception("Failed to create task: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to create task") from exc

    @app.delete("/tasks/{task_id}", response_model=DeleteResponse)
    async def delete_task(task_id: int, user: User = Depends(get_current_user)) -> DeleteResponse:
        """Delete a task."""
        service = get_task_service()
        try:
            await service.delete_task(task_id, user)
            return DeleteResponse(deleted=True)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.patch("/tasks/{task_id}/status", response_model=TaskResponse)
    async def update_task_status(
        task_id: int,
        request: TaskStatusUpdateRequest,
        user: User = Depends(get_current_user),
    ) -> TaskResponse:
        """Move a task to another status."""
        service = get_task_service()
        try:
            task = await service.update_task_status(task_id, request.status, user)
            return serialize_task(task)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
