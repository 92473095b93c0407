from __future__ import annotations

import logging
from typing import List

from src.auth.models import User
from src.task_tracker.exceptions import NotFoundError

from .models import Task, TaskDraft, TaskFilter, TaskStatus
from .repository import TaskRepository

logger = logging.getLogger(__name__)


class TaskService:
    """認証済みユーザーに代わってTaskRepositoryを操作する。"""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    async def get_tasks(self, task_filter: TaskFilter, user: User) -> List[Task]:
        return await self.repository.get_tasks(task_filter, user)

    async def get_task_by_id(self, task_id: int, user: User) -> Task:
        task = await self.repository.find_one(task_id, user)
        if task is None:
            raise NotFoundError(f'Task with ID "{task_id}" not found')
        return task

    async def create_task(self, draft: TaskDraft, user: User) -> Task:
        return await self.repository.create_task(draft, user)

    async def delete_task(self, task_id: int, user: User) -> None:
        affected = await self.repository.delete(task_id, user)
        if affected == 0:
            raise NotFoundError(f'Task with ID "{task_id}" not found')

    async def update_task_status(self, task_id: int, status: TaskStatus, user: User) -> Task:
        task = await self.get_task_by_id(task_id, user)
        task.status = TaskStatus(status)
        await self.repository.save(task)
        logger.debug("Task %s of %s moved to %s", task_id, user.username, task.status.value)
        return task
