from __future__ import annotations

import logging
from dataclasses import asdict
from typing import List, Optional

from src.auth.models import User
from src.database import Database, PersistenceError, Search
from src.task_tracker.exceptions import InternalError

from .models import Task, TaskDraft, TaskFilter, TaskStatus

logger = logging.getLogger(__name__)

TASKS = "tasks"
SEARCH_COLUMNS = ("title", "description")


class TaskRepository:
    """tasksテーブルを所有するストア。すべての操作を所有ユーザーでスコープする。"""

    def __init__(self, database: Database):
        self.database = database

    @staticmethod
    def _row_to_task(row: dict) -> Task:
        return Task(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            status=TaskStatus(row["status"]),
            user_id=row["user_id"],
        )

    async def get_tasks(self, task_filter: TaskFilter, user: User) -> List[Task]:
        where: dict = {"user_id": user.id}
        if task_filter.status is not None:
            where["status"] = TaskStatus(task_filter.status).value
        search = Search(task_filter.search, SEARCH_COLUMNS) if task_filter.search else None

        try:
            rows = await self.database.find(TASKS, where, search)
        except PersistenceError as exc:
            logger.error(
                'Failed to get tasks for user "%s", filters: %s',
                user.username,
                asdict(task_filter),
                exc_info=True,
            )
            raise InternalError("Failed to get tasks") from exc
        return [self._row_to_task(row) for row in rows]

    async def find_one(self, task_id: int, user: User) -> Optional[Task]:
        row = await self.database.find_one(TASKS, {"id": task_id, "user_id": user.id})
        return self._row_to_task(row) if row else None

    async def create_task(self, draft: TaskDraft, user: User) -> Task:
        try:
            row = await self.database.insert(
                TASKS,
                {
                    "title": draft.title,
                    "description": draft.description,
                    "status": TaskStatus.OPEN.value,
                    "user_id": user.id,
                },
            )
        except PersistenceError as exc:
            logger.error(
                'Failed to create a task for user "%s", data: %s',
                user.username,
                asdict(draft),
                exc_info=True,
            )
            raise InternalError("Failed to create task") from exc
        return self._row_to_task(row)

    async def save(self, task: Task) -> Task:
        """タスクの可変フィールドを書き戻す"""
        await self.database.update(
            TASKS,
            {"id": task.id, "user_id": task.user_id},
            {
                "title": task.title,
                "description": task.description,
                "status": TaskStatus(task.status).value,
            },
        )
        return task

    async def delete(self, task_id: int, user: User) -> int:
        """削除件数（0または1）を返す"""
        return await self.database.delete(TASKS, {"id": task_id, "user_id": user.id})
