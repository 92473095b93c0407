from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    """タスクのステータス。遷移順序は強制しない。"""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


@dataclass(slots=True)
class Task:
    """永続化済みタスクの表現。"""

    id: int
    title: str
    description: str
    status: TaskStatus
    user_id: int  # 所有ユーザー（全クエリのスコープ）


@dataclass(slots=True)
class TaskDraft:
    """タスク作成時の入力"""

    title: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("Task title must not be empty")


@dataclass(slots=True)
class TaskFilter:
    """一覧取得の絞り込み条件。空なら所有タスクすべて。"""

    status: Optional[TaskStatus] = None
    search: Optional[str] = None
