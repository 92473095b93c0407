"""Task management shared by the HTTP layer and tests."""

from .models import Task, TaskDraft, TaskFilter, TaskStatus
from .repository import TaskRepository
from .service import TaskService

__all__ = ["Task", "TaskDraft", "TaskFilter", "TaskStatus", "TaskRepository", "TaskService"]
