"""Relational persistence for the task tracker."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .base import Database, Row, Search
from .errors import UNIQUE_VIOLATION, PersistenceError
from .memory import MemoryDatabase
from .sqlite import SQLiteDatabase

__all__ = [
    "Database",
    "Row",
    "Search",
    "PersistenceError",
    "UNIQUE_VIOLATION",
    "MemoryDatabase",
    "SQLiteDatabase",
    "create_database",
]


def create_database(backend: str = "sqlite", path: Optional[str] = None) -> Database:
    """
    設定値からDatabase実装を作成するファクトリー関数

    Args:
        backend: "sqlite" または "memory"
        path: SQLiteファイルのパス（memoryでは無視）

    Raises:
        ValueError: 未知のbackendが指定された場合
    """
    if backend == "sqlite":
        return SQLiteDatabase(db_path=Path(path) if path else None)
    if backend == "memory":
        return MemoryDatabase()
    raise ValueError(f"Unknown database backend: {backend}")
