from __future__ import annotations

import pytest

from src.auth import PasswordHasher
from src.database import MemoryDatabase, SQLiteDatabase


@pytest.fixture
def hasher():
    """テスト用の低コストbcrypt"""
    return PasswordHasher(rounds=4)


@pytest.fixture(params=["memory", "sqlite"])
def database(request, tmp_path):
    """両バックエンドで同じテストを実行する"""
    if request.param == "memory":
        return MemoryDatabase()
    return SQLiteDatabase(db_path=tmp_path / "test_task_tracker.db")
