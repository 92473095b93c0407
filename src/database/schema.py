"""
SQLite database schema for task tracker.

users: 1 --- * tasks（tasks.user_idで所有者をスコープ）
"""

from typing import Dict, Tuple

CREATE_TABLES_SQL = """
-- ========================================
-- users: アカウント（usernameは大文字小文字を区別して一意）
-- ========================================
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    salt TEXT NOT NULL
);

-- ========================================
-- tasks: ユーザーごとのタスク
-- ========================================
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    status TEXT NOT NULL CHECK (status IN ('OPEN','IN_PROGRESS','DONE')),
    user_id INTEGER NOT NULL,
    FOREIGN KEY(user_id) REFERENCES users(id)
);

CREATE INDEX IF NOT EXISTS idx_tasks_user ON tasks(user_id);
"""

# テーブルごとの列定義（識別子の許可リストを兼ねる）
TABLES: Dict[str, Tuple[str, ...]] = {
    "users": ("id", "username", "password", "salt"),
    "tasks": ("id", "title", "description", "status", "user_id"),
}

# 一意制約を持つ列
UNIQUE_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "users": ("username",),
    "tasks": (),
}


def get_pragma_settings() -> list[str]:
    """接続ごとに適用するPRAGMA"""
    return [
        "PRAGMA foreign_keys=ON",
    ]


def check_columns(table: str, columns) -> None:
    """未知のテーブル・列名を拒否する"""
    known = TABLES.get(table)
    if known is None:
        raise ValueError(f"Unknown table: {table}")
    unknown = [column for column in columns if column not in known]
    if unknown:
        raise ValueError(f"Unknown columns for {table}: {', '.join(unknown)}")
