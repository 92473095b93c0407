"""
SQLite実装の永続化層

呼び出しごとに接続を開き、ブロッキングI/Oは asyncio.to_thread で
イベントループの外に逃がす。
"""

from __future__ import annotations

import asyncio
import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .base import Row, Search
from .errors import INTEGRITY_VIOLATION, UNIQUE_VIOLATION, PersistenceError
from .schema import CREATE_TABLES_SQL, check_columns, get_pragma_settings

logger = logging.getLogger(__name__)

SQLITE_MAX_INT = 2**63 - 1
SQLITE_MIN_INT = -(2**63)


class SQLiteDatabase:
    """SQLiteベースのDatabase実装。"""

    def __init__(self, db_path: Optional[Path] = None):
        root = Path(__file__).resolve().parents[2]
        default_path = root / "data" / "task_tracker.db"
        env_path = os.getenv("TASK_TRACKER_DB_PATH")
        if db_path:
            self.db_path = Path(db_path)
        elif env_path:
            self.db_path = Path(env_path)
        else:
            self.db_path = default_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        # LOWER はASCIIしか畳まないので、検索用にPythonのcasefoldを登録する
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        for pragma in get_pragma_settings():
            conn.execute(pragma)
        return conn

    def _initialize(self) -> None:
        with self._session() as conn:
            conn.executescript(CREATE_TABLES_SQL)
        logger.info("Database initialized: %s", self.db_path)

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        """コミット・クローズとエラー変換をまとめて行う"""
        conn = self._connect()
        try:
            with conn:
                yield conn
        except sqlite3.IntegrityError as exc:
            code = UNIQUE_VIOLATION if "UNIQUE constraint failed" in str(exc) else INTEGRITY_VIOLATION
            raise PersistenceError(code, str(exc)) from exc
        except sqlite3.Error as exc:
            code = getattr(exc, "sqlite_errorname", None) or type(exc).__name__
            raise PersistenceError(code, str(exc)) from exc
        finally:
            conn.close()

    @staticmethod
    def _where_clause(where: Row, search: Optional[Search] = None) -> Tuple[str, list]:
        clauses = [f"{column} = ?" for column in where]
        params: list = list(where.values())
        if search is not None:
            pattern = "%" + _escape_like(search.term.casefold()) + "%"
            clauses.append(
                "("
                + " OR ".join(f"casefold({column}) LIKE ? ESCAPE '\\'" for column in search.columns)
                + ")"
            )
            params.extend(pattern for _ in search.columns)
        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    # ---- 同期実装 ----

    def _insert(self, table: str, values: Row) -> Row:
        check_columns(table, values)
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        with self._session() as conn:
            cursor = conn.execute(
                f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
                list(values.values()),
            )
            row = conn.execute(
                f"SELECT * FROM {table} WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
        return dict(row)

    def _find(self, table: str, where: Row, search: Optional[Search], limit: Optional[int]) -> List[Row]:
        check_columns(table, where)
        if search is not None:
            check_columns(table, search.columns)
        if _out_of_range(where):
            return []
        clause, params = self._where_clause(where, search)
        sql = f"SELECT * FROM {table}{clause} ORDER BY id ASC"
        if limit is not None:
            sql += f" LIMIT {int(limit)}"
        with self._session() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [dict(row) for row in rows]

    def _update(self, table: str, where: Row, values: Row) -> int:
        check_columns(table, where)
        _require_predicate(table, where)
        check_columns(table, values)
        if not values or _out_of_range(where):
            return 0
        assignments = ", ".join(f"{column} = ?" for column in values)
        clause, params = self._where_clause(where)
        with self._session() as conn:
            cursor = conn.execute(
                f"UPDATE {table} SET {assignments}{clause}",
                list(values.values()) + params,
            )
            return cursor.rowcount

    def _delete(self, table: str, where: Row) -> int:
        check_columns(table, where)
        _require_predicate(table, where)
        if _out_of_range(where):
            return 0
        clause, params = self._where_clause(where)
        with self._session() as conn:
            cursor = conn.execute(f"DELETE FROM {table}{clause}", params)
            return cursor.rowcount

    # ---- Database プロトコル ----

    async def insert(self, table: str, values: Row) -> Row:
        return await asyncio.to_thread(self._insert, table, values)

    async def find_one(self, table: str, where: Row) -> Optional[Row]:
        rows = await asyncio.to_thread(self._find, table, where, None, 1)
        return rows[0] if rows else None

    async def find(self, table: str, where: Row, search: Optional[Search] = None) -> List[Row]:
        return await asyncio.to_thread(self._find, table, where, search, None)

    async def update(self, table: str, where: Row, values: Row) -> int:
        return await asyncio.to_thread(self._update, table, where, values)

    async def delete(self, table: str, where: Row) -> int:
        return await asyncio.to_thread(self._delete, table, where)


def _out_of_range(where: Row) -> bool:
    """64bit INTEGERに収まらない整数はどの行にも一致しない"""
    return any(
        isinstance(value, int) and not SQLITE_MIN_INT <= value <= SQLITE_MAX_INT
        for value in where.values()
    )


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _require_predicate(table: str, where: Row) -> None:
    if not where:
        raise ValueError(f"Refusing unscoped write on {table}")
