"""インメモリ実装の永続化層（テスト・開発用）"""

from __future__ import annotations

import itertools
from typing import Dict, List, Optional

from .base import Row, Search
from .errors import UNIQUE_VIOLATION, PersistenceError
from .schema import TABLES, UNIQUE_COLUMNS, check_columns


class MemoryDatabase:
    """プロセス内dictに行を保持するDatabase実装。

    一意制約はSQLite実装と同じコード（23505）で報告する。
    返す行はコピーなので、呼び出し側の変更はストアに影響しない。
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[int, Row]] = {name: {} for name in TABLES}
        self._ids = {name: itertools.count(1) for name in TABLES}

    @staticmethod
    def _matches(row: Row, where: Row, search: Optional[Search] = None) -> bool:
        if any(row.get(column) != value for column, value in where.items()):
            return False
        if search is not None:
            term = search.term.casefold()
            return any(term in str(row.get(column) or "").casefold() for column in search.columns)
        return True

    async def insert(self, table: str, values: Row) -> Row:
        check_columns(table, values)
        rows = self._tables[table]
        for column in UNIQUE_COLUMNS[table]:
            if column in values and any(row[column] == values[column] for row in rows.values()):
                raise PersistenceError(
                    UNIQUE_VIOLATION, f"duplicate key value violates unique constraint: {table}.{column}"
                )
        row = {column: None for column in TABLES[table]}
        row.update(values)
        row["id"] = next(self._ids[table])
        rows[row["id"]] = row
        return dict(row)

    async def find_one(self, table: str, where: Row) -> Optional[Row]:
        rows = await self.find(table, where)
        return rows[0] if rows else None

    async def find(self, table: str, where: Row, search: Optional[Search] = None) -> List[Row]:
        check_columns(table, where)
        if search is not None:
            check_columns(table, search.columns)
        return [
            dict(row)
            for _, row in sorted(self._tables[table].items())
            if self._matches(row, where, search)
        ]

    async def update(self, table: str, where: Row, values: Row) -> int:
        check_columns(table, where)
        check_columns(table, values)
        if not where:
            raise ValueError(f"Refusing unscoped write on {table}")
        affected = 0
        for row in self._tables[table].values():
            if self._matches(row, where):
                row.update(values)
                affected += 1
        return affected

    async def delete(self, table: str, where: Row) -> int:
        check_columns(table, where)
        if not where:
            raise ValueError(f"Refusing unscoped write on {table}")
        rows = self._tables[table]
        doomed = [row_id for row_id, row in rows.items() if self._matches(row, where)]
        for row_id in doomed:
            del rows[row_id]
        return len(doomed)
