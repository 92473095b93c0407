"""永続化インターフェース

ストア（UserRepository / TaskRepository）はこのプロトコルだけに依存する。
実装: SQLiteDatabase（sqlite.py）、MemoryDatabase（memory.py）
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

Row = Dict[str, Any]


@dataclass(frozen=True)
class Search:
    """大文字小文字を区別しない部分一致検索。columnsのいずれかに一致すればよい。"""

    term: str
    columns: Sequence[str]


class Database(Protocol):
    """行単位の作成・検索・更新・削除。失敗時はPersistenceErrorを送出する。"""

    async def insert(self, table: str, values: Row) -> Row: ...

    async def find_one(self, table: str, where: Row) -> Optional[Row]: ...

    async def find(
        self, table: str, where: Row, search: Optional[Search] = None
    ) -> List[Row]: ...

    async def update(self, table: str, where: Row, values: Row) -> int: ...

    async def delete(self, table: str, where: Row) -> int: ...
