"""永続化層のエラー定義"""

from __future__ import annotations

# SQLSTATE unique_violation
UNIQUE_VIOLATION = "23505"
# SQLSTATE integrity_constraint_violation（一意制約以外）
INTEGRITY_VIOLATION = "23000"


class PersistenceError(Exception):
    """ストアが報告したエラー。codeで一意制約違反とそれ以外を区別する。"""

    def __init__(self, code: str, message: str = "") -> None:
        super().__init__(message or code)
        self.code = code

    @property
    def is_unique_violation(self) -> bool:
        return self.code == UNIQUE_VIOLATION
