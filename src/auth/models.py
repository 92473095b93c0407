from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class User:
    """永続化済みユーザーの表現。作成後は変更しない。"""

    id: int
    username: str  # 大文字小文字を区別して一意
    password: str  # bcryptハッシュ（平文は保持しない）
    salt: str  # 作成時に一度だけ生成
