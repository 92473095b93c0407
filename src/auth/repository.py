"""User Repository

ユーザーの作成（サインアップ）と認証情報の検証を提供する。
ユーザー名の一意性はストアの一意制約に委ねる。

Related Classes: User (models.py), PasswordHasher (hasher.py)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from src.database import Database, PersistenceError
from src.task_tracker.exceptions import ConflictError, InternalError

from .hasher import PasswordHasher
from .models import User

logger = logging.getLogger(__name__)

USERS = "users"


class UserRepository:
    """usersテーブルを所有するストア。"""

    def __init__(self, database: Database, hasher: Optional[PasswordHasher] = None):
        self.database = database
        self.hasher = hasher or PasswordHasher()

    @staticmethod
    def _row_to_user(row: dict) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            password=row["password"],
            salt=row["salt"],
        )

    async def sign_up(self, username: str, password: str) -> None:
        """新規ユーザーを作成

        Raises:
            ConflictError: ユーザー名が既に存在する場合
            InternalError: その他の永続化エラー
        """
        salt = self.hasher.gen_salt()
        password_hash = await asyncio.to_thread(self.hasher.hash, password, salt)
        try:
            await self.database.insert(
                USERS,
                {"username": username, "password": password_hash, "salt": salt},
            )
        except PersistenceError as exc:
            if exc.is_unique_violation:
                logger.info("Sign-up rejected, username already exists: %s", username)
                raise ConflictError("Username already exists") from exc
            logger.error("Sign-up failed for %s (code=%s): %s", username, exc.code, exc)
            raise InternalError("Failed to create user") from exc

    async def get_by_username(self, username: str) -> Optional[User]:
        row = await self.database.find_one(USERS, {"username": username})
        return self._row_to_user(row) if row else None

    async def validate_password(self, username: str, password: str) -> Optional[str]:
        """認証情報を検証し、成功時はユーザー名を返す

        ユーザーが存在しない場合はハッシュ計算を行わずにNoneを返す。
        「ユーザーなし」と「パスワード不一致」は区別しない。
        """
        user = await self.get_by_username(username)
        if user is None:
            return None
        valid = await asyncio.to_thread(self.hasher.verify, password, user.password, user.salt)
        return user.username if valid else None
