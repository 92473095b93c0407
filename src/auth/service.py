from __future__ import annotations

import logging

from src.task_tracker.exceptions import AuthenticationError

from .models import User
from .repository import UserRepository
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)


class AuthService:
    """サインアップ・サインイン・トークンからのユーザー解決"""

    def __init__(self, users: UserRepository, tokens: TokenIssuer):
        self.users = users
        self.tokens = tokens

    async def sign_up(self, username: str, password: str) -> None:
        await self.users.sign_up(username, password)

    async def sign_in(self, username: str, password: str) -> str:
        """認証に成功したらアクセストークンを返す"""
        validated = await self.users.validate_password(username, password)
        if validated is None:
            logger.warning("Failed sign-in attempt for %s", username)
            raise AuthenticationError("Invalid credentials")

        access_token = self.tokens.issue(validated)
        logger.debug("Generated JWT token with payload %s", {"username": validated})
        return access_token

    async def authenticate(self, token: str) -> User:
        username = self.tokens.decode(token)
        user = await self.users.get_by_username(username)
        if user is None:
            raise AuthenticationError("Unknown user")
        return user
