"""JWTアクセストークンの発行と検証（PyJWT）"""

from __future__ import annotations

import time

import jwt

from src.task_tracker.exceptions import AuthenticationError


class TokenIssuer:
    """{"username": ...} を載せた署名付きトークンを扱う。"""

    def __init__(self, secret: str, expires_in: int = 3600, algorithm: str = "HS256"):
        self.secret = secret
        self.expires_in = expires_in
        self.algorithm = algorithm

    def issue(self, username: str) -> str:
        now = int(time.time())
        payload = {"username": username, "iat": now, "exp": now + self.expires_in}
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> str:
        """トークンを検証してユーザー名を返す

        Raises:
            AuthenticationError: 期限切れ・署名不正・username欠落
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc

        username = payload.get("username")
        if not isinstance(username, str) or not username:
            raise AuthenticationError("Invalid token")
        return username
