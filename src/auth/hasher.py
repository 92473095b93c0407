"""パスワードのソルト付きハッシュ化と検証（bcrypt）"""

from __future__ import annotations

import hmac

import bcrypt


class PasswordHasher:
    """ユーザーごとのソルトでパスワードをハッシュ化する。

    同じ (plaintext, salt) からは常に同じハッシュが得られ、
    ソルトが異なれば同じ平文でも異なるハッシュになる。
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def gen_salt(self) -> str:
        return bcrypt.gensalt(rounds=self.rounds).decode("ascii")

    def hash(self, plaintext: str, salt: str) -> str:
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt.encode("ascii")).decode("ascii")

    def verify(self, plaintext: str, stored_hash: str, salt: str) -> bool:
        """不一致は例外ではなくFalseを返す"""
        candidate = self.hash(plaintext, salt)
        return hmac.compare_digest(candidate.encode("ascii"), stored_hash.encode("ascii"))
