"""Authentication: password hashing, user store, access tokens."""

from .hasher import PasswordHasher
from .models import User
from .repository import UserRepository
from .service import AuthService
from .tokens import TokenIssuer

__all__ = ["User", "PasswordHasher", "UserRepository", "TokenIssuer", "AuthService"]
