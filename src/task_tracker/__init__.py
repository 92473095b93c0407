"""Task Tracker共通基盤（設定・ロギング・例外）"""

from .config import AuthConfig, Config, DatabaseConfig, ServerConfig
from .exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    TaskTrackerError,
)
from .logger import setup_logger

__all__ = [
    "Config",
    "ServerConfig",
    "DatabaseConfig",
    "AuthConfig",
    "TaskTrackerError",
    "ConflictError",
    "InternalError",
    "NotFoundError",
    "AuthenticationError",
    "setup_logger",
]
