"""
設定管理モジュール

config/default.yaml を読み込み、環境別ファイル（config/<env>.yaml）と
環境変数で上書きする。

関連クラス:
  - server.dependencies: この設定からDB・ストア・サービスを組み立てる
  - server.app.create_app: CORSポリシーの決定に environment を使用
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"
DEVELOPMENT = "development"


@dataclass
class ServerConfig:
    """HTTPサーバー設定"""

    host: str = "0.0.0.0"
    port: int = 3000
    origin: str = "http://localhost:4200"


@dataclass
class DatabaseConfig:
    """永続化設定"""

    backend: str = "sqlite"  # sqlite | memory
    path: str = "data/task_tracker.db"


@dataclass
class AuthConfig:
    """JWT・パスワードハッシュ設定"""

    jwt_secret: str = "task-tracker-development-secret-key"
    jwt_expires_in: int = 3600
    jwt_algorithm: str = "HS256"
    bcrypt_rounds: int = 10


@dataclass
class Config:
    """アプリケーション設定クラス"""

    environment: str = DEVELOPMENT

    server: ServerConfig = None  # type: ignore
    database: DatabaseConfig = None  # type: ignore
    auth: AuthConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/task_tracker.log"
    log_library_level: str = "WARNING"

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.server is None:
            self.server = ServerConfig()
        if self.database is None:
            self.database = DatabaseConfig()
        if self.auth is None:
            self.auth = AuthConfig()

    @property
    def is_development(self) -> bool:
        return self.environment == DEVELOPMENT

    @classmethod
    def from_yaml(
        cls,
        config_dir: Optional[Path] = None,
        environment: Optional[str] = None,
    ) -> "Config":
        """YAMLファイルと環境変数から設定を読み込む

        Args:
            config_dir: 設定ディレクトリ（省略時はリポジトリ直下のconfig/）
            environment: 環境名（省略時は TASK_TRACKER_ENV、既定は development）

        Returns:
            Config: 設定インスタンス

        Raises:
            ValueError: development以外で JWT_SECRET が未設定の場合
        """
        config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        environment = environment or os.getenv("TASK_TRACKER_ENV", DEVELOPMENT)

        yaml_data = _load_yaml(config_dir / "default.yaml")
        env_file = config_dir / f"{environment}.yaml"
        if env_file.exists():
            yaml_data = _deep_merge(yaml_data, _load_yaml(env_file))

        server_data = yaml_data.get("server", {})
        db_data = yaml_data.get("database", {})
        jwt_data = yaml_data.get("jwt", {})
        auth_data = yaml_data.get("auth", {})
        log_data = yaml_data.get("log", {})

        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret and environment != DEVELOPMENT:
            raise ValueError(f"JWT_SECRET must be set in the {environment} environment")

        # 環境変数が最優先
        return cls(
            environment=environment,
            server=ServerConfig(
                host=server_data.get("host", "0.0.0.0"),
                port=int(os.getenv("PORT", server_data.get("port", 3000))),
                origin=server_data.get("origin", "http://localhost:4200"),
            ),
            database=DatabaseConfig(
                backend=os.getenv("TASK_TRACKER_DB_BACKEND", db_data.get("backend", "sqlite")),
                path=os.getenv("TASK_TRACKER_DB_PATH", db_data.get("path", "data/task_tracker.db")),
            ),
            auth=AuthConfig(
                jwt_secret=jwt_secret or jwt_data.get("secret", "task-tracker-development-secret-key"),
                jwt_expires_in=int(jwt_data.get("expires_in", 3600)),
                jwt_algorithm=jwt_data.get("algorithm", "HS256"),
                bcrypt_rounds=int(auth_data.get("bcrypt_rounds", 10)),
            ),
            log_level=os.getenv("LOG_LEVEL", log_data.get("level", "INFO")),
            log_file=log_data.get("file", "logs/task_tracker.log"),
            log_library_level=log_data.get("library_level", "WARNING"),
        )


def _load_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """overrideの値でbaseを再帰的に上書きした新しいdictを返す"""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
