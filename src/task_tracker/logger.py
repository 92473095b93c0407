"""
ロギング設定モジュール

アプリのログはファイルと標準エラーへ。uvicornのアクセスログなど
ライブラリ側のロガーは library_level で個別に絞る。
"""

import logging
from pathlib import Path
from typing import Iterable

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# リクエストごとに出力されるライブラリのロガー
LIBRARY_LOGGERS = ("uvicorn.access", "uvicorn.asgi")


def setup_logger(
    log_level: str = "INFO",
    log_file: str = "logs/task_tracker.log",
    library_level: str = "WARNING",
    library_loggers: Iterable[str] = LIBRARY_LOGGERS,
) -> None:
    """
    ロガーのセットアップ

    Args:
        log_level: アプリのログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: ログファイルのパス
        library_level: library_loggers に適用するログレベル
        library_loggers: レベルを絞るライブラリのロガー名
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=_level(log_level),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )

    for name in library_loggers:
        logging.getLogger(name).setLevel(_level(library_level))


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level
