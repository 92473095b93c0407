"""CLI entry point for launching the FastAPI app with uvicorn."""

import logging

import uvicorn

from src.task_tracker.logger import setup_logger

from .app import create_app
from .dependencies import get_config

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the server on the configured host and port."""
    config = get_config()
    setup_logger(
        log_level=config.log_level,
        log_file=config.log_file,
        library_level=config.log_library_level,
    )

    app = create_app(config)
    logger.info("Application listening on port %s", config.server.port)
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        # ハンドラとレベルは setup_logger の設定を使う
        log_config=None,
    )


if __name__ == "__main__":
    main()
