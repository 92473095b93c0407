"""FastAPI application bootstrap."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.task_tracker.config import Config

from .dependencies import get_config
from .routes import register_auth_routes, register_health_routes, register_task_routes

logger = logging.getLogger(__name__)


def configure_cors(app: FastAPI, config: Config) -> None:
    """Allow any origin in development, only the configured origin elsewhere."""
    if config.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[config.server.origin],
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.info("Accepting request from origin %s", config.server.origin)


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or get_config()
    app = FastAPI(title="Task Tracker API", version="1.0.0")

    configure_cors(app, config)

    register_health_routes(app)
    register_auth_routes(app)
    register_task_routes(app)

    return app
