"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.auth import AuthService, PasswordHasher, TokenIssuer, User, UserRepository
from src.database import Database, create_database
from src.task_tracker.config import Config
from src.task_tracker.exceptions import AuthenticationError
from src.tasks import Task, TaskRepository, TaskService

from .schemas import TaskResponse

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Singleton Config loaded from config/ and the environment."""
    return Config.from_yaml()


@lru_cache(maxsize=1)
def get_database() -> Database:
    """Singleton Database for the configured backend."""
    config = get_config()
    return create_database(config.database.backend, config.database.path)


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Singleton UserRepository."""
    hasher = PasswordHasher(rounds=get_config().auth.bcrypt_rounds)
    return UserRepository(get_database(), hasher)


@lru_cache(maxsize=1)
def get_auth_service() -> AuthService:
    """Singleton AuthService."""
    auth = get_config().auth
    tokens = TokenIssuer(
        auth.jwt_secret,
        expires_in=auth.jwt_expires_in,
        algorithm=auth.jwt_algorithm,
    )
    return AuthService(get_user_repository(), tokens)


@lru_cache(maxsize=1)
def get_task_service() -> TaskService:
    """Singleton TaskService."""
    return TaskService(TaskRepository(get_database()))


def clear_caches() -> None:
    """Drop every singleton so the next request rebuilds from config."""
    for getter in (
        get_config,
        get_database,
        get_user_repository,
        get_auth_service,
        get_task_service,
    ):
        getter.cache_clear()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> User:
    """Resolve the bearer token into the authenticated User."""
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return await get_auth_service().authenticate(credentials.credentials)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def serialize_task(task: Task) -> TaskResponse:
    """Convert domain Task to API response."""
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        user_id=task.user_id,
    )
