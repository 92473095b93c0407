"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.tasks import TaskStatus

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class AuthCredentialsRequest(BaseModel):
    """Request body for sign-up and sign-in."""

    username: str = Field(..., min_length=4, max_length=20)
    password: str = Field(..., min_length=8, max_length=20)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        """Upper and lower case letters plus a digit or a special character."""
        if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError("password too long")
        if not (
            re.search(r"[A-Z]", value)
            and re.search(r"[a-z]", value)
            and re.search(r"[\d\W]", value)
        ):
            raise ValueError("password too weak")
        return value


class SignInResponse(BaseModel):
    """Response body for sign-in."""

    access_token: str
    token_type: str = "bearer"


class TaskResponse(BaseModel):
    """Serialized task."""

    model_config = ConfigDict(use_enum_values=True)

    id: int
    title: str
    description: str
    status: TaskStatus
    user_id: int


class TaskCreateRequest(BaseModel):
    """Request body for creating a task."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class TaskStatusUpdateRequest(BaseModel):
    """Request body for updating task status."""

    status: TaskStatus


class DeleteResponse(BaseModel):
    """Response for delete endpoint."""

    deleted: bool
