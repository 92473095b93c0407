"""Sign-up and sign-in endpoints."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Response

from src.task_tracker.exceptions import AuthenticationError, ConflictError, InternalError

from ..dependencies import get_auth_service
from ..schemas import AuthCredentialsRequest, SignInResponse

logger = logging.getLogger(__name__)


def register_auth_routes(app: FastAPI) -> None:
    """Register authentication endpoints."""

    @app.post("/auth/signup", status_code=201, response_class=Response)
    async def sign_up(request: AuthCredentialsRequest) -> Response:
        """Create a new account."""
        service = get_auth_service()
        try:
            await service.sign_up(request.username, request.password)
            return Response(status_code=201)
        except ConflictError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except InternalError as exc:
            logger.exception("Failed to sign up: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to sign up") from exc

    @app.post("/auth/signin", response_model=SignInResponse)
    async def sign_in(request: AuthCredentialsRequest) -> SignInResponse:
        """Exchange credentials for an access token."""
        service = get_auth_service()
        try:
            access_token = await service.sign_in(request.username, request.password)
            return SignInResponse(access_token=access_token)
        except AuthenticationError as exc:
            raise HTTPException(
                status_code=401,
                detail="Invalid credentials",
                headers={"WWW-Authenticate": "Bearer"},
            ) from exc
