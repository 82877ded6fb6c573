"""Authentication endpoints for the admin console."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.deps import get_auth_service, get_current_user, get_session_token
from app.config import settings
from app.schemas.auth import LoginRequest, MessageResponse, SessionResponse, SessionUser
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


@router.post(
    "/login",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in with email and password",
)
async def login(
    payload: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    """
    Sign in to the admin console.

    The session token is returned in the body and also set as an HTTP-only
    cookie for browser requests.

    Raises:
        HTTPException: 401 if credentials invalid
    """
    result = auth.sign_in_with_password(payload.email, payload.password)
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.error.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = result.data["access_token"]
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 3600,
    )
    return SessionResponse(access_token=token, user=result.data["user"])


@router.post("/logout", response_model=MessageResponse, summary="Sign out")
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    auth.sign_out(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return MessageResponse(message="Signed out")


@router.get("/session", response_model=SessionUser, summary="Current session user")
async def read_session(current_user: SessionUser = Depends(get_current_user)) -> SessionUser:
    return current_user
