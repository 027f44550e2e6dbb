"""Authentication routes for username/password sessions."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from backend import config
from backend.auth import SESSION_COOKIE, get_current_user, issue_session, hash_password, verify_password
from backend.middleware.rate_limit import rate_limiter
from backend.models.auth import LoginRequest, LogoutResponse, RegisterRequest
from backend.models.user import User, UserPublic
from backend.repos.user_repo import UserRepo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])
user_repo = UserRepo()

LOGIN_WINDOW_MINUTES = 15


def _set_session_cookie(response: Response, user: User) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=issue_session(user),
        httponly=True,
        secure=config.settings.COOKIE_SECURE,
        samesite="lax",
        max_age=config.settings.JWT_EXPIRY_HOURS * 3600,
        path="/",
    )


@router.post("/register", status_code=201)
async def register_endpoint(req: RegisterRequest, response: Response) -> UserPublic:
    """
    Create an account and sign it in.

    409 if the username is taken.
    """
    user = await user_repo.create(req.username, hash_password(req.password))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already taken.",
        )

    logger.info("Registered user %s", user.id)
    _set_session_cookie(response, user)
    return UserPublic.from_user(user)


@router.post("/login", status_code=200)
async def login_endpoint(
    req: LoginRequest,
    request: Request,
    response: Response,
) -> UserPublic:
    """
    Verify credentials and create a session.

    Rate limit: LOGIN_RATE_LIMIT_PER_IP attempts per IP per 15 minutes.
    """
    client_ip = request.client.host if request.client else "unknown"

    if not rate_limiter.check_rate_limit(
        f"login:{client_ip}",
        max_requests=config.settings.LOGIN_RATE_LIMIT_PER_IP,
        window_minutes=LOGIN_WINDOW_MINUTES,
    ):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Please wait a few minutes.",
            headers={"Retry-After": str(LOGIN_WINDOW_MINUTES * 60)},
        )

    user = await user_repo.get_by_username(req.username)
    if not user or not verify_password(req.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )

    _set_session_cookie(response, user)
    return UserPublic.from_user(user)


@router.get("/me", status_code=200)
async def get_current_user_endpoint(
    user: User = Depends(get_current_user),
) -> UserPublic:
    """
    Get the current authenticated user.

    Requires valid session cookie.
    """
    return UserPublic.from_user(user)


@router.post("/logout", status_code=200)
async def logout_endpoint(response: Response) -> LogoutResponse:
    """
    Logout the current user.

    Clears the session cookie.
    """
    response.set_cookie(
        key=SESSION_COOKIE,
        value="",
        httponly=True,
        secure=config.settings.COOKIE_SECURE,
        samesite="lax",
        max_age=0,
        path="/",
    )
    return LogoutResponse()
