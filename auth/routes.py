"""
User API routes: registration, login, current user.

Route prefix: /api/v1
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response, status

from api.body import parse_body
from api.errors import (
    AuthenticationError,
    ClientInputError,
    ConflictError,
    InfrastructureError,
    NotFoundError,
    ServiceUnavailableError,
)
from auth.dependencies import get_current_user_id, get_session_manager, get_user_repository
from auth.password import hash_password, verify_password
from auth.schemas import LoginRequest, RegisteredUser, RegistrationRequest, UserProfile
from auth.sessions import SessionManager
from auth.validators import normalize_phone, validate_registration
from database.repository import (
    DuplicateUserError,
    StorageError,
    StorageUnavailableError,
    UserRepository,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["user"])

INVALID_CREDENTIALS = "Invalid credentials"


def _storage_failure(exc: StorageError, message: str) -> Exception:
    """Map a storage fault to the error the client sees."""
    if isinstance(exc, StorageUnavailableError):
        return ServiceUnavailableError("Service temporarily unavailable")
    return InfrastructureError(message)


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/user/registration", status_code=status.HTTP_201_CREATED)
async def register(
    request: Request,
    users: UserRepository = Depends(get_user_repository),
) -> Dict[str, Any]:
    """Register a new user."""
    req = await parse_body(request, RegistrationRequest)

    problem = validate_registration(req)
    if problem:
        raise ClientInputError(problem)

    phone = normalize_phone(req.phone)

    try:
        existing = await users.find_by_email_or_username(req.email, req.username)
        if existing is not None:
            logger.info("Registration refused, user exists: %s / %s", req.username, req.email)
            raise ConflictError("User already exists")

        user_id = await users.insert(req.username, hash_password(req.password), phone, req.email)
    except DuplicateUserError:
        # Lost a race with a concurrent registration for the same name/email.
        logger.info("Registration refused by unique constraint: %s / %s", req.username, req.email)
        raise ConflictError("User already exists")
    except StorageError as exc:
        logger.error("Registration failed for %s: %s", req.email, exc, exc_info=True)
        raise _storage_failure(exc, "Failed to register user")

    logger.info("Registered user %s (%s)", req.username, user_id)
    data = RegisteredUser(
        userId=user_id,
        username=req.username,
        email=req.email,
        phone=phone,
        createdAt=_utc_timestamp(),
    )
    return {
        "success": True,
        "message": "Registration successful",
        "data": data.model_dump(),
    }


@router.post("/user/login")
async def login(
    request: Request,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
    sessions: SessionManager = Depends(get_session_manager),
) -> Dict[str, Any]:
    """Login with email + password; sets the session cookie."""
    req = await parse_body(request, LoginRequest)

    if not req.email or not req.password:
        raise ClientInputError("Email and password are required")

    try:
        user = await users.find_by_email(req.email)
    except StorageError as exc:
        logger.error("Login lookup failed for %s: %s", req.email, exc, exc_info=True)
        raise _storage_failure(exc, "Failed to login")

    if user is None or not verify_password(req.password, user.password):
        logger.info("Login failed for %s", req.email)
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = sessions.create(user.user_id)
    response.set_cookie(
        request.app.state.settings.session_cookie_name,
        token,
        path="/",
        httponly=True,
        samesite="Lax",
    )
    logger.info("Login: %s (%s)", user.username, user.user_id)

    return {
        "success": True,
        "message": "Login successful",
        "data": UserProfile.from_user(user).model_dump(),
    }


@router.get("/user-info")
async def user_info(
    user_id: int = Depends(get_current_user_id),
    users: UserRepository = Depends(get_user_repository),
) -> Dict[str, Any]:
    """Return the profile of the user behind the session cookie."""
    try:
        user = await users.find_by_id(user_id)
    except StorageError as exc:
        logger.error("User info lookup failed for %s: %s", user_id, exc, exc_info=True)
        raise _storage_failure(exc, "Failed to fetch user info")

    if user is None:
        raise NotFoundError("User not found")

    return {
        "success": True,
        "message": "User info fetched",
        "data": UserProfile.from_user(user).model_dump(),
    }
