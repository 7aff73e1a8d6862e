"""
FastAPI dependencies for authentication.

Provides the user repository, the application's session manager, and
``get_current_user_id`` which resolves the ``sessionId`` cookie.
"""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import AuthenticationError
from auth.sessions import SessionManager
from database.repository import UserRepository
from database.session import get_db_session


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
) -> UserRepository:
    return UserRepository(session)


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.sessions


def get_current_user_id(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
) -> int:
    """
    Return the user id behind the request's session cookie.

    Raises ``AuthenticationError`` when the cookie is missing or names a
    session this process does not know.
    """
    token = request.cookies.get(request.app.state.settings.session_cookie_name)
    if not token:
        raise AuthenticationError("Not authenticated")

    user_id = sessions.lookup(token)
    if user_id is None:
        raise AuthenticationError("Invalid session")
    return user_id
