"""
User repository: parameterized queries over the ``users`` table.

Every statement is built with SQLAlchemy expressions, so user input is
always bound, never interpolated into SQL text.  Any storage fault is
re-raised as ``StorageError`` so callers never see driver exceptions.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import exc, or_, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from database.models import User

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The database could not complete an operation."""


class StorageUnavailableError(StorageError):
    """No pooled connection became free in time; safe to retry."""


class DuplicateUserError(StorageError):
    """An insert hit the unique constraint on ``username`` or ``email``."""


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    try:
        yield
    except exc.TimeoutError as e:
        raise StorageUnavailableError(f"{action}: connection pool exhausted") from e
    except exc.SQLAlchemyError as e:
        raise StorageError(f"{action}: {e.__class__.__name__}") from e
    except OSError as e:
        raise StorageError(f"{action}: {e}") from e


async def ping(engine: AsyncEngine) -> None:
    """Check out a pooled connection and run a trivial query."""
    with _storage_errors("ping"):
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))


class UserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        with _storage_errors("find user by email or username"):
            result = await self._session.execute(
                select(User)
                .where(or_(User.email == email, User.username == username))
                .limit(1)
            )
            return result.scalars().first()

    async def insert(
        self,
        username: str,
        password_hash: str,
        phone: Optional[str],
        email: str,
    ) -> int:
        """Insert a user and return the id assigned by the database."""
        user = User(username=username, password=password_hash, phone=phone, email=email)
        try:
            with _storage_errors("insert user"):
                self._session.add(user)
                await self._session.commit()
        except StorageError as e:
            await self._rollback()
            if isinstance(e.__cause__, exc.IntegrityError):
                raise DuplicateUserError("username or email already taken") from e.__cause__
            raise
        return user.user_id

    async def find_by_email(self, email: str) -> Optional[User]:
        with _storage_errors("find user by email"):
            result = await self._session.execute(
                select(User).where(User.email == email).limit(1)
            )
            return result.scalars().first()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Fetch a profile row; the password column is never selected."""
        with _storage_errors("find user by id"):
            result = await self._session.execute(
                select(User.user_id, User.username, User.email, User.phone)
                .where(User.user_id == user_id)
                .limit(1)
            )
            row = result.first()
        if row is None:
            return None
        return User(user_id=row.user_id, username=row.username, email=row.email, phone=row.phone)

    async def _rollback(self) -> None:
        try:
            await self._session.rollback()
        except exc.SQLAlchemyError:
            logger.warning("Rollback after failed insert also failed", exc_info=True)
