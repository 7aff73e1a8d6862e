"""
In-process login sessions.

A ``SessionManager`` maps an opaque random token to the id of the user
who logged in.  One instance is created per application (``app.state``)
and lives as long as the process: there is no expiry, no deletion and
no size bound.  Running several server processes therefore requires an
external shared store.
"""

from __future__ import annotations

import logging
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


@dataclass(frozen=True)
class SessionRecord:
    user_id: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SessionManager:
    def __init__(self) -> None:
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def create(self, user_id: int) -> str:
        """Start a session for ``user_id`` and return its token."""
        token = secrets.token_urlsafe(TOKEN_BYTES)
        record = SessionRecord(user_id=user_id)
        with self._lock:
            self._sessions[token] = record
        logger.debug("Session created for user %s", user_id)
        return token

    def get(self, token: str) -> Optional[SessionRecord]:
        with self._lock:
            return self._sessions.get(token)

    def lookup(self, token: str) -> Optional[int]:
        """Return the user id bound to ``token`` or ``None``."""
        record = self.get(token)
        return record.user_id if record else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
