"""
Registration payload validation.

``validate_registration`` is pure: it inspects the payload and returns
the first violated rule's message, or ``None`` when the payload is
acceptable.  Rules are checked in a fixed order (presence, email,
phone, confirmation, length) and the first failure wins.
"""

from __future__ import annotations

import re
from typing import Optional

from auth.schemas import RegistrationRequest

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"[0-9()+\-\s]{7,20}")
MIN_PASSWORD_LENGTH = 6

MSG_REQUIRED = "All fields are required"
MSG_INVALID_EMAIL = "Invalid email address"
MSG_INVALID_PHONE = "Invalid phone number"
MSG_PASSWORD_MISMATCH = "Passwords do not match"
MSG_PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone(phone: str) -> bool:
    return PHONE_PATTERN.fullmatch(phone) is not None


def validate_registration(payload: RegistrationRequest) -> Optional[str]:
    if not (payload.username and payload.email and payload.password and payload.confirmPassword):
        return MSG_REQUIRED

    if not is_valid_email(payload.email):
        return MSG_INVALID_EMAIL

    if payload.phone and not is_valid_phone(payload.phone):
        return MSG_INVALID_PHONE

    if payload.password != payload.confirmPassword:
        return MSG_PASSWORD_MISMATCH

    if len(payload.password) < MIN_PASSWORD_LENGTH:
        return MSG_PASSWORD_TOO_SHORT

    return None


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    """Trim ``phone``; blank values are stored as NULL."""
    if phone is None:
        return None
    phone = phone.strip()
    return phone or None
