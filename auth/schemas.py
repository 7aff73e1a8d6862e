"""
Request / response schemas for the user endpoints.

Field names follow the JSON the front end sends and expects (camelCase).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class RegistrationRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    confirmPassword: Optional[str] = None


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = None
    password: Optional[str] = None


class UserProfile(BaseModel):
    userId: int
    username: str
    email: str
    phone: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> "UserProfile":
        return cls(
            userId=user.user_id,
            username=user.username,
            email=user.email,
            phone=user.phone,
        )


class RegisteredUser(UserProfile):
    createdAt: str
