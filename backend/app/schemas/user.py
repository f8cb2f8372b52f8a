from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from app.schemas.base import CamelModel


class UserCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    time_zone: Optional[str] = Field(default=None, max_length=64)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class UserRead(CamelModel):
    id: UUID
    name: str
    email: str
    time_zone: str


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserRead


class ProfileResponse(CamelModel):
    message: str
    user: UserRead
