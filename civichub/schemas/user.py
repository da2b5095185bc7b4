from __future__ import annotations
from datetime import datetime
from pydantic import Field
from civichub.schemas.base import RequestModel, ReadModel


class RegisterRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1)


class LoginRequest(RequestModel):
    email: str
    password: str


class ProfileUpdate(RequestModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    avatar: str | None = None
    location: str | None = None
    bio: str | None = Field(None, max_length=500)


class UserSummary(ReadModel):
    id: str
    name: str
    avatar: str = ""


class VoterRead(ReadModel):
    id: str
    name: str


class UserRead(ReadModel):
    id: str
    name: str
    email: str
    avatar: str = ""
    location: str = ""
    bio: str = ""
    created_at: datetime


class AuthResponse(ReadModel):
    token: str
    user: UserRead


class MeResponse(ReadModel):
    user: UserRead
