"""Authentication service: DB-backed bearer-token sessions, bcrypt passwords."""

from __future__ import annotations

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone, timedelta

import bcrypt
from fastapi import Request
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from civichub.config import get_settings
from civichub.errors import UnauthorizedError, ValidationError
from civichub.models import User, UserSession

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


@dataclass
class AuthContext:
    """The acting user, passed explicitly into every mutating operation."""

    user_id: str
    name: str
    email: str


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def _hash_token(token: str) -> str:
    """SHA-256 hash of a session token for DB storage."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


async def create_session(user: User, db: AsyncSession) -> str:
    """Create a DB-backed session. Returns the raw token (not the hash)."""
    token = secrets.token_urlsafe(48)
    max_age = get_settings().auth.session_max_age_days
    session = UserSession(
        user_id=user.id,
        token_hash=_hash_token(token),
        expires_at=datetime.now(timezone.utc) + timedelta(days=max_age),
    )
    db.add(session)
    await db.commit()
    return token


async def validate_session(token: str, db: AsyncSession) -> User | None:
    """Look up session by token hash, return User if valid."""
    result = await db.execute(
        select(UserSession).where(UserSession.token_hash == _hash_token(token))
    )
    session = result.scalars().first()
    if not session or session.expires_at <= datetime.now(timezone.utc):
        return None
    return await db.get(User, session.user_id)


async def remove_session(token: str, db: AsyncSession) -> None:
    await db.execute(delete(UserSession).where(UserSession.token_hash == _hash_token(token)))
    await db.commit()


def read_bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    if not header.lower().startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):].strip()
    return token or None


async def get_current_user(request: Request, db: AsyncSession) -> AuthContext:
    """Read the bearer token, validate it, return AuthContext or raise 401."""
    token = read_bearer_token(request)
    if not token:
        raise UnauthorizedError("No token, authorization denied")

    user = await validate_session(token, db)
    if not user:
        raise UnauthorizedError("Token is not valid")

    return AuthContext(user_id=user.id, name=user.name, email=user.email)


async def register_user(db: AsyncSession, name: str, email: str, password: str) -> User:
    min_length = get_settings().auth.min_password_length
    if len(password) < min_length:
        raise ValidationError("password", f"Password must be at least {min_length} characters")

    email = email.lower()
    result = await db.execute(select(User).where(User.email == email))
    if result.scalars().first():
        raise ValidationError("email", "User already exists")

    user = User(name=name, email=email, password_hash=hash_password(password))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    result = await db.execute(select(User).where(User.email == email.lower()))
    user = result.scalars().first()
    if not user or not verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid credentials")
    return user
