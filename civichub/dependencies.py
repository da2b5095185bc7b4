"""FastAPI dependency providers for auth, DB sessions and pagination."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from civichub.config import Settings, get_settings
from civichub.db.engine import get_db
from civichub.errors import ValidationError
from civichub.services.auth import AuthContext, get_current_user

# OFFSET is bound as a signed 64-bit integer
MAX_OFFSET = 2**63 - 1


def get_settings_dep() -> Settings:
    return get_settings()


async def require_auth(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> AuthContext:
    """Require a valid bearer token. Returns AuthContext."""
    return await get_current_user(request, db)


@dataclass
class Pagination:
    page: int
    limit: int
    sort_by: str


def pagination(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    sort_by: str = Query("createdAt", alias="sortBy"),
    settings: Settings = Depends(get_settings_dep),
) -> Pagination:
    if limit is None:
        limit = settings.pagination.default_limit
    if limit > settings.pagination.max_limit:
        raise ValidationError("limit", f"limit must be at most {settings.pagination.max_limit}")
    if (page - 1) * limit > MAX_OFFSET:
        raise ValidationError("page", "page is out of range")
    return Pagination(page=page, limit=limit, sort_by=sort_by)
