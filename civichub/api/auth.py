"""Auth API: register, login, logout, current user, profile."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from civichub.db import crud
from civichub.db.engine import get_db
from civichub.dependencies import require_auth
from civichub.errors import UnauthorizedError
from civichub.schemas import (
    RegisterRequest, LoginRequest, ProfileUpdate,
    AuthResponse, MeResponse, MessageResponse,
)
from civichub.services.auth import (
    AuthContext, register_user, authenticate, create_session, remove_session, read_bearer_token,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    user = await register_user(db, body.name, body.email, body.password)
    token = await create_session(user, db)
    return {"token": token, "user": user}


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    user = await authenticate(db, body.email, body.password)
    token = await create_session(user, db)
    return {"token": token, "user": user}


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    token = read_bearer_token(request)
    await remove_session(token, db)
    return {"message": "Logged out"}


@router.get("/me", response_model=MeResponse)
async def me(
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    user = await crud.get_user(db, auth.user_id)
    if not user:
        raise UnauthorizedError("Token is not valid")
    return {"user": user}


@router.put("/profile", response_model=MeResponse)
async def update_profile(
    body: ProfileUpdate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    user = await crud.get_user(db, auth.user_id)
    if not user:
        raise UnauthorizedError("Token is not valid")
    user = await crud.update_user(db, user, **body.model_dump(exclude_unset=True))
    return {"user": user}
