"""Auth routes — signup, login, logout, session check, token refresh."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from curio_app.api.deps import Services, get_services, ok, require_user
from curio_app.users.auth import AuthUser

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


class Credentials(BaseModel):
    email: str | None = None
    password: str | None = None


class RefreshRequest(BaseModel):
    refresh_token: str | None = None


@router.post("/signup", status_code=201)
async def signup(body: Credentials, services: Services = Depends(get_services)) -> dict:
    result = await asyncio.to_thread(services.auth.signup, body.email, body.password)
    return ok(result, message="Signup successful")


@router.post("/login")
async def login(body: Credentials, services: Services = Depends(get_services)) -> dict:
    result = await asyncio.to_thread(services.auth.login, body.email, body.password)
    return ok(result, message="Login successful")


@router.post("/logout")
async def logout(
    user: AuthUser = Depends(require_user), services: Services = Depends(get_services)
) -> dict:
    services.auth.logout(user)
    return ok(message="Logout successful")


@router.get("/session")
async def session(user: AuthUser = Depends(require_user)) -> dict:
    return ok(
        {"user": {"id": user.id, "email": user.email, "isPremium": user.is_premium}},
        valid=True,
    )


@router.post("/refresh")
async def refresh(body: RefreshRequest, services: Services = Depends(get_services)) -> dict:
    result = services.auth.refresh(body.refresh_token)
    return ok({"session": result["session"]}, message="Token refreshed")
