"""User routes — profile, daily limits, tier status."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from curio_app.api.deps import Services, get_services, ok, require_user
from curio_app.users.auth import AuthUser
from curio_app.users.limits import subject_for, tier_for

router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/profile")
async def profile(
    user: AuthUser = Depends(require_user), services: Services = Depends(get_services)
) -> dict:
    membership = services.auth.premium.get(user.email)
    return ok(
        {
            "id": user.id,
            "email": user.email,
            "isPremium": user.is_premium,
            "profile": {
                "createdAt": user.created_at,
                "lastSignInAt": user.last_sign_in_at,
                "premiumStatus": membership["status"] if membership else None,
                "premiumExpiresAt": membership["expires_at"] if membership else None,
            },
        }
    )


@router.get("/limits")
async def limits(
    user: AuthUser = Depends(require_user), services: Services = Depends(get_services)
) -> dict:
    return ok(services.limiter.summary(subject_for(user, None), tier_for(user)))


@router.get("/status")
async def status(user: AuthUser = Depends(require_user)) -> dict:
    return ok({"userType": tier_for(user), "isPremium": user.is_premium, "email": user.email})
