"""Favorites routes — list, add, remove, check."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from curio_app.api.deps import Services, get_services, ok, require_user
from curio_app.users.auth import AuthUser

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


class FavoriteCreate(BaseModel):
    type: str | None = None
    itemId: int | str | None = None
    gradient: str | None = None


@router.get("")
async def list_favorites(
    lang: str | None = Query(None),
    user: AuthUser = Depends(require_user),
    services: Services = Depends(get_services),
) -> dict:
    items = services.favorites.list_for_user(user.id, lang)
    return ok(items, count=len(items))


@router.post("")
async def add_favorite(
    body: FavoriteCreate,
    user: AuthUser = Depends(require_user),
    services: Services = Depends(get_services),
):
    result = services.favorites.add(user.id, body.type, body.itemId, body.gradient)
    if result.pop("alreadyExists"):
        return ok(result, message="Already in favorites", alreadyExists=True)
    return JSONResponse(status_code=201, content=ok(result, message="Added to favorites"))


@router.delete("/{favorite_id}")
async def remove_favorite(
    favorite_id: int,
    user: AuthUser = Depends(require_user),
    services: Services = Depends(get_services),
) -> dict:
    services.favorites.remove(user.id, favorite_id)
    return ok(message="Removed from favorites")


@router.get("/check/{kind}/{item_id}")
async def check_favorite(
    kind: str,
    item_id: str,
    user: AuthUser = Depends(require_user),
    services: Services = Depends(get_services),
) -> dict:
    return ok(services.favorites.check(user.id, kind, item_id))
