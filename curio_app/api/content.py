"""Content routes — daily pick, navigation to further artworks and quotes."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from curio_app.api.deps import (
    Services,
    client_ip,
    get_services,
    ok,
    optional_user,
    require_premium,
)
from curio_app.content.fallback import fallback_artwork, fallback_quote
from curio_app.content.gradients import random_gradient
from curio_app.content.payloads import artwork_payload, quote_payload
from curio_app.errors import ContentUnavailableError, NotFoundError
from curio_app.users.auth import AuthUser
from curio_app.users.limits import subject_for, tier_for

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["content"])


async def _daily(services: Services) -> dict[str, Any] | None:
    try:
        return await asyncio.to_thread(services.daily.get_daily_content)
    except ContentUnavailableError as e:
        logger.error("Serving fallback daily content: %s", e)
        return None


@router.get("/daily")
async def daily(lang: str | None = Query(None), services: Services = Depends(get_services)) -> dict:
    content = await _daily(services)
    if content is None:
        return ok(
            {"art": fallback_artwork(lang), "quote": fallback_quote(lang)},
            cached=False,
            fallback=True,
        )
    return ok(
        {
            "date": content["date"],
            "art": artwork_payload(content["artwork"], lang) if content["artwork"] else fallback_artwork(lang),
            "quote": quote_payload(content["quote"], lang) if content["quote"] else fallback_quote(lang),
        },
        cached=content["cached"],
    )


@router.get("/daily/art")
async def daily_art(lang: str | None = Query(None), services: Services = Depends(get_services)) -> dict:
    content = await _daily(services)
    if content is None or content["artwork"] is None:
        return ok(fallback_artwork(lang), cached=False, fallback=True)
    return ok(artwork_payload(content["artwork"], lang), cached=content["cached"], date=content["date"])


@router.get("/daily/quote")
async def daily_quote(lang: str | None = Query(None), services: Services = Depends(get_services)) -> dict:
    content = await _daily(services)
    if content is None or content["quote"] is None:
        return ok(fallback_quote(lang), cached=False, fallback=True)
    return ok(quote_payload(content["quote"], lang), cached=content["cached"], date=content["date"])


@router.get("/archive/{date}")
async def archive(
    date: str,
    lang: str | None = Query(None),
    user: AuthUser = Depends(require_premium),
    services: Services = Depends(get_services),
) -> dict:
    """Content of a past day (premium)."""
    row = services.daily.daily.get(date)
    if not row:
        raise NotFoundError(f"No daily content for {date}")
    artwork = services.daily.artworks.get(row["artwork_id"]) if row["artwork_id"] else None
    quote = services.daily.quotes.get(row["quote_id"]) if row["quote_id"] else None
    return ok(
        {
            "date": date,
            "art": artwork_payload(artwork, lang) if artwork else None,
            "quote": quote_payload(quote, lang) if quote else None,
        }
    )


async def _next_item(
    kind: str,
    request: Request,
    user: AuthUser | None,
    services: Services,
    prefetch: bool,
    lang: str | None,
) -> dict:
    tier = tier_for(user)
    usage = services.limiter.check_and_increment(subject_for(user, client_ip(request)), tier, kind)
    exclude = services.favorites.excluded_ids(user.id if user else None, kind)
    cache = services.art_cache if kind == "art" else services.quote_cache

    try:
        row = await asyncio.to_thread(cache.get, exclude, prefetch)
    except ContentUnavailableError as e:
        logger.error("Serving fallback %s: %s", kind, e)
        item = fallback_artwork(lang) if kind == "art" else fallback_quote(lang)
        return ok(item, usage=usage, userType=tier, fallback=True)

    if kind == "art":
        return ok(artwork_payload(row, lang), usage=usage, userType=tier)
    return ok(quote_payload(row, lang), gradient=random_gradient(), usage=usage, userType=tier)


@router.get("/art/next")
@router.get("/art/fresh")
async def next_art(
    request: Request,
    prefetch: bool = Query(False),
    lang: str | None = Query(None),
    user: AuthUser | None = Depends(optional_user),
    services: Services = Depends(get_services),
) -> dict:
    return await _next_item("art", request, user, services, prefetch, lang)


@router.get("/quote/next")
@router.get("/quote/fresh")
async def next_quote(
    request: Request,
    prefetch: bool = Query(False),
    lang: str | None = Query(None),
    user: AuthUser | None = Depends(optional_user),
    services: Services = Depends(get_services),
) -> dict:
    return await _next_item("quotes", request, user, services, prefetch, lang)
