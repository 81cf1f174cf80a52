"""Admin API routes — daily task trigger, cache maintenance, premium grants.

Mounted under /api/admin and protected by Basic Auth when admin credentials
are configured.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from curio_app.api.deps import Services, get_services, ok
from curio_app.db.models import JobRepository, LLMCallRepository, to_sql_timestamp
from curio_app.errors import ValidationError
from curio_app.users.auth import normalize_email

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["admin"])


class PremiumGrant(BaseModel):
    email: str
    days: int | None = 30


@router.post("/daily/run")
async def run_daily(request: Request, services: Services = Depends(get_services)) -> dict:
    """Run the daily tasks now instead of waiting for the scheduler."""
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is not None:
        result = await scheduler.run_now()
    else:
        result = await asyncio.to_thread(services.daily.run_daily_tasks)
    return ok(result)


@router.get("/cache")
async def cache_status(services: Services = Depends(get_services)) -> dict:
    return ok(
        {
            "art": services.art_cache.status(),
            "quotes": services.quote_cache.status(),
            "jobs": JobRepository(services.db).counts(),
        }
    )


@router.post("/cache/{kind}/fill")
async def fill_cache(kind: str, services: Services = Depends(get_services)) -> dict:
    """Queue a top-up of the art or quote cache."""
    if kind not in ("art", "quotes"):
        raise ValidationError("Invalid type. Must be 'art' or 'quotes'")
    cache = services.art_cache if kind == "art" else services.quote_cache
    job_id = cache.request_refill()
    return ok({"queued": job_id is not None, "jobId": job_id, "status": cache.status()})


@router.post("/cache/quotes/clear")
async def clear_quotes(services: Services = Depends(get_services)) -> dict:
    removed = services.quote_cache.clear(today=services.daily.today())
    return ok({"removed": removed, "status": services.quote_cache.status()})


@router.post("/describe/backfill")
async def describe_backfill(limit: int = 20, services: Services = Depends(get_services)) -> dict:
    """Queue description jobs for cached items that have none yet."""
    jobs = JobRepository(services.db)
    queued = 0
    for row in services.daily.artworks.missing_descriptions(limit):
        jobs.enqueue("describe", {"kind": "art", "id": row["id"]})
        queued += 1
    for row in services.daily.quotes.missing_descriptions(limit):
        jobs.enqueue("describe", {"kind": "quotes", "id": row["id"]})
        queued += 1
    logger.info("Queued %d description job(s)", queued)
    return ok({"queued": queued})


@router.get("/llm/stats")
async def llm_stats(services: Services = Depends(get_services)) -> dict:
    calls = LLMCallRepository(services.db)
    return ok({"stats": calls.get_stats(), "recent": calls.get_recent(limit=20)})


@router.post("/premium")
async def grant_premium(body: PremiumGrant, services: Services = Depends(get_services)) -> dict:
    """Grant (or extend) a premium membership. ``days: null`` never expires."""
    email = normalize_email(body.email)
    expires_at = None
    if body.days is not None:
        expires_at = to_sql_timestamp(datetime.now(timezone.utc) + timedelta(days=body.days))
    services.auth.premium.upsert(email, expires_at)
    logger.info("Premium granted to %s until %s", email, expires_at or "forever")
    return ok({"email": email, "status": "active", "expiresAt": expires_at})
