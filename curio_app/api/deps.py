"""Request dependencies — service container and bearer-token auth."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends, Request

from curio_app.cache.art import ArtCache
from curio_app.cache.quotes import QuoteCache
from curio_app.config import AppConfig
from curio_app.daily.service import DailyContentService
from curio_app.db.connection import Database
from curio_app.db.models import LLMCallRepository
from curio_app.describe.engine import DescriptionEngine
from curio_app.errors import ForbiddenError, UnauthorizedError
from curio_app.llm.config import LLMConfig
from curio_app.llm.gateway import LLMGateway
from curio_app.providers.art import ArtFetcher
from curio_app.providers.quotes import QuoteFetcher
from curio_app.users.auth import AuthService, AuthUser
from curio_app.users.favorites import FavoritesService
from curio_app.users.limits import UsageLimiter


@dataclass
class Services:
    config: AppConfig
    db: Database
    auth: AuthService
    limiter: UsageLimiter
    favorites: FavoritesService
    art_cache: ArtCache
    quote_cache: QuoteCache
    daily: DailyContentService
    llm: LLMGateway


def build_services(
    config: AppConfig,
    db: Database,
    art_fetcher: ArtFetcher | None = None,
    quote_fetcher: QuoteFetcher | None = None,
) -> Services:
    """Wire the service graph for one application instance."""
    llm = LLMGateway(LLMConfig.from_app_config(config), call_repo=LLMCallRepository(db))
    art_cache = ArtCache(db, art_fetcher or ArtFetcher.from_config(config), config)
    quote_cache = QuoteCache(db, quote_fetcher or QuoteFetcher.from_config(config), config)
    daily = DailyContentService(db, art_cache, quote_cache, DescriptionEngine(llm), config)
    return Services(
        config=config,
        db=db,
        auth=AuthService(db, config),
        limiter=UsageLimiter(db, config),
        favorites=FavoritesService(db),
        art_cache=art_cache,
        quote_cache=quote_cache,
        daily=daily,
        llm=llm,
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def ok(data: Any = None, **extra: Any) -> dict[str, Any]:
    """Standard success envelope."""
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(extra)
    body.setdefault("timestamp", utc_timestamp())
    return body


def bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def client_ip(request: Request) -> str | None:
    """Socket peer address. Behind a trusted proxy uvicorn rewrites it from
    X-Forwarded-For, so the raw header is never read here."""
    return request.client.host if request.client else None


def optional_user(
    request: Request, services: Services = Depends(get_services)
) -> AuthUser | None:
    """The signed-in user, or None for guests and invalid tokens."""
    return services.auth.resolve(bearer_token(request))


def require_user(
    request: Request, services: Services = Depends(get_services)
) -> AuthUser:
    token = bearer_token(request)
    if not token:
        raise UnauthorizedError("No token provided")
    user = services.auth.resolve(token)
    if user is None:
        raise UnauthorizedError("Invalid or expired token")
    return user


def require_premium(user: AuthUser = Depends(require_user)) -> AuthUser:
    if not user.is_premium:
        raise ForbiddenError("Premium membership required")
    return user
