"""Admin setup — create engine and mount SQLAdmin."""

from __future__ import annotations

from fastapi import FastAPI
from sqladmin import Admin
from sqlalchemy import create_engine

from curio_app.admin.views import (
    ArtworkAdmin,
    DailyContentAdmin,
    DailyUsageAdmin,
    FavoriteAdmin,
    JobAdmin,
    LLMCallAdmin,
    PremiumUserAdmin,
    QuoteAdmin,
    UserAdmin,
)


def setup_admin(app: FastAPI, sqlite_path: str, *, debug: bool = False) -> Admin:
    """Mount the read-only admin console at ``/admin``.

    Args:
        app: FastAPI application instance
        sqlite_path: Path to SQLite database file
        debug: Show full tracebacks on errors (development only)
    """
    engine = create_engine(
        f"sqlite:///{sqlite_path}",
        connect_args={"check_same_thread": False},
    )

    admin = Admin(app, engine, title="Curio Admin", base_url="/admin", debug=debug)

    for view in (
        UserAdmin,
        PremiumUserAdmin,
        ArtworkAdmin,
        QuoteAdmin,
        DailyContentAdmin,
        DailyUsageAdmin,
        FavoriteAdmin,
        LLMCallAdmin,
        JobAdmin,
    ):
        admin.add_view(view)

    return admin
