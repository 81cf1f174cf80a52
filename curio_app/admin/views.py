"""Admin views — SQLAdmin ModelView classes for each table."""

from __future__ import annotations

from sqladmin import ModelView

from curio_app.admin.models import (
    ArtworkModel,
    DailyContentModel,
    DailyUsageModel,
    FavoriteModel,
    JobModel,
    LLMCallModel,
    PremiumUserModel,
    QuoteModel,
    UserModel,
)


class UserAdmin(ModelView, model=UserModel):
    """User admin view."""

    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-user"

    # Read-only
    can_create = False
    can_edit = False
    can_delete = False

    column_list = ["id", "email", "is_active", "last_sign_in_at", "created_at"]
    column_searchable_list = ["email"]
    column_sortable_list = ["id", "email", "created_at"]
    column_default_sort = ("id", True)


class PremiumUserAdmin(ModelView, model=PremiumUserModel):
    name = "Premium Member"
    name_plural = "Premium Members"
    icon = "fa-solid fa-crown"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = ["id", "email", "status", "expires_at", "created_at"]
    column_searchable_list = ["email"]
    column_sortable_list = ["email", "status", "expires_at"]


class ArtworkAdmin(ModelView, model=ArtworkModel):
    """Artwork cache view."""

    name = "Artwork"
    name_plural = "Artworks"
    icon = "fa-solid fa-image"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = ["id", "title", "artist", "year", "source_api", "created_at"]
    column_searchable_list = ["title", "artist", "external_id"]
    column_sortable_list = ["id", "title", "artist", "created_at"]
    column_default_sort = ("id", True)

    column_details_list = [
        "id",
        "external_id",
        "title",
        "artist",
        "year",
        "medium",
        "dimensions",
        "image_url",
        "image_url_large",
        "source_api",
        "ai_description_de",
        "ai_description_en",
        "created_at",
    ]


class QuoteAdmin(ModelView, model=QuoteModel):
    """Quote cache view."""

    name = "Quote"
    name_plural = "Quotes"
    icon = "fa-solid fa-quote-left"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = ["id", "author", "text", "category", "source_api", "created_at"]
    column_searchable_list = ["author", "text"]
    column_sortable_list = ["id", "author", "category", "created_at"]
    column_default_sort = ("id", True)

    column_details_list = [
        "id",
        "text",
        "author",
        "source",
        "category",
        "source_api",
        "ai_description_de",
        "ai_description_en",
        "created_at",
    ]


class DailyContentAdmin(ModelView, model=DailyContentModel):
    name = "Daily Content"
    name_plural = "Daily Content"
    icon = "fa-solid fa-calendar-day"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = ["date", "artwork", "quote", "created_at"]
    column_sortable_list = ["date"]
    column_default_sort = ("date", True)


class DailyUsageAdmin(ModelView, model=DailyUsageModel):
    name = "Daily Usage"
    name_plural = "Daily Usage"
    icon = "fa-solid fa-gauge"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = ["subject", "date", "art_count", "quote_count"]
    column_searchable_list = ["subject"]
    column_sortable_list = ["subject", "date", "art_count", "quote_count"]


class FavoriteAdmin(ModelView, model=FavoriteModel):
    name = "Favorite"
    name_plural = "Favorites"
    icon = "fa-solid fa-heart"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = ["id", "user", "artwork", "quote", "saved_gradient", "created_at"]
    column_sortable_list = ["id", "user_id", "created_at"]
    column_default_sort = ("id", True)


class LLMCallAdmin(ModelView, model=LLMCallModel):
    """LLM call log view — cost and failure tracking for descriptions."""

    name = "LLM Call"
    name_plural = "LLM Calls"
    icon = "fa-solid fa-robot"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = [
        "id",
        "call_type",
        "model",
        "subject_type",
        "subject_id",
        "total_tokens",
        "latency_ms",
        "error",
        "created_at",
    ]
    column_searchable_list = ["call_type", "model"]
    column_sortable_list = ["id", "call_type", "total_tokens", "latency_ms", "created_at"]
    column_default_sort = ("id", True)


class JobAdmin(ModelView, model=JobModel):
    """Background job queue view."""

    name = "Job"
    name_plural = "Jobs"
    icon = "fa-solid fa-list-check"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = ["id", "job_type", "status", "attempts", "error_message", "created_at", "completed_at"]
    column_searchable_list = ["job_type", "status"]
    column_sortable_list = ["id", "job_type", "status", "created_at"]
    column_default_sort = ("id", True)
