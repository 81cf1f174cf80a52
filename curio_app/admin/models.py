"""SQLAlchemy models for admin UI — read-only view wrappers over existing tables."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class UserModel(Base):
    """User model for admin UI."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, nullable=False)
    is_active = Column(Integer, default=1)
    last_sign_in_at = Column(String)
    created_at = Column(String)

    favorites = relationship("FavoriteModel", back_populates="user")

    def __str__(self) -> str:
        return self.email


class PremiumUserModel(Base):
    __tablename__ = "premium_users"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, nullable=False)
    status = Column(String)
    expires_at = Column(String)
    created_at = Column(String)


class ArtworkModel(Base):
    """Cached artwork for admin UI."""

    __tablename__ = "artworks"

    id = Column(Integer, primary_key=True)
    external_id = Column(String, unique=True)
    title = Column(String)
    artist = Column(String)
    year = Column(String)
    image_url = Column(String)
    image_url_large = Column(String)
    source_api = Column(String)
    medium = Column(String)
    dimensions = Column(String)
    metadata_json = Column("metadata", Text)
    ai_description_de = Column(Text)
    ai_description_en = Column(Text)
    created_at = Column(String)

    def __str__(self) -> str:
        return f"{self.title} ({self.artist})"


class QuoteModel(Base):
    """Cached quote for admin UI."""

    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True)
    text = Column(Text)
    author = Column(String)
    source = Column(String)
    category = Column(String)
    source_api = Column(String)
    ai_description_de = Column(Text)
    ai_description_en = Column(Text)
    created_at = Column(String)

    def __str__(self) -> str:
        return f"{self.author}: {self.text[:40]}"


class DailyContentModel(Base):
    __tablename__ = "daily_content"

    date = Column(String, primary_key=True)
    artwork_id = Column(Integer, ForeignKey("artworks.id"))
    quote_id = Column(Integer, ForeignKey("quotes.id"))
    created_at = Column(String)

    artwork = relationship("ArtworkModel")
    quote = relationship("QuoteModel")


class DailyUsageModel(Base):
    __tablename__ = "daily_usage"

    subject = Column(String, primary_key=True)
    date = Column(String, primary_key=True)
    art_count = Column(Integer)
    quote_count = Column(Integer)


class FavoriteModel(Base):
    __tablename__ = "favorites"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"))
    artwork_id = Column(Integer, ForeignKey("artworks.id"))
    quote_id = Column(Integer, ForeignKey("quotes.id"))
    saved_gradient = Column(String)
    created_at = Column(String)

    user = relationship("UserModel", back_populates="favorites")
    artwork = relationship("ArtworkModel")
    quote = relationship("QuoteModel")


class LLMCallModel(Base):
    """LLM call log for admin UI."""

    __tablename__ = "llm_calls"

    id = Column(Integer, primary_key=True)
    call_type = Column(String)
    model = Column(String)
    subject_type = Column(String)
    subject_id = Column(Integer)
    prompt = Column(Text)
    response_text = Column(Text)
    prompt_tokens = Column(Integer)
    completion_tokens = Column(Integer)
    total_tokens = Column(Integer)
    latency_ms = Column(Integer)
    error = Column(Text)
    created_at = Column(String)


class JobModel(Base):
    """Background job for admin UI."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True)
    job_type = Column(String)
    payload = Column(Text)
    status = Column(String)
    attempts = Column(Integer)
    max_attempts = Column(Integer)
    error_message = Column(Text)
    created_at = Column(String)
    started_at = Column(String)
    completed_at = Column(String)
