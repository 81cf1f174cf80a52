"""Normalised content records produced by the provider clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ArtworkRecord:
    external_id: str
    title: str
    artist: str
    year: str
    image_url: str
    source_api: str
    image_url_large: str | None = None
    medium: str | None = None
    dimensions: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    description_de: str | None = None
    description_en: str | None = None

    @classmethod
    def from_artic(cls, data: dict[str, Any], iiif_url: str) -> ArtworkRecord | None:
        """Build from an Art Institute of Chicago artwork payload.

        Returns None when the artwork has no image.
        """
        image_id = data.get("image_id")
        if not image_id:
            return None
        metadata = {
            "origin": data.get("place_of_origin"),
            "description": data.get("description"),
        }
        return cls(
            external_id=str(data["id"]),
            title=data.get("title") or "Untitled",
            artist=data.get("artist_title") or "Unknown Artist",
            year=data.get("date_display") or "Unknown",
            image_url=f"{iiif_url}/{image_id}/full/843,/0/default.jpg",
            image_url_large=f"{iiif_url}/{image_id}/full/1686,/0/default.jpg",
            source_api="artic",
            medium=data.get("medium_display"),
            dimensions=data.get("dimensions"),
            metadata={k: v for k, v in metadata.items() if v},
        )

    @classmethod
    def from_rijks(cls, data: dict[str, Any]) -> ArtworkRecord | None:
        """Build from a Rijksmuseum artObject (detail or search hit)."""
        image = data.get("webImage") or {}
        image_url = image.get("url")
        if not image_url or not data.get("objectNumber"):
            return None
        dating = data.get("dating") or {}
        year = dating.get("presentingDate") or dating.get("sortingDate")
        return cls(
            external_id=f"rijks:{data['objectNumber']}",
            title=data.get("title") or "Untitled",
            artist=data.get("principalOrFirstMaker") or "Unknown Artist",
            year=str(year) if year else "Unknown",
            image_url=image_url,
            image_url_large=image_url,
            source_api="rijks",
            medium=data.get("physicalMedium"),
            dimensions=data.get("subTitle"),
            metadata={"long_title": data["longTitle"]} if data.get("longTitle") else {},
        )


@dataclass
class QuoteRecord:
    text: str
    author: str
    source_api: str
    source: str | None = None
    category: str | None = None
    description_de: str | None = None
    description_en: str | None = None

    @classmethod
    def from_ninjas(cls, data: dict[str, Any], fallback_category: str | None = None) -> QuoteRecord | None:
        text = (data.get("quote") or "").strip()
        if not text:
            return None
        categories = data.get("categories") or []
        return cls(
            text=text,
            author=(data.get("author") or "").strip() or "Unknown",
            source_api="ninjas",
            category=categories[0] if categories else (fallback_category or "wisdom"),
        )

    @classmethod
    def from_favqs(cls, data: dict[str, Any]) -> QuoteRecord | None:
        text = (data.get("body") or "").strip()
        if not text:
            return None
        tags = data.get("tags") or []
        return cls(
            text=text,
            author=(data.get("author") or "").strip() or "Unknown",
            source_api="favqs",
            source=data.get("source") or None,
            category=tags[0] if tags else "wisdom",
        )
