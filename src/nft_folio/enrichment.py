"""Attach display settings to collection groups and order them"""

import json
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from .models import CollectionDisplay, CollectionGroup, EnrichedCollection

PLACEHOLDER_IMAGE = "/placeholder.png"

_display_adapter = TypeAdapter(Dict[str, CollectionDisplay])


def load_display_config(path: Path) -> Dict[str, CollectionDisplay]:
    """Read the slug -> display settings table"""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Collections config {path} not found, using raw slugs")
        return {}
    try:
        return _display_adapter.validate_python(json.loads(path.read_text(encoding="utf-8")))
    except (ValueError, ValidationError) as e:
        logger.error(f"Invalid collections config {path}: {e}")
        return {}


def _fallback_cover(group: CollectionGroup) -> Optional[str]:
    # Newest items sit at the end and usually have working media
    for nft in reversed(group.nfts):
        if nft.display_image_url or nft.image_url:
            return nft.display_image_url or nft.image_url
    return None


def enrich_and_sort_collections(
    grouped: Mapping[str, CollectionGroup],
    display: Optional[Mapping[str, CollectionDisplay]] = None,
) -> List[EnrichedCollection]:
    """
    Apply display names, priorities and cover images, then sort by priority
    (descending) and display name (ascending).
    """
    display = display or {}
    enriched: List[EnrichedCollection] = []

    for slug, group in grouped.items():
        settings = display.get(slug)
        name = settings.display_name if settings else group.name
        priority = settings.priority if settings else 0
        cover = (settings.cover_image if settings else None) or _fallback_cover(group)

        enriched.append(
            EnrichedCollection(
                name=name,
                slug=group.slug,
                nfts=group.nfts,
                priority=priority,
                cover_image=cover or PLACEHOLDER_IMAGE,
            )
        )

    return sorted(enriched, key=lambda c: (-c.priority, c.name.casefold()))
