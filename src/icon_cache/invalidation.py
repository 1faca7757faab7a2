from __future__ import annotations

import logging

from .context import IconCaches
from .keys import PNG_PREFIX, SVG_PREFIX, generate_metadata_cache_key, icon_key_prefix

logger = logging.getLogger(__name__)


def invalidate_icon_cache(caches: IconCaches, icon_name: str, library: str) -> int:
    """Drop every cached render variant and the metadata of one icon.

    Scans all SVG and PNG keys for the icon's structural prefix, since the
    render parameters of the cached variants are unknown here.
    """
    metadata_key = generate_metadata_cache_key(icon_name, library)
    removed = 0
    for kind, cache in ((SVG_PREFIX, caches.svg), (PNG_PREFIX, caches.png)):
        prefix = icon_key_prefix(kind, icon_name, library)
        for key in cache.backend.keys():
            if key.startswith(prefix) and cache.delete(key):
                removed += 1
    if caches.metadata.delete(metadata_key):
        removed += 1

    logger.info("Invalidated cache for %s from %s: %d items", icon_name, library, removed)
    return removed


def invalidate_search_cache(caches: IconCaches) -> None:
    caches.search.clear()
    logger.info("Search cache invalidated")


def invalidate_all_caches(caches: IconCaches) -> None:
    for _, cache in caches.all():
        cache.clear()
    logger.info("All caches cleared")
