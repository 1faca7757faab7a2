from __future__ import annotations

import logging
from datetime import datetime, timezone

from .context import IconCaches

logger = logging.getLogger(__name__)


def get_cache_stats(caches: IconCaches) -> dict:
    stats: dict = {name: cache.get_stats().to_dict() for name, cache in caches.all()}
    stats["timestamp"] = datetime.now(timezone.utc).isoformat()
    return stats


def perform_cache_cleanup(caches: IconCaches) -> dict[str, tuple[int, int]]:
    """Purge expired entries from every cache and log the item counts.

    Housekeeping only: TTL and capacity are already enforced on get/set.
    """
    logger.info("Performing cache cleanup...")
    before = {name: len(cache.backend) for name, cache in caches.all()}
    for _, cache in caches.all():
        cache.backend.purge_expired()
    after = {name: len(cache.backend) for name, cache in caches.all()}

    deltas = {name: (before[name], after[name]) for name in before}
    logger.info(
        "Cache cleanup completed: %s",
        ", ".join(f"{name} {b}->{a}" for name, (b, a) in deltas.items()),
    )
    return deltas
