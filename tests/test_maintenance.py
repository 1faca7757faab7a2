from __future__ import annotations

import time
from datetime import datetime
from unittest.mock import patch

from icon_cache.maintenance import get_cache_stats, perform_cache_cleanup


def test_cache_stats_shape(caches):
    caches.svg.set("svg:lucide:Home:24:#000:none:0", "<svg/>")
    stats = get_cache_stats(caches)

    assert set(stats) == {"svg", "png", "metadata", "search", "timestamp"}
    assert stats["svg"] == {
        "size": 1,
        "calculatedSize": len("<svg/>"),
        "maxSize": 1024 * 1024,
        "maxEntries": 100,
    }
    assert stats["png"]["size"] == 0
    assert datetime.fromisoformat(stats["timestamp"]).tzinfo is not None


def test_cleanup_purges_expired(make_caches):
    caches = make_caches(ttl_seconds=10)
    caches.svg.set("a", "<svg/>")
    caches.svg.set("b", "<svg/>")
    caches.png.set("a", b"png")
    caches.search.set("s", {"icons": []})

    with patch("icon_cache.cache.time") as mock_time:
        mock_time.monotonic.return_value = time.monotonic() + 11
        deltas = perform_cache_cleanup(caches)

    assert deltas == {
        "svg": (2, 0),
        "png": (1, 0),
        "metadata": (0, 0),
        "search": (1, 0),
    }
    assert caches.svg.get_stats().calculated_size == 0


def test_cleanup_keeps_live_entries(caches):
    caches.metadata.set("metadata:lucide:Home", {"name": "Home"})
    deltas = perform_cache_cleanup(caches)
    assert deltas["metadata"] == (1, 1)
    assert caches.metadata.get("metadata:lucide:Home") == {"name": "Home"}
