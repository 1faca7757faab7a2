from __future__ import annotations

import os
from dataclasses import dataclass

MB = 1024 * 1024
HOUR = 60 * 60


def _env_bool(key: str, default: bool) -> bool:
    val = os.environ.get(key, "").lower()
    if val in ("1", "true", "yes"):
        return True
    if val in ("0", "false", "no"):
        return False
    return default


def _env_int(key: str, default: int) -> int:
    val = os.environ.get(key)
    if val is None:
        return default
    return int(val)


def _env_float(key: str, default: float) -> float:
    val = os.environ.get(key)
    if val is None:
        return default
    return float(val)


@dataclass(frozen=True)
class CacheTierConfig:
    max_entries: int
    max_bytes: int
    ttl_seconds: int


@dataclass(frozen=True)
class CacheConfig:
    svg: CacheTierConfig
    png: CacheTierConfig
    metadata: CacheTierConfig
    search: CacheTierConfig
    cleanup_interval_seconds: int = HOUR
    cleanup_enabled: bool = True
    warmup_limit: int = 100
    render_timeout_seconds: float = 10.0


DEFAULT_TIERS = {
    # SVGs are small text, so more of them fit
    "svg": CacheTierConfig(max_entries=2000, max_bytes=50 * MB, ttl_seconds=24 * HOUR),
    "png": CacheTierConfig(max_entries=500, max_bytes=100 * MB, ttl_seconds=24 * HOUR),
    "metadata": CacheTierConfig(max_entries=5000, max_bytes=10 * MB, ttl_seconds=12 * HOUR),
    "search": CacheTierConfig(max_entries=1000, max_bytes=20 * MB, ttl_seconds=30 * 60),
}


def _load_tier(name: str) -> CacheTierConfig:
    default = DEFAULT_TIERS[name]
    prefix = f"ICON_CACHE_{name.upper()}"
    return CacheTierConfig(
        max_entries=_env_int(f"{prefix}_MAX_ENTRIES", default.max_entries),
        max_bytes=_env_int(f"{prefix}_MAX_BYTES", default.max_bytes),
        ttl_seconds=_env_int(f"{prefix}_TTL_SECONDS", default.ttl_seconds),
    )


def load_config() -> CacheConfig:
    return CacheConfig(
        svg=_load_tier("svg"),
        png=_load_tier("png"),
        metadata=_load_tier("metadata"),
        search=_load_tier("search"),
        cleanup_interval_seconds=_env_int("ICON_CACHE_CLEANUP_INTERVAL_SECONDS", HOUR),
        cleanup_enabled=_env_bool("ICON_CACHE_CLEANUP_ENABLED", True),
        warmup_limit=_env_int("ICON_CACHE_WARMUP_LIMIT", 100),
        render_timeout_seconds=_env_float("ICON_CACHE_RENDER_TIMEOUT_SECONDS", 10.0),
    )
