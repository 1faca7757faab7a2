from __future__ import annotations

import pytest

from icon_cache.config import CacheConfig, CacheTierConfig
from icon_cache.context import IconCaches


class FakeRenderer:
    """Records render calls; fails for icon names listed in ``failing``."""

    def __init__(self, failing: set[str] | None = None):
        self.failing = failing or set()
        self.calls: list[tuple[str, str, str, int, str]] = []

    async def render_svg(self, icon_name, library, size, color, background_color=None, padding=None):
        self.calls.append(("svg", library, icon_name, size, color))
        if icon_name in self.failing:
            raise RuntimeError(f"cannot render {icon_name}")
        return f'<svg width="{size}" height="{size}" fill="{color}"><title>{icon_name}</title></svg>'

    async def render_png(self, icon_name, library, size, color, background_color=None, padding=None):
        self.calls.append(("png", library, icon_name, size, color))
        if icon_name in self.failing:
            raise RuntimeError(f"cannot render {icon_name}")
        return b"\x89PNG\r\n\x1a\n" + bytes(size)


def make_config(
    max_entries: int = 100,
    max_bytes: int = 1024 * 1024,
    ttl_seconds: int = 3600,
    **overrides,
) -> CacheConfig:
    tier = CacheTierConfig(max_entries=max_entries, max_bytes=max_bytes, ttl_seconds=ttl_seconds)
    params = dict(
        svg=tier,
        png=tier,
        metadata=tier,
        search=tier,
        cleanup_interval_seconds=3600,
        cleanup_enabled=True,
        warmup_limit=100,
        render_timeout_seconds=5.0,
    )
    params.update(overrides)
    return CacheConfig(**params)


@pytest.fixture
def caches() -> IconCaches:
    return IconCaches.from_config(make_config())


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def make_caches():
    def _make(**kwargs) -> IconCaches:
        return IconCaches.from_config(make_config(**kwargs))

    return _make
