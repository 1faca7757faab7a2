from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Mapping, Sequence

from .context import IconCaches
from .facades import ArtifactCache
from .keys import generate_png_cache_key, generate_svg_cache_key
from .renderer import IconRenderer, PopularIcon

logger = logging.getLogger(__name__)

COMMON_SIZES = (16, 24, 32, 48)
COMMON_COLORS = ("#000000", "#ffffff", "#666666")


@dataclass
class WarmupResult:
    icons_processed: int = 0
    warmed: int = 0
    skipped: int = 0
    failed: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "iconsProcessed": self.icons_processed,
            "warmed": self.warmed,
            "skipped": self.skipped,
            "failed": self.failed,
        }


async def warmup_icon_cache(
    caches: IconCaches,
    icons: Sequence[PopularIcon | Mapping[str, Any]],
    renderer: IconRenderer,
    *,
    limit: int | None = None,
    sizes: Iterable[int] = COMMON_SIZES,
    colors: Iterable[str] = COMMON_COLORS,
    render_timeout: float | None = None,
) -> WarmupResult:
    """Render and cache the common size/color variants of popular icons.

    Variants already cached are skipped, so running this twice renders nothing
    the second time. A failing variant is logged and counted; the rest carry on.
    """
    if limit is None:
        limit = caches.config.warmup_limit
    if render_timeout is None:
        render_timeout = caches.config.render_timeout_seconds
    sizes = tuple(sizes)
    colors = tuple(colors)
    result = WarmupResult()

    logger.info("Warming up cache for %d icons (limit %d)", len(icons), limit)

    for item in icons[:limit]:
        result.icons_processed += 1
        try:
            icon = PopularIcon.coerce(item)
            variants = [
                (size, color, generate_svg_cache_key(icon.icon_name, icon.library, size, color),
                 generate_png_cache_key(icon.icon_name, icon.library, size, color))
                for size in sizes
                for color in colors
            ]
        except (ValueError, TypeError, AttributeError) as exc:
            logger.warning("Skipping warm-up for invalid icon %r: %s", item, exc)
            result.failed += 1
            continue

        for size, color, svg_key, png_key in variants:
            await _warm_one(
                caches.svg, svg_key, renderer.render_svg, icon, "svg", size, color,
                render_timeout, result,
            )
            await _warm_one(
                caches.png, png_key, renderer.render_png, icon, "png", size, color,
                render_timeout, result,
            )

    logger.info(
        "Cache warmup completed: %d warmed, %d skipped, %d failed",
        result.warmed, result.skipped, result.failed,
    )
    return result


async def _warm_one(
    cache: ArtifactCache,
    key: str,
    render: Callable[..., Awaitable[Any]],
    icon: PopularIcon,
    fmt: str,
    size: int,
    color: str,
    timeout: float,
    result: WarmupResult,
) -> None:
    if cache.has(key):
        result.skipped += 1
        return
    try:
        value = await asyncio.wait_for(render(icon.icon_name, icon.library, size, color), timeout)
        cache.set(key, value)
    except Exception as exc:
        result.failed += 1
        logger.warning(
            "Failed to warm %s for %s/%s size=%d color=%s: %s",
            fmt, icon.library, icon.icon_name, size, color, exc,
            exc_info=True,
        )
        return
    result.warmed += 1
