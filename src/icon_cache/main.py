from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager, suppress
from typing import Any, Mapping, Sequence

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from .context import IconCaches, get_icon_caches
from .invalidation import invalidate_all_caches, invalidate_icon_cache, invalidate_search_cache
from .keys import InvalidCacheKeyError
from .maintenance import get_cache_stats
from .renderer import IconRenderer, PopularIcon
from .scheduler import CacheCleanupScheduler
from .schemas import (
    CacheStatsResponse,
    CleanupResponse,
    HealthResponse,
    IconIdentity,
    InvalidationResponse,
    WarmupRequest,
    WarmupResponse,
)
from .warmup import warmup_icon_cache

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(
    caches: IconCaches | None = None,
    renderer: IconRenderer | None = None,
    popular_icons: Sequence[PopularIcon | Mapping[str, Any]] | None = None,
) -> FastAPI:
    caches = caches or get_icon_caches()
    scheduler = CacheCleanupScheduler(caches)

    async def startup_warmup() -> None:
        try:
            await warmup_icon_cache(caches, popular_icons, renderer)
        except Exception as exc:
            logger.error("Startup cache warmup failed: %s", exc, exc_info=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        scheduler.start()
        # Warm up in the background; requests are served meanwhile
        if renderer is not None and popular_icons:
            app.state.warmup_task = asyncio.create_task(startup_warmup())
        yield
        task = app.state.warmup_task
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
            logger.info("Startup cache warmup cancelled at shutdown")
        await scheduler.stop()

    app = FastAPI(title="Icon Cache Server", version="0.1.0", lifespan=lifespan)
    app.state.caches = caches
    app.state.renderer = renderer
    app.state.cleanup_scheduler = scheduler
    app.state.warmup_task = None

    @app.get("/api/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=app.version)

    @app.get("/api/icons/cache-stats", response_model=CacheStatsResponse)
    async def cache_stats():
        return {"success": True, "data": get_cache_stats(caches)}

    @app.post("/api/icons/cache/invalidate", response_model=InvalidationResponse)
    async def invalidate_icon(req: IconIdentity):
        removed = invalidate_icon_cache(caches, req.icon_name, req.library)
        return InvalidationResponse(removed=removed)

    @app.post("/api/icons/cache/invalidate-search", response_model=InvalidationResponse)
    async def invalidate_search():
        invalidate_search_cache(caches)
        return InvalidationResponse()

    @app.post("/api/icons/cache/invalidate-all", response_model=InvalidationResponse)
    async def invalidate_all():
        invalidate_all_caches(caches)
        return InvalidationResponse()

    @app.post("/api/icons/cache/warmup", response_model=WarmupResponse)
    async def warmup(req: WarmupRequest):
        if renderer is None:
            return JSONResponse(
                content={"detail": "No icon renderer configured"}, status_code=503
            )
        icons = [PopularIcon(icon_name=i.icon_name, library=i.library) for i in req.icons]
        result = await warmup_icon_cache(caches, icons, renderer, limit=req.limit)
        return {"success": True, **result.to_dict()}

    @app.post("/api/icons/cache/cleanup", response_model=CleanupResponse)
    async def cleanup():
        deltas = scheduler.run_once() or {}
        return CleanupResponse(
            before={name: b for name, (b, _) in deltas.items()},
            after={name: a for name, (_, a) in deltas.items()},
        )

    @app.exception_handler(InvalidCacheKeyError)
    async def invalid_key_handler(request: Request, exc: InvalidCacheKeyError):
        return JSONResponse(content={"detail": str(exc)}, status_code=422)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error("Icon cache request failed: %s", exc, exc_info=True)
        return Response(
            content=json.dumps(
                {"detail": f"Icon cache request failed: {exc}", "type": type(exc).__name__}
            ),
            status_code=500,
            media_type="application/json",
        )

    return app


app = create_app()
