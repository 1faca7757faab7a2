from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Iterator

from .config import CacheConfig, load_config
from .facades import ArtifactCache, MetadataCache, PNGCache, SearchCache, SVGCache


@dataclass
class IconCaches:
    """The four independent icon caches, owned by whoever builds them.

    Production code shares one instance per process (see ``get_icon_caches``);
    tests build their own.
    """

    config: CacheConfig
    svg: SVGCache
    png: PNGCache
    metadata: MetadataCache
    search: SearchCache

    @classmethod
    def from_config(cls, config: CacheConfig | None = None) -> IconCaches:
        config = config or load_config()
        return cls(
            config=config,
            svg=SVGCache.from_config(config.svg),
            png=PNGCache.from_config(config.png),
            metadata=MetadataCache.from_config(config.metadata),
            search=SearchCache.from_config(config.search),
        )

    def all(self) -> Iterator[tuple[str, ArtifactCache]]:
        yield "svg", self.svg
        yield "png", self.png
        yield "metadata", self.metadata
        yield "search", self.search


_default: IconCaches | None = None
_default_lock = Lock()


def get_icon_caches() -> IconCaches:
    global _default
    with _default_lock:
        if _default is None:
            _default = IconCaches.from_config()
        return _default
