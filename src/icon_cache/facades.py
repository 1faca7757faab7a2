from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .cache import SizedLRUCache, bytes_size, json_size, text_size
from .config import CacheTierConfig

V = TypeVar("V")


@dataclass(frozen=True)
class CacheStats:
    size: int
    calculated_size: int
    max_size: int
    max_entries: int

    def to_dict(self) -> dict[str, int]:
        return {
            "size": self.size,
            "calculatedSize": self.calculated_size,
            "maxSize": self.max_size,
            "maxEntries": self.max_entries,
        }


class ArtifactCache(Generic[V]):
    """Uniform get/set/has/delete/clear/stats wrapper over one cache primitive.

    Holds no state of its own; all state lives in the wrapped cache.
    """

    name = "artifact"

    def __init__(self, cache: SizedLRUCache[V]):
        self._cache = cache

    @property
    def backend(self) -> SizedLRUCache[V]:
        return self._cache

    def get(self, key: str) -> V | None:
        return self._cache.get(key)

    def set(self, key: str, value: V) -> None:
        self._cache.set(key, value)

    def has(self, key: str) -> bool:
        return self._cache.has(key)

    def delete(self, key: str) -> bool:
        return self._cache.delete(key)

    def clear(self) -> None:
        self._cache.clear()

    def get_stats(self) -> CacheStats:
        size, calculated_size = self._cache.stats()
        return CacheStats(
            size=size,
            calculated_size=calculated_size,
            max_size=self._cache.max_bytes,
            max_entries=self._cache.max_entries,
        )


class SVGCache(ArtifactCache[str]):
    name = "svg"

    @classmethod
    def from_config(cls, config: CacheTierConfig) -> SVGCache:
        return cls(_build(cls.name, config, text_size))

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"SVG markup must be str, got {type(value).__name__}")
        super().set(key, value)


class PNGCache(ArtifactCache[bytes]):
    name = "png"

    @classmethod
    def from_config(cls, config: CacheTierConfig) -> PNGCache:
        return cls(_build(cls.name, config, bytes_size))

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"PNG data must be bytes, got {type(value).__name__}")
        super().set(key, bytes(value))


class MetadataCache(ArtifactCache[Any]):
    name = "metadata"

    @classmethod
    def from_config(cls, config: CacheTierConfig) -> MetadataCache:
        return cls(_build(cls.name, config, json_size))


class SearchCache(ArtifactCache[Any]):
    name = "search"

    @classmethod
    def from_config(cls, config: CacheTierConfig) -> SearchCache:
        return cls(_build(cls.name, config, json_size))


def _build(name: str, config: CacheTierConfig, size_of) -> SizedLRUCache:
    return SizedLRUCache(
        max_entries=config.max_entries,
        max_bytes=config.max_bytes,
        ttl_seconds=config.ttl_seconds,
        size_of=size_of,
        name=name,
    )
