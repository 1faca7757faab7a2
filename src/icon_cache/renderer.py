from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol


class IconRenderer(Protocol):
    """Produces icon artifacts on a cache miss. Implemented outside this package."""

    async def render_svg(
        self,
        icon_name: str,
        library: str,
        size: int,
        color: str,
        background_color: str | None = None,
        padding: int | None = None,
    ) -> str: ...

    async def render_png(
        self,
        icon_name: str,
        library: str,
        size: int,
        color: str,
        background_color: str | None = None,
        padding: int | None = None,
    ) -> bytes: ...


@dataclass(frozen=True)
class PopularIcon:
    icon_name: str
    library: str

    @classmethod
    def coerce(cls, item: PopularIcon | Mapping[str, Any]) -> PopularIcon:
        if isinstance(item, PopularIcon):
            return item
        icon_name = item.get("iconName") or item.get("icon_name")
        return cls(icon_name=icon_name, library=item.get("library"))
