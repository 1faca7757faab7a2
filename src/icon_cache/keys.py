"""Cache key derivation.

Keys are ``:``-delimited. Field values containing ``:`` (or the ``%`` escape
character itself) are percent-escaped, so two different inputs can never
produce the same key. Omitted optional fields collapse to the same sentinel
as their explicit defaults.
"""

from __future__ import annotations

SVG_PREFIX = "svg"
PNG_PREFIX = "png"
METADATA_PREFIX = "metadata"
SEARCH_PREFIX = "search"

DEFAULT_SEARCH_LIMIT = 20


class InvalidCacheKeyError(ValueError):
    """Raised when key inputs are missing or malformed."""


def _escape(value: str) -> str:
    return value.replace("%", "%25").replace(":", "%3A")


def _require_text(field: str, value: str | None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidCacheKeyError(f"{field} is required")
    return _escape(value)


def _optional_text(value: str | None, sentinel: str, reserve_sentinel: bool = False) -> str:
    if value is None or value == "":
        return sentinel
    if not isinstance(value, str):
        raise InvalidCacheKeyError(f"expected a string, got {type(value).__name__}")
    escaped = _escape(value)
    if reserve_sentinel and escaped == sentinel:
        # A literal "all" must not read as "no filter"
        return f"%{ord(escaped[0]):02X}{escaped[1:]}"
    return escaped


def _require_int(field: str, value, minimum: int) -> int:
    # bool is an int subclass but never a valid size
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCacheKeyError(f"{field} must be an integer")
    if value < minimum:
        raise InvalidCacheKeyError(f"{field} must be >= {minimum}")
    return value


def icon_key_prefix(kind: str, icon_name: str, library: str) -> str:
    """Structural prefix shared by every render variant of one icon."""
    return f"{kind}:{_require_text('library', library)}:{_require_text('icon_name', icon_name)}:"


def _render_key(
    kind: str,
    icon_name: str,
    library: str,
    size: int,
    color: str,
    background_color: str | None,
    padding: int | None,
) -> str:
    prefix = icon_key_prefix(kind, icon_name, library)
    size = _require_int("size", size, 1)
    color = _require_text("color", color)
    background = _optional_text(background_color, "none")
    pad = 0 if padding is None else _require_int("padding", padding, 0)
    return f"{prefix}{size}:{color}:{background}:{pad}"


def generate_svg_cache_key(
    icon_name: str,
    library: str,
    size: int,
    color: str,
    background_color: str | None = None,
    padding: int | None = None,
) -> str:
    return _render_key(SVG_PREFIX, icon_name, library, size, color, background_color, padding)


def generate_png_cache_key(
    icon_name: str,
    library: str,
    size: int,
    color: str,
    background_color: str | None = None,
    padding: int | None = None,
) -> str:
    return _render_key(PNG_PREFIX, icon_name, library, size, color, background_color, padding)


def generate_metadata_cache_key(icon_name: str, library: str) -> str:
    # Render parameters never affect metadata
    return icon_key_prefix(METADATA_PREFIX, icon_name, library)[:-1]


def generate_search_cache_key(
    query: str | None = None,
    library: str | None = None,
    category: str | None = None,
    limit: int | None = None,
    offset: int | None = None,
) -> str:
    limit = DEFAULT_SEARCH_LIMIT if limit is None else _require_int("limit", limit, 1)
    offset = 0 if offset is None else _require_int("offset", offset, 0)
    return ":".join(
        [
            SEARCH_PREFIX,
            _optional_text(query, "all", reserve_sentinel=True),
            _optional_text(library, "all", reserve_sentinel=True),
            _optional_text(category, "all", reserve_sentinel=True),
            str(limit),
            str(offset),
        ]
    )
