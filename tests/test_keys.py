import pytest

from icon_cache.keys import (
    InvalidCacheKeyError,
    generate_metadata_cache_key,
    generate_png_cache_key,
    generate_search_cache_key,
    generate_svg_cache_key,
    icon_key_prefix,
)


class TestRenderKeys:
    def test_svg_key_shape(self):
        assert generate_svg_cache_key("Home", "lucide", 24, "#000") == "svg:lucide:Home:24:#000:none:0"

    def test_png_key_shape(self):
        key = generate_png_cache_key("Home", "lucide", 32, "#fff", "#000", 4)
        assert key == "png:lucide:Home:32:#fff:#000:4"

    def test_deterministic(self):
        a = generate_svg_cache_key("Home", "lucide", 24, "#000", "#fff", 2)
        b = generate_svg_cache_key("Home", "lucide", 24, "#000", "#fff", 2)
        assert a == b

    def test_omitted_equals_explicit_default(self):
        base = generate_svg_cache_key("home", "lucide", 24, "#000")
        assert base == generate_svg_cache_key("home", "lucide", 24, "#000", None, None)
        assert base == generate_svg_cache_key("home", "lucide", 24, "#000", "", 0)

    @pytest.mark.parametrize(
        "args",
        [
            ("Home", "lucide", 24, "#000", "#fff", 2),
            ("User", "lucide", 24, "#000", None, None),
            ("Home", "heroicons", 24, "#000", None, None),
            ("Home", "lucide", 32, "#000", None, None),
            ("Home", "lucide", 24, "#111", None, None),
            ("Home", "lucide", 24, "#000", "#fff", None),
            ("Home", "lucide", 24, "#000", None, 3),
        ],
    )
    def test_any_changed_field_changes_key(self, args):
        base = generate_svg_cache_key("Home", "lucide", 24, "#000")
        assert generate_svg_cache_key(*args) != base

    def test_svg_and_png_keys_differ(self):
        assert generate_svg_cache_key("Home", "lucide", 24, "#000") != generate_png_cache_key(
            "Home", "lucide", 24, "#000"
        )

    def test_delimiter_in_field_is_escaped(self):
        # Without escaping both would read "svg:a:b:c:..."
        k1 = generate_svg_cache_key("b:c", "a", 24, "#000")
        k2 = generate_svg_cache_key("c", "a:b", 24, "#000")
        assert k1 != k2
        assert "b%3Ac" in k1

    def test_escape_char_itself_is_escaped(self):
        assert generate_svg_cache_key("a%3Ab", "x", 24, "#000") != generate_svg_cache_key(
            "a:b", "x", 24, "#000"
        )

    @pytest.mark.parametrize(
        "args",
        [
            ("", "lucide", 24, "#000"),
            ("   ", "lucide", 24, "#000"),
            (None, "lucide", 24, "#000"),
            ("Home", "", 24, "#000"),
            ("Home", "lucide", 0, "#000"),
            ("Home", "lucide", -16, "#000"),
            ("Home", "lucide", 24.5, "#000"),
            ("Home", "lucide", True, "#000"),
            ("Home", "lucide", 24, ""),
        ],
    )
    def test_invalid_inputs_fail_fast(self, args):
        with pytest.raises(InvalidCacheKeyError):
            generate_svg_cache_key(*args)

    def test_negative_padding_rejected(self):
        with pytest.raises(InvalidCacheKeyError):
            generate_png_cache_key("Home", "lucide", 24, "#000", None, -1)

    def test_invalid_key_error_is_value_error(self):
        with pytest.raises(ValueError):
            generate_png_cache_key("", "lucide", 24, "#000")


class TestMetadataKey:
    def test_shape(self):
        assert generate_metadata_cache_key("Home", "lucide") == "metadata:lucide:Home"

    def test_requires_identity(self):
        with pytest.raises(InvalidCacheKeyError):
            generate_metadata_cache_key("Home", "")


class TestSearchKey:
    def test_all_defaults(self):
        assert generate_search_cache_key() == "search:all:all:all:20:0"

    def test_defaults_equal_explicit(self):
        assert generate_search_cache_key() == generate_search_cache_key(None, None, None, 20, 0)
        assert generate_search_cache_key("", "", "") == generate_search_cache_key()

    def test_fields(self):
        key = generate_search_cache_key("arrow", "lucide", "navigation", 50, 100)
        assert key == "search:arrow:lucide:navigation:50:100"

    def test_pagination_changes_key(self):
        assert generate_search_cache_key("arrow", offset=20) != generate_search_cache_key("arrow")

    def test_query_with_delimiter(self):
        assert generate_search_cache_key("a:b") != generate_search_cache_key("a", "b")

    def test_literal_all_differs_from_no_filter(self):
        assert generate_search_cache_key("all") != generate_search_cache_key()
        assert generate_search_cache_key(library="all") != generate_search_cache_key()
        assert generate_search_cache_key(category="all") != generate_search_cache_key()
        assert generate_search_cache_key("all") == "search:%61ll:all:all:20:0"

    def test_literal_all_distinct_from_escaped_lookalike(self):
        assert generate_search_cache_key("all") != generate_search_cache_key("%61ll")
        assert generate_search_cache_key("allx") == "search:allx:all:all:20:0"

    def test_invalid_pagination(self):
        with pytest.raises(InvalidCacheKeyError):
            generate_search_cache_key(limit=0)
        with pytest.raises(InvalidCacheKeyError):
            generate_search_cache_key(offset=-1)


def test_icon_prefix_is_prefix_of_render_keys():
    prefix = icon_key_prefix("svg", "Home", "lucide")
    assert prefix == "svg:lucide:Home:"
    assert generate_svg_cache_key("Home", "lucide", 48, "#fff").startswith(prefix)
