import pytest
from qr_poster.colors import InvalidColorFormat, adjust
from qr_poster.presets import (
    PosterStyle, get_background_swatches, get_qr_size_options, get_style_options, resolve_style
)

BRAND = "#2563eb"


@pytest.mark.parametrize("style_id", ["neon", "", None, "MINIMAL", 3])
def test_unknown_style_resolves_to_minimal(style_id):
    assert resolve_style(style_id, BRAND) == resolve_style("minimal", BRAND)


def test_enum_and_string_ids_resolve_the_same():
    assert resolve_style(PosterStyle.POSTER, BRAND) == resolve_style("poster", BRAND)


def test_brand_style_uses_gradient_header():
    style = resolve_style("brand", BRAND)
    assert style.header_gradient is True
    assert style.header_start == BRAND
    assert style.header_end == adjust(BRAND, 20)
    assert style.border_color == BRAND
    assert style.footer_background == adjust(BRAND, 95)
    assert style.has_call_to_action is False


def test_minimal_and_poster_headers_are_solid():
    assert resolve_style("minimal", BRAND).header_gradient is False
    assert resolve_style("poster", BRAND).header_gradient is False


def test_only_poster_has_call_to_action():
    assert resolve_style("poster", BRAND).has_call_to_action is True
    assert resolve_style("minimal", BRAND).has_call_to_action is False
    assert resolve_style("brand", BRAND).has_call_to_action is False


def test_poster_style_is_wider():
    assert resolve_style("poster", BRAND).width == 400
    assert resolve_style("minimal", BRAND).width == 340


def test_minimal_avatar_uses_brand_background():
    minimal = resolve_style("minimal", BRAND)
    assert (minimal.avatar_background, minimal.avatar_color) == (BRAND, "#ffffff")
    brand = resolve_style("brand", BRAND)
    assert (brand.avatar_background, brand.avatar_color) == ("#ffffff", BRAND)


def test_brand_color_is_validated():
    with pytest.raises(InvalidColorFormat):
        resolve_style("brand", "red")


def test_options_catalog():
    assert [s["id"] for s in get_style_options()] == ["minimal", "brand", "poster"]
    assert [s["value"] for s in get_qr_size_options()] == [180, 256, 360]
    assert len(get_background_swatches()) == 5
