import io

import pytest
import qrcode
from qrcode.constants import ERROR_CORRECT_H
from PIL import Image
from qr_poster.config import PosterConfig
from qr_poster.layout import compose
from qr_poster.models import StoreProfile
from qr_poster.renderer import PosterRenderer

TARGET_URL = "https://emprendego.shop/tienda/cafe-luna"


@pytest.fixture
def renderer():
    return PosterRenderer()


@pytest.fixture
def store():
    return StoreProfile(
        name="Café Luna",
        slug="cafe-luna",
        description="Café de especialidad tostado en casa, entregas a domicilio",
        whatsapp="+573001234567",
        social_links={"instagram": "cafeluna"},
    )


@pytest.mark.parametrize("style", ["minimal", "brand", "poster"])
def test_render_size_matches_metrics(renderer, store, style):
    layout = compose(store, TARGET_URL, PosterConfig(style=style, qr_size=180))
    metrics = renderer.measure(layout)
    image = renderer.render(layout, pixel_ratio=1)
    assert image.size == (metrics.width, metrics.height)
    assert image.mode == "RGBA"


def test_pixel_ratio_scales_output(renderer, store):
    layout = compose(store, TARGET_URL, PosterConfig(qr_size=180))
    small = renderer.render(layout, pixel_ratio=1)
    large = renderer.render(layout, pixel_ratio=2)
    assert large.size == (small.width * 2, small.height * 2)


def test_large_qr_widens_card(renderer, store):
    layout = compose(store, TARGET_URL, PosterConfig(qr_size=360))
    assert renderer.measure(layout).width == 360 + 2 * 16 + 2 * 24


def test_hidden_sections_take_no_space(renderer, store):
    full = renderer.measure(compose(store, TARGET_URL, PosterConfig()))
    trimmed = renderer.measure(compose(store, TARGET_URL, PosterConfig(show_url=False, show_socials=False)))
    assert trimmed.footer_height == 0
    assert trimmed.body_height < full.body_height
    assert trimmed.caption_height == full.caption_height


def test_rounded_corners_are_transparent(renderer, store):
    image = renderer.render(compose(store, TARGET_URL, PosterConfig()), pixel_ratio=1)
    assert image.getpixel((0, 0))[3] == 0


def test_minimal_header_is_solid_gray(renderer):
    layout = compose(StoreProfile(name="Luna"), TARGET_URL, PosterConfig(style="minimal", qr_size=180))
    image = renderer.render(layout, pixel_ratio=1)
    assert image.getpixel((image.width // 2, 5)) == (249, 250, 251, 255)


def test_render_qr_is_exact_size_with_transparent_background(renderer):
    qr = renderer.render_qr(TARGET_URL, 180, "#059669")
    assert qr.size == (180, 180)
    # Finder pattern: dark outer ring, light ring inside it
    assert qr.getpixel((0, 0)) == (5, 150, 105, 255)
    matrix = qrcode.QRCode(error_correction=ERROR_CORRECT_H, box_size=1, border=0)
    matrix.add_data(TARGET_URL)
    matrix.make(fit=True)
    modules = len(matrix.get_matrix())
    light = (180 * 3 // 2) // modules  # middle of module 1
    assert qr.getpixel((light, light))[3] == 0


def test_render_with_logo_image(renderer):
    store = StoreProfile(name="Luna", logo_url="https://cdn.emprendego.shop/luna.png")
    logo = Image.new("RGB", (120, 80), "#ff0000")
    image = renderer.render(compose(store, TARGET_URL, PosterConfig()), pixel_ratio=1, logo_image=logo)
    # Avatar sits at the left padding, vertically centered in the header
    header_height = renderer.measure(compose(store, TARGET_URL, PosterConfig())).header_height
    assert image.getpixel((24 + 28, header_height // 2)) == (255, 0, 0, 255)


def test_export_png_bytes(renderer, store):
    image = renderer.render(compose(store, TARGET_URL, PosterConfig()), pixel_ratio=1)
    data = renderer.export(image)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    assert Image.open(io.BytesIO(data)).size == image.size

