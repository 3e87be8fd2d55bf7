"""
Poster style presets and customizer options.

Supports three poster styles:
- Minimal: clean white card
- Brand: gradient header in the store's brand color
- Poster: dark header with a call-to-action line
"""

from enum import Enum
from typing import List, Optional
from dataclasses import dataclass

from .colors import adjust, normalize_hex


class PosterStyle(Enum):
    """Available poster styles."""

    MINIMAL = "minimal"
    BRAND = "brand"
    POSTER = "poster"

    @classmethod
    def parse(cls, value) -> "PosterStyle":
        """Map a raw style id to a style, falling back to MINIMAL."""
        if isinstance(value, cls):
            return value
        for style in cls:
            if style.value == value:
                return style
        return cls.MINIMAL


class QrSize(Enum):
    """QR code sizes in pixels."""

    SMALL = 180
    MEDIUM = 256
    LARGE = 360


# Tailwind grays used across the poster
GRAY_50 = "#f9fafb"
GRAY_100 = "#f3f4f6"
GRAY_200 = "#e5e7eb"
GRAY_400 = "#9ca3af"
GRAY_500 = "#6b7280"
GRAY_600 = "#4b5563"
GRAY_700 = "#374151"
GRAY_800 = "#1f2937"
GRAY_900 = "#111827"
WHITE = "#ffffff"
BLUE_50 = "#eff6ff"


@dataclass(frozen=True)
class ResolvedStyle:
    """Concrete visual parameters for one poster style."""
    style: PosterStyle
    width: int                      # Poster width in CSS pixels
    corner_radius: int
    shadow: str                     # "lg" or "2xl"
    background_tint: Optional[str]  # Soft gradient end over bg_color
    border_width: int
    border_color: str
    header_start: str
    header_end: str
    header_gradient: bool           # False means solid header_start
    header_text_color: str
    footer_text_color: str
    footer_background: str
    qr_frame_shadow: bool
    qr_frame_border: Optional[str]
    avatar_background: str
    avatar_color: str
    has_call_to_action: bool = False


def resolve_style(style_id, brand_color: str) -> ResolvedStyle:
    """
    Resolve a style id into concrete visual parameters.

    Args:
        style_id: "minimal", "brand", "poster" or a PosterStyle.
            Anything else resolves to minimal.
        brand_color: Store brand color as #RRGGBB

    Returns:
        ResolvedStyle for the poster
    """
    style = PosterStyle.parse(style_id)
    brand_color = normalize_hex(brand_color)

    if style is PosterStyle.BRAND:
        return ResolvedStyle(
            style=style,
            width=340,
            corner_radius=24,
            shadow="2xl",
            background_tint=BLUE_50,
            border_width=4,
            border_color=brand_color,
            header_start=brand_color,
            header_end=adjust(brand_color, 20),
            header_gradient=True,
            header_text_color=WHITE,
            footer_text_color=GRAY_600,
            footer_background=adjust(brand_color, 95),
            qr_frame_shadow=True,
            qr_frame_border=None,
            avatar_background=WHITE,
            avatar_color=brand_color,
        )
    elif style is PosterStyle.POSTER:
        return ResolvedStyle(
            style=style,
            width=400,
            corner_radius=16,
            shadow="2xl",
            background_tint=None,
            border_width=2,
            border_color=GRAY_200,
            header_start=GRAY_800,
            header_end=GRAY_700,
            header_gradient=False,
            header_text_color=WHITE,
            footer_text_color=GRAY_500,
            footer_background=GRAY_50,
            qr_frame_shadow=True,
            qr_frame_border=None,
            avatar_background=WHITE,
            avatar_color=brand_color,
            has_call_to_action=True,
        )
    else:
        return ResolvedStyle(
            style=PosterStyle.MINIMAL,
            width=340,
            corner_radius=16,
            shadow="lg",
            background_tint=None,
            border_width=1,
            border_color=GRAY_200,
            header_start=GRAY_50,
            header_end=GRAY_100,
            header_gradient=False,
            header_text_color=GRAY_900,
            footer_text_color=GRAY_500,
            footer_background=GRAY_50,
            qr_frame_shadow=False,
            qr_frame_border=GRAY_200,
            avatar_background=brand_color,
            avatar_color=WHITE,
        )


STYLE_OPTIONS = {
    PosterStyle.MINIMAL: ("Minimal", "Limpio y elegante"),
    PosterStyle.BRAND: ("Brand", "Con tu color de marca"),
    PosterStyle.POSTER: ("Poster", "Llamativo con CTA"),
}

QR_SIZE_OPTIONS = {
    QrSize.SMALL: ("Pequeño", "Para web"),
    QrSize.MEDIUM: ("Mediano", "Multiuso"),
    QrSize.LARGE: ("Grande", "Impresión"),
}

BACKGROUND_SWATCHES = [
    ("#ffffff", "Blanco"),
    ("#f9fafb", "Gris claro"),
    ("#fef3c7", "Crema"),
    ("#dbeafe", "Azul"),
    ("#f3e8ff", "Lila"),
]


def get_style_options() -> List[dict]:
    """Get list of poster styles for user selection."""
    return [
        {"id": style.value, "name": name, "description": description}
        for style, (name, description) in STYLE_OPTIONS.items()
    ]


def get_qr_size_options() -> List[dict]:
    """Get list of QR sizes for user selection."""
    return [
        {"value": size.value, "label": label, "description": description}
        for size, (label, description) in QR_SIZE_OPTIONS.items()
    ]


def get_background_swatches() -> List[dict]:
    """Get preset background colors."""
    return [{"value": value, "label": label} for value, label in BACKGROUND_SWATCHES]
