# QR Poster Module
# Pure core (colors, styles, config, layout) + Pillow export

from .colors import InvalidColorFormat, adjust
from .config import PosterConfig
from .exporter import ExportError, ExportResult, PosterExporter
from .layout import PosterComposer, RenderableLayout, compose
from .models import SocialLinks, StoreProfile
from .presets import PosterStyle, QrSize, ResolvedStyle, resolve_style
from .renderer import PosterRenderer

__all__ = [
    "InvalidColorFormat",
    "adjust",
    "PosterConfig",
    "ExportError",
    "ExportResult",
    "PosterExporter",
    "PosterComposer",
    "RenderableLayout",
    "compose",
    "SocialLinks",
    "StoreProfile",
    "PosterStyle",
    "QrSize",
    "ResolvedStyle",
    "resolve_style",
    "PosterRenderer",
]
