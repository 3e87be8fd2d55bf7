"""
PosterExporter - Main orchestrator for poster export.

Combines:
- PosterComposer: store + config to layout
- PosterRenderer: layout to Pillow image to PNG bytes

The layout is composed when export() is called and only that snapshot is
rendered, so config edits made while an export is running never leak
into the image.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Optional

from PIL import Image

from .config import PosterConfig
from .layout import PosterComposer, RenderableLayout
from .models import StoreProfile
from .renderer import DEFAULT_PIXEL_RATIO, PosterRenderer
from .sharing import export_filename

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when a layout cannot be rasterized."""


@dataclass
class ExportResult:
    """Result of exporting a poster."""
    success: bool
    filename: str
    image_bytes: Optional[bytes] = None
    layout: Optional[RenderableLayout] = None
    error: Optional[str] = None


class PosterExporter:
    """
    Exports posters as images.

    Workflow:
    1. Compose layout from store, URL and config (snapshot)
    2. Render the snapshot on a worker thread
    3. Encode to PNG bytes
    """

    def __init__(
        self,
        renderer: Optional[PosterRenderer] = None,
        composer: Optional[PosterComposer] = None,
        pixel_ratio: int = DEFAULT_PIXEL_RATIO,
        format: str = "PNG",
    ):
        """Initialize exporter with its components."""
        self.renderer = renderer or PosterRenderer()
        self.composer = composer or PosterComposer()
        self.pixel_ratio = pixel_ratio
        self.format = format

    def render_layout(self, layout: RenderableLayout, logo_image: Optional[Image.Image] = None) -> bytes:
        """
        Rasterize a layout to image bytes.

        Raises:
            ExportError: If Pillow or qrcode fail on the layout
        """
        try:
            image = self.renderer.render(layout, pixel_ratio=self.pixel_ratio, logo_image=logo_image)
            return self.renderer.export(image, format=self.format)
        except Exception as e:
            raise ExportError(f"Poster rendering failed: {e}") from e

    def export(
        self,
        store: StoreProfile,
        target_url: str,
        config: PosterConfig,
        remove_branding: bool = False,
        logo_image: Optional[Image.Image] = None,
    ) -> Awaitable[ExportResult]:
        """
        Export a poster.

        Args:
            store: Store record
            target_url: URL encoded in the QR
            config: Poster configuration at the time of the request
            remove_branding: Hide the powered-by caption
            logo_image: Pre-loaded store logo

        Returns:
            Awaitable ExportResult; failures are reported, not raised.
            The layout is composed before this returns.
        """
        layout = self.composer.compose(store, target_url, config, remove_branding)
        return self._render_snapshot(layout, export_filename(store.slug), logo_image)

    async def _render_snapshot(
        self,
        layout: RenderableLayout,
        filename: str,
        logo_image: Optional[Image.Image],
    ) -> ExportResult:
        logger.info(f"Exporting {layout.style.style.value} poster for {layout.header.title!r}")

        try:
            image_bytes = await asyncio.to_thread(self.render_layout, layout, logo_image)
        except ExportError as e:
            logger.error(f"Poster export failed: {e}")
            return ExportResult(success=False, filename=filename, layout=layout, error=str(e))

        logger.info(f"Poster exported: {filename} ({len(image_bytes)} bytes)")
        return ExportResult(success=True, filename=filename, image_bytes=image_bytes, layout=layout)
