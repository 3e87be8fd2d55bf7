"""
PosterRenderer - Pillow-based rasterizer for composed poster layouts.

Handles:
1. Measuring block heights from the layout
2. Painting header fill (solid or gradient), logo or initial avatar
3. Drawing the QR code with qrcode's module matrix
4. Footer contact row and powered-by caption
5. Rounded card border
6. Exporting final image

The renderer never fetches anything; a remote logo must be passed in as
an already-loaded image.
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import qrcode
from qrcode.constants import ERROR_CORRECT_H
from PIL import Image, ImageDraw, ImageFilter, ImageFont, ImageOps

from .colors import hex_to_rgb
from .layout import BodyBlock, FooterBlock, HeaderBlock, LogoAvailable, RenderableLayout
from .presets import GRAY_100, GRAY_400, GRAY_500, GRAY_900, WHITE, ResolvedStyle

logger = logging.getLogger(__name__)

# Sizes in CSS pixels; multiplied by the pixel ratio when drawing
HEADER_PAD_X = 24
HEADER_PAD_Y = 20
AVATAR_SIZE = 56
AVATAR_RADIUS = 12
HEADER_GAP = 16
TITLE_SIZE = 20
TITLE_LINE = 28
SUBTITLE_SIZE = 14
SUBTITLE_LINE = 20

BODY_PAD_X = 24
BODY_PAD_Y = 32
CTA_SIZE = 18
CTA_LINE = 28
CTA_GAP = 16
FRAME_PAD = 16
FRAME_RADIUS = 16
SHADOW_MARGIN = 20  # must stay below BODY_PAD_X
SHADOW_BLUR = 8
URL_GAP = 16
URL_SIZE = 14
URL_LINE = 20

FOOTER_PAD_Y = 16
FOOTER_SIZE = 14
FOOTER_LINE = 20
FOOTER_ENTRY_GAP = 16

CAPTION_PAD_Y = 8
CAPTION_SIZE = 12
CAPTION_LINE = 16

DEFAULT_PIXEL_RATIO = 3


@dataclass
class PosterMetrics:
    """Block heights of a poster, in CSS pixels."""
    width: int
    header_height: int
    body_height: int
    footer_height: int
    caption_height: int

    @property
    def height(self) -> int:
        return self.header_height + self.body_height + self.footer_height + self.caption_height


class PosterRenderer:
    """
    Renders a RenderableLayout to a Pillow image.

    Every block of the layout is always visited; hidden elements take
    no space but the drawing order never changes.
    """

    FONT_PATHS = [
        "/System/Library/Fonts/Helvetica.ttc",  # macOS
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",  # Linux
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",  # Linux
        "C:\\Windows\\Fonts\\arial.ttf",  # Windows
    ]

    def __init__(self, font_path: Optional[str] = None):
        """
        Initialize renderer.

        Args:
            font_path: Optional TrueType font used for all text
        """
        self.font_path = font_path
        self._fonts = {}

    def _get_font(self, size: int) -> ImageFont.ImageFont:
        """Get font for text rendering, cached per size."""
        if size in self._fonts:
            return self._fonts[size]

        font = None
        candidates = [self.font_path] if self.font_path else []
        candidates.extend(self.FONT_PATHS)

        for fp in candidates:
            try:
                font = ImageFont.truetype(fp, size)
                break
            except OSError:
                continue

        if font is None:
            if self.font_path:
                logger.warning(f"Failed to load font {self.font_path}, using Pillow default")
            font = ImageFont.load_default(size)

        self._fonts[size] = font
        return font

    # ----- measuring -----

    def measure(self, layout: RenderableLayout) -> PosterMetrics:
        """
        Compute block heights for a layout.

        The card grows wider than the style width when a large QR would
        not fit inside it.
        """
        header = layout.header
        text_height = TITLE_LINE + (SUBTITLE_LINE if header.subtitle else 0)
        avatar_height = AVATAR_SIZE if header.logo_visible else 0
        header_height = 2 * HEADER_PAD_Y + max(avatar_height, text_height)

        body = layout.body
        body_height = 2 * BODY_PAD_Y + body.qr.size + 2 * FRAME_PAD
        if body.call_to_action_visible:
            body_height += CTA_LINE + CTA_GAP
        if body.display_url_visible:
            body_height += URL_GAP + URL_LINE

        footer_height = 2 * FOOTER_PAD_Y + FOOTER_LINE + 1 if layout.footer.visible else 0
        caption_height = 2 * CAPTION_PAD_Y + CAPTION_LINE if layout.footer.caption_visible else 0

        width = max(layout.width, body.qr.size + 2 * FRAME_PAD + 2 * BODY_PAD_X)

        return PosterMetrics(
            width=width,
            header_height=header_height,
            body_height=body_height,
            footer_height=footer_height,
            caption_height=caption_height,
        )

    # ----- drawing helpers -----

    def _fill_gradient(
        self,
        image: Image.Image,
        box: Tuple[int, int, int, int],
        start: str,
        end: str,
        horizontal: bool = True,
    ) -> None:
        """Paint a linear gradient inside box."""
        draw = ImageDraw.Draw(image)
        x1, y1, x2, y2 = box
        c1 = hex_to_rgb(start)
        c2 = hex_to_rgb(end)
        span = max((x2 - x1) if horizontal else (y2 - y1), 1)

        for i in range(span):
            ratio = i / span
            r = int(c1[0] + (c2[0] - c1[0]) * ratio)
            g = int(c1[1] + (c2[1] - c1[1]) * ratio)
            b = int(c1[2] + (c2[2] - c1[2]) * ratio)
            if horizontal:
                draw.line([(x1 + i, y1), (x1 + i, y2 - 1)], fill=(r, g, b, 255))
            else:
                draw.line([(x1, y1 + i), (x2 - 1, y1 + i)], fill=(r, g, b, 255))

    def _fit_text(self, draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> str:
        """Trim text with an ellipsis so it fits on one line."""
        if draw.textlength(text, font=font) <= max_width:
            return text
        while text and draw.textlength(text + "…", font=font) > max_width:
            text = text[:-1]
        return text + "…"

    def _draw_centered_text(
        self,
        draw: ImageDraw.ImageDraw,
        text: str,
        font,
        center_x: int,
        top: int,
        line_height: int,
        fill: str,
    ) -> None:
        bbox = draw.textbbox((0, 0), text, font=font)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]
        x = center_x - text_width // 2 - bbox[0]
        y = top + (line_height - text_height) // 2 - bbox[1]
        draw.text((x, y), text, font=font, fill=fill)

    def _rounded_mask(self, size: Tuple[int, int], radius: int) -> Image.Image:
        mask = Image.new('L', size, 0)
        ImageDraw.Draw(mask).rounded_rectangle([(0, 0), (size[0] - 1, size[1] - 1)], radius=radius, fill=255)
        return mask

    def render_qr(self, data: str, size: int, foreground: str) -> Image.Image:
        """
        Draw a QR code on a transparent square.

        Args:
            data: Payload encoded in the QR
            size: Output size in pixels
            foreground: Module color as #RRGGBB

        Returns:
            RGBA image of exactly size x size
        """
        qr = qrcode.QRCode(error_correction=ERROR_CORRECT_H, box_size=1, border=0)
        qr.add_data(data)
        qr.make(fit=True)
        matrix = qr.get_matrix()

        modules = len(matrix)
        image = Image.new('RGBA', (size, size), (0, 0, 0, 0))
        draw = ImageDraw.Draw(image)
        color = hex_to_rgb(foreground) + (255,)

        for row, cells in enumerate(matrix):
            y1 = row * size // modules
            y2 = (row + 1) * size // modules
            for col, dark in enumerate(cells):
                if not dark:
                    continue
                x1 = col * size // modules
                x2 = (col + 1) * size // modules
                draw.rectangle([(x1, y1), (x2 - 1, y2 - 1)], fill=color)

        return image

    # ----- blocks -----

    def _draw_header(
        self,
        canvas: Image.Image,
        header: HeaderBlock,
        style: ResolvedStyle,
        top: int,
        width: int,
        height: int,
        scale: int,
        logo_image: Optional[Image.Image],
    ) -> None:
        box = (0, top, width, top + height)
        if header.gradient:
            self._fill_gradient(canvas, box, header.fill_start, header.fill_end)
        else:
            ImageDraw.Draw(canvas).rectangle([(0, top), (width - 1, top + height - 1)], fill=header.fill_start)

        draw = ImageDraw.Draw(canvas)
        x = HEADER_PAD_X * scale

        if header.logo_visible:
            avatar = AVATAR_SIZE * scale
            avatar_top = top + (height - avatar) // 2

            if isinstance(header.logo, LogoAvailable) and logo_image is not None:
                logo = logo_image.convert('RGBA')
                # object-cover: crop to square before scaling
                logo = ImageOps.fit(logo, (avatar, avatar), Image.Resampling.LANCZOS)
                mask = self._rounded_mask((avatar, avatar), AVATAR_RADIUS * scale)
                backing = Image.new('RGBA', (avatar, avatar), WHITE)
                backing.paste(logo, (0, 0), logo)
                canvas.paste(backing, (x, avatar_top), mask)
            else:
                if isinstance(header.logo, LogoAvailable):
                    logger.info("Logo image not supplied, drawing initial avatar")
                    background, color = style.avatar_background, style.avatar_color
                    initial = header.title[:1].upper()
                else:
                    background, color = header.logo.background, header.logo.color
                    initial = header.logo.initial
                draw.rounded_rectangle(
                    [(x, avatar_top), (x + avatar - 1, avatar_top + avatar - 1)],
                    radius=AVATAR_RADIUS * scale,
                    fill=background,
                )
                self._draw_centered_text(
                    draw, initial, self._get_font(TITLE_SIZE * scale),
                    x + avatar // 2, avatar_top, avatar, color,
                )

            x += (AVATAR_SIZE + HEADER_GAP) * scale

        text_width = width - x - HEADER_PAD_X * scale
        lines = TITLE_LINE + (SUBTITLE_LINE if header.subtitle else 0)
        text_top = top + (height - lines * scale) // 2

        title_font = self._get_font(TITLE_SIZE * scale)
        title = self._fit_text(draw, header.title, title_font, text_width)
        draw.text((x, text_top), title, font=title_font, fill=header.text_color)

        if header.subtitle:
            subtitle_font = self._get_font(SUBTITLE_SIZE * scale)
            subtitle = self._fit_text(draw, header.subtitle, subtitle_font, text_width)
            # opacity-80 over the header fill
            text_rgb = hex_to_rgb(header.text_color)
            fill_rgb = hex_to_rgb(header.fill_start)
            fill = tuple(int(t * 0.8 + f * 0.2) for t, f in zip(text_rgb, fill_rgb))
            draw.text((x, text_top + TITLE_LINE * scale), subtitle, font=subtitle_font, fill=fill)

    def _draw_body(
        self,
        canvas: Image.Image,
        body: BodyBlock,
        top: int,
        width: int,
        height: int,
        scale: int,
    ) -> None:
        draw = ImageDraw.Draw(canvas)
        draw.rectangle([(0, top), (width - 1, top + height - 1)], fill=body.background)

        center_x = width // 2
        y = top + BODY_PAD_Y * scale

        if body.call_to_action_visible:
            self._draw_centered_text(
                draw, body.call_to_action, self._get_font(CTA_SIZE * scale),
                center_x, y, CTA_LINE * scale, GRAY_900,
            )
            y += (CTA_LINE + CTA_GAP) * scale

        frame = (body.qr.size + 2 * FRAME_PAD) * scale
        frame_x = center_x - frame // 2
        radius = FRAME_RADIUS * scale

        if body.frame_shadow:
            margin = SHADOW_MARGIN * scale
            shadow = Image.new('RGBA', (frame + 2 * margin, frame + 2 * margin), (0, 0, 0, 0))
            ImageDraw.Draw(shadow).rounded_rectangle(
                [(margin, margin + 4 * scale), (margin + frame - 1, margin + frame - 1 + 4 * scale)],
                radius=radius,
                fill=(0, 0, 0, 20),
            )
            shadow = shadow.filter(ImageFilter.GaussianBlur(SHADOW_BLUR * scale))
            canvas.alpha_composite(shadow, (frame_x - margin, y - margin))
            draw = ImageDraw.Draw(canvas)

        draw.rounded_rectangle(
            [(frame_x, y), (frame_x + frame - 1, y + frame - 1)],
            radius=radius,
            fill=WHITE,
            outline=body.frame_border,
            width=scale if body.frame_border else 0,
        )

        qr_image = self.render_qr(body.qr.data, body.qr.size * scale, body.qr.foreground)
        offset = FRAME_PAD * scale
        canvas.alpha_composite(qr_image, (frame_x + offset, y + offset))
        y += frame

        if body.display_url_visible:
            y += URL_GAP * scale
            font = self._get_font(URL_SIZE * scale)
            label = self._fit_text(draw, body.display_url, font, width - 2 * BODY_PAD_X * scale)
            self._draw_centered_text(draw, label, font, center_x, y, URL_LINE * scale, GRAY_500)

    def _draw_footer(
        self,
        canvas: Image.Image,
        footer: FooterBlock,
        top: int,
        width: int,
        footer_height: int,
        caption_height: int,
        scale: int,
    ) -> None:
        draw = ImageDraw.Draw(canvas)

        if footer.visible:
            draw.rectangle([(0, top), (width - 1, top + footer_height - 1)], fill=footer.background)
            draw.rectangle([(0, top), (width - 1, top + scale - 1)], fill=GRAY_100)

            font = self._get_font(FOOTER_SIZE * scale)
            gap = FOOTER_ENTRY_GAP * scale
            labels = [entry.label for entry in footer.entries]
            widths = [int(draw.textlength(label, font=font)) for label in labels]
            row_width = sum(widths) + gap * (len(labels) - 1)
            x = (width - row_width) // 2
            y = top + scale + FOOTER_PAD_Y * scale

            for label, label_width in zip(labels, widths):
                self._draw_centered_text(
                    draw, label, font, x + label_width // 2, y, FOOTER_LINE * scale, footer.text_color,
                )
                x += label_width + gap

            top += footer_height

        if footer.caption_visible:
            draw.rectangle([(0, top), (width - 1, top + caption_height - 1)], fill=footer.caption_background)
            self._draw_centered_text(
                draw, footer.caption, self._get_font(CAPTION_SIZE * scale),
                width // 2, top + CAPTION_PAD_Y * scale, CAPTION_LINE * scale, GRAY_400,
            )

    # ----- poster -----

    def render(
        self,
        layout: RenderableLayout,
        pixel_ratio: int = DEFAULT_PIXEL_RATIO,
        logo_image: Optional[Image.Image] = None,
    ) -> Image.Image:
        """
        Render complete poster.

        Args:
            layout: Composed poster layout
            pixel_ratio: Output pixels per CSS pixel
            logo_image: Pre-loaded store logo, used when the layout has one

        Returns:
            RGBA poster image
        """
        scale = max(int(pixel_ratio), 1)
        metrics = self.measure(layout)
        width = metrics.width * scale
        height = metrics.height * scale

        canvas = Image.new('RGBA', (width, height), layout.background)
        if layout.style.background_tint:
            self._fill_gradient(
                canvas, (0, 0, width, height), layout.background, layout.style.background_tint,
                horizontal=False,
            )

        top = 0
        header_height = metrics.header_height * scale
        self._draw_header(canvas, layout.header, layout.style, top, width, header_height, scale, logo_image)
        top += header_height

        body_height = metrics.body_height * scale
        self._draw_body(canvas, layout.body, top, width, body_height, scale)
        top += body_height

        self._draw_footer(
            canvas, layout.footer, top, width,
            metrics.footer_height * scale, metrics.caption_height * scale, scale,
        )

        # Card border and rounded corners
        radius = layout.style.corner_radius * scale
        border = layout.style.border_width * scale
        ImageDraw.Draw(canvas).rounded_rectangle(
            [(0, 0), (width - 1, height - 1)],
            radius=radius,
            outline=layout.style.border_color,
            width=border,
        )
        poster = Image.new('RGBA', (width, height), (0, 0, 0, 0))
        poster.paste(canvas, (0, 0), self._rounded_mask((width, height), radius))

        logger.debug(f"Rendered {layout.style.style.value} poster at {width}x{height}")
        return poster

    def export(self, image: Image.Image, format: str = "PNG") -> bytes:
        """Encode the poster image to bytes (PNG keeps the transparent corners)."""
        buffer = io.BytesIO()
        image.save(buffer, format=format)
        return buffer.getvalue()
