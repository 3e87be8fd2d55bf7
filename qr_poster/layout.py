"""
PosterComposer - Builds the renderable poster layout.

Handles:
1. Store name fallback and initial-letter avatar
2. Description truncation
3. Display URL shortening (QR always encodes the full URL)
4. Footer contact entries
5. Visibility flags for every optional element

The layout always has the same three blocks so the export renders a
stable structure; hidden parts are flagged, never dropped.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .config import PosterConfig
from .models import StoreProfile
from .presets import ResolvedStyle, resolve_style

DEFAULT_STORE_NAME = "Mi Tienda"
DESCRIPTION_MAX_LENGTH = 40
ELLIPSIS = "..."
CALL_TO_ACTION = "Escanea para ver el catálogo"
POWERED_BY = "Creado con EmprendeGo"

URL_PREFIXES = ("https://", "http://", "www.")


class SocialChannel(Enum):
    """Contact channels shown in the footer."""
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    TIKTOK = "tiktok"
    WHATSAPP = "whatsapp"


@dataclass(frozen=True)
class LogoAvailable:
    """Store logo loaded from an absolute URL."""
    url: str
    kind: str = "image"


@dataclass(frozen=True)
class LogoUnavailable:
    """Initial-letter avatar drawn when there is no usable logo."""
    initial: str
    background: str
    color: str
    kind: str = "initial"


Logo = Union[LogoAvailable, LogoUnavailable]


@dataclass(frozen=True)
class HeaderBlock:
    """Logo, store name and short description."""
    logo: Logo
    logo_visible: bool
    title: str
    subtitle: Optional[str]
    fill_start: str
    fill_end: str
    gradient: bool
    text_color: str
    visible: bool = True


@dataclass(frozen=True)
class QrPayload:
    """What the QR encodes and how it is drawn."""
    data: str
    size: int
    foreground: str
    background: str = "transparent"


@dataclass(frozen=True)
class BodyBlock:
    """Call to action, QR code and display URL."""
    qr: QrPayload
    call_to_action: str
    call_to_action_visible: bool
    display_url: str
    display_url_visible: bool
    background: str
    frame_shadow: bool
    frame_border: Optional[str]
    visible: bool = True


@dataclass(frozen=True)
class FooterEntry:
    """One contact channel in the footer row."""
    channel: SocialChannel
    label: str


@dataclass(frozen=True)
class FooterBlock:
    """Contact row plus the powered-by caption."""
    entries: Tuple[FooterEntry, ...]
    visible: bool
    background: str
    text_color: str
    caption: str
    caption_visible: bool
    caption_background: str


@dataclass(frozen=True)
class RenderableLayout:
    """Complete poster description handed to the renderer."""
    width: int
    background: str
    style: ResolvedStyle
    header: HeaderBlock
    body: BodyBlock
    footer: FooterBlock
    slug: Optional[str] = None

    def to_dict(self) -> dict:
        """Plain JSON-ready dict (enums as their values)."""
        return _jsonable(asdict(self))


def _jsonable(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


# ----- text rules -----

def display_url(target_url: str) -> str:
    """
    Shorten a URL for display under the QR.

    Examples:
        >>> display_url("https://www.emprendego.shop/tienda/demo")
        'emprendego.shop/tienda/demo'
    """
    label = target_url
    for prefix in URL_PREFIXES:
        if label.startswith(prefix):
            label = label[len(prefix):]
    return label


def display_name(store: StoreProfile) -> str:
    return store.name or store.slug or DEFAULT_STORE_NAME


def truncate_description(description: Optional[str]) -> Optional[str]:
    if not description:
        return None
    if len(description) > DESCRIPTION_MAX_LENGTH:
        return description[:DESCRIPTION_MAX_LENGTH] + ELLIPSIS
    return description


def normalize_handle(handle: str) -> str:
    """Show a handle with exactly one leading @."""
    if handle.startswith("@"):
        handle = handle[1:]
    return f"@{handle}"


def has_usable_logo(store: StoreProfile) -> bool:
    return bool(store.logo_url) and store.logo_url.startswith("http")


def footer_entries(store: StoreProfile) -> Tuple[FooterEntry, ...]:
    """Contact entries in display order."""
    links = store.social_links
    entries = []
    if links.instagram:
        entries.append(FooterEntry(SocialChannel.INSTAGRAM, normalize_handle(links.instagram)))
    if links.facebook:
        entries.append(FooterEntry(SocialChannel.FACEBOOK, links.facebook))
    if links.tiktok:
        entries.append(FooterEntry(SocialChannel.TIKTOK, normalize_handle(links.tiktok)))
    if store.whatsapp:
        entries.append(FooterEntry(SocialChannel.WHATSAPP, store.whatsapp))
    return tuple(entries)


class PosterComposer:
    """
    Combines store data, config and resolved style into a layout.

    Stateless: the same inputs always give an equal layout, so it can be
    recomputed on every customizer change.
    """

    def compose(
        self,
        store: StoreProfile,
        target_url: str,
        config: PosterConfig,
        remove_branding: bool = False,
    ) -> RenderableLayout:
        """
        Compose the poster layout.

        Args:
            store: Store record from the data layer
            target_url: Fully-qualified store URL encoded in the QR
            config: Current poster configuration
            remove_branding: Hide the powered-by caption (plan feature)

        Returns:
            RenderableLayout with header, body and footer blocks
        """
        style = resolve_style(config.style, config.brand_color)
        name = display_name(store)

        return RenderableLayout(
            width=style.width,
            background=config.bg_color,
            style=style,
            header=self._header(store, name, config, style),
            body=self._body(target_url, config, style),
            footer=self._footer(store, config, style, remove_branding),
            slug=store.slug or None,
        )

    def _header(
        self,
        store: StoreProfile,
        name: str,
        config: PosterConfig,
        style: ResolvedStyle,
    ) -> HeaderBlock:
        if has_usable_logo(store):
            logo = LogoAvailable(url=store.logo_url)
        else:
            logo = LogoUnavailable(
                initial=name[0].upper(),
                background=style.avatar_background,
                color=style.avatar_color,
            )

        return HeaderBlock(
            logo=logo,
            logo_visible=config.show_logo,
            title=name,
            subtitle=truncate_description(store.description),
            fill_start=style.header_start,
            fill_end=style.header_end,
            gradient=style.header_gradient,
            text_color=style.header_text_color,
        )

    def _body(self, target_url: str, config: PosterConfig, style: ResolvedStyle) -> BodyBlock:
        return BodyBlock(
            # Poster background and QR background are independent
            qr=QrPayload(data=target_url, size=config.qr_size, foreground=config.qr_color),
            call_to_action=CALL_TO_ACTION,
            call_to_action_visible=style.has_call_to_action,
            display_url=display_url(target_url),
            display_url_visible=config.show_url,
            background=config.bg_color,
            frame_shadow=style.qr_frame_shadow,
            frame_border=style.qr_frame_border,
        )

    def _footer(
        self,
        store: StoreProfile,
        config: PosterConfig,
        style: ResolvedStyle,
        remove_branding: bool,
    ) -> FooterBlock:
        entries = footer_entries(store)
        return FooterBlock(
            entries=entries,
            visible=config.show_socials and len(entries) > 0,
            background=style.footer_background,
            text_color=style.footer_text_color,
            caption=POWERED_BY,
            caption_visible=not remove_branding,
            caption_background=config.bg_color,
        )


_default_composer = PosterComposer()


def compose(
    store: StoreProfile,
    target_url: str,
    config: PosterConfig,
    remove_branding: bool = False,
) -> RenderableLayout:
    """Compose a layout with the shared stateless composer."""
    return _default_composer.compose(store, target_url, config, remove_branding)
