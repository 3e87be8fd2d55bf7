"""
Store links: public URL, share intents and export filename.
"""

from typing import List, Optional
from urllib.parse import quote

WHATSAPP_SHARE_TEXT = "¡Mira mi catálogo! {url}"
TWITTER_SHARE_TEXT = "¡Conoce mi catálogo!"

# Characters encodeURIComponent leaves alone
URI_COMPONENT_SAFE = "!'()*"


def build_store_url(origin: str, slug: Optional[str]) -> str:
    """
    Public URL of a store page.

    Examples:
        >>> build_store_url("https://emprendego.shop/", "cafe-luna")
        'https://emprendego.shop/tienda/cafe-luna'
    """
    if not slug:
        return ""
    return f"{origin.rstrip('/')}/tienda/{slug}"


def get_share_links(store_url: str) -> List[dict]:
    """Share intents for the store URL."""
    encoded_url = quote(store_url, safe=URI_COMPONENT_SAFE)
    return [
        {
            "name": "WhatsApp",
            "url": f"https://wa.me/?text={quote(WHATSAPP_SHARE_TEXT.format(url=store_url), safe=URI_COMPONENT_SAFE)}",
        },
        {
            "name": "Facebook",
            "url": f"https://www.facebook.com/sharer/sharer.php?u={encoded_url}",
        },
        {
            "name": "Twitter",
            "url": f"https://twitter.com/intent/tweet?url={encoded_url}&text={quote(TWITTER_SHARE_TEXT, safe=URI_COMPONENT_SAFE)}",
        },
    ]


def export_filename(slug: Optional[str], extension: str = "png") -> str:
    return f"qr-{slug or 'tienda'}-emprendego.{extension}"


def content_disposition(filename: str) -> str:
    """
    Attachment header for a download filename.

    HTTP headers are latin-1, so non-ASCII slugs get an ASCII fallback
    plus the RFC 6266 filename* form.
    """
    fallback = "".join(
        char if char.isascii() and char.isprintable() and char not in '"\\' else "_"
        for char in filename
    )
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"
