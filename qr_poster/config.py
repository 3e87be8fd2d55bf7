"""
PosterConfig - Immutable customizer state.

Every edit returns a new config, so the composer always sees a
consistent snapshot.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from .colors import is_valid_hex, normalize_hex
from .models import StoreProfile
from .presets import PosterStyle, QrSize

logger = logging.getLogger(__name__)

DEFAULT_QR_COLOR = "#1f2937"
DEFAULT_BG_COLOR = "#ffffff"
DEFAULT_BRAND_COLOR = "#2563eb"

QR_SIZES = tuple(size.value for size in QrSize)

_BOOL = TypeAdapter(bool)

COLOR_FIELDS = {
    "qr": "qr_color",
    "bg": "bg_color",
    "brand": "brand_color",
}

ELEMENT_FIELDS = {
    "logo": "show_logo",
    "url": "show_url",
    "socials": "show_socials",
}

# Keys accepted from the customizer, camelCase or snake_case
FIELD_ALIASES = {
    "style": "style",
    "qrSize": "qr_size",
    "qr_size": "qr_size",
    "qrColor": "qr_color",
    "qr_color": "qr_color",
    "bgColor": "bg_color",
    "bg_color": "bg_color",
    "brandColor": "brand_color",
    "brand_color": "brand_color",
    "showLogo": "show_logo",
    "show_logo": "show_logo",
    "showUrl": "show_url",
    "show_url": "show_url",
    "showSocials": "show_socials",
    "show_socials": "show_socials",
}


def _field_for(which: str, table: Mapping[str, str]) -> str:
    if which in table:
        return table[which]
    field = FIELD_ALIASES.get(which)
    if field in table.values():
        return field
    raise ValueError(f"Unknown poster element: {which!r}")


@dataclass(frozen=True)
class PosterConfig:
    """Poster customization chosen by the store owner."""
    style: PosterStyle = PosterStyle.MINIMAL
    qr_size: int = QrSize.MEDIUM.value
    qr_color: str = DEFAULT_QR_COLOR
    bg_color: str = DEFAULT_BG_COLOR
    brand_color: str = DEFAULT_BRAND_COLOR
    show_logo: bool = True
    show_url: bool = True
    show_socials: bool = True

    def __post_init__(self):
        object.__setattr__(self, "style", PosterStyle.parse(self.style))

        if self.qr_size not in QR_SIZES:
            raise ValueError(f"Unsupported QR size {self.qr_size}, expected one of {QR_SIZES}")

        for field in COLOR_FIELDS.values():
            object.__setattr__(self, field, normalize_hex(getattr(self, field)))

    # ----- transitions -----

    def set_style(self, style) -> "PosterConfig":
        return replace(self, style=PosterStyle.parse(style))

    def set_qr_size(self, size) -> "PosterConfig":
        if isinstance(size, QrSize):
            size = size.value
        return replace(self, qr_size=int(size))

    def set_color(self, which: str, value: str) -> "PosterConfig":
        """Return a copy with one color changed ("qr", "bg" or "brand")."""
        field = _field_for(which, COLOR_FIELDS)
        return replace(self, **{field: value})

    def toggle_element(self, which: str) -> "PosterConfig":
        """Return a copy with one element ("logo", "url" or "socials") flipped."""
        field = _field_for(which, ELEMENT_FIELDS)
        return replace(self, **{field: not getattr(self, field)})

    # ----- construction -----

    @classmethod
    def for_store(cls, store: Optional[StoreProfile] = None) -> "PosterConfig":
        """
        Default config for a store.

        The store's primary color seeds both the QR and brand colors,
        like the "use my color" button in the customizer.
        """
        if store is not None and is_valid_hex(store.primary_color):
            return cls(qr_color=store.primary_color, brand_color=store.primary_color)
        return cls()

    @classmethod
    def from_dict(
        cls,
        data: Optional[Mapping[str, Any]],
        base: Optional["PosterConfig"] = None,
    ) -> "PosterConfig":
        """
        Build a config from a customizer payload.

        Unrecognized keys are ignored. Unknown styles and unsupported QR
        sizes fall back to defaults. Toggles accept JSON booleans and the
        usual string forms ("false", "0", "off"); anything else keeps the base
        value. Malformed colors raise InvalidColorFormat.

        Args:
            data: Raw payload (camelCase or snake_case keys)
            base: Config supplying values for missing keys

        Returns:
            New PosterConfig
        """
        base = base or cls()
        values = {}

        for key, value in (data or {}).items():
            field = FIELD_ALIASES.get(key)
            if field is None:
                logger.debug(f"Ignoring unknown poster config field: {key}")
                continue
            if value is None:
                continue
            values[field] = value

        if "qr_size" in values:
            try:
                size = int(values["qr_size"])
            except (TypeError, ValueError):
                size = None
            if size not in QR_SIZES:
                logger.warning(f"Unsupported QR size {values['qr_size']!r}, using {base.qr_size}")
                size = base.qr_size
            values["qr_size"] = size

        for field in ELEMENT_FIELDS.values():
            if field in values:
                try:
                    values[field] = _BOOL.validate_python(values[field])
                except ValidationError:
                    logger.warning(f"Unsupported {field} value {values[field]!r}, using {getattr(base, field)}")
                    values[field] = getattr(base, field)

        return replace(base, **values)

    def to_dict(self) -> dict:
        """Serialize using the customizer's camelCase keys."""
        return {
            "style": self.style.value,
            "qrSize": self.qr_size,
            "qrColor": self.qr_color,
            "bgColor": self.bg_color,
            "brandColor": self.brand_color,
            "showLogo": self.show_logo,
            "showUrl": self.show_url,
            "showSocials": self.show_socials,
        }
