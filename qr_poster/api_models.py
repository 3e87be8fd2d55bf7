"""
Poster API models for FastAPI endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from .models import StoreProfile


class PlanFeatures(BaseModel):
    """Plan features that affect the poster."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    qr_code: bool = Field(default=True, alias="qrCode")
    remove_branding: bool = Field(default=False, alias="removeBranding")


class PosterRequest(BaseModel):
    """Request for poster layout or export."""
    model_config = ConfigDict(extra="ignore")

    store: StoreProfile
    target_url: Optional[str] = None  # Built from public_origin + slug if missing
    config: Dict[str, Any] = Field(default_factory=dict)  # Customizer payload, camelCase or snake_case
    plan: PlanFeatures = Field(default_factory=PlanFeatures)
    logo_data: Optional[str] = None  # Base64 logo, already fetched by the client


class PosterOptionsResponse(BaseModel):
    """Response with available poster options."""
    styles: List[dict]
    qr_sizes: List[dict]
    backgrounds: List[dict]
    defaults: dict


class PosterLayoutResponse(BaseModel):
    """Composed layout plus the effective config."""
    target_url: str
    config: dict
    layout: dict


class ShareLinksResponse(BaseModel):
    """Public store URL with share intents."""
    store_url: str
    links: List[dict]
