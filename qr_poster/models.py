"""
Store data consumed by the poster pipeline.

Records arrive already fetched from the data layer; extra columns are ignored.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Optional


class SocialLinks(BaseModel):
    """Social handles configured by the store owner."""
    model_config = ConfigDict(extra="ignore")

    instagram: Optional[str] = None
    facebook: Optional[str] = None
    tiktok: Optional[str] = None


class StoreProfile(BaseModel):
    """Read-only store record used to brand the poster."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("logo_url", "logoUrl")
    )
    primary_color: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("primary_color", "primaryColor")
    )
    whatsapp: Optional[str] = None
    social_links: SocialLinks = Field(
        default_factory=SocialLinks,
        validation_alias=AliasChoices("social_links", "socialLinks"),
    )

    @field_validator("social_links", mode="before")
    @classmethod
    def _empty_social_links(cls, value):
        # Stores created before socials existed have NULL here
        return value or {}
