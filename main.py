from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import base64
import io
import logging

from PIL import Image, UnidentifiedImageError

from qr_poster import InvalidColorFormat, PosterComposer, PosterConfig, PosterExporter, PosterRenderer
from qr_poster.api_models import (
    PosterLayoutResponse, PosterOptionsResponse, PosterRequest, ShareLinksResponse
)
from qr_poster.presets import get_background_swatches, get_qr_size_options, get_style_options
from qr_poster.sharing import build_store_url, content_disposition, get_share_links


class Settings(BaseSettings):
    public_origin: str = "https://emprendego.shop"  # Origin of public store pages
    export_pixel_ratio: int = 3
    font_path: Optional[str] = None
    log_level: str = "INFO"
    cors_origins: str = "*"  # Comma-separated

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()

# Logging setup
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI(title="QR Poster", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services
composer = PosterComposer()
renderer = PosterRenderer(font_path=settings.font_path)
exporter = PosterExporter(renderer=renderer, composer=composer, pixel_ratio=settings.export_pixel_ratio)


def _resolve_request(request: PosterRequest):
    """Turn a request into (target_url, config), raising 422 on bad input."""
    target_url = request.target_url or build_store_url(settings.public_origin, request.store.slug)
    if not target_url:
        raise HTTPException(status_code=422, detail="Store has no slug and no target_url was given")

    try:
        config = PosterConfig.from_dict(request.config, base=PosterConfig.for_store(request.store))
    except InvalidColorFormat as e:
        raise HTTPException(status_code=422, detail=str(e))

    return target_url, config


def _load_logo(logo_data: Optional[str]) -> Optional[Image.Image]:
    """Decode a base64 logo sent by the client; bad data falls back to the initial avatar."""
    if not logo_data:
        return None
    try:
        image = Image.open(io.BytesIO(base64.b64decode(logo_data, validate=True)))
        image.load()
        return image
    except (ValueError, UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        logger.warning(f"Ignoring unreadable logo image: {e}")
        return None


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "qr-poster"}


@app.get("/")
async def root():
    return {
        "service": "QR Poster",
        "version": app.version,
        "description": "QR poster composition and PNG export for store catalogs",
        "endpoints": ["/poster/options", "/poster/layout", "/poster/export", "/share", "/config", "/health"],
    }


@app.get("/config")
async def get_config():
    """Get current configuration."""
    return {
        "public_origin": settings.public_origin,
        "export_pixel_ratio": settings.export_pixel_ratio,
    }


# ==================== POSTER ENDPOINTS ====================

@app.get("/poster/options", response_model=PosterOptionsResponse)
async def get_poster_options():
    """
    Get available options for the poster customizer.

    Returns styles, QR sizes, background swatches and default config.
    """
    return PosterOptionsResponse(
        styles=get_style_options(),
        qr_sizes=get_qr_size_options(),
        backgrounds=get_background_swatches(),
        defaults=PosterConfig().to_dict(),
    )


@app.post("/poster/layout", response_model=PosterLayoutResponse)
async def poster_layout(request: PosterRequest):
    """Compose the poster layout for the live preview."""
    target_url, config = _resolve_request(request)
    layout = composer.compose(request.store, target_url, config, request.plan.remove_branding)
    return PosterLayoutResponse(target_url=target_url, config=config.to_dict(), layout=layout.to_dict())


@app.post("/poster/export")
async def export_poster(request: PosterRequest):
    """
    Export the poster as a PNG download.

    Returns:
        image/png with a qr-<slug>-emprendego.png filename
    """
    if not request.plan.qr_code:
        raise HTTPException(status_code=403, detail="Esta función requiere un plan superior")

    target_url, config = _resolve_request(request)
    logger.info(f"Exporting poster for store={request.store.slug}, style={config.style.value}, qr_size={config.qr_size}")

    result = await exporter.export(
        request.store,
        target_url,
        config,
        remove_branding=request.plan.remove_branding,
        logo_image=_load_logo(request.logo_data),
    )

    if not result.success:
        raise HTTPException(status_code=500, detail=f"Poster export failed: {result.error}")

    return Response(
        content=result.image_bytes,
        media_type="image/png",
        headers={"Content-Disposition": content_disposition(result.filename)},
    )


@app.get("/share", response_model=ShareLinksResponse)
async def share_links(slug: str):
    """Public store URL and share intents."""
    store_url = build_store_url(settings.public_origin, slug)
    if not store_url:
        raise HTTPException(status_code=422, detail="slug is required")
    return ShareLinksResponse(store_url=store_url, links=get_share_links(store_url))
