import base64
import io

import pytest
from httpx import AsyncClient, ASGITransport
from PIL import Image
from main import app

STORE = {
    "name": "Café Luna",
    "slug": "cafe-luna",
    "logo_url": None,
    "primary_color": "#2563eb",
    "created_at": "2025-01-01T00:00:00Z",
}


@pytest.mark.asyncio
async def test_health():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_poster_options():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/poster/options")

    assert response.status_code == 200
    data = response.json()
    assert [s["id"] for s in data["styles"]] == ["minimal", "brand", "poster"]
    assert data["defaults"]["qrSize"] == 256
    assert data["defaults"]["style"] == "minimal"


@pytest.mark.asyncio
async def test_layout_endpoint():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/poster/layout", json={
            "store": STORE,
            "target_url": "https://emprendego.shop/cafe-luna",
            "config": {"style": "brand", "showSocials": False, "unknownField": 1},
        })

    assert response.status_code == 200
    data = response.json()
    layout = data["layout"]
    assert layout["header"]["logo"] == {"initial": "C", "background": "#ffffff", "color": "#2563eb", "kind": "initial"}
    assert layout["header"]["fill_end"] == "#5896ff"
    assert layout["body"]["display_url"] == "emprendego.shop/cafe-luna"
    assert layout["footer"]["visible"] is False
    assert data["config"]["style"] == "brand"


@pytest.mark.asyncio
async def test_layout_builds_target_url_from_slug():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/poster/layout", json={"store": STORE})

    assert response.status_code == 200
    assert response.json()["target_url"].endswith("/tienda/cafe-luna")


@pytest.mark.asyncio
async def test_layout_rejects_bad_color():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/poster/layout", json={
            "store": STORE,
            "config": {"qrColor": "not-a-color"},
        })

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_layout_requires_slug_or_target_url():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/poster/layout", json={"store": {"name": "Sin slug"}})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_export_endpoint_returns_png():
    logo = io.BytesIO()
    Image.new("RGB", (64, 64), "#ff0000").save(logo, format="PNG")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/poster/export", json={
            "store": {**STORE, "logo_url": "https://cdn.emprendego.shop/luna.png"},
            "config": {"style": "poster", "qrSize": 180},
            "logo_data": base64.b64encode(logo.getvalue()).decode(),
        })

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert 'filename="qr-cafe-luna-emprendego.png"' in response.headers["content-disposition"]
    assert response.content[:4] == b"\x89PNG"


@pytest.mark.asyncio
async def test_export_requires_qr_feature():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/poster/export", json={
            "store": STORE,
            "plan": {"qrCode": False},
        })

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_share_links():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/share", params={"slug": "cafe-luna"})

    assert response.status_code == 200
    data = response.json()
    assert data["store_url"].endswith("/tienda/cafe-luna")
    assert [link["name"] for link in data["links"]] == ["WhatsApp", "Facebook", "Twitter"]


@pytest.mark.asyncio
async def test_export_ignores_unreadable_logo():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        for logo_data in ["logó", "not base64!", base64.b64encode(b"plain text").decode()]:
            response = await client.post("/poster/export", json={
                "store": {**STORE, "logo_url": "https://cdn.emprendego.shop/luna.png"},
                "config": {"qrSize": 180},
                "logo_data": logo_data,
            })

            assert response.status_code == 200
            assert response.content[:4] == b"\x89PNG"


@pytest.mark.asyncio
async def test_export_with_non_ascii_slug():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/poster/export", json={
            "store": {**STORE, "slug": "tienda-東京"},
            "config": {"qrSize": 180},
        })

    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert 'filename="qr-tienda-__-emprendego.png"' in disposition
    assert "filename*=UTF-8''qr-tienda-%E6%9D%B1%E4%BA%AC-emprendego.png" in disposition
