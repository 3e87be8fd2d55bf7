from qr_poster.sharing import build_store_url, content_disposition, export_filename, get_share_links


def test_build_store_url():
    assert build_store_url("https://emprendego.shop", "demo") == "https://emprendego.shop/tienda/demo"
    assert build_store_url("https://emprendego.shop/", "demo") == "https://emprendego.shop/tienda/demo"
    assert build_store_url("https://emprendego.shop", None) == ""


def test_share_links_encode_url():
    links = {link["name"]: link["url"] for link in get_share_links("https://emprendego.shop/tienda/demo")}
    assert links["Facebook"] == (
        "https://www.facebook.com/sharer/sharer.php?u=https%3A%2F%2Femprendego.shop%2Ftienda%2Fdemo"
    )
    assert links["WhatsApp"].startswith("https://wa.me/?text=%C2%A1Mira%20mi%20cat%C3%A1logo!%20https%3A")
    assert "&text=%C2%A1Conoce%20mi%20cat%C3%A1logo!" in links["Twitter"]


def test_export_filename():
    assert export_filename("cafe-luna") == "qr-cafe-luna-emprendego.png"
    assert export_filename(None) == "qr-tienda-emprendego.png"
    assert export_filename("") == "qr-tienda-emprendego.png"


def test_content_disposition():
    assert content_disposition("qr-cafe-luna-emprendego.png") == (
        "attachment; filename=\"qr-cafe-luna-emprendego.png\"; "
        "filename*=UTF-8''qr-cafe-luna-emprendego.png"
    )
    header = content_disposition('qr-café"-emprendego.png')
    header.encode("latin-1")
    assert 'filename="qr-caf__-emprendego.png"' in header
    assert "filename*=UTF-8''qr-caf%C3%A9%22-emprendego.png" in header
