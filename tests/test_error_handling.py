"""Tests for error handling in the ShopAssist API.

Tests validation failures, missing resources, an empty catalog and the
consistent shape of error responses.
"""

from fastapi.testclient import TestClient

from shopassist.api.main import create_app
from shopassist.config import Settings


def test_product_not_found(client):
    response = client.get("/api/products/999")

    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "Product not found"
    assert data["details"] == {"product_id": 999}


def test_invalid_product_id_type(client):
    """Test that a non-integer product id returns 422 with the error shape."""
    response = client.get("/api/products/not_a_number")

    assert response.status_code == 422
    data = response.json()
    assert data["error"] == "Validation error"
    assert isinstance(data["details"], list)


def test_invalid_min_rating(client):
    response = client.get("/api/search", params={"minRating": "high"})
    assert response.status_code == 422


def test_chat_requires_message(client):
    for body in ({}, {"message": ""}):
        response = client.post("/api/chat", json=body)
        assert response.status_code == 400
        assert response.json()["message"] == "Message is required"


def test_compare_needs_two_ids(client):
    for body in ({}, {"productIds": [1]}):
        response = client.post("/api/compare", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"


def test_compare_missing_products(client):
    response = client.post("/api/compare", json={"productIds": [1, 998, 999]})
    assert response.status_code == 404


def test_upload_without_file(client):
    response = client.post("/api/upload-image")

    assert response.status_code == 400
    assert response.json()["message"] == "No image file provided"


def test_upload_rejects_non_images(client):
    response = client.post(
        "/api/upload-image",
        files={"image": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Only image files are allowed!"


def test_upload_rejects_undecodable_image(client):
    response = client.post(
        "/api/upload-image",
        files={"image": ("broken.png", b"definitely not a png", "image/png")},
    )

    assert response.status_code == 500
    assert response.json()["error"] == "Image processing failed"


def test_upload_size_limit(tmp_path, catalog):
    settings = Settings(
        upload_dir=str(tmp_path / "uploads"),
        static_dir=str(tmp_path / "no-static"),
        log_level="WARNING",
        max_upload_bytes=10,
    )
    client = TestClient(create_app(settings, catalog=catalog))

    response = client.post(
        "/api/upload-image",
        files={"image": ("big.png", b"x" * 11, "image/png")},
    )

    assert response.status_code == 413
    assert response.json()["details"] == {"size": 11, "limit": 10}


def test_unknown_session(client):
    response = client.get("/api/sessions/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error"] == "Session not found"


def test_empty_catalog_endpoints(settings, empty_catalog):
    """Test that catalog endpoints report 500 while health checks keep working."""
    client = TestClient(create_app(settings, catalog=empty_catalog))

    for path in ("/api/products", "/api/products/1", "/api/search", "/api/seasonal-recommendations"):
        response = client.get(path)
        assert response.status_code == 500
        assert response.json()["message"] == "Product catalog is currently unavailable"

    response = client.post("/api/chat", json={"message": "hello"})
    assert response.status_code == 200
    assert response.json()["type"] == "error"

    assert client.get("/ping").json() == {"status": "ok"}
    assert client.get("/status").json()["catalog_loaded"] is False


def test_missing_catalog_file_yields_empty_catalog(settings):
    client = TestClient(create_app(settings))
    assert client.get("/status").json()["num_products"] == 0
