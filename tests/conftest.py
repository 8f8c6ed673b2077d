"""Shared fixtures for the ShopAssist test suite."""

from typing import Any, Dict, Generator, List

import pytest
from fastapi.testclient import TestClient

from shopassist.api.main import create_app
from shopassist.api.metrics import metrics_service
from shopassist.config import Settings
from shopassist.recommender.catalog import Catalog

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "Noise Cancelling Headphones",
        "brand": "SoundPeak",
        "category": "Electronics",
        "subcategory": "Headphones",
        "price": 129.99,
        "originalPrice": 159.99,
        "discount": 19,
        "rating": 4.6,
        "reviews": 2000,
        "availability": "in-stock",
        "shippingTime": "2-3 days",
        "features": ["Noise cancelling", "30h battery"],
        "colors": ["Black"],
        "tags": ["audio", "gift"],
        "season": "all",
        "priceRange": "mid",
    },
    {
        "id": 2,
        "name": "Winter Parka",
        "brand": "NorthRidge",
        "category": "Clothing",
        "subcategory": "Jackets",
        "price": 249,
        "originalPrice": 299,
        "discount": 17,
        "rating": 4.8,
        "reviews": 1300,
        "availability": "in-stock",
        "shippingTime": "3-5 days",
        "features": ["Down insulation", "Waterproof shell"],
        "tags": ["winter", "warm"],
        "season": "winter",
        "priceRange": "premium",
    },
    {
        "id": 3,
        "name": "Cotton Shirt",
        "brand": "Loomline",
        "category": "Clothing",
        "subcategory": "Shirts",
        "price": 30,
        "rating": 4.1,
        "reviews": 900,
        "availability": "in-stock",
        "features": ["Breathable"],
        "tags": ["casual"],
        "season": "summer",
        "priceRange": "budget",
    },
    {
        "id": 4,
        "name": "Trail Sneakers",
        "brand": "StrideCo",
        "category": "Footwear",
        "subcategory": "Sneakers",
        "price": 119,
        "rating": 4.4,
        "reviews": 1700,
        "availability": "out-of-stock",
        "features": ["Grippy outsole"],
        "tags": ["running"],
        "season": "spring",
        "priceRange": "mid",
    },
    {
        "id": 5,
        "name": "Oak Bedside Table",
        "brand": "Hearthwood",
        "category": "Home",
        "subcategory": "Furniture",
        "price": 149,
        "rating": 3.9,
        "reviews": 50,
        "availability": "in-stock",
        "features": ["Solid oak"],
        "tags": ["bedroom"],
        "season": "all",
        "priceRange": "mid",
    },
    {
        "id": 6,
        "name": "Smart Watch",
        "brand": "SoundPeak",
        "category": "Accessories",
        "subcategory": "Watches",
        "price": 299,
        "originalPrice": 349,
        "discount": 14,
        "rating": 4.5,
        "reviews": 1500,
        "availability": "in-stock",
        "shippingTime": "2-3 days",
        "features": ["GPS", "Heart rate"],
        "tags": ["fitness", "gift"],
        "season": "all",
        "priceRange": "premium",
    },
]


@pytest.fixture
def catalog() -> Catalog:
    """Fixture providing the six-product sample catalog."""
    return Catalog.from_records(SAMPLE_PRODUCTS, source="fixture")


@pytest.fixture
def empty_catalog() -> Catalog:
    return Catalog([], source="empty")


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing uploads at a temp dir and disabling static files."""
    return Settings(
        catalog_path=str(tmp_path / "missing.json"),
        upload_dir=str(tmp_path / "uploads"),
        static_dir=str(tmp_path / "no-static"),
        log_level="WARNING",
    )


@pytest.fixture
def client(settings, catalog) -> Generator[TestClient, None, None]:
    """Test client for an app built around the sample catalog.

    Used as a context manager so every WebSocket shares one event loop.
    """
    metrics_service.reset()
    with TestClient(create_app(settings, catalog=catalog)) as test_client:
        yield test_client
