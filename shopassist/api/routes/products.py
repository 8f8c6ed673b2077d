"""Product catalog endpoints for the ShopAssist API.

Listing, lookup, search, comparison, seasonal picks and history-based
recommendations over the static catalog.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from shopassist.api.dependencies import require_catalog
from shopassist.api.exceptions import InvalidRequestError, ProductNotFoundError
from shopassist.api.metrics import metrics_service
from shopassist.recommender.catalog import Catalog
from shopassist.recommender.search import (
    compare_products,
    history_recommendations,
    search_products,
    seasonal_recommendations,
)

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/api",
    tags=["products"],
)


class CompareRequest(BaseModel):
    """Request body for product comparison."""

    productIds: Optional[List[int]] = Field(
        default=None, description="IDs of the products to compare (at least 2)"
    )


class Preferences(BaseModel):
    priceRange: Optional[str] = None
    brands: List[str] = Field(default_factory=list)


class RecommendationsRequest(BaseModel):
    """Request body for history-based recommendations.

    Attributes:
        viewedProducts: IDs of products the shopper has looked at.
        preferences: Optional price range and brand filters.
    """

    viewedProducts: List[int] = Field(default_factory=list)
    preferences: Optional[Preferences] = None


@router.get("/products")
def list_products(catalog: Catalog = Depends(require_catalog)) -> List[Dict[str, Any]]:
    """Return the whole product catalog."""
    return catalog.records()


@router.get("/products/{product_id}")
def get_product(product_id: int, catalog: Catalog = Depends(require_catalog)) -> Dict[str, Any]:
    """Return one product by id."""
    product = catalog.get(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


@router.get("/search")
def search(
    q: Optional[str] = None,
    category: Optional[str] = None,
    price_range: Optional[str] = Query(default=None, alias="priceRange"),
    brand: Optional[str] = None,
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    min_rating: Optional[float] = Query(default=None, alias="minRating"),
    catalog: Catalog = Depends(require_catalog),
) -> Dict[str, Any]:
    """Search the catalog with optional filters and sorting.

    Example:
        GET /api/search?q=jacket&sortBy=price-low&minRating=4
    """
    start_time = time.time()
    result = search_products(
        catalog,
        q=q,
        category=category,
        price_range=price_range,
        brand=brand,
        sort=sort_by,
        min_rating=min_rating,
    )
    metrics_service.record_recommendation((time.time() - start_time) * 1000, endpoint="search")
    logger.info("Search completed", extra={"query": q, "total": result["total"]})
    return result


@router.post("/compare")
def compare(body: CompareRequest, catalog: Catalog = Depends(require_catalog)) -> Dict[str, Any]:
    """Compare two or more products side by side."""
    product_ids = body.productIds or []
    if len(product_ids) < 2:
        raise InvalidRequestError(
            "At least 2 product IDs required for comparison",
            details={"productIds": product_ids},
        )

    comparison = compare_products(catalog, product_ids)
    if comparison is None:
        raise ProductNotFoundError(product_ids, details={"productIds": product_ids})
    return comparison


@router.get("/seasonal-recommendations")
def seasonal(catalog: Catalog = Depends(require_catalog)) -> Dict[str, Any]:
    """Top picks for the current season."""
    start_time = time.time()
    result = seasonal_recommendations(catalog)
    metrics_service.record_recommendation((time.time() - start_time) * 1000, endpoint="seasonal")
    return result


@router.post("/recommendations")
def recommendations(
    body: RecommendationsRequest,
    catalog: Catalog = Depends(require_catalog),
) -> Dict[str, Any]:
    """Recommend products from browsing history and preferences."""
    start_time = time.time()
    preferences = body.preferences.model_dump() if body.preferences else None
    products = history_recommendations(catalog, body.viewedProducts, preferences)
    metrics_service.record_recommendation((time.time() - start_time) * 1000, endpoint="recommendations")
    return {
        "recommendations": products,
        "reason": "Based on your browsing history and preferences",
    }
