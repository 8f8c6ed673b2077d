"""Static product catalog.

The catalog is a JSON array of product objects loaded once at startup.
Entries are validated with pydantic and kept in a pandas DataFrame so that
search and ranking can be expressed as column operations.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from pydantic import BaseModel, Field, ValidationError, model_validator

# Configure module logger
logger = logging.getLogger(__name__)

SEASONS = ("spring", "summer", "fall", "winter")
ALL_SEASONS = "all"
IN_STOCK = "in-stock"


class Product(BaseModel):
    """One catalog entry. Field names match the catalog JSON."""

    id: int
    name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    price: float
    category: str = ""
    subcategory: str = ""
    description: str = ""
    originalPrice: Optional[float] = None
    discount: float = 0
    rating: float = 0
    reviews: int = 0
    availability: str = IN_STOCK
    shippingTime: Optional[str] = None
    warranty: Optional[str] = None
    image: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    season: str = ALL_SEASONS
    priceRange: Optional[str] = None

    @model_validator(mode="after")
    def _default_original_price(self) -> "Product":
        if self.originalPrice is None:
            self.originalPrice = self.price
        return self


PRODUCT_COLUMNS = list(Product.model_fields)


def to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert catalog rows to JSON-ready dicts (native types, None for missing)."""
    if df.empty:
        return []
    clean = df.astype(object).where(df.notna(), None)
    return clean.to_dict(orient="records")


class Catalog:
    """In-memory product catalog.

    Attributes:
        products: One row per product, columns as in :class:`Product`.
        source: Path the catalog was loaded from, if any.
        loaded_at: When the catalog was loaded.
    """

    def __init__(
        self,
        products: List[Product],
        source: Optional[str] = None,
    ) -> None:
        self.products = pd.DataFrame(
            [product.model_dump() for product in products],
            columns=PRODUCT_COLUMNS,
        )
        self.source = source
        self.loaded_at = datetime.now(timezone.utc)

    @property
    def is_empty(self) -> bool:
        return self.products.empty

    def __len__(self) -> int:
        return len(self.products)

    def get(self, product_id: int) -> Optional[Dict[str, Any]]:
        """Return the product with ``product_id`` or None."""
        rows = self.products.loc[self.products["id"] == product_id]
        records = to_records(rows)
        return records[0] if records else None

    def records(self) -> List[Dict[str, Any]]:
        return to_records(self.products)

    @classmethod
    def from_records(cls, records: List[Dict[str, Any]], source: Optional[str] = None) -> "Catalog":
        """Validate raw product dicts, skipping entries that are not usable.

        Ids are unique: when several entries share one, the first wins.
        """
        products: List[Product] = []
        seen_ids = set()
        for index, record in enumerate(records):
            try:
                product = Product.model_validate(record)
            except ValidationError as e:
                logger.warning(
                    "Skipping invalid catalog entry",
                    extra={"index": index, "errors": e.error_count()},
                )
                continue
            if product.id in seen_ids:
                logger.warning(
                    "Skipping duplicate catalog id",
                    extra={"index": index, "product_id": product.id},
                )
                continue
            seen_ids.add(product.id)
            products.append(product)
        return cls(products, source=source)


def load_catalog(path: str) -> Catalog:
    """Load the product catalog from a JSON file.

    A missing or unreadable file yields an empty catalog rather than an
    error; endpoints then report the catalog as unavailable.

    Args:
        path: Path to a JSON file containing an array of products.

    Returns:
        Loaded :class:`Catalog` (possibly empty).
    """
    catalog_file = Path(path)
    if not catalog_file.exists():
        logger.error(f"Catalog file not found: {path}")
        return Catalog([], source=path)

    try:
        with catalog_file.open(encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read catalog from {path}: {e}", exc_info=True)
        return Catalog([], source=path)

    if not isinstance(raw, list):
        logger.error(f"Catalog in {path} is not a JSON array")
        return Catalog([], source=path)

    catalog = Catalog.from_records(raw, source=path)
    logger.info(
        "Catalog loaded",
        extra={"catalog_path": path, "num_products": len(catalog)},
    )
    return catalog
