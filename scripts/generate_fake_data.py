"""Generate a fake product catalog for testing and development.

This module creates a synthetic catalog in the same JSON shape as
``data/productData.json``: brands, categories, prices with optional
discounts, ratings, review counts, seasons and price bands.

Example:
    Run the script directly to generate a catalog:
        $ python scripts/generate_fake_data.py --num-products 200

    Or import and use programmatically:
        from scripts.generate_fake_data import generate_fake_catalog
        df = generate_fake_catalog(num_products=50, seed=7)
"""

import argparse
import json
import random
from pathlib import Path
from typing import Optional

import pandas as pd

# Default configuration constants
DEFAULT_NUM_PRODUCTS = 100
DEFAULT_OUTPUT = Path(__file__).parent.parent / "data" / "fakeProductData.json"

CATALOG_SHAPES = {
    "Electronics": (["Headphones", "Speakers", "Tablets", "Cameras"], ["Bluetooth", "USB-C", "Long battery life", "Noise cancelling"]),
    "Clothing": (["Jackets", "Shirts", "Sweaters", "Pants"], ["Breathable", "Machine washable", "Water resistant", "Organic cotton"]),
    "Footwear": (["Sneakers", "Boots", "Sandals"], ["Cushioned sole", "Waterproof", "Lightweight", "Grippy outsole"]),
    "Accessories": (["Watches", "Bags", "Sunglasses"], ["Gift box", "Scratch resistant", "Adjustable strap"]),
    "Home": (["Furniture", "Kitchen", "Lighting"], ["Solid wood", "Dishwasher safe", "Energy efficient"]),
}
BRANDS = ["Northwind", "Lumen", "Acorn & Co", "Velo", "Brightside", "Pinecrest"]
SEASONS = ["spring", "summer", "fall", "winter", "all"]
COLORS = ["Black", "White", "Navy", "Olive", "Red", "Grey"]
TAGS = ["gift", "trending", "eco", "bestseller", "new"]


def price_band(price: float) -> str:
    """Bucket a price into the catalog's budget/mid/premium bands."""
    if price < 50:
        return "budget"
    if price < 200:
        return "mid"
    return "premium"


def generate_fake_catalog(
    num_products: int = DEFAULT_NUM_PRODUCTS,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """Generate synthetic catalog products.

    Args:
        num_products: Number of products to create. Must be positive.
        seed: Optional seed for reproducible output.

    Returns:
        A DataFrame with one row per product and the catalog's camelCase
        columns, ids numbered from 1.

    Raises:
        ValueError: If ``num_products`` is not positive.
    """
    if num_products <= 0:
        raise ValueError("num_products must be positive")

    rng = random.Random(seed)
    products = []

    for product_id in range(1, num_products + 1):
        category = rng.choice(list(CATALOG_SHAPES))
        subcategories, features = CATALOG_SHAPES[category]
        subcategory = rng.choice(subcategories)
        brand = rng.choice(BRANDS)

        original_price = round(rng.uniform(10, 600), 2)
        discount = rng.choice([0, 0, 0, 10, 15, 20, 30])
        price = round(original_price * (100 - discount) / 100, 2)

        products.append({
            "id": product_id,
            "name": f"{brand} {subcategory.rstrip('s')} {product_id}",
            "brand": brand,
            "category": category,
            "subcategory": subcategory,
            "description": f"A {subcategory.lower().rstrip('s')} from {brand}.",
            "price": price,
            "originalPrice": original_price,
            "discount": discount,
            "rating": round(rng.uniform(3.0, 5.0), 1),
            "reviews": rng.randint(0, 5000),
            "availability": rng.choice(["in-stock"] * 4 + ["out-of-stock"]),
            "shippingTime": rng.choice(["1-2 days", "2-3 days", "3-5 days"]),
            "features": rng.sample(features, k=min(2, len(features))),
            "colors": rng.sample(COLORS, k=2),
            "tags": rng.sample(TAGS, k=2),
            "season": rng.choice(SEASONS),
            "priceRange": price_band(price),
        })

    return pd.DataFrame(products)


def main() -> None:
    """Main entry point for the catalog generation script.

    Writes the generated catalog as a JSON array and prints summary
    statistics upon completion.
    """
    parser = argparse.ArgumentParser(description="Generate a fake product catalog")
    parser.add_argument("--num-products", type=int, default=DEFAULT_NUM_PRODUCTS)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT)
    args = parser.parse_args()

    print(f"Generating {args.num_products} fake products...")

    try:
        df = generate_fake_catalog(num_products=args.num_products, seed=args.seed)
    except ValueError as e:
        print(f"Error generating data: {e}")
        return

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(json.loads(df.to_json(orient="records")), indent=2))

    # Print results summary
    print("\nCatalog generated successfully!")
    print(f"Saved to: {args.output}")
    print("\nData preview:")
    print(df[["id", "name", "category", "price", "rating"]].head(10))
    print("\nData summary:")
    print(f"  Total products: {len(df)}")
    print(f"  Products per category:\n{df['category'].value_counts().to_string()}")
    print(f"  Discounted: {(df['discount'] > 0).sum()}")
    print(f"  Price range: ${df['price'].min()} to ${df['price'].max()}")
    print(f"  Set SHOPASSIST_CATALOG_PATH={args.output} to serve it")


if __name__ == "__main__":
    main()
