"""Keyword search and ranking over the product catalog.

Matching is plain case-insensitive substring matching; ranking uses fixed
linear scores over rating, review count and availability.
"""

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from shopassist.recommender.catalog import ALL_SEASONS, IN_STOCK, Catalog, to_records

# Configure module logger
logger = logging.getLogger(__name__)

PRICE_KEYWORDS = {
    "budget": ["cheap", "affordable", "budget", "under", "low cost"],
    "mid": ["mid-range", "moderate", "reasonable"],
    "premium": ["premium", "expensive", "high-end", "luxury", "designer"],
}

SEASON_KEYWORDS = {
    "spring": ["spring", "light", "fresh"],
    "summer": ["summer", "hot", "breathable", "cool"],
    "fall": ["fall", "autumn", "warm", "cozy"],
    "winter": ["winter", "cold", "warm", "insulated"],
}

CATEGORY_KEYWORDS = {
    "electronics": ["electronics", "phone", "laptop", "computer", "tablet", "headphone", "camera"],
    "clothing": [
        "clothing", "clothes", "shirt", "jacket", "sweater", "coat",
        "dress", "pants", "jeans", "top", "bottom",
    ],
    "footwear": ["footwear", "shoes", "shoe", "boot", "sneaker", "sandal", "heel", "loafer"],
    "accessories": ["accessories", "bag", "watch", "jewelry", "hat", "sunglasses", "belt"],
    "home": ["home", "furniture", "decor", "kitchen", "bedroom", "living"],
    "automotive": ["automotive", "car", "vehicle", "auto"],
}

SEASON_TIPS = {
    "spring": "Perfect time for light layers and fresh colors!",
    "summer": "Stay cool with breathable fabrics and sun protection!",
    "fall": "Cozy up with warm layers and rich autumn tones!",
    "winter": "Bundle up with insulated gear and winter essentials!",
}

SORT_COLUMNS = {
    "price-low": ("price", True),
    "price-high": ("price", False),
    "rating": ("rating", False),
    "reviews": ("reviews", False),
    "discount": ("discount", False),
}

SEASONAL_TOP_N = 8
HISTORY_TOP_N = 6


def current_season(today: Optional[date] = None) -> str:
    """Northern-hemisphere meteorological season for ``today``."""
    month = (today or date.today()).month
    if 3 <= month <= 5:
        return "spring"
    if 6 <= month <= 8:
        return "summer"
    if 9 <= month <= 11:
        return "fall"
    return "winter"


def _log_reviews(df: pd.DataFrame) -> pd.Series:
    return np.log(df["reviews"].astype(float).clip(lower=1.0))


def _contains(series: pd.Series, text: str) -> pd.Series:
    return series.str.lower().str.contains(text, regex=False).astype(bool)


def _any_item(series: pd.Series, predicate: Callable[[str], bool]) -> pd.Series:
    return series.map(lambda items: any(predicate(item.lower()) for item in items)).astype(bool)


def sort_by(df: pd.DataFrame, score: pd.Series, ascending: bool = False) -> pd.DataFrame:
    """Stable sort of ``df`` by a score series aligned on its index."""
    order = score.sort_values(ascending=ascending, kind="mergesort").index
    return df.loc[order]


def relevance_score(df: pd.DataFrame) -> pd.Series:
    """0.4 * rating + 0.3 * ln(reviews) + 0.3 if in stock."""
    in_stock = (df["availability"] == IN_STOCK).astype(float)
    return df["rating"].astype(float) * 0.4 + _log_reviews(df) * 0.3 + in_stock * 0.3


def popularity_score(df: pd.DataFrame) -> pd.Series:
    """rating * ln(reviews)."""
    return df["rating"].astype(float) * _log_reviews(df)


def in_season(df: pd.DataFrame, season: str) -> pd.Series:
    return df["season"].isin([season, ALL_SEASONS])


def _first_match(query: str, groups: Dict[str, List[str]]) -> Optional[str]:
    for name, keywords in groups.items():
        if any(keyword in query for keyword in keywords):
            return name
    return None


def smart_recommendations(catalog: Catalog, query: str) -> Tuple[pd.DataFrame, Dict[str, str]]:
    """Filter and rank the catalog from keywords found in a free-text query.

    Price, season, category and brand keywords each narrow the candidate
    set (first matching group only). When none of them apply the query is
    matched as text against names, descriptions, features and tags.

    Returns:
        Tuple of ranked products and the detected query context.
    """
    products = catalog.products
    query = query.lower()
    filtered = products
    context: Dict[str, str] = {}

    price_range = _first_match(query, PRICE_KEYWORDS)
    if price_range:
        filtered = filtered.loc[filtered["priceRange"] == price_range]
        context["priceRange"] = price_range

    season = _first_match(query, SEASON_KEYWORDS)
    if season:
        filtered = filtered.loc[in_season(filtered, season)]
        context["season"] = season

    category = _first_match(query, CATEGORY_KEYWORDS)
    if category:
        filtered = filtered.loc[_contains(filtered["category"], category)]
        context["category"] = category

    for brand in dict.fromkeys(products["brand"].str.lower()):
        if brand in query:
            filtered = filtered.loc[filtered["brand"].str.lower() == brand]
            context["brand"] = brand
            break

    if len(filtered) == len(products):
        text_match = (
            _contains(products["name"], query)
            | _contains(products["description"], query)
            | _any_item(products["features"], lambda feature: query in feature)
            | _any_item(products["tags"], lambda tag: tag in query)
        )
        filtered = products.loc[text_match]

    logger.debug(
        "Smart recommendations computed",
        extra={"query": query, "num_results": len(filtered), "context": context},
    )
    return sort_by(filtered, relevance_score(filtered)), context


def search_products(
    catalog: Catalog,
    q: Optional[str] = None,
    category: Optional[str] = None,
    price_range: Optional[str] = None,
    brand: Optional[str] = None,
    sort: Optional[str] = None,
    min_rating: Optional[float] = None,
) -> Dict[str, Any]:
    """Filtered, optionally sorted product listing plus available filter values."""
    products = catalog.products
    results = products

    if q:
        query = q.lower()
        results = results.loc[
            _contains(results["name"], query)
            | _contains(results["description"], query)
            | _contains(results["brand"], query)
            | _any_item(results["tags"], lambda tag: query in tag)
        ]
    if category:
        results = results.loc[results["category"].str.lower() == category.lower()]
    if price_range:
        results = results.loc[results["priceRange"] == price_range]
    if brand:
        results = results.loc[results["brand"].str.lower() == brand.lower()]
    if min_rating is not None:
        results = results.loc[results["rating"] >= min_rating]

    if sort:
        column, ascending = SORT_COLUMNS.get(sort, ("rating", False))
        results = sort_by(results, results[column].astype(float), ascending=ascending)

    return {
        "results": to_records(results),
        "total": len(results),
        "filters": {
            "categories": list(dict.fromkeys(products["category"])),
            "brands": list(dict.fromkeys(products["brand"])),
            "priceRanges": list(dict.fromkeys(products["priceRange"].dropna())),
        },
    }


def seasonal_recommendations(catalog: Catalog, today: Optional[date] = None) -> Dict[str, Any]:
    """Top in-season picks, favouring exact season matches and stock."""
    season = current_season(today)
    products = catalog.products
    candidates = products.loc[in_season(products, season)]

    score = (
        candidates["rating"].astype(float) * 0.4
        + (candidates["availability"] == IN_STOCK).astype(float) * 0.3
        + np.where(candidates["season"] == season, 0.3, 0.1)
    )
    picks = sort_by(candidates, score).head(SEASONAL_TOP_N)

    tip = SEASON_TIPS[season]
    return {
        "season": season,
        "recommendations": to_records(picks),
        "message": f"{tip} Here are our top {season} picks:",
        "weatherTip": tip,
    }


def compare_products(catalog: Catalog, product_ids: List[int]) -> Optional[Dict[str, Any]]:
    """Side-by-side comparison of the requested products.

    Returns:
        Comparison payload, or None when fewer than two of the ids exist.
    """
    products = catalog.products
    selected = products.loc[products["id"].isin(product_ids)]
    if len(selected) < 2:
        return None

    records = to_records(selected)
    prices = selected["price"].astype(float)
    ratings = selected["rating"].astype(float)
    feature_sets = [set(record["features"]) for record in records]
    shared = set.intersection(*feature_sets)

    best_value = (ratings / prices.replace(0, np.nan)).fillna(0.0)
    best_value_pos = int(np.argmax(best_value.to_numpy()))
    most_popular_pos = int(np.argmax(selected["reviews"].to_numpy()))

    return {
        "products": records,
        "comparison": {
            "priceRange": {
                "min": float(prices.min()),
                "max": float(prices.max()),
                "average": float(prices.mean()),
            },
            "avgRating": float(ratings.mean()),
            "totalReviews": int(selected["reviews"].sum()),
            "commonFeatures": [f for f in records[0]["features"] if f in shared],
            "uniqueFeatures": [
                {
                    "id": record["id"],
                    "name": record["name"],
                    "unique": [f for f in record["features"] if f not in shared],
                }
                for record in records
            ],
            "bestValue": records[best_value_pos],
            "mostPopular": records[most_popular_pos],
            "availability": [
                {
                    "id": record["id"],
                    "name": record["name"],
                    "status": record["availability"],
                    "shipping": record["shippingTime"],
                }
                for record in records
            ],
        },
    }


def history_recommendations(
    catalog: Catalog,
    viewed_products: Optional[List[int]] = None,
    preferences: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """Recommendations from the most viewed category and user preferences."""
    products = catalog.products
    recommendations = products
    viewed = list(viewed_products or [])

    if viewed:
        categories = products.drop_duplicates("id").set_index("id")["category"]
        viewed_categories = [categories[pid] for pid in viewed if pid in categories.index]
        if viewed_categories:
            top_category = max(viewed_categories, key=viewed_categories.count)
            recommendations = recommendations.loc[
                (recommendations["category"] == top_category)
                & ~recommendations["id"].isin(viewed)
            ]

    if preferences:
        if preferences.get("priceRange"):
            recommendations = recommendations.loc[
                recommendations["priceRange"] == preferences["priceRange"]
            ]
        if preferences.get("brands"):
            recommendations = recommendations.loc[
                recommendations["brand"].isin(preferences["brands"])
            ]

    ranked = sort_by(recommendations, popularity_score(recommendations))
    return to_records(ranked.head(HISTORY_TOP_N))
