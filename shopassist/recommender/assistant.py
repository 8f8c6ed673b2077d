"""Rule-based shopping assistant.

Turns a chat message into one recommended product plus alternatives. The
"intelligence" is substring dispatch on the message: seasonal, trending,
deals and gift intents reshape the keyword matches from
:func:`smart_recommendations`.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from shopassist.recommender.catalog import Catalog, to_records
from shopassist.recommender.search import current_season, in_season, smart_recommendations, sort_by

# Configure module logger
logger = logging.getLogger(__name__)

TRENDING_TOP_N = 5
FALLBACK_TOP_N = 3
MAX_ALTERNATIVES = 3
GIFT_MIN_RATING = 4.5

CATALOG_UNAVAILABLE_RESPONSE = {
    "type": "error",
    "message": "Sorry, our product catalog is currently unavailable. Please try again later.",
    "suggestions": ["Check back in a few minutes", "Contact support if the issue persists"],
}


def format_price(value: Optional[float]) -> Optional[str]:
    """Render a price the way the storefront shows it: ``$30``, ``$29.99``."""
    if value is None:
        return None
    value = float(value)
    if value.is_integer():
        return f"${int(value)}"
    return f"${value}"


def _original_price(product: Dict[str, Any]) -> Optional[str]:
    original = product.get("originalPrice")
    if original is not None and original > product["price"]:
        return format_price(original)
    return None


def _discount(product: Dict[str, Any]) -> Optional[str]:
    discount = product.get("discount") or 0
    if discount > 0:
        amount = int(discount) if float(discount).is_integer() else discount
        return f"{amount}% off"
    return None


def _alternative(product: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": product["id"],
        "name": product["name"],
        "brand": product["brand"],
        "price": format_price(product["price"]),
        "originalPrice": _original_price(product),
        "discount": _discount(product),
        "image": product.get("image"),
        "rating": product.get("rating"),
        "availability": product.get("availability"),
    }


def _default_reason(message: str, product: Dict[str, Any]) -> str:
    kind = (product.get("subcategory") or product.get("category") or "item").lower()
    features = ", ".join(product.get("features", [])[:3]) or "great features"
    return (
        f'Based on your query "{message}", I recommend this {kind} from '
        f"{product['brand']}. It's perfect because of its {features}."
    )


def respond(catalog: Catalog, message: str, today: Optional[date] = None) -> Dict[str, Any]:
    """Build the assistant's reply to a chat message.

    Args:
        catalog: Product catalog to recommend from.
        message: The user's chat message (non-empty).
        today: Date used for seasonal intents (defaults to today).

    Returns:
        Reply payload with the best product, alternatives and query context,
        or an error-typed payload when the catalog is empty.
    """
    if catalog.is_empty:
        return dict(CATALOG_UNAVAILABLE_RESPONSE)

    text = message.lower()
    matches, context = smart_recommendations(catalog, message)
    response_type = "general"
    special_response = ""
    final = matches

    if "season" in text or "weather" in text:
        season = current_season(today)
        seasonal = matches.loc[in_season(matches, season)]
        if len(seasonal):
            final = seasonal
        response_type = "seasonal"
        special_response = (
            f"Perfect for {season}! Based on current weather patterns, "
            f"I recommend these {season} essentials:"
        )
    elif "trending" in text or "popular" in text:
        popularity = matches["rating"].astype(float) * matches["reviews"].astype(float)
        trending = sort_by(matches, popularity).head(TRENDING_TOP_N)
        if len(trending):
            final = trending
        response_type = "trending"
        special_response = "Here are the most popular and trending items right now:"
    elif "deal" in text or "discount" in text or "sale" in text:
        discounted = matches.loc[matches["discount"].astype(float) > 0]
        discounted = sort_by(discounted, discounted["discount"].astype(float))
        if len(discounted):
            final = discounted
        response_type = "deals"
        special_response = "Great timing! Here are the best deals and discounts available:"
    elif "gift" in text or "present" in text:
        giftable = matches.loc[
            matches["tags"].map(lambda tags: "gift" in tags).astype(bool)
            | (matches["rating"].astype(float) >= GIFT_MIN_RATING)
        ]
        if len(giftable):
            final = giftable
        response_type = "gift"
        special_response = "Perfect gift ideas! These highly-rated items make excellent presents:"

    products: List[Dict[str, Any]] = to_records(final)
    if not products:
        ranked = sort_by(catalog.products, catalog.products["rating"].astype(float))
        products = to_records(ranked.head(FALLBACK_TOP_N))
        special_response = (
            f'I couldn\'t find exact matches for "{message}", '
            "but here are some highly-rated items you might love:"
        )

    best = products[0]
    logger.info(
        "Assistant reply built",
        extra={
            "response_type": response_type,
            "num_matches": len(products),
            "product_id": best["id"],
        },
    )

    return {
        "type": response_type,
        "name": best["name"],
        "id": best["id"],
        "brand": best["brand"],
        "reason": special_response or _default_reason(message, best),
        "image": best.get("image"),
        "link": f"#product-{best['id']}",
        "price": format_price(best["price"]),
        "originalPrice": _original_price(best),
        "discount": _discount(best),
        "rating": best.get("rating"),
        "reviews": best.get("reviews"),
        "features": best.get("features") or [],
        "colors": best.get("colors") or [],
        "availability": best.get("availability"),
        "shippingTime": best.get("shippingTime"),
        "warranty": best.get("warranty"),
        "alternatives": [_alternative(p) for p in products[1 : 1 + MAX_ALTERNATIVES]],
        "context": context,
    }
