"""Tests for the rule-based chat responder."""

from datetime import date

import pytest

from shopassist.recommender.assistant import format_price, respond

WINTER_DAY = date(2026, 1, 10)


@pytest.mark.parametrize(
    "value,expected",
    [(30, "$30"), (30.0, "$30"), (29.99, "$29.99"), (1299.5, "$1299.5"), (None, None)],
)
def test_format_price(value, expected):
    assert format_price(value) == expected


def test_general_reply_has_product_details(catalog):
    reply = respond(catalog, "winter jacket", today=WINTER_DAY)

    assert reply["type"] == "general"
    assert reply["id"] == 2
    assert reply["name"] == "Winter Parka"
    assert reply["price"] == "$249"
    assert reply["originalPrice"] == "$299"
    assert reply["discount"] == "17% off"
    assert reply["link"] == "#product-2"
    assert reply["reason"].startswith('Based on your query "winter jacket"')
    assert "Down insulation" in reply["reason"]
    assert reply["alternatives"] == []
    assert reply["context"] == {"season": "winter", "category": "clothing"}


def test_no_discount_fields_are_null(catalog):
    reply = respond(catalog, "oak", today=WINTER_DAY)
    assert reply["id"] == 5
    assert reply["originalPrice"] is None
    assert reply["discount"] is None


def test_seasonal_intent(catalog):
    reply = respond(catalog, "what headphones suit this weather", today=WINTER_DAY)
    assert reply["type"] == "seasonal"
    assert reply["id"] == 1
    assert reply["reason"].startswith("Perfect for winter!")


def test_trending_intent(catalog):
    reply = respond(catalog, "popular headphones", today=WINTER_DAY)
    assert reply["type"] == "trending"
    assert reply["id"] == 1
    assert reply["reason"] == "Here are the most popular and trending items right now:"


def test_deals_intent_keeps_discounted_products(catalog):
    reply = respond(catalog, "any deals on clothing", today=WINTER_DAY)
    assert reply["type"] == "deals"
    assert reply["id"] == 2
    assert reply["alternatives"] == []


def test_gift_intent_with_alternatives(catalog):
    reply = respond(catalog, "gift for dad", today=WINTER_DAY)
    assert reply["type"] == "gift"
    assert reply["id"] == 1
    assert [alt["id"] for alt in reply["alternatives"]] == [6]
    assert reply["alternatives"][0]["price"] == "$299"
    assert reply["alternatives"][0]["discount"] == "14% off"


def test_fallback_to_top_rated(catalog):
    """Test that unmatched messages still get the three best-rated products."""
    reply = respond(catalog, "xyzzy", today=WINTER_DAY)
    assert reply["type"] == "general"
    assert reply["id"] == 2
    assert [alt["id"] for alt in reply["alternatives"]] == [1, 6]
    assert "couldn't find exact matches" in reply["reason"]


def test_empty_catalog_returns_error_reply(empty_catalog):
    reply = respond(empty_catalog, "anything")
    assert reply["type"] == "error"
    assert reply["suggestions"]
