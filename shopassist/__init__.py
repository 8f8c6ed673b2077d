"""ShopAssist: chat-driven shopping assistant with real-time co-browsing.

This package provides a backend service for keyword-based product
recommendations and shared browsing sessions between several clients.

Modules:
    api: FastAPI application, REST endpoints and the co-browsing WebSocket
    recommender: product catalog, search and the rule-based chat responder
    cobrowse: session membership and event fan-out for co-browsing
"""

__version__ = "0.1.0"
