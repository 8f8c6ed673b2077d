"""FastAPI application module for ShopAssist.

This module contains the FastAPI application, route handlers, the
co-browsing WebSocket endpoint and the HTTP error handling.
"""
