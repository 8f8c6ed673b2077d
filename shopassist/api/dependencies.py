"""Request dependencies resolving per-application state.

The catalog and the co-browsing coordinator live on ``app.state`` and are
handed to route handlers through these functions.
"""

from fastapi import Request

from shopassist.api.exceptions import CatalogUnavailableError
from shopassist.cobrowse import LifecycleManager
from shopassist.config import Settings
from shopassist.recommender.catalog import Catalog


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog


def require_catalog(request: Request) -> Catalog:
    """Like :func:`get_catalog` but fails when no products are loaded."""
    catalog: Catalog = request.app.state.catalog
    if catalog.is_empty:
        raise CatalogUnavailableError(details={"catalog_path": catalog.source})
    return catalog


def get_coordinator(request: Request) -> LifecycleManager:
    return request.app.state.cobrowse
