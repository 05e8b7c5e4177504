"""
Catalog lifecycle for the web app.

The lookup index (and the catalog it references) is built once at
startup and stored on ``app.state``. A reload builds a complete new
index first and then replaces the old one with a single assignment, so
requests only ever see a fully built index.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, Request

from deckdoctor.models.failure import CatalogUnavailableError
from deckdoctor.services.card_catalog import load_catalog
from deckdoctor.services.lookup_index import LookupIndex

logger = logging.getLogger(__name__)

CATALOG_LOAD_FAILED = "Card data files are missing or unreadable"


def build_lookup_index(data_dir: Path | None = None) -> LookupIndex:
    """
    Load the static tables and build a fresh catalog and index.

    Raises:
        CatalogUnavailableError: If the tables are missing or corrupted
    """
    try:
        catalog = load_catalog(data_dir)
    except (FileNotFoundError, ValueError) as e:
        # Paths stay in the log; clients only see the generic detail
        logger.error("Failed to load card data: %s", e)
        raise CatalogUnavailableError(detail=CATALOG_LOAD_FAILED) from e
    return LookupIndex(catalog)


def install_lookup_index(app: FastAPI, index: LookupIndex) -> None:
    """Swap in a fully built index."""
    app.state.lookup_index = index
    logger.info("Installed lookup index for %d cards", len(index.catalog))


def init_catalog(app: FastAPI, data_dir: Path | None = None) -> LookupIndex:
    """Build the catalog and index and install them on the app."""
    index = build_lookup_index(data_dir)
    install_lookup_index(app, index)
    return index


def current_lookup_index(app: FastAPI) -> LookupIndex | None:
    return getattr(app.state, "lookup_index", None)


def get_lookup_index(request: Request) -> LookupIndex:
    """
    Dependency that provides the current lookup index.

    Usage in FastAPI:
        @router.get("/cards")
        async def list_cards(index: LookupIndex = Depends(get_lookup_index)):
            ...

    Raises:
        CatalogUnavailableError: If no catalog has been loaded
    """
    index = current_lookup_index(request.app)
    if index is None:
        raise CatalogUnavailableError(detail="Catalog has not been loaded")
    return index
