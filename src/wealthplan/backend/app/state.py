"""Per-application services shared by the blueprints."""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from wealthplan.backend.config.catalog import CatalogHandle
from wealthplan.backend.items.catalog import ItemTypeCatalog
from wealthplan.backend.services.tax_query import TaxQueryService

EXTENSION_KEY = "wealthplan"


@dataclass(frozen=True)
class AppState:
    """Catalogs and settings injected by :func:`create_app`."""

    catalog: CatalogHandle
    taxes: TaxQueryService
    items: ItemTypeCatalog
    floor_liability: bool = False


def get_state() -> AppState:
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["AppState", "EXTENSION_KEY", "get_state"]
