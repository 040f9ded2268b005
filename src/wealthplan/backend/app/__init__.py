"""Application factory for WealthPlan backend services."""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping
from warnings import warn

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from wealthplan.backend.config.catalog import CatalogHandle, TaxCatalog
from wealthplan.backend.config.tax_data import load_default_catalog
from wealthplan.backend.items.catalog import ItemTypeCatalog, default_item_catalog
from wealthplan.backend.services.tax_query import TaxQueryService
from wealthplan.backend.version import get_project_version

from .http import problem_response
from .routes import register_routes
from .state import EXTENSION_KEY, AppState, get_state

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def _parse_flag(value: str | None, *, env: str, default: bool = False) -> bool:
    if value is None or not value.strip():
        return default
    normalised = value.strip().lower()
    if normalised in _TRUE_VALUES:
        return True
    if normalised in _FALSE_VALUES:
        return False
    logger.warning("Ignoring invalid value for %s: %s", env, value)
    return default


def create_app(
    catalog: TaxCatalog | None = None,
    item_catalog: ItemTypeCatalog | None = None,
) -> Flask:
    """Create and configure the Flask application instance.

    ``catalog`` and ``item_catalog`` default to the shipped tax documents and
    built-in item types; tests pass synthetic ones.
    """

    app = Flask(__name__)

    allowed_origins = _parse_allowed_origins(os.getenv("WEALTHPLAN_ALLOWED_ORIGINS"))
    if not allowed_origins:
        warn(
            "No allowed origins configured; cross-origin requests will be rejected.",
            stacklevel=1,
        )

    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(allowed_origins)}},
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST"],
        allow_headers=["Content-Type"],
    )

    handle = CatalogHandle(catalog if catalog is not None else load_default_catalog())
    app.extensions[EXTENSION_KEY] = AppState(
        catalog=handle,
        taxes=TaxQueryService(handle),
        items=item_catalog if item_catalog is not None else default_item_catalog(),
        floor_liability=_parse_flag(
            os.getenv("WEALTHPLAN_FLOOR_LIABILITY"), env="WEALTHPLAN_FLOOR_LIABILITY"
        ),
    )

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        taxes = get_state().taxes
        payload = {
            "status": "ok",
            "version": get_project_version(),
            "supported_countries": list(taxes.list_supported_countries()),
        }
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Gracefully surface domain validation errors to clients."""

        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()

    return app


def reload_tax_catalog(app: Flask, raw_configs: Mapping[str, Any]) -> TaxCatalog:
    """Validate ``raw_configs`` and publish them as the app's tax catalog.

    The previous catalog stays in place when validation fails.
    """

    state: AppState = app.extensions[EXTENSION_KEY]
    return state.catalog.replace(raw_configs)


__all__ = ["create_app", "reload_tax_catalog"]
