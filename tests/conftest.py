"""Test configuration utilities and shared fixtures."""

import sys
from copy import deepcopy
from pathlib import Path
from typing import Any

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from wealthplan.backend.app import create_app  # noqa: E402
from wealthplan.backend.config.catalog import TaxCatalog, load_catalog  # noqa: E402
from wealthplan.backend.config.tax_data import clear_caches  # noqa: E402
from wealthplan.backend.services.queries import default_tax_service  # noqa: E402

SYNTHETIC_DOCUMENTS: dict[str, dict[str, Any]] = {
    "NL": {
        "countryCode": "NL",
        "countryName": "Netherlands",
        "incomeTaxes": [
            {
                "id": "nl-box1",
                "name": "Box 1",
                "type": "income",
                "isDefault": True,
                "brackets": [
                    {"threshold": 0, "rate": 10},
                    {"threshold": 1000, "rate": 20},
                ],
            },
            {
                "id": "nl-box2",
                "name": "Box 2",
                "type": "income",
                "isDefault": False,
                "rate": 25,
            },
        ],
        "wealthTaxes": [
            {
                "id": "nl-box3",
                "name": "Box 3",
                "type": "wealth",
                "isDefault": True,
                "rate": 2,
                "exemptionThreshold": 50000,
            }
        ],
        "capitalGainsTaxes": [
            {
                "id": "nl-gains",
                "name": "No gains tax",
                "type": "capital_gains",
                "isDefault": True,
                "rate": 0,
            }
        ],
        "sources": ["https://example.org/nl"],
    },
    "GB": {
        "countryCode": "GB",
        "countryName": "United Kingdom",
        "incomeTaxes": [
            {
                "id": "gb-income",
                "name": "Income tax",
                "type": "income",
                "isDefault": False,
                "brackets": [
                    {"threshold": 0, "rate": 0},
                    {"threshold": 12570, "rate": 20},
                ],
            }
        ],
        "wealthTaxes": [],
        "capitalGainsTaxes": [
            {
                "id": "gb-cgt",
                "name": "Capital gains tax",
                "type": "capital_gains",
                "isDefault": True,
                "rate": 20,
                "exemptionThreshold": 3000,
            }
        ],
        "sources": ["https://example.org/gb"],
    },
}


@pytest.fixture()
def raw_documents() -> dict[str, dict[str, Any]]:
    """Return a mutable copy of the synthetic country documents."""

    return deepcopy(SYNTHETIC_DOCUMENTS)


@pytest.fixture()
def synthetic_catalog(raw_documents: dict[str, dict[str, Any]]) -> TaxCatalog:
    return load_catalog(raw_documents)


@pytest.fixture(autouse=True)
def _reset_data_caches():
    clear_caches()
    default_tax_service.cache_clear()
    yield
    clear_caches()
    default_tax_service.cache_clear()


@pytest.fixture()
def app() -> Flask:
    """Return a configured Flask application backed by the shipped data."""

    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def synthetic_client(synthetic_catalog: TaxCatalog) -> FlaskClient:
    """Test client whose tax catalog is the synthetic one."""

    application = create_app(catalog=synthetic_catalog)
    application.config.update(TESTING=True)
    return application.test_client()
