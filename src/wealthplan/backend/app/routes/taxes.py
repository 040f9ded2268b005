"""Expose the tax catalog to the front-end.

Unknown tax types yield empty option lists rather than errors so the UI can
probe jurisdictions without wealth tax data.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from wealthplan.backend.app.http import not_found, read_json_object
from wealthplan.backend.app.models import parse_liability_request, serialise_option
from wealthplan.backend.app.state import get_state
from wealthplan.backend.services.calculators import compute_liability, effective_rate

blueprint = Blueprint("taxes", __name__, url_prefix="/api/v1/taxes")


@blueprint.get("/countries")
def list_countries() -> tuple[Any, int]:
    """Return supported country codes with their display names."""

    taxes = get_state().taxes
    countries = []
    for code in taxes.list_supported_countries():
        config = taxes.get_config(code)
        countries.append({"code": code, "name": config.country_name if config else code})
    return jsonify({"countries": countries}), 200


@blueprint.get("/options/<option_id>")
def get_option(option_id: str) -> tuple[Any, int]:
    country = (request.args.get("country") or "").upper() or None
    option = get_state().taxes.find_option(option_id, country)
    if option is None:
        return not_found("tax option", option_id, country=country).to_response()
    return jsonify(serialise_option(option)), 200


@blueprint.get("/<country_code>")
def get_country(country_code: str) -> tuple[Any, int]:
    config = get_state().taxes.get_config(country_code.upper())
    if config is None:
        return not_found("tax configuration", country_code).to_response()
    payload = config.model_dump(mode="json", by_alias=True, exclude_none=True)
    return jsonify(payload), 200


@blueprint.get("/<country_code>/<tax_type>")
def list_options(country_code: str, tax_type: str) -> tuple[Any, int]:
    options = get_state().taxes.get_options(country_code.upper(), tax_type)
    payload = {
        "country": country_code.upper(),
        "tax_type": tax_type,
        "options": [serialise_option(option) for option in options],
    }
    return jsonify(payload), 200


@blueprint.get("/<country_code>/<tax_type>/default")
def get_default(country_code: str, tax_type: str) -> tuple[Any, int]:
    option = get_state().taxes.get_default_option(country_code.upper(), tax_type)
    if option is None:
        return not_found(
            "default tax option", f"{country_code.upper()}/{tax_type}"
        ).to_response()
    return jsonify(serialise_option(option)), 200


@blueprint.post("/liability")
def calculate_liability() -> tuple[Any, int]:
    """Compute the liability for an amount under a resolved tax option."""

    state = get_state()
    liability_request = parse_liability_request(read_json_object(request))
    country = liability_request.country.upper() if liability_request.country else None

    option = state.taxes.resolve_option(
        liability_request.option, country, liability_request.tax_type
    )
    floor = liability_request.floor_at_zero
    if floor is None:
        floor = state.floor_liability

    if option is None:
        liability = 0.0
    else:
        liability = compute_liability(
            liability_request.amount,
            option,
            floor_at_zero=floor,
            inflation=liability_request.inflation(),
        )

    payload = {
        "amount": liability_request.amount,
        "country": country,
        "tax_type": liability_request.tax_type,
        "option": serialise_option(option) if option else None,
        "liability": liability,
        "effective_rate": effective_rate(liability_request.amount, liability),
    }
    return jsonify(payload), 200
