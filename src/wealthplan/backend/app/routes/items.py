"""Endpoints listing the item type templates offered by the editor."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from wealthplan.backend.app.http import not_found
from wealthplan.backend.app.models import serialise_item_type
from wealthplan.backend.app.state import get_state

blueprint = Blueprint("items", __name__, url_prefix="/api/v1/items")


@blueprint.get("/types")
def list_item_types() -> tuple[Any, int]:
    """Return all item types, optionally filtered with ``?category=``."""

    catalog = get_state().items
    category = request.args.get("category")
    definitions = catalog.list_by_category(category) if category else catalog.list_all()
    payload = {"item_types": [serialise_item_type(entry) for entry in definitions]}
    return jsonify(payload), 200


@blueprint.get("/types/<item_type_id>")
def get_item_type(item_type_id: str) -> tuple[Any, int]:
    definition = get_state().items.get_by_id(item_type_id)
    if definition is None:
        return not_found("item type", item_type_id).to_response()
    return jsonify(serialise_item_type(definition)), 200
