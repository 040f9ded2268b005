"""Request and response models for the JSON API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wealthplan.backend.config.schema import TaxOption, TaxType, format_validation_error
from wealthplan.backend.items.catalog import ItemTypeDefinition
from wealthplan.backend.services.calculators import InflationAdjustment


class LiabilityRequest(BaseModel):
    """Payload accepted by ``POST /api/v1/taxes/liability``."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    amount: float = Field(ge=0)
    tax_type: TaxType
    country: str | None = None
    option: str | None = "default"
    floor_at_zero: bool | None = None
    inflation_rate: float | None = None
    months_since_reference: int = Field(default=0, ge=0)

    def inflation(self) -> InflationAdjustment | None:
        if self.inflation_rate is None:
            return None
        return InflationAdjustment(
            inflation_rate=self.inflation_rate,
            months_since_reference=self.months_since_reference,
        )


def parse_liability_request(payload: dict[str, Any]) -> LiabilityRequest:
    """Validate ``payload``, raising ``ValueError`` with a readable message."""

    try:
        return LiabilityRequest.model_validate(payload)
    except ValidationError as error:
        raise ValueError(
            f"Invalid liability request: {format_validation_error(error)}"
        ) from error


def serialise_option(option: TaxOption) -> dict[str, Any]:
    return option.model_dump(mode="json", by_alias=True, exclude_none=True)


def serialise_item_type(definition: ItemTypeDefinition) -> dict[str, Any]:
    payload = definition.model_dump(mode="json", exclude_none=True)
    payload["button_label"] = definition.button_label
    return payload


__all__ = [
    "LiabilityRequest",
    "parse_liability_request",
    "serialise_item_type",
    "serialise_option",
]
