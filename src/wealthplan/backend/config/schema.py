"""Pydantic models describing the per-country tax configuration schema."""

from __future__ import annotations

from typing import Any, Literal, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)

TaxType = Literal["income", "wealth", "capital_gains"]

TAX_TYPES: tuple[TaxType, ...] = ("income", "wealth", "capital_gains")

# Attribute holding each tax type's option list on ``CountryTaxConfig``.
TAX_TYPE_FIELDS: Mapping[str, str] = {
    "income": "income_taxes",
    "wealth": "wealth_taxes",
    "capital_gains": "capital_gains_taxes",
}


class ConfigValidationError(ValueError):
    """Raised when a tax document violates the catalog invariants.

    The offending country, tax type, option and field are kept on the
    instance so loaders and the validator CLI can report them precisely.
    """

    def __init__(
        self,
        message: str,
        *,
        country_code: str | None = None,
        tax_type: str | None = None,
        option_id: str | None = None,
        field: str | None = None,
    ) -> None:
        self.country_code = country_code
        self.tax_type = tax_type
        self.option_id = option_id
        self.field = field
        self.reason = message
        super().__init__(self._describe())

    def _describe(self) -> str:
        scope = [
            part
            for part in (self.country_code, self.tax_type, self.option_id, self.field)
            if part
        ]
        if not scope:
            return self.reason
        return f"{'.'.join(scope)}: {self.reason}"


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields.

    Numbers must be finite so NaN cannot slip past ordering checks.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", populate_by_name=True, allow_inf_nan=False
    )


class TaxBracket(ImmutableModel):
    """Marginal rate applying from ``threshold`` up to the next bracket."""

    threshold: float
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBracket:
        if self.threshold < 0:
            raise ValueError("Bracket thresholds must be non-negative")
        # Negative rates model rebate brackets; only the magnitude is bounded.
        if not -100 <= self.rate <= 100:
            raise ValueError("Bracket rates must be percentages no greater than 100")
        return self


class TaxOption(ImmutableModel):
    """A single taxable regime such as ``nl-box1`` or ``us-federal-single``."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    type: TaxType
    is_default: bool = Field(default=False, alias="isDefault")
    rate: float | None = None
    brackets: tuple[TaxBracket, ...] | None = None
    exemption_threshold: float | None = Field(default=None, alias="exemptionThreshold")
    notes: str | None = None

    @field_validator("brackets", mode="before")
    @classmethod
    def _coerce_brackets(cls, value: Any) -> Any:
        if value is None or isinstance(value, tuple):
            return value
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        raise ValueError("'brackets' must be a list of threshold/rate pairs")

    @model_validator(mode="after")
    def _validate_option(self) -> TaxOption:
        if self.rate is not None and self.brackets is not None:
            raise ValueError("Define either 'rate' or 'brackets', not both")
        if self.rate is None and self.brackets is None:
            raise ValueError("Either 'rate' or 'brackets' must be defined")
        if self.rate is not None and not -100 <= self.rate <= 100:
            raise ValueError("Flat rates must be percentages no greater than 100")
        if self.brackets is not None:
            _validate_bracket_sequence(self.brackets)
        if self.exemption_threshold is not None and self.exemption_threshold < 0:
            raise ValueError("Exemption thresholds must be non-negative")
        return self

    @computed_field
    @property
    def is_progressive(self) -> bool:
        return self.brackets is not None


def _validate_bracket_sequence(brackets: Sequence[TaxBracket]) -> None:
    if not brackets:
        raise ValueError("At least one tax bracket must be defined")
    previous: float | None = None
    for bracket in brackets:
        if previous is not None and bracket.threshold <= previous:
            raise ValueError("Bracket thresholds must be strictly ascending")
        previous = bracket.threshold


class CountryTaxConfig(ImmutableModel):
    """Complete tax configuration for a single jurisdiction."""

    country_code: str = Field(alias="countryCode", pattern=r"^[A-Z]{2}$")
    country_name: str = Field(alias="countryName", min_length=1)
    income_taxes: tuple[TaxOption, ...] = Field(alias="incomeTaxes")
    wealth_taxes: tuple[TaxOption, ...] = Field(default=(), alias="wealthTaxes")
    capital_gains_taxes: tuple[TaxOption, ...] = Field(alias="capitalGainsTaxes")
    sources: tuple[str, ...] = ()

    def options_for(self, tax_type: str) -> tuple[TaxOption, ...]:
        """Return the options stored for ``tax_type`` or an empty tuple."""

        attribute = TAX_TYPE_FIELDS.get(tax_type)
        if attribute is None:
            return ()
        return getattr(self, attribute)

    def all_options(self) -> tuple[TaxOption, ...]:
        """Return income, wealth and capital gains options in that order."""

        return self.income_taxes + self.wealth_taxes + self.capital_gains_taxes


class TaxDataManifestEntry(ImmutableModel):
    """Entry describing a country document shipped in the data directory."""

    country: str = Field(pattern=r"^[A-Z]{2}$")
    filename: str | None = None
    status: Literal["active", "draft"] = "active"

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"tax.{self.country}.yaml"


class TaxDataManifest(ImmutableModel):
    """Manifest describing the available country documents."""

    countries: tuple[TaxDataManifestEntry, ...]

    @model_validator(mode="after")
    def _validate_countries(self) -> TaxDataManifest:
        seen: set[str] = set()
        for entry in self.countries:
            if entry.country in seen:
                raise ValueError(
                    f"Duplicate country {entry.country} declared in the tax data manifest"
                )
            seen.add(entry.country)
        return self

    @property
    def active_entries(self) -> tuple[TaxDataManifestEntry, ...]:
        return tuple(entry for entry in self.countries if entry.status == "active")


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)
    return "; ".join(messages) if messages else str(error)


__all__ = [
    "ConfigValidationError",
    "CountryTaxConfig",
    "ImmutableModel",
    "TAX_TYPES",
    "TAX_TYPE_FIELDS",
    "TaxBracket",
    "TaxDataManifest",
    "TaxDataManifestEntry",
    "TaxOption",
    "TaxType",
    "ValidationError",
    "format_validation_error",
]
