"""Construction of the read-only tax catalog from pre-parsed country documents."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from threading import Lock
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from .schema import (
    TAX_TYPE_FIELDS,
    ConfigValidationError,
    CountryTaxConfig,
    TaxOption,
)

_LOGGER = logging.getLogger(__name__)

# Raw document keys for each tax type, in search order.
_RAW_LIST_KEYS: Mapping[str, tuple[str, str]] = {
    "income": ("incomeTaxes", "income_taxes"),
    "wealth": ("wealthTaxes", "wealth_taxes"),
    "capital_gains": ("capitalGainsTaxes", "capital_gains_taxes"),
}
_RAW_LIST_NAMES = frozenset(name for pair in _RAW_LIST_KEYS.values() for name in pair)
_REQUIRED_TYPES = frozenset({"income", "capital_gains"})


class TaxCatalog(Mapping[str, CountryTaxConfig]):
    """Immutable mapping of country codes to validated configurations.

    Iteration follows the insertion order of the documents handed to
    :func:`load_catalog`. Instances are only produced by that function.
    """

    __slots__ = ("_configs",)

    def __init__(self, configs: Mapping[str, CountryTaxConfig]) -> None:
        self._configs = MappingProxyType(dict(configs))

    def __getitem__(self, country_code: str) -> CountryTaxConfig:
        return self._configs[country_code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def __repr__(self) -> str:
        return f"TaxCatalog({', '.join(self._configs)})"

    @property
    def countries(self) -> Mapping[str, CountryTaxConfig]:
        """Read-only view of the backing mapping."""

        return self._configs


def _first_error_field(error: ValidationError) -> str | None:
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        if location:
            return location
    return None


def _error_reason(error: ValidationError) -> str:
    issues = error.errors()
    if not issues:
        return str(error)
    message = str(issues[0].get("msg", "Invalid value"))
    if message.startswith("Value error, "):
        message = message[len("Value error, ") :]
    return message


def _raw_option_list(
    country_code: str, tax_type: str, document: Mapping[str, Any]
) -> list[Any]:
    camel, snake = _RAW_LIST_KEYS[tax_type]
    key = camel if camel in document else snake
    raw = document.get(key)
    if raw is None:
        raw = []
    if not isinstance(raw, list | tuple):
        raise ConfigValidationError(
            "option lists must be sequences",
            country_code=country_code,
            tax_type=tax_type,
            field=camel,
        )
    if not raw and tax_type in _REQUIRED_TYPES:
        raise ConfigValidationError(
            "at least one option is required",
            country_code=country_code,
            tax_type=tax_type,
            field=camel,
        )
    return list(raw)


def _build_options(
    country_code: str, tax_type: str, raw_options: list[Any]
) -> tuple[TaxOption, ...]:
    options: list[TaxOption] = []
    default_id: str | None = None

    for raw in raw_options:
        if not isinstance(raw, Mapping):
            raise ConfigValidationError(
                "tax options must be mappings",
                country_code=country_code,
                tax_type=tax_type,
            )
        option_id = raw.get("id")
        try:
            option = TaxOption.model_validate(raw)
        except ValidationError as error:
            raise ConfigValidationError(
                _error_reason(error),
                country_code=country_code,
                tax_type=tax_type,
                option_id=str(option_id) if option_id else None,
                field=_first_error_field(error),
            ) from error

        if option.type != tax_type:
            raise ConfigValidationError(
                f"option of type '{option.type}' listed under {tax_type} taxes",
                country_code=country_code,
                tax_type=tax_type,
                option_id=option.id,
                field="type",
            )
        if option.is_default:
            if default_id is not None:
                raise ConfigValidationError(
                    f"multiple default options ('{default_id}' and '{option.id}')",
                    country_code=country_code,
                    tax_type=tax_type,
                    option_id=option.id,
                    field="isDefault",
                )
            default_id = option.id
        options.append(option)

    return tuple(options)


def _build_country(key: str, document: Any) -> CountryTaxConfig:
    if not isinstance(document, Mapping):
        raise ConfigValidationError(
            "country documents must be mappings", country_code=key
        )

    declared = document.get("countryCode", document.get("country_code"))
    if declared != key:
        raise ConfigValidationError(
            f"document declares country code {declared!r}",
            country_code=key,
            field="countryCode",
        )

    prepared = {
        name: value
        for name, value in document.items()
        if name not in _RAW_LIST_NAMES
    }
    for tax_type in TAX_TYPE_FIELDS:
        raw_options = _raw_option_list(key, tax_type, document)
        prepared[_RAW_LIST_KEYS[tax_type][0]] = _build_options(key, tax_type, raw_options)

    try:
        return CountryTaxConfig.model_validate(prepared)
    except ValidationError as error:
        raise ConfigValidationError(
            _error_reason(error),
            country_code=key,
            field=_first_error_field(error),
        ) from error


def load_catalog(raw_configs: Mapping[str, Any]) -> TaxCatalog:
    """Validate ``raw_configs`` and return an immutable :class:`TaxCatalog`.

    Raises :class:`ConfigValidationError` on the first violation; no partial
    catalog is ever produced.
    """

    configs: dict[str, CountryTaxConfig] = {}
    owners: dict[str, str] = {}

    for country_code, document in raw_configs.items():
        config = _build_country(country_code, document)
        for tax_type in TAX_TYPE_FIELDS:
            for option in config.options_for(tax_type):
                owner = owners.get(option.id)
                if owner is not None:
                    raise ConfigValidationError(
                        f"option id already defined by {owner}",
                        country_code=country_code,
                        tax_type=tax_type,
                        option_id=option.id,
                        field="id",
                    )
                owners[option.id] = country_code
        configs[country_code] = config

    _LOGGER.debug(
        "Built tax catalog with %d countries and %d options", len(configs), len(owners)
    )
    return TaxCatalog(configs)


class CatalogHandle:
    """Holder publishing a catalog that may be replaced wholesale.

    Readers take :attr:`current` without locking; :meth:`replace` validates
    the new documents first and only then swaps the reference.
    """

    def __init__(self, catalog: TaxCatalog) -> None:
        self._catalog = catalog
        self._lock = Lock()

    @property
    def current(self) -> TaxCatalog:
        return self._catalog

    def replace(self, raw_configs: Mapping[str, Any]) -> TaxCatalog:
        with self._lock:
            catalog = load_catalog(raw_configs)
            self._catalog = catalog
        _LOGGER.info("Published tax catalog for %d countries", len(catalog))
        return catalog


__all__ = ["CatalogHandle", "TaxCatalog", "load_catalog"]
