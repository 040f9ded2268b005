"""Lookup operations over an injected tax catalog."""

from __future__ import annotations

import logging

from wealthplan.backend.config.catalog import CatalogHandle, TaxCatalog
from wealthplan.backend.config.schema import CountryTaxConfig, TaxOption

from .calculators.brackets import InflationAdjustment, compute_liability

_LOGGER = logging.getLogger(__name__)

# Selections meaning the amount is not taxed.
NO_TAX_SELECTIONS = frozenset({"none", "after-tax"})
DEFAULT_SELECTION = "default"


class TaxQueryService:
    """Read-only queries over a tax catalog.

    Unknown countries, tax types and ids are reported as ``None`` or an empty
    tuple because callers routinely probe jurisdictions without data.
    """

    def __init__(self, catalog: TaxCatalog | CatalogHandle) -> None:
        self._source = catalog

    @property
    def catalog(self) -> TaxCatalog:
        if isinstance(self._source, CatalogHandle):
            return self._source.current
        return self._source

    def list_supported_countries(self) -> tuple[str, ...]:
        return tuple(sorted(self.catalog))

    def get_config(self, country_code: str) -> CountryTaxConfig | None:
        return self.catalog.get(country_code)

    def get_options(self, country_code: str, tax_type: str) -> tuple[TaxOption, ...]:
        config = self.get_config(country_code)
        if config is None:
            return ()
        return config.options_for(tax_type)

    def get_default_option(self, country_code: str, tax_type: str) -> TaxOption | None:
        for option in self.get_options(country_code, tax_type):
            if option.is_default:
                return option
        return None

    def find_option(
        self, option_id: str, country_code: str | None = None
    ) -> TaxOption | None:
        """Find an option by id, optionally restricted to one country.

        Without a country the search walks the catalog in insertion order and
        returns the first match.
        """

        catalog = self.catalog
        if country_code:
            config = catalog.get(country_code)
            configs = (config,) if config is not None else ()
        else:
            configs = tuple(catalog.values())

        for config in configs:
            for option in config.all_options():
                if option.id == option_id:
                    return option
        return None

    def resolve_option(
        self, selection: str | None, country_code: str | None, tax_type: str
    ) -> TaxOption | None:
        """Translate a user's tax selection into the option to apply.

        ``None``, ``"none"`` and ``"after-tax"`` mean no tax applies;
        ``"default"`` picks the country's default for ``tax_type``; any other
        value is treated as an option id.
        """

        if not selection or selection in NO_TAX_SELECTIONS:
            return None

        if selection == DEFAULT_SELECTION:
            if not country_code:
                _LOGGER.warning("Cannot resolve default %s tax without a country", tax_type)
                return None
            option = self.get_default_option(country_code, tax_type)
            if option is None:
                _LOGGER.warning(
                    "No default %s tax option configured for %s", tax_type, country_code
                )
            return option

        option = self.find_option(selection, country_code)
        if option is None:
            _LOGGER.warning(
                "Tax option %s not found for country %s", selection, country_code or "any"
            )
            return None
        if option.type != tax_type:
            _LOGGER.warning(
                "Tax option %s is of type %s, expected %s", selection, option.type, tax_type
            )
            return None
        return option

    def compute(
        self,
        amount: float,
        country_code: str | None,
        tax_type: str,
        selection: str | None = DEFAULT_SELECTION,
        *,
        floor_at_zero: bool = False,
        inflation: InflationAdjustment | None = None,
    ) -> float | None:
        """Resolve ``selection`` and compute the liability, or ``None`` if untaxed."""

        option = self.resolve_option(selection, country_code, tax_type)
        if option is None:
            return None
        return compute_liability(
            amount, option, floor_at_zero=floor_at_zero, inflation=inflation
        )


__all__ = ["DEFAULT_SELECTION", "NO_TAX_SELECTIONS", "TaxQueryService"]
