"""Utilities for reviewing country tax documents and surfacing data issues.

The catalog loader already rejects documents that break hard invariants.
The checks here cover softer problems contributors should look at before
publishing data, such as groups without a default option or rebate rates.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from .catalog import TaxCatalog, load_catalog
from .schema import TAX_TYPES, ConfigValidationError, CountryTaxConfig, TaxOption
from .tax_data import clear_caches, manifest_entries, read_country_document


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_defaults(config: CountryTaxConfig) -> list[str]:
    errors: list[str] = []
    for tax_type in TAX_TYPES:
        options = config.options_for(tax_type)
        if options and not any(option.is_default for option in options):
            errors.append(
                _format_scope(
                    f"{config.country_code}.{tax_type}",
                    "no option is marked as default",
                )
            )
    return errors


def _validate_option_rates(scope: str, option: TaxOption) -> list[str]:
    errors: list[str] = []

    if option.rate is not None and option.rate < 0:
        errors.append(_format_scope(scope, f"flat rate {option.rate} is negative"))

    for bracket in option.brackets or ():
        if bracket.rate < 0:
            errors.append(
                _format_scope(
                    scope,
                    f"bracket at {bracket.threshold} has negative rate {bracket.rate}",
                )
            )

    if option.brackets and option.brackets[0].threshold != 0:
        errors.append(
            _format_scope(
                scope,
                f"first bracket starts at {option.brackets[0].threshold} instead of 0",
            )
        )

    return errors


def _validate_sources(config: CountryTaxConfig) -> list[str]:
    errors: list[str] = []
    if not config.sources:
        errors.append(_format_scope(config.country_code, "no data sources listed"))
    for source in config.sources:
        if not source.startswith(("http://", "https://")):
            errors.append(
                _format_scope(
                    f"{config.country_code}.sources",
                    f"source '{source}' must be an absolute URL",
                )
            )
    return errors


def validate_country_config(config: CountryTaxConfig) -> list[str]:
    """Return a list of data-quality issues for ``config``."""

    errors: list[str] = []
    errors.extend(_validate_defaults(config))

    for tax_type in TAX_TYPES:
        for option in config.options_for(tax_type):
            scope = f"{config.country_code}.{tax_type}.{option.id}"
            errors.extend(_validate_option_rates(scope, option))

    errors.extend(_validate_sources(config))
    return errors


def validate_catalog(catalog: TaxCatalog) -> dict[str, list[str]]:
    """Validate every country in ``catalog`` and return issues keyed by code."""

    return {
        country_code: validate_country_config(config)
        for country_code, config in catalog.items()
    }


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate country tax documents and report issues helpful to contributors."
    )
    parser.add_argument(
        "countries",
        nargs="*",
        help="Specific country codes to validate (defaults to all active countries)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding manifest.yaml and the country documents",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    clear_caches()

    entries = list(manifest_entries(args.data_dir))
    requested = {code.upper() for code in args.countries}
    if requested:
        entries = [entry for entry in entries if entry.country in requested]

    if not entries:
        parser.print_help()
        return 1

    exit_code = 0
    documents = {}

    for entry in entries:
        try:
            document = read_country_document(entry, args.data_dir)
            catalog = load_catalog({entry.country: document})
        except (FileNotFoundError, ConfigValidationError) as error:
            print(f"[{entry.country}] failed to load: {error}")
            exit_code = 1
            continue

        documents[entry.country] = document
        issues = validate_country_config(catalog[entry.country])
        if issues:
            exit_code = 1
            print(f"[{entry.country}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{entry.country}] OK")

    if len(documents) > 1:
        try:
            load_catalog(documents)
        except ConfigValidationError as error:
            print(f"[catalog] {error}")
            exit_code = 1

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
