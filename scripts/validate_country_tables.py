"""Validate the static country tables before they drive localisation checks."""

from __future__ import annotations

import sys
from typing import Iterable

from canonguard.core.exceptions import ConfigurationError
from canonguard.domain import countries

TABLES = ("COUNTRY_DOMAINS", "COUNTRY_NAMES")


def _validate_string_list(values: Iterable[object], label: str) -> list[str]:
    errors: list[str] = []
    seen = set()
    for value in values:
        if not isinstance(value, str):
            errors.append(f"{label} contains non-string value: {value!r}")
            continue
        if not value.strip():
            errors.append(f"{label} contains empty/blank string.")
            continue
        if value != value.lower():
            errors.append(f"{label} contains non-lowercase value: {value!r}")
            continue
        if value in seen:
            errors.append(f"{label} contains duplicate value: {value!r}")
            continue
        seen.add(value)
    if not seen:
        errors.append(f"{label} is empty.")
    return errors


def _validate_country_table(name: str) -> list[str]:
    if not hasattr(countries, name):
        return [f"Missing {name} in countries.py."]
    table = getattr(countries, name)
    if not isinstance(table, dict):
        return [f"{name} must be a dict."]

    errors: list[str] = []
    iso_codes = getattr(countries, "ISO_COUNTRY_CODES", frozenset())
    for code, indicators in table.items():
        if not isinstance(code, str) or code not in iso_codes:
            errors.append(f"{name} key {code!r} is not a lowercase ISO-3166 alpha-2 code.")
            continue
        if not isinstance(indicators, (list, tuple)):
            errors.append(f"{name}[{code!r}] must be a list or tuple.")
            continue
        errors.extend(_validate_string_list(indicators, f"{name}[{code!r}]"))
    return errors


def validate_country_tables() -> list[str]:
    errors: list[str] = []
    for name in TABLES:
        errors.extend(_validate_country_table(name))

    if hasattr(countries, "COUNTRY_DOMAINS") and hasattr(countries, "COUNTRY_NAMES"):
        if isinstance(countries.COUNTRY_DOMAINS, dict) and isinstance(countries.COUNTRY_NAMES, dict):
            missing = sorted(set(countries.COUNTRY_DOMAINS) ^ set(countries.COUNTRY_NAMES))
            if missing:
                errors.append(f"COUNTRY_DOMAINS and COUNTRY_NAMES cover different countries: {', '.join(missing)}")

    if not hasattr(countries, "MULTI_COUNTRY_WHITELIST"):
        errors.append("Missing MULTI_COUNTRY_WHITELIST in countries.py.")
    elif not isinstance(countries.MULTI_COUNTRY_WHITELIST, list):
        errors.append("MULTI_COUNTRY_WHITELIST must be a list.")
    else:
        errors.extend(_validate_string_list(countries.MULTI_COUNTRY_WHITELIST, "MULTI_COUNTRY_WHITELIST"))

    return errors


def assert_valid() -> None:
    errors = validate_country_tables()
    if errors:
        raise ConfigurationError(errors)


def main() -> int:
    errors = validate_country_tables()
    if errors:
        print("Country table validation failed:")
        for err in errors:
            print(f"- {err}")
        return 1
    print("Country table validation passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
