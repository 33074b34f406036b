from __future__ import annotations

from canonguard.core.exceptions import CountryCodeError
from canonguard.domain import countries as country_source


class CountryTaxonomy:
    """Typed access to the static country tables."""

    @property
    def country_domains(self) -> dict[str, tuple[str, ...]]:
        return country_source.COUNTRY_DOMAINS

    @property
    def country_names(self) -> dict[str, tuple[str, ...]]:
        return country_source.COUNTRY_NAMES

    @property
    def multi_country_whitelist(self) -> list[str]:
        return country_source.MULTI_COUNTRY_WHITELIST

    @property
    def iso_codes(self) -> frozenset[str]:
        return country_source.ISO_COUNTRY_CODES

    def domain_indicators(self, country: str) -> tuple[str, ...]:
        """Indicators starting with a dot, e.g. ``.de``."""
        return tuple(i for i in self.country_domains.get(country.lower(), ()) if i.startswith("."))

    def term_indicators(self, country: str) -> tuple[str, ...]:
        """Plain-word indicators, e.g. ``germany``."""
        return tuple(i for i in self.country_domains.get(country.lower(), ()) if not i.startswith("."))

    def normalise_code(self, code: object) -> str:
        """Return the lowercase ISO-2 code or raise CountryCodeError."""
        if not isinstance(code, str):
            raise CountryCodeError(code)
        normalised = code.strip().lower()
        if normalised not in self.iso_codes:
            raise CountryCodeError(code)
        return normalised
