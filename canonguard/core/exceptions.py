"""Custom exceptions for Canon Guard."""

from __future__ import annotations


class CanonGuardError(Exception):
    """Base exception for all Canon Guard errors."""
    pass


class ValidationError(CanonGuardError):
    """Raised when caller-supplied input fails validation."""
    pass


class CountryCodeError(ValidationError):
    """Raised when a country code is not an ISO-3166-1 alpha-2 code."""

    def __init__(self, code: object):
        self.code = code
        super().__init__(f"Invalid country code: {code!r}")


class ConfigurationError(CanonGuardError):
    """Raised when the static country tables are inconsistent."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors) or "Invalid configuration")
