"""
Engine configuration: fixed algorithm constants plus environment-driven settings.
Settings are optional overrides; every field has a safe default.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Near-duplicate detection
LEVENSHTEIN_THRESHOLD = 0.8
TITLE_WEIGHT = 0.5
VENUE_WEIGHT = 0.3
DATE_WEIGHT = 0.2
MISSING_DATE_SIMILARITY = 0.5
# (max day difference, similarity), checked in order
DATE_SIMILARITY_STEPS: tuple[tuple[float, float], ...] = (
    (0, 1.0),
    (7, 0.8),
    (30, 0.5),
    (90, 0.2),
)

# Canonical representative tie-break points
HTTPS_POINTS = 10
OFFICIAL_DOMAIN_POINTS = 5
NEWER_DATE_POINTS = 3
CONFIDENCE_POINTS = 2
OFFICIAL_DOMAIN_SUFFIXES: tuple[str, ...] = (".org", ".edu", ".gov")

# Localisation guard
CONTENT_SCORE_THRESHOLD = 2
DOMAIN_INDICATOR_WEIGHT = 2
WORD_INDICATOR_WEIGHT = 1
WHITELIST_CONFIDENCE = 0.9
DOMAIN_VIOLATION_CONFIDENCE = 0.95
CONTENT_VIOLATION_CONFIDENCE = 0.8
EXPLICIT_VIOLATION_CONFIDENCE = 0.85
DEFAULT_PASS_CONFIDENCE = 0.7

TRACKING_PARAMS: frozenset[str] = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        "fbclid",
        "gclid",
        "ref",
        "source",
        "campaign",
        "affiliate",
    }
)


class Settings(BaseSettings):
    """
    Runtime settings for the batch pipeline.
    Read from the environment or a local .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "production"
    DEDUP_SIMILARITY_THRESHOLD: float = LEVENSHTEIN_THRESHOLD
    DEFAULT_COUNTRY: str | None = None

    @field_validator("DEDUP_SIMILARITY_THRESHOLD")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        """Similarity scores live in (0, 1]."""
        if not 0.0 < v <= 1.0:
            raise ValueError("DEDUP_SIMILARITY_THRESHOLD must be in (0, 1]")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @field_validator("DEFAULT_COUNTRY")
    @classmethod
    def validate_default_country(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        # Imported lazily to keep config importable on its own.
        from canonguard.domain.countries import ISO_COUNTRY_CODES

        code = v.strip().lower()
        if code not in ISO_COUNTRY_CODES:
            raise ValueError(f"DEFAULT_COUNTRY is not an ISO-3166 alpha-2 code: {v}")
        return code

    def log_startup_summary(self) -> None:
        """Log configuration summary on startup."""
        logger.info("=" * 60)
        logger.info("Canon Guard - Configuration")
        logger.info("=" * 60)
        logger.info("Environment: %s", self.ENVIRONMENT)
        logger.info("Log Level: %s", self.LOG_LEVEL)
        logger.info("Dedup Similarity Threshold: %.2f", self.DEDUP_SIMILARITY_THRESHOLD)
        logger.info("Default Country: %s", self.DEFAULT_COUNTRY or "○ Not configured")
        logger.info("=" * 60)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Raises pydantic ValidationError if the environment holds invalid values.
    """
    from canonguard.core.logging import configure_logging

    settings = Settings()
    configure_logging(settings.LOG_LEVEL)
    settings.log_startup_summary()
    return settings
