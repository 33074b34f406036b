from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field, field_validator

from canonguard.domain.countries import ISO_COUNTRY_CODES, SEARCH_INTENTS, SEARCH_LANGUAGES


class SpeakerRef(BaseModel):
    """Speaker as listed on an event page."""

    name: str
    org: str | None = None
    title: str | None = None


class EventRecord(BaseModel):
    """Event candidate extracted from one source page."""

    source_url: str
    title: str | None = None
    description: str | None = None
    starts_at: datetime | str | None = None
    ends_at: datetime | str | None = None
    city: str | None = None
    country: str | None = None
    location: str | None = None
    venue: str | None = None
    organizer: str | None = None
    topics: list[str] = Field(default_factory=list)
    speakers: list[SpeakerRef] = Field(default_factory=list)
    confidence: float | None = None

    @field_validator("topics", "speakers", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class SpeakerRecord(BaseModel):
    """Speaker candidate extracted from one source page."""

    name: str
    org: str | None = None
    title: str | None = None
    source_url: str | None = None
    confidence: float | None = None


class CanonicalKey(BaseModel):
    """Deterministic identity hint for bucketing records."""

    type: Literal["event", "speaker"]
    key: str
    confidence: float = Field(ge=0.0, le=1.0)
    sources: list[str] = Field(default_factory=list)


RecordT = TypeVar("RecordT", EventRecord, SpeakerRecord)


class DuplicateGroup(BaseModel, Generic[RecordT]):
    """One cluster of near-duplicates and the representative chosen for it."""

    canonical: RecordT
    duplicates: list[RecordT]
    reason: str
    confidence: float


class DeduplicationStats(BaseModel):
    total: int
    canonical: int
    duplicates: int
    deduplication_rate: float


class DeduplicationResult(BaseModel, Generic[RecordT]):
    """Partition of a batch into canonical records and merged duplicates."""

    canonical: list[RecordT] = Field(default_factory=list)
    duplicates: list[DuplicateGroup[RecordT]] = Field(default_factory=list)
    stats: DeduplicationStats


class SearchResult(BaseModel):
    """Search hit or crawled page checked by the localisation guard."""

    url: str
    title: str | None = None
    snippet: str | None = None
    content: str | None = None


class CountryMatch(BaseModel):
    """Outcome of checking one result against the expected country."""

    matches: bool
    detected_country: str | None = None
    confidence: float
    reason: str


class LocalisationViolation(BaseModel):
    url: str
    expected_country: str
    detected_country: str
    confidence: float
    reason: str


class LocalisationStats(BaseModel):
    total: int
    passed: int
    failed: int
    violations: int


class LocalisationResult(BaseModel):
    """Audit report for one localisation check over a batch."""

    passed: bool
    violations: list[LocalisationViolation] = Field(default_factory=list)
    filtered_urls: list[str] = Field(default_factory=list)
    stats: LocalisationStats


class CountryQuery(BaseModel):
    """Search request whose country is fixed server-side."""

    query: str = Field(min_length=1, max_length=500)
    country: str
    intent: str = "event"
    language_pref: list[str] = Field(default_factory=lambda: ["en"], min_length=1, max_length=5)
    page_limit: int = Field(default=10, ge=1, le=100)

    @field_validator("query", mode="before")
    @classmethod
    def strip_query(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("country")
    @classmethod
    def validate_country(cls, v: str) -> str:
        code = v.strip().lower()
        if code not in ISO_COUNTRY_CODES:
            raise ValueError(f"Not an ISO-3166-1 alpha-2 country code: {v}")
        return code

    @field_validator("intent")
    @classmethod
    def validate_intent(cls, v: str) -> str:
        if v not in SEARCH_INTENTS:
            raise ValueError(f"intent must be one of {', '.join(SEARCH_INTENTS)}")
        return v

    @field_validator("language_pref")
    @classmethod
    def validate_languages(cls, v: list[str]) -> list[str]:
        unknown = [lang for lang in v if lang not in SEARCH_LANGUAGES]
        if unknown:
            raise ValueError(f"Unsupported languages: {', '.join(unknown)}")
        return v


class PipelineResult(BaseModel):
    """Dedup-then-localise outcome for one batch."""

    deduplication: DeduplicationResult[EventRecord]
    localisation: LocalisationResult
    accepted: list[EventRecord] = Field(default_factory=list)
