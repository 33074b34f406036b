"""Canonical keys for events and speakers.

Keys are pipe-delimited composites of normalised fields. They are a bucketing
hint, not an identity verdict: events still have to clear the similarity
threshold, while speakers sharing a key are the same person.
"""
from __future__ import annotations

import re
from datetime import datetime

from canonguard.domain.models import CanonicalKey, EventRecord, SpeakerRecord
from canonguard.utils import parse_event_datetime

UNKNOWN_DATE = "unknown"

_TITLE_NOISE_PATTERNS = (
    re.compile(r"\b(conference|summit|workshop|seminar|meeting|event|forum|symposium|exhibition|expo)\b"),
    re.compile(r"\b(2024|2025|2026|2027|2028|2029|2030)\b"),
    re.compile(r"\b(annual|yearly|monthly|weekly|daily)\b"),
    re.compile(r"\b(rd|th|st|nd)\b"),
)
_VENUE_NOISE = re.compile(r"\b(conference center|convention center|hotel|venue|location|place)\b")
_HONORIFICS = re.compile(r"\b(dr|prof|professor|mr|mrs|ms|sir|dame)\b\.?\s*")
_LEGAL_SUFFIXES = re.compile(r"\b(ltd|llc|inc|corp|corporation|company|co|gmbh|ag|sa|bv|nv)\b\.?\s*")
_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", _NON_WORD.sub(" ", text)).strip()


def normalize_event_title(title: str) -> str:
    text = title.lower()
    for pattern in _TITLE_NOISE_PATTERNS:
        text = pattern.sub("", text)
    return _collapse(text)


def normalize_venue(venue: str) -> str:
    return _collapse(_VENUE_NOISE.sub("", venue.lower()))


def normalize_date(value: datetime | str | None) -> str:
    """``YYYY-MM-DD`` in UTC, or ``unknown`` when absent or unparsable."""
    parsed = parse_event_datetime(value)
    if parsed is None:
        return UNKNOWN_DATE
    return parsed.date().isoformat()


def normalize_speaker_name(name: str) -> str:
    return _collapse(_HONORIFICS.sub("", name.lower()))


def normalize_organization(org: str) -> str:
    return _collapse(_LEGAL_SUFFIXES.sub("", org.lower()))


def event_key_confidence(event: EventRecord) -> float:
    confidence = 0.5
    if event.title:
        confidence += 0.2
    if event.venue or event.location:
        confidence += 0.2
    if event.starts_at:
        confidence += 0.1
    return round(min(confidence, 1.0), 2)


def speaker_key_confidence(speaker: SpeakerRecord) -> float:
    confidence = 0.6
    if speaker.name:
        confidence += 0.3
    if speaker.org:
        confidence += 0.1
    return round(min(confidence, 1.0), 2)


def generate_event_key(event: EventRecord) -> CanonicalKey:
    """Key layout: ``title|venue|YYYY-MM-DD``."""
    key = "|".join(
        (
            normalize_event_title(event.title or ""),
            normalize_venue(event.venue or event.location or ""),
            normalize_date(event.starts_at),
        )
    )
    return CanonicalKey(
        type="event",
        key=key,
        confidence=event_key_confidence(event),
        sources=[event.source_url],
    )


def generate_speaker_key(speaker: SpeakerRecord) -> CanonicalKey:
    """Key layout: ``name|org``."""
    key = f"{normalize_speaker_name(speaker.name)}|{normalize_organization(speaker.org or '')}"
    return CanonicalKey(
        type="speaker",
        key=key,
        confidence=speaker_key_confidence(speaker),
        sources=[speaker.source_url] if speaker.source_url else [],
    )
