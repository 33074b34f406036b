"""Near-duplicate detection for events and exact-key merging for speakers.

Event clustering is greedy and seed-anchored: each unassigned event, in input
order, seeds a cluster and every later unassigned event is compared to that
seed only. Worst case is O(n^2) comparisons, fine for the few hundred
candidates a single search pass produces.
"""
from __future__ import annotations

from datetime import datetime
from urllib.parse import urlsplit

from rapidfuzz.distance import Levenshtein

from canonguard.core.config import (
    CONFIDENCE_POINTS,
    DATE_SIMILARITY_STEPS,
    DATE_WEIGHT,
    HTTPS_POINTS,
    LEVENSHTEIN_THRESHOLD,
    MISSING_DATE_SIMILARITY,
    NEWER_DATE_POINTS,
    OFFICIAL_DOMAIN_POINTS,
    OFFICIAL_DOMAIN_SUFFIXES,
    TITLE_WEIGHT,
    VENUE_WEIGHT,
)
from canonguard.domain.models import (
    DeduplicationResult,
    DeduplicationStats,
    DuplicateGroup,
    EventRecord,
    SpeakerRecord,
)
from canonguard.services.keys_svc import generate_event_key, generate_speaker_key
from canonguard.utils import parse_event_datetime

SECONDS_PER_DAY = 86_400


def levenshtein_similarity(first: str, second: str) -> float:
    """``1 - distance / max_len``; empty strings never match anything."""
    if not first or not second:
        return 0.0
    if first == second:
        return 1.0
    distance = Levenshtein.distance(first, second)
    return 1.0 - distance / max(len(first), len(second))


def date_similarity(first: datetime | str | None, second: datetime | str | None) -> float:
    """Step score on the absolute day gap; neutral when either side is unknown."""
    first_dt = parse_event_datetime(first)
    second_dt = parse_event_datetime(second)
    if first_dt is None or second_dt is None:
        return MISSING_DATE_SIMILARITY

    diff_days = abs((first_dt - second_dt).total_seconds()) / SECONDS_PER_DAY
    for max_days, similarity in DATE_SIMILARITY_STEPS:
        if diff_days <= max_days:
            return similarity
    return 0.0


def _venue_text(event: EventRecord) -> str:
    return event.venue or event.location or ""


def event_similarity(first: EventRecord, second: EventRecord) -> float:
    """Weighted title/venue/date similarity on the raw fields."""
    title_sim = levenshtein_similarity(first.title or "", second.title or "")
    venue_sim = levenshtein_similarity(_venue_text(first), _venue_text(second))
    date_sim = date_similarity(first.starts_at, second.starts_at)
    return title_sim * TITLE_WEIGHT + venue_sim * VENUE_WEIGHT + date_sim * DATE_WEIGHT


def _is_official(url: str) -> bool:
    try:
        host = urlsplit(url).hostname or ""
    except ValueError:
        return False
    return host.endswith(OFFICIAL_DOMAIN_SUFFIXES)


def _challenger_score(challenger: EventRecord, best: EventRecord) -> int:
    score = 0

    if challenger.source_url.startswith("https://"):
        score += HTTPS_POINTS
    if best.source_url.startswith("https://"):
        score -= HTTPS_POINTS

    challenger_official = _is_official(challenger.source_url)
    best_official = _is_official(best.source_url)
    if challenger_official and not best_official:
        score += OFFICIAL_DOMAIN_POINTS
    if best_official and not challenger_official:
        score -= OFFICIAL_DOMAIN_POINTS

    challenger_start = parse_event_datetime(challenger.starts_at)
    best_start = parse_event_datetime(best.starts_at)
    if challenger_start is not None and best_start is not None:
        if challenger_start > best_start:
            score += NEWER_DATE_POINTS
        if challenger_start < best_start:
            score -= NEWER_DATE_POINTS

    challenger_confidence = challenger.confidence or 0.0
    best_confidence = best.confidence or 0.0
    if challenger_confidence > best_confidence:
        score += CONFIDENCE_POINTS
    if challenger_confidence < best_confidence:
        score -= CONFIDENCE_POINTS

    return score


def _best_event_index(events: list[EventRecord]) -> int:
    best = 0
    for position in range(1, len(events)):
        if _challenger_score(events[position], events[best]) > 0:
            best = position
    return best


def select_best_canonical_event(events: list[EventRecord]) -> EventRecord:
    """Pick the representative of a duplicate group.

    Prefers HTTPS, then .org/.edu/.gov hosts, later start dates and higher
    confidence. The incumbent keeps its place on a tie, so the first-seen
    record wins when nothing separates them.
    """
    if not events:
        raise ValueError("Cannot select a canonical event from an empty group")
    return events[_best_event_index(events)]


def _stats(total: int, canonical: int) -> DeduplicationStats:
    duplicates = total - canonical
    return DeduplicationStats(
        total=total,
        canonical=canonical,
        duplicates=duplicates,
        deduplication_rate=duplicates / total if total else 0.0,
    )


def detect_near_duplicate_events(
    events: list[EventRecord],
    *,
    threshold: float = LEVENSHTEIN_THRESHOLD,
) -> DeduplicationResult[EventRecord]:
    """Collapse near-identical events into one canonical record per cluster."""
    canonical: list[EventRecord] = []
    groups: list[DuplicateGroup[EventRecord]] = []
    processed: set[int] = set()

    for i, seed in enumerate(events):
        if i in processed:
            continue
        processed.add(i)
        cluster = [seed]
        # Reported for the whole group, as computed by the final comparison.
        last_score = 0.0

        for j in range(i + 1, len(events)):
            if j in processed:
                continue
            last_score = event_similarity(seed, events[j])
            if last_score >= threshold:
                cluster.append(events[j])
                processed.add(j)

        if len(cluster) == 1:
            canonical.append(seed)
            continue

        best_position = _best_event_index(cluster)
        best = cluster[best_position]
        canonical.append(best)
        groups.append(
            DuplicateGroup[EventRecord](
                canonical=best,
                duplicates=[event for position, event in enumerate(cluster) if position != best_position],
                reason=f"Near-duplicate detected (similarity: {last_score:.2f})",
                confidence=last_score,
            )
        )

    return DeduplicationResult[EventRecord](
        canonical=canonical,
        duplicates=groups,
        stats=_stats(len(events), len(canonical)),
    )


def group_by_event_key(events: list[EventRecord]) -> dict[str, list[EventRecord]]:
    """Bucket events by canonical key, preserving first-seen order."""
    buckets: dict[str, list[EventRecord]] = {}
    for event in events:
        buckets.setdefault(generate_event_key(event).key, []).append(event)
    return buckets


def deduplicate_speakers(speakers: list[SpeakerRecord]) -> DeduplicationResult[SpeakerRecord]:
    """Merge speakers sharing a name|org key; higher confidence wins, else first seen."""
    buckets: dict[str, list[SpeakerRecord]] = {}
    for speaker in speakers:
        buckets.setdefault(generate_speaker_key(speaker).key, []).append(speaker)

    canonical: list[SpeakerRecord] = []
    groups: list[DuplicateGroup[SpeakerRecord]] = []
    for key, members in buckets.items():
        best_position = 0
        for position in range(1, len(members)):
            if (members[position].confidence or 0.0) > (members[best_position].confidence or 0.0):
                best_position = position
        best = members[best_position]
        canonical.append(best)
        if len(members) > 1:
            groups.append(
                DuplicateGroup[SpeakerRecord](
                    canonical=best,
                    duplicates=[speaker for position, speaker in enumerate(members) if position != best_position],
                    reason=f"Exact speaker key match ({key})",
                    confidence=generate_speaker_key(best).confidence,
                )
            )

    return DeduplicationResult[SpeakerRecord](
        canonical=canonical,
        duplicates=groups,
        stats=_stats(len(speakers), len(canonical)),
    )
