from __future__ import annotations

import pytest

from canonguard.domain.models import SpeakerRecord
from canonguard.services.dedup_svc import deduplicate_speakers


def test_exact_key_speakers_merge_and_higher_confidence_wins():
    first = SpeakerRecord(name="Dr. Jane Doe", org="Acme Inc.", source_url="https://a.fr/speakers")
    second = SpeakerRecord(name="Jane Doe", org="ACME", confidence=0.9, source_url="https://b.fr/lineup")
    other = SpeakerRecord(name="John Roe", org="Globex")

    result = deduplicate_speakers([first, second, other])

    assert result.canonical == [second, other]
    assert len(result.duplicates) == 1
    group = result.duplicates[0]
    assert group.canonical == second
    assert group.duplicates == [first]
    assert group.reason == "Exact speaker key match (jane doe|acme)"
    assert group.confidence == pytest.approx(1.0)
    assert result.stats.total == 3
    assert result.stats.duplicates == 1


def test_same_name_different_org_stays_separate():
    speakers = [
        SpeakerRecord(name="Jane Doe", org="Acme"),
        SpeakerRecord(name="Jane Doe", org="Globex"),
    ]

    result = deduplicate_speakers(speakers)

    assert result.canonical == speakers
    assert result.duplicates == []


def test_first_seen_wins_on_equal_confidence():
    first = SpeakerRecord(name="Prof. Alan Smith", confidence=0.8)
    second = SpeakerRecord(name="Alan Smith", confidence=0.8)

    result = deduplicate_speakers([first, second])

    assert result.canonical == [first]
    assert result.duplicates[0].confidence == pytest.approx(0.9)


def test_empty_speaker_batch():
    result = deduplicate_speakers([])

    assert result.canonical == []
    assert result.stats.deduplication_rate == 0.0
