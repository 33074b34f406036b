from canonguard.services.dedup_svc import (
    deduplicate_speakers,
    detect_near_duplicate_events,
    group_by_event_key,
)
from canonguard.services.evaluation_svc import LocalisationBenchmark
from canonguard.services.keys_svc import generate_event_key, generate_speaker_key
from canonguard.services.localisation_svc import (
    assert_country,
    build_country_constrained_query,
    build_search_params,
)
from canonguard.services.pipeline_svc import CandidatePipeline
from canonguard.services.url_svc import canonicalize_url

__all__ = [
    "CandidatePipeline",
    "LocalisationBenchmark",
    "assert_country",
    "build_country_constrained_query",
    "build_search_params",
    "canonicalize_url",
    "deduplicate_speakers",
    "detect_near_duplicate_events",
    "generate_event_key",
    "generate_speaker_key",
    "group_by_event_key",
]
