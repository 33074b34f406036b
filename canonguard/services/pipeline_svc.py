from __future__ import annotations

from canonguard.core.config import Settings
from canonguard.core.logging import get_logger
from canonguard.domain.models import EventRecord, PipelineResult, SearchResult
from canonguard.domain.taxonomy import CountryTaxonomy
from canonguard.services.dedup_svc import detect_near_duplicate_events
from canonguard.services.localisation_svc import assert_country
from canonguard.services.url_svc import canonicalize_url

LOGGER = get_logger(__name__)


class CandidatePipeline:
    """Deduplicate a candidate batch, then localise the survivors."""

    def __init__(self, settings: Settings, taxonomy: CountryTaxonomy | None = None) -> None:
        self.settings = settings
        self.taxonomy = taxonomy or CountryTaxonomy()

    @staticmethod
    def to_search_result(event: EventRecord) -> SearchResult:
        """Project an event onto the fields the localisation guard inspects."""
        place = " ".join(part for part in (event.venue, event.location, event.city, event.country) if part)
        return SearchResult(
            url=canonicalize_url(event.source_url),
            title=event.title,
            snippet=event.description,
            content=place or None,
        )

    def run(
        self,
        events: list[EventRecord],
        expected_country: str | None = None,
        correlation_id: str | None = None,
    ) -> PipelineResult:
        """Return canonical events whose canonical URL passed localisation.

        Falls back to ``DEFAULT_COUNTRY`` when no country is given; raises
        CountryCodeError when neither is a valid ISO-2 code.
        """
        country = self.taxonomy.normalise_code(
            expected_country if expected_country is not None else self.settings.DEFAULT_COUNTRY
        )

        deduplication = detect_near_duplicate_events(
            events, threshold=self.settings.DEDUP_SIMILARITY_THRESHOLD
        )
        candidates = [(event, self.to_search_result(event)) for event in deduplication.canonical]
        localisation = assert_country(
            [result for _, result in candidates], country, correlation_id=correlation_id
        )

        allowed = set(localisation.filtered_urls)
        accepted = [event for event, result in candidates if result.url in allowed]

        LOGGER.info(
            "Pipeline %s: %d in, %d canonical, %d accepted for %s",
            correlation_id or "-",
            deduplication.stats.total,
            deduplication.stats.canonical,
            len(accepted),
            country,
        )
        return PipelineResult(
            deduplication=deduplication,
            localisation=localisation,
            accepted=accepted,
        )
