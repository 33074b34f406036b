"""Localisation enforcement: results served for country X must belong to X.

The guard is advisory. It returns violations as values and never raises on
them; callers decide whether to drop, quarantine or review. Passing is the
default, failing requires positive evidence.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from canonguard.core.config import (
    CONTENT_SCORE_THRESHOLD,
    CONTENT_VIOLATION_CONFIDENCE,
    DEFAULT_PASS_CONFIDENCE,
    DOMAIN_INDICATOR_WEIGHT,
    DOMAIN_VIOLATION_CONFIDENCE,
    EXPLICIT_VIOLATION_CONFIDENCE,
    WHITELIST_CONFIDENCE,
    WORD_INDICATOR_WEIGHT,
)
from canonguard.core.logging import get_logger
from canonguard.domain.models import (
    CountryMatch,
    CountryQuery,
    LocalisationResult,
    LocalisationStats,
    LocalisationViolation,
    SearchResult,
)
from canonguard.domain.taxonomy import CountryTaxonomy

LOGGER = get_logger(__name__)
TAXONOMY = CountryTaxonomy()

MAX_RESULTS_PER_REQUEST = 100


def _combined_text(result: SearchResult) -> str:
    return " ".join(
        (
            result.url.lower(),
            (result.title or "").lower(),
            (result.snippet or "").lower(),
            (result.content or "").lower(),
        )
    )


def is_multi_country(text: str) -> bool:
    """True when any whitelist term occurs anywhere in ``text``, e.g. ``g20summit``."""
    return any(term in text for term in TAXONOMY.multi_country_whitelist)


def detect_country_from_domain(url: str) -> str | None:
    """First country, in table order, with any indicator inside the URL."""
    lowered = url.lower()
    for country, indicators in TAXONOMY.country_domains.items():
        if any(indicator in lowered for indicator in indicators):
            return country
    return None


def score_countries(text: str) -> dict[str, int]:
    """Indicator occurrence counts per country, domain-style indicators doubled."""
    scores: dict[str, int] = {}
    for country, indicators in TAXONOMY.country_domains.items():
        score = 0
        for indicator in indicators:
            weight = DOMAIN_INDICATOR_WEIGHT if indicator.startswith(".") else WORD_INDICATOR_WEIGHT
            score += text.count(indicator) * weight
        scores[country] = score
    return scores


def detect_country_from_content(text: str) -> str | None:
    scores = score_countries(text)
    if not scores:
        return None
    max_score = max(scores.values())
    if max_score < CONTENT_SCORE_THRESHOLD:
        return None
    return next(country for country, score in scores.items() if score == max_score)


def find_explicit_mismatch(text: str, expected_country: str) -> str | None:
    """First other country whose name or demonym appears in ``text``."""
    for country, names in TAXONOMY.country_names.items():
        if country == expected_country:
            continue
        if any(name in text for name in names):
            return country
    return None


def check_country_match(result: SearchResult, expected_country: str) -> CountryMatch:
    """Classify one result; the first decisive signal wins."""
    expected = expected_country.strip().lower()
    text = _combined_text(result)

    if is_multi_country(text):
        return CountryMatch(
            matches=True,
            detected_country="multi",
            confidence=WHITELIST_CONFIDENCE,
            reason="Multi-country event whitelisted",
        )

    domain_country = detect_country_from_domain(result.url)
    if domain_country and domain_country != expected:
        return CountryMatch(
            matches=False,
            detected_country=domain_country,
            confidence=DOMAIN_VIOLATION_CONFIDENCE,
            reason=f"Domain indicates {domain_country}, expected {expected}",
        )

    content_country = detect_country_from_content(text)
    if content_country and content_country != expected:
        return CountryMatch(
            matches=False,
            detected_country=content_country,
            confidence=CONTENT_VIOLATION_CONFIDENCE,
            reason=f"Content indicates {content_country}, expected {expected}",
        )

    mentioned_country = find_explicit_mismatch(text, expected)
    if mentioned_country:
        return CountryMatch(
            matches=False,
            detected_country=mentioned_country,
            confidence=EXPLICIT_VIOLATION_CONFIDENCE,
            reason=f"Explicit mention of {mentioned_country}, expected {expected}",
        )

    return CountryMatch(
        matches=True,
        detected_country=expected,
        confidence=DEFAULT_PASS_CONFIDENCE,
        reason="No country mismatch detected",
    )


def _as_search_result(result: SearchResult | Mapping[str, Any]) -> SearchResult:
    if isinstance(result, SearchResult):
        return result
    return SearchResult.model_validate(result)


def assert_country(
    results: Iterable[SearchResult | Mapping[str, Any]],
    expected_country: str,
    correlation_id: str | None = None,
) -> LocalisationResult:
    """Split results into country-matching URLs and structured violations.

    Emits one ERROR audit record when any violation is found.
    """
    expected = expected_country.strip().lower()
    checked = [_as_search_result(result) for result in results]
    violations: list[LocalisationViolation] = []
    filtered_urls: list[str] = []

    for result in checked:
        match = check_country_match(result, expected)
        if match.matches:
            filtered_urls.append(result.url)
            continue
        violations.append(
            LocalisationViolation(
                url=result.url,
                expected_country=expected,
                detected_country=match.detected_country or "unknown",
                confidence=match.confidence,
                reason=match.reason,
            )
        )

    stats = LocalisationStats(
        total=len(checked),
        passed=len(filtered_urls),
        failed=len(checked) - len(filtered_urls),
        violations=len(violations),
    )

    if violations:
        LOGGER.error(
            "localisation_violation",
            extra={
                "correlation_id": correlation_id,
                "expected_country": expected,
                "violations": [
                    {
                        "url": v.url,
                        "detected": v.detected_country,
                        "confidence": v.confidence,
                        "reason": v.reason,
                    }
                    for v in violations
                ],
                "stats": stats.model_dump(),
            },
        )

    return LocalisationResult(
        passed=not violations,
        violations=violations,
        filtered_urls=filtered_urls,
        stats=stats,
    )


def build_country_constrained_query(query: CountryQuery | str, country: str | None = None) -> str:
    """Append ``(site:.de OR ... OR "germany")`` hints for the search tier.

    Query construction only; ``assert_country`` is the enforcement point.
    """
    if isinstance(query, CountryQuery):
        base_query, code = query.query, query.country
    else:
        base_query, code = query.strip(), (country or "")

    site_clauses = " OR ".join(f"site:{domain}" for domain in TAXONOMY.domain_indicators(code))
    term_clauses = " OR ".join(f'"{term}"' for term in TAXONOMY.term_indicators(code))
    constraints = [clause for clause in (site_clauses, term_clauses) if clause]

    if constraints:
        return f"{base_query} ({' OR '.join(constraints)})"
    return base_query


def build_search_params(query: CountryQuery) -> dict[str, str]:
    """Search-engine parameters biased towards the requested country."""
    country = query.country.upper()
    return {
        "q": build_country_constrained_query(query),
        "gl": country,
        "cr": f"country{country}",
        "hl": query.language_pref[0],
        "num": str(min(query.page_limit * 10, MAX_RESULTS_PER_REQUEST)),
        "safe": "off",
    }
