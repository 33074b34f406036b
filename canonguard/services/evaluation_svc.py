from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from canonguard.domain.models import LocalisationViolation, SearchResult
from canonguard.services.localisation_svc import assert_country

FRANCE_VS_GERMANY_QUERIES: tuple[str, ...] = (
    "legal conference",
    "compliance summit",
    "regulatory workshop",
    "data protection event",
    "GDPR seminar",
    "privacy conference",
    "cybersecurity summit",
    "fintech event",
    "blockchain conference",
    "AI workshop",
    "digital transformation",
    "innovation summit",
    "startup event",
    "investment conference",
    "banking seminar",
    "insurance workshop",
    "real estate event",
    "construction conference",
    "energy summit",
    "sustainability event",
)


class QueryReport(BaseModel):
    query: str
    total_results: int
    expected_results: int
    forbidden_results: int
    violations: list[LocalisationViolation] = Field(default_factory=list)


class BenchmarkSummary(BaseModel):
    total_queries: int
    passed_queries: int
    total_results: int
    total_violations: int
    overall_precision: float
    forbidden_bleed: float


class BenchmarkReport(BaseModel):
    passed: bool
    results: list[QueryReport]
    summary: BenchmarkSummary


class LocalisationBenchmark:
    """Measure how much of one country's result set bleeds in from another.

    Precision is the share of results the guard lets through for the expected
    country; bleed is the share detected as the forbidden country.
    """

    def __init__(
        self,
        expected_country: str = "fr",
        forbidden_country: str = "de",
        *,
        min_precision: float = 0.99,
        max_bleed: float = 0.01,
    ) -> None:
        self.expected_country = expected_country.lower()
        self.forbidden_country = forbidden_country.lower()
        self.min_precision = min_precision
        self.max_bleed = max_bleed

    def evaluate(
        self,
        results_by_query: Mapping[str, Sequence[SearchResult | Mapping[str, Any]]],
        correlation_id: str | None = None,
    ) -> BenchmarkReport:
        reports: list[QueryReport] = []
        for query, results in results_by_query.items():
            outcome = assert_country(results, self.expected_country, correlation_id=correlation_id)
            forbidden = sum(
                1 for violation in outcome.violations if violation.detected_country == self.forbidden_country
            )
            reports.append(
                QueryReport(
                    query=query,
                    total_results=outcome.stats.total,
                    expected_results=outcome.stats.passed,
                    forbidden_results=forbidden,
                    violations=outcome.violations,
                )
            )

        total_results = sum(report.total_results for report in reports)
        expected_results = sum(report.expected_results for report in reports)
        forbidden_results = sum(report.forbidden_results for report in reports)
        precision = expected_results / total_results if total_results else 0.0
        bleed = forbidden_results / total_results if total_results else 0.0

        summary = BenchmarkSummary(
            total_queries=len(reports),
            passed_queries=sum(1 for report in reports if not report.violations),
            total_results=total_results,
            total_violations=sum(len(report.violations) for report in reports),
            overall_precision=precision,
            forbidden_bleed=bleed,
        )
        return BenchmarkReport(
            passed=precision >= self.min_precision and bleed <= self.max_bleed,
            results=reports,
            summary=summary,
        )
