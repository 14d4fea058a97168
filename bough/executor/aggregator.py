"""Result aggregation: merges per-group results and summarises a run."""

from __future__ import annotations

import time
from typing import Iterable, Sequence

from bough.models.results import ResultRecord, RunReport, TestResult


def aggregate(
    own_results: Sequence[TestResult],
    child_results: Iterable[Sequence[TestResult]],
) -> list[TestResult]:
    """Own results in execution order, then each child's results in declaration order.

    Nothing is filtered or deduplicated.
    """
    merged = list(own_results)
    for results in child_results:
        merged.extend(results)
    return merged


def summarize(
    results: Sequence[TestResult],
    suite_name: str = "",
    duration_seconds: float = 0.0,
    started_at: str = "",
    completed_at: str = "",
) -> RunReport:
    """Build a serialisable RunReport from a run's results."""
    return RunReport(
        suite_name=suite_name,
        started_at=started_at,
        completed_at=completed_at or time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        total_tests=len(results),
        passed=sum(1 for r in results if r.is_passed),
        failed=sum(1 for r in results if r.is_failed),
        pending=sum(1 for r in results if r.is_pending),
        duration_seconds=round(duration_seconds, 2),
        results=[ResultRecord.from_result(r) for r in results],
    )


def failures(results: Iterable[TestResult]) -> list[TestResult]:
    return [r for r in results if r.is_failed]
