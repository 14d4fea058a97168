"""Tests for result aggregation and run summaries."""

from bough.executor.aggregator import aggregate, failures, summarize
from bough.models.results import OutcomeStatus, RunReport, TestOutcome, TestResult
from bough.models.suite import LogLevel, LogStatement, SuitePath

PATH = SuitePath.root("root")


def _result(name, status="passed", message=None, logs=()):
    if status == "passed":
        outcome = TestOutcome.passed(PATH, name)
    elif status == "failed":
        outcome = TestOutcome.failed(PATH, name, AssertionError(message or "boom"))
    else:
        outcome = TestOutcome.pending(PATH, name)
    return TestResult(outcome=outcome, logs=tuple(logs), duration_seconds=0.25)


class TestAggregate:
    """Tests for aggregate()."""

    def test_own_results_then_children_in_order(self):
        own = [_result("own1"), _result("own2")]
        children = [[_result("c1a"), _result("c1b")], [], [_result("c3")]]
        assert [r.name for r in aggregate(own, children)] == ["own1", "own2", "c1a", "c1b", "c3"]

    def test_nothing_filtered(self):
        own = [_result("p"), _result("f", "failed"), _result("x", "pending")]
        merged = aggregate(own, [[_result("p")]])
        assert len(merged) == 4

    def test_failures(self):
        results = [_result("p"), _result("f", "failed"), _result("x", "pending")]
        assert [r.name for r in failures(results)] == ["f"]


class TestSummarize:
    """Tests for summarize()."""

    def test_counts(self):
        results = [_result("p"), _result("f", "failed"), _result("x", "pending"), _result("q")]
        report = summarize(results, suite_name="root", duration_seconds=1.234)
        assert isinstance(report, RunReport)
        assert report.suite_name == "root"
        assert (report.total_tests, report.passed, report.failed, report.pending) == (4, 2, 1, 1)
        assert report.duration_seconds == 1.23
        assert report.all_passed is False
        assert report.completed_at

    def test_failed_record_details(self):
        result = _result(
            "f", "failed", "Expected 5 but got 4",
            logs=[LogStatement(LogLevel.DEBUG, "setup")],
        )
        [record] = summarize([result]).results
        assert record.status is OutcomeStatus.FAILED
        assert record.failure_reason == "Expected 5 but got 4"
        assert record.failure_phase == "body"
        assert record.error_type == "AssertionError"
        assert record.path == ["root"]
        assert record.logs[0].message == "setup"

    def test_serialises_to_json(self):
        data = summarize([_result("p")]).model_dump(mode="json")
        assert data["results"][0]["status"] == "passed"
        assert data["results"][0]["error_type"] is None

    def test_empty_run_all_passed(self):
        assert summarize([]).all_passed is True
