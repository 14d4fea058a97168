"""Tests for runner wiring — suite loading, reporter construction, sync entry point."""

import json
import textwrap
import uuid

import pytest

from bough.builder import describe, it, pending
from bough.errors import SuiteLoadError
from bough.executor.strategies import ConcurrentStrategy, SequentialStrategy
from bough.models.config import RunnerConfig
from bough.reporter.base import MultiReporter, RecordingReporter
from bough.reporter.console import ConsoleReporter
from bough.reporter.json_report import JsonReporter
from bough.reporter.tap import TapReporter
from bough.runner import build_executor, build_reporter, load_suite, run_suite

SUITE_SOURCE = textwrap.dedent(
    """
    from bough.builder import describe, it

    suite = describe("Loaded", it("works", lambda: None))

    def make_suite():
        return describe("Made", it("works", lambda: None))

    not_a_suite = 42

    class Holder:
        suite = describe("Nested attr")
    """
)


@pytest.fixture
def suite_module(tmp_path, monkeypatch):
    """Write a uniquely named suite module and make it importable."""
    name = f"suite_mod_{uuid.uuid4().hex[:8]}"
    (tmp_path / f"{name}.py").write_text(SUITE_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return name


class TestLoadSuite:
    """Tests for load_suite()."""

    def test_loads_group_attribute(self, suite_module):
        assert load_suite(f"{suite_module}:suite").name == "Loaded"

    def test_calls_factory(self, suite_module):
        assert load_suite(f"{suite_module}:make_suite").name == "Made"

    def test_dotted_attribute(self, suite_module):
        assert load_suite(f"{suite_module}:Holder.suite").name == "Nested attr"

    @pytest.mark.parametrize("target", ["no_colon", ":suite", "module:"])
    def test_malformed_target(self, target):
        with pytest.raises(SuiteLoadError, match="Expected 'module:attribute'"):
            load_suite(target)

    def test_missing_module(self):
        with pytest.raises(SuiteLoadError, match="Cannot import module"):
            load_suite("definitely_not_a_module_xyz:suite")

    def test_missing_attribute(self, suite_module):
        with pytest.raises(SuiteLoadError, match="has no attribute"):
            load_suite(f"{suite_module}:missing")

    def test_non_group_attribute(self, suite_module):
        with pytest.raises(SuiteLoadError, match="not a Group"):
            load_suite(f"{suite_module}:not_a_suite")


class TestBuildReporter:
    """Tests for build_reporter()."""

    def test_single_console_reporter(self):
        reporter = build_reporter(RunnerConfig(passed_symbol="v"))
        assert isinstance(reporter, ConsoleReporter)
        assert reporter.passed_symbol == "v"

    def test_multiple_reporters(self, tmp_path):
        config = RunnerConfig(reporters=["tap", "json"], report_output_dir=str(tmp_path))
        reporter = build_reporter(config, suite_name="My Suite!")
        assert isinstance(reporter, MultiReporter)
        tap, json_reporter = reporter.reporters
        assert isinstance(tap, TapReporter)
        assert isinstance(json_reporter, JsonReporter)
        assert json_reporter.output_path == tmp_path / "report_my_suite.json"


class TestBuildExecutor:
    """Tests for build_executor()."""

    def test_sequential_by_default(self):
        executor = build_executor(RunnerConfig(), RecordingReporter())
        assert isinstance(executor.sequencing, SequentialStrategy)

    def test_concurrent(self):
        executor = build_executor(RunnerConfig(concurrent=True, max_concurrency=3), RecordingReporter())
        assert isinstance(executor.sequencing, ConcurrentStrategy)
        assert executor.sequencing.max_concurrency == 3


class TestRunSuite:
    """Tests for the synchronous run_suite() entry point."""

    def test_returns_all_results(self):
        recorder = RecordingReporter()
        root = describe("g", it("a", lambda: None), pending("b"))
        results = run_suite(root, reporter=recorder)
        assert [r.name for r in results] == ["a", "b"]
        assert recorder.methods[0] == "begin"
        assert recorder.methods[-1] == "end"

    def test_writes_json_report_from_config(self, tmp_path):
        config = RunnerConfig(reporters=["json"], report_output_dir=str(tmp_path))
        run_suite(describe("Json Suite", it("a", lambda: None)), config)
        data = json.loads((tmp_path / "report_json_suite.json").read_text())
        assert data["passed"] == 1
