"""TAP version 14 reporter."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO

import yaml

from bough.models.results import OutcomeStatus, TestResult
from bough.models.suite import SuitePath

from .base import Reporter


class TapReporter(Reporter):
    """Writes a TAP 14 stream: plan line, one test point per case, SKIP for pending."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def _write(self, text: str) -> None:
        self.stream.write(text + "\n")

    def begin(self, total_count: int) -> None:
        self._write("TAP version 14")
        self._write(f"1..{total_count}")

    def begin_suite(self, name: str, path: SuitePath) -> None:
        pass

    def end_suite(self, name: str, path: SuitePath) -> None:
        pass

    def info(self, message: str, path: SuitePath) -> None:
        pass

    def debug(self, message: str, path: SuitePath) -> None:
        pass

    def report_result(self, result: TestResult, path: SuitePath) -> None:
        outcome = result.outcome
        if outcome.status is OutcomeStatus.PASSED:
            self._write(f"ok {outcome.name}")
        elif outcome.status is OutcomeStatus.FAILED:
            self._write(f"not ok {outcome.name}")
            self._write("  ---")
            for line in _diagnostics(outcome.message or "").splitlines():
                self._write(f"  {line}")
            self._write("  ...")
        else:
            self._write(f"ok {outcome.name} # SKIP")

    def end(self, results: Sequence[TestResult]) -> None:
        self.stream.flush()


def _diagnostics(message: str) -> str:
    """Render the YAML body of a failed test point."""
    return yaml.safe_dump(
        {"message": message, "severity": "fail"},
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
