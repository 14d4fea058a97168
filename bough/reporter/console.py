"""Console reporter — indented, coloured progress output via rich."""

from __future__ import annotations

import time
from typing import Sequence

from rich.console import Console
from rich.text import Text

from bough.executor.aggregator import failures
from bough.models.results import OutcomeStatus, TestResult
from bough.models.suite import SuitePath

from .base import Reporter


class ConsoleReporter(Reporter):
    """Prints each suite, log line and result indented by the suite depth."""

    def __init__(
        self,
        console: Console | None = None,
        passed_symbol: str = "✅",
        failed_symbol: str = "❌",
        pending_symbol: str = "❔",
        indent: str = "  ",
    ):
        self.console = console or Console(highlight=False)
        self.passed_symbol = passed_symbol
        self.failed_symbol = failed_symbol
        self.pending_symbol = pending_symbol
        self.indent_string = indent
        self._started = time.perf_counter()

    def _indent(self, path: SuitePath) -> str:
        return self.indent_string * (len(path) - 1)

    def _line(self, text: str, style: str) -> None:
        self.console.print(Text(text, style=style), highlight=False)

    def begin(self, total_count: int) -> None:
        self._started = time.perf_counter()

    def begin_suite(self, name: str, path: SuitePath) -> None:
        self._line(f"{self._indent(path)}{name}", "green")

    def end_suite(self, name: str, path: SuitePath) -> None:
        pass

    def info(self, message: str, path: SuitePath) -> None:
        self._line(f"{self._indent(path)}{message}", "white")

    def debug(self, message: str, path: SuitePath) -> None:
        self._line(f"{self._indent(path)}{message}", "bright_black")

    def report_result(self, result: TestResult, path: SuitePath) -> None:
        indent = self._indent(path)
        outcome = result.outcome
        if outcome.status is OutcomeStatus.PASSED:
            self._line(f"{indent}  {self.passed_symbol} passed: {outcome.name}", "green")
        elif outcome.status is OutcomeStatus.FAILED:
            self._line(
                f"{indent}  {self.failed_symbol} failed: {outcome.name} - {outcome.message}", "red"
            )
        else:
            self._line(f"{indent}  {self.pending_symbol} pending: {outcome.name}", "bright_black")

    def end(self, results: Sequence[TestResult]) -> None:
        failed = failures(results)
        if not failed:
            self.console.print("All tests passed!", highlight=False)
        else:
            self.console.print(f"There were {len(failed)} test failures:", highlight=False)
        for r in failed:
            self._line(f"- {r.path} / {r.name} - {r.outcome.message}", "red")

        passed = sum(1 for r in results if r.is_passed)
        pending = sum(1 for r in results if r.is_pending)
        self.console.print(
            f"Summary: {passed} passed, {len(failed)} failed, {pending} pending", highlight=False
        )
        self.console.print(
            f"Total time: {time.perf_counter() - self._started:.3f}s", highlight=False
        )
