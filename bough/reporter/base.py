"""Reporter interface and the generic reporters the executor relies on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from bough.models.results import TestResult
from bough.models.suite import SuitePath


class Reporter(ABC):
    """Sink the executor calls synchronously at each lifecycle point.

    Exceptions raised by a reporter are not caught; they abort the run.
    """

    @abstractmethod
    def begin(self, total_count: int) -> None:
        """Called once, before any suite runs."""

    @abstractmethod
    def begin_suite(self, name: str, path: SuitePath) -> None:
        pass

    @abstractmethod
    def end_suite(self, name: str, path: SuitePath) -> None:
        pass

    @abstractmethod
    def info(self, message: str, path: SuitePath) -> None:
        pass

    @abstractmethod
    def debug(self, message: str, path: SuitePath) -> None:
        pass

    @abstractmethod
    def report_result(self, result: TestResult, path: SuitePath) -> None:
        """Called exactly once per executed test case."""

    @abstractmethod
    def end(self, results: Sequence[TestResult]) -> None:
        """Called once with every result, after the whole tree completes."""


class NullReporter(Reporter):
    def begin(self, total_count: int) -> None:
        pass

    def begin_suite(self, name: str, path: SuitePath) -> None:
        pass

    def end_suite(self, name: str, path: SuitePath) -> None:
        pass

    def info(self, message: str, path: SuitePath) -> None:
        pass

    def debug(self, message: str, path: SuitePath) -> None:
        pass

    def report_result(self, result: TestResult, path: SuitePath) -> None:
        pass

    def end(self, results: Sequence[TestResult]) -> None:
        pass


class RecordingReporter(Reporter):
    """Records every call so it can be inspected or replayed into another reporter."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def begin(self, total_count: int) -> None:
        self.calls.append(("begin", (total_count,)))

    def begin_suite(self, name: str, path: SuitePath) -> None:
        self.calls.append(("begin_suite", (name, path)))

    def end_suite(self, name: str, path: SuitePath) -> None:
        self.calls.append(("end_suite", (name, path)))

    def info(self, message: str, path: SuitePath) -> None:
        self.calls.append(("info", (message, path)))

    def debug(self, message: str, path: SuitePath) -> None:
        self.calls.append(("debug", (message, path)))

    def report_result(self, result: TestResult, path: SuitePath) -> None:
        self.calls.append(("report_result", (result, path)))

    def end(self, results: Sequence[TestResult]) -> None:
        self.calls.append(("end", (list(results),)))

    @property
    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]

    def replay(self, target: Reporter) -> None:
        for method, args in self.calls:
            getattr(target, method)(*args)

    def clear(self) -> None:
        self.calls.clear()


class MultiReporter(Reporter):
    """Fans every call out to several reporters, in the order given."""

    def __init__(self, reporters: Sequence[Reporter]):
        self.reporters = list(reporters)

    def begin(self, total_count: int) -> None:
        for reporter in self.reporters:
            reporter.begin(total_count)

    def begin_suite(self, name: str, path: SuitePath) -> None:
        for reporter in self.reporters:
            reporter.begin_suite(name, path)

    def end_suite(self, name: str, path: SuitePath) -> None:
        for reporter in self.reporters:
            reporter.end_suite(name, path)

    def info(self, message: str, path: SuitePath) -> None:
        for reporter in self.reporters:
            reporter.info(message, path)

    def debug(self, message: str, path: SuitePath) -> None:
        for reporter in self.reporters:
            reporter.debug(message, path)

    def report_result(self, result: TestResult, path: SuitePath) -> None:
        for reporter in self.reporters:
            reporter.report_result(result, path)

    def end(self, results: Sequence[TestResult]) -> None:
        for reporter in self.reporters:
            reporter.end(results)
