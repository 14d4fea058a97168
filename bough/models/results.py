"""Test result data structures produced by the executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from bough.models.suite import LogLevel, LogStatement, SuitePath


class OutcomeStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"


@dataclass(frozen=True)
class TestOutcome:
    """Passed, Failed or Pending, tagged with the case's path and name.

    The raised exception is kept for programmatic inspection but does not take
    part in equality; ``message`` carries its text verbatim.
    """
    __test__ = False

    status: OutcomeStatus
    path: SuitePath
    name: str
    message: Optional[str] = None
    phase: Optional[str] = None  # before, body, after
    error: Optional[BaseException] = field(default=None, compare=False, repr=False)

    @classmethod
    def passed(cls, path: SuitePath, name: str) -> TestOutcome:
        return cls(OutcomeStatus.PASSED, path, name)

    @classmethod
    def failed(
        cls, path: SuitePath, name: str, error: BaseException, phase: str = "body",
    ) -> TestOutcome:
        return cls(OutcomeStatus.FAILED, path, name, message=str(error), phase=phase, error=error)

    @classmethod
    def pending(cls, path: SuitePath, name: str) -> TestOutcome:
        return cls(OutcomeStatus.PENDING, path, name)


@dataclass(frozen=True)
class TestResult:
    __test__ = False

    outcome: TestOutcome
    logs: tuple[LogStatement, ...] = ()
    duration_seconds: float = field(default=0.0, compare=False)

    @property
    def path(self) -> SuitePath:
        return self.outcome.path

    @property
    def name(self) -> str:
        return self.outcome.name

    @property
    def status(self) -> OutcomeStatus:
        return self.outcome.status

    @property
    def is_passed(self) -> bool:
        return self.outcome.status is OutcomeStatus.PASSED

    @property
    def is_failed(self) -> bool:
        return self.outcome.status is OutcomeStatus.FAILED

    @property
    def is_pending(self) -> bool:
        return self.outcome.status is OutcomeStatus.PENDING


class LogRecord(BaseModel):
    level: LogLevel
    message: str


class ResultRecord(BaseModel):
    """Serialisable view of a single TestResult."""
    path: list[str]
    name: str
    status: OutcomeStatus
    failure_reason: Optional[str] = None
    failure_phase: Optional[str] = None
    error_type: Optional[str] = None
    duration_seconds: float = 0.0
    logs: list[LogRecord] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: TestResult) -> ResultRecord:
        outcome = result.outcome
        return cls(
            path=list(outcome.path.parts),
            name=outcome.name,
            status=outcome.status,
            failure_reason=outcome.message,
            failure_phase=outcome.phase,
            error_type=type(outcome.error).__name__ if outcome.error is not None else None,
            duration_seconds=round(result.duration_seconds, 4),
            logs=[LogRecord(level=log.level, message=log.message) for log in result.logs],
        )


class RunReport(BaseModel):
    suite_name: str = ""
    started_at: str = ""
    completed_at: str = ""
    total_tests: int = 0
    passed: int = 0
    failed: int = 0
    pending: int = 0
    duration_seconds: float = 0.0
    results: list[ResultRecord] = Field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        return self.failed == 0
