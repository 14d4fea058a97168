"""Pytest configuration and shared fixtures."""

import pytest

from bough.assertions import should_equal
from bough.builder import Debug, Info, after_each, before_each, describe, it, pending
from bough.capture import debug, info
from bough.models.suite import Group
from bough.reporter.base import RecordingReporter


# ============================================================================
# Reporter Fixtures
# ============================================================================


@pytest.fixture
def recorder() -> RecordingReporter:
    """A reporter that records every lifecycle call."""
    return RecordingReporter()


# ============================================================================
# Suite Fixtures
# ============================================================================


@pytest.fixture
def trace() -> list[str]:
    """Shared list hooks and bodies append to, to observe execution order."""
    return []


def _fail(message: str):
    raise RuntimeError(message)


@pytest.fixture
def sample_suite() -> Group:
    """A suite mixing passing, failing, pending, nested and logging steps."""
    return describe(
        "A larger test suite",
        Info("Top level info message"),
        before_each(lambda: debug("Before each test")),
        after_each(lambda: debug("After each test")),
        it("should pass", lambda: info("This test passes")),
        it("should fail", lambda: (info("This test fails"), _fail("Intentional failure"))),
        pending("This is a pending test"),
        describe(
            "Nested suite",
            Debug("Use before_each and after_each for setup and teardown"),
            it("should also pass", lambda: info("Nested test passes")),
        ),
        describe(
            "Arithmetic",
            describe(
                "Addition",
                it("should add two numbers correctly", lambda: should_equal(4, 2 + 2)),
                it("should handle negative numbers", lambda: should_equal(-2, -1 + -1)),
            ),
            describe(
                "Faulty Addition",
                it("should fail when adding incorrect numbers", lambda: should_equal(5, 2 + 2)),
            ),
        ),
    )
