"""Assertion helpers for test bodies. Each raises AssertionError on mismatch."""

from __future__ import annotations

from typing import Any, Callable, Type


def should_equal(expected: Any, actual: Any) -> None:
    if expected != actual:
        raise AssertionError(f"Expected {expected!r} but got {actual!r}")


def should_not_equal(unexpected: Any, actual: Any) -> None:
    if unexpected == actual:
        raise AssertionError(f"Expected not to be {unexpected!r} but got {actual!r}")


def should_be_true(condition: Any) -> None:
    if not condition:
        raise AssertionError("Expected condition to be true")


def should_be_false(condition: Any) -> None:
    if condition:
        raise AssertionError("Expected condition to be false")


def should_raise(expected: Type[BaseException], fn: Callable[[], Any]) -> BaseException:
    """Call ``fn`` and return the exception it raised, which must be an ``expected``."""
    try:
        fn()
    except expected as e:
        return e
    except Exception as e:
        raise AssertionError(
            f"Expected {expected.__name__} but {type(e).__name__} was raised: {e}"
        ) from e
    raise AssertionError(f"Expected {expected.__name__} but nothing was raised")
