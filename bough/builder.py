"""Declarative authoring helpers that assemble Group trees.

Example::

    from bough.builder import Info, after_each, before_each, describe, for_each, it, pending
    from bough.capture import info

    suite = describe(
        "Arithmetic",
        Info("top level message"),
        before_each(lambda: info("setting up")),
        it("adds", lambda: should_equal(4, 2 + 2)),
        pending("divides by zero"),
        describe(
            "Parameterized",
            for_each([1, 2, 3], lambda n: it(f"handles {n}", lambda: should_be_true(n > 0))),
        ),
    )
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, TypeVar

from bough.errors import SuiteDefinitionError
from bough.models.suite import (
    Group,
    Hook,
    HookFunction,
    HookKind,
    LogLevel,
    LogStatement,
    Step,
    TestCase,
)

T = TypeVar("T")


def describe(name: str, *entries: Any) -> Group:
    """Build a Group from test cases, log statements, hooks and child groups.

    Entries keep their declaration order within each kind. Lists, tuples and
    generators are flattened, so ``for_each`` results can be embedded directly.
    """
    steps: list[Step] = []
    hooks: list[Hook] = []
    children: list[Group] = []
    for entry in _flatten(entries):
        if isinstance(entry, (TestCase, LogStatement)):
            steps.append(entry)
        elif isinstance(entry, Hook):
            hooks.append(entry)
        elif isinstance(entry, Group):
            children.append(entry)
        elif entry is not None:
            raise SuiteDefinitionError(_unsupported(name, entry))
    return Group(name=name, steps=tuple(steps), hooks=tuple(hooks), children=tuple(children))


def it(name: str, body: Optional[HookFunction] = None):
    """Declare an active test case.

    Without a body this returns a decorator, so both ``it("x", fn)`` and::

        @it("x")
        async def x(): ...

    are accepted. The decorated name is bound to the resulting TestCase.
    """
    if body is not None:
        return TestCase(name=name, body=body)

    def decorator(fn: HookFunction) -> TestCase:
        return TestCase(name=name, body=fn)

    return decorator


def pending(name: str) -> TestCase:
    return TestCase(name=name, body=None)


def before_each(fn: HookFunction) -> Hook:
    return Hook(kind=HookKind.BEFORE, fn=fn)


def after_each(fn: HookFunction) -> Hook:
    return Hook(kind=HookKind.AFTER, fn=fn)


def Info(message: str) -> LogStatement:  # noqa: N802
    return LogStatement(level=LogLevel.INFO, message=message)


def Debug(message: str) -> LogStatement:  # noqa: N802
    return LogStatement(level=LogLevel.DEBUG, message=message)


def for_each(items: Iterable[T], factory: Callable[[T], Any]) -> list[Any]:
    """Call ``factory`` once per item and concatenate what it produces."""
    produced: list[Any] = []
    for item in items:
        produced.extend(_flatten([factory(item)]))
    return produced


def _flatten(entries: Iterable[Any]) -> Iterable[Any]:
    for entry in entries:
        if isinstance(entry, (list, tuple)) or _is_generator(entry):
            yield from _flatten(entry)
        else:
            yield entry


def _is_generator(value: Any) -> bool:
    return hasattr(value, "__next__") and hasattr(value, "__iter__")


def _unsupported(name: str, entry: Any) -> str:
    message = f"describe({name!r}) got an unsupported entry of type {type(entry).__name__}"
    if callable(entry):
        message += "; a test without a body is declared with pending(name), not it(name)"
    return message
