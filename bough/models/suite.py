"""Suite tree data structures consumed by the collector and executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Iterator, Optional, Union

# Bodies and hooks may be plain functions or coroutine functions.
HookFunction = Callable[[], Union[Awaitable[Any], None]]


class LogLevel(str, Enum):
    INFO = "info"
    DEBUG = "debug"


@dataclass(frozen=True)
class LogStatement:
    level: LogLevel
    message: str


@dataclass(frozen=True)
class TestCase:
    """A named unit of verification. No body means the case is pending."""
    __test__ = False

    name: str
    body: Optional[HookFunction] = field(default=None, compare=False)

    @property
    def is_pending(self) -> bool:
        return self.body is None


class HookKind(str, Enum):
    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class Hook:
    kind: HookKind
    fn: HookFunction


Step = Union[TestCase, LogStatement]


@dataclass(frozen=True)
class Group:
    """A "describe" node: own steps, own hooks and child groups, in declaration order."""

    name: str
    steps: tuple[Step, ...] = ()
    hooks: tuple[Hook, ...] = ()
    children: tuple["Group", ...] = ()

    @property
    def total_count(self) -> int:
        own = sum(1 for s in self.steps if isinstance(s, TestCase))
        return own + sum(child.total_count for child in self.children)

    @property
    def before_hooks(self) -> tuple[HookFunction, ...]:
        return tuple(h.fn for h in self.hooks if h.kind is HookKind.BEFORE)

    @property
    def after_hooks(self) -> tuple[HookFunction, ...]:
        return tuple(h.fn for h in self.hooks if h.kind is HookKind.AFTER)

    def combine(self, other: Group) -> Group:
        """Append another group's contents to this one, keeping this group's name."""
        return Group(
            name=self.name,
            steps=self.steps + other.steps,
            hooks=self.hooks + other.hooks,
            children=self.children + other.children,
        )


@dataclass(frozen=True)
class SuitePath:
    """Root-to-node sequence of group names. Root groups have depth 1."""

    parts: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.parts:
            raise ValueError("SuitePath must contain at least one group name")

    @classmethod
    def root(cls, name: str) -> SuitePath:
        return cls((name,))

    def child(self, name: str) -> SuitePath:
        return SuitePath(self.parts + (name,))

    @property
    def depth(self) -> int:
        return len(self.parts)

    @property
    def name(self) -> str:
        return self.parts[-1]

    def __len__(self) -> int:
        return len(self.parts)

    def __iter__(self) -> Iterator[str]:
        return iter(self.parts)

    def __str__(self) -> str:
        return " / ".join(self.parts)
