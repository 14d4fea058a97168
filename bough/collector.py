"""Collector: resolves paths and inherited hooks for every step of a suite tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from bough.models.suite import (
    Group,
    HookFunction,
    LogStatement,
    SuitePath,
    TestCase,
)


@dataclass(frozen=True, eq=False)
class CollectedStep:
    """A test case or log statement annotated with its path and resolved hooks.

    ``before_hooks`` run outermost group first; ``after_hooks`` run innermost
    group first. Steps compare by identity so ordering policies can be checked
    for permutations even when two steps carry equal payloads.
    """

    path: SuitePath
    before_hooks: tuple[HookFunction, ...]
    after_hooks: tuple[HookFunction, ...]
    payload: Union[TestCase, LogStatement]

    @property
    def is_test_case(self) -> bool:
        return isinstance(self.payload, TestCase)


@dataclass(frozen=True)
class CollectedGroup:
    """Nested collected form, isomorphic to the source Group tree."""

    name: str
    path: SuitePath
    steps: tuple[CollectedStep, ...]
    children: tuple["CollectedGroup", ...]

    @property
    def total_count(self) -> int:
        own = sum(1 for s in self.steps if s.is_test_case)
        return own + sum(child.total_count for child in self.children)

    def iter_steps(self) -> Iterator[CollectedStep]:
        """Pre-order: own steps first, then each child's steps."""
        yield from self.steps
        for child in self.children:
            yield from child.iter_steps()

    def iter_groups(self) -> Iterator[CollectedGroup]:
        yield self
        for child in self.children:
            yield from child.iter_groups()


def collect_groups(root: Group) -> CollectedGroup:
    """Collect the tree into CollectedGroups, resolving hooks at every level."""
    return _collect(root, SuitePath.root(root.name), (), ())


def collect_steps(root: Group) -> list[CollectedStep]:
    """Collect the tree into a flat pre-order list of CollectedSteps."""
    return list(collect_groups(root).iter_steps())


def _collect(
    group: Group,
    path: SuitePath,
    parent_before: tuple[HookFunction, ...],
    parent_after: tuple[HookFunction, ...],
) -> CollectedGroup:
    before = parent_before + group.before_hooks
    after = group.after_hooks + parent_after

    steps = tuple(
        CollectedStep(path=path, before_hooks=before, after_hooks=after, payload=step)
        for step in group.steps
    )
    children = tuple(
        _collect(child, path.child(child.name), before, after)
        for child in group.children
    )
    return CollectedGroup(name=group.name, path=path, steps=steps, children=children)
