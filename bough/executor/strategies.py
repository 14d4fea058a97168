"""Ordering policies and sequencing strategies injected into the Executor."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional, Protocol, Sequence, TypeVar

from bough.collector import CollectedStep
from bough.errors import OrderingError

logger = logging.getLogger(__name__)

T = TypeVar("T")

StepAction = Callable[[], Awaitable[T]]


class OrderingPolicy(Protocol):
    """Reorders the flattened step list once, before execution."""

    def __call__(self, steps: list[CollectedStep]) -> list[CollectedStep]:
        ...


class SequencingStrategy(Protocol):
    """Runs a list of step actions and returns their results in input order."""

    concurrent: bool

    async def __call__(self, actions: Sequence[StepAction]) -> list:
        ...


def declaration_order(steps: list[CollectedStep]) -> list[CollectedStep]:
    return list(steps)


def reverse_order(steps: list[CollectedStep]) -> list[CollectedStep]:
    return list(reversed(steps))


def shuffled(seed: Optional[int] = None) -> OrderingPolicy:
    """Return a policy that shuffles steps with a dedicated ``random.Random``.

    With a seed, every call produces the same permutation for the same input.
    """

    def policy(steps: list[CollectedStep]) -> list[CollectedStep]:
        rng = random.Random(seed)
        result = list(steps)
        rng.shuffle(result)
        return result

    return policy


def apply_ordering(policy: OrderingPolicy, steps: list[CollectedStep]) -> list[CollectedStep]:
    """Apply ``policy`` and check that it neither dropped nor invented steps."""
    ordered = list(policy(list(steps)))
    if len(ordered) != len(steps) or {id(s) for s in ordered} != {id(s) for s in steps}:
        raise OrderingError(
            f"Ordering policy returned {len(ordered)} steps that are not a permutation "
            f"of the {len(steps)} collected steps"
        )
    return ordered


class SequentialStrategy:
    """Each action completes before the next one starts."""

    concurrent = False

    async def __call__(self, actions: Sequence[StepAction]) -> list:
        results = []
        for action in actions:
            results.append(await action())
        return results

    def __repr__(self) -> str:
        return "SequentialStrategy()"


class ConcurrentStrategy:
    """Launches every action together and waits for all of them (fan-out/fan-in).

    ``max_concurrency`` bounds how many actions are in flight at once.
    """

    concurrent = True

    def __init__(self, max_concurrency: Optional[int] = None):
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.max_concurrency = max_concurrency

    async def __call__(self, actions: Sequence[StepAction]) -> list:
        if not actions:
            return []
        if self.max_concurrency is None:
            return list(await asyncio.gather(*(action() for action in actions)))

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(action: StepAction):
            async with semaphore:
                return await action()

        return list(await asyncio.gather(*(_bounded(action) for action in actions)))

    def __repr__(self) -> str:
        return f"ConcurrentStrategy(max_concurrency={self.max_concurrency})"


def build_ordering(name: str, seed: Optional[int] = None) -> OrderingPolicy:
    """Resolve a config ordering name into a policy."""
    if name == "declaration":
        return declaration_order
    if name == "reverse":
        return reverse_order
    if name == "shuffle":
        logger.debug("Shuffling steps with seed %s", seed)
        return shuffled(seed)
    raise ValueError(f"Unknown ordering policy: {name}")


def build_sequencing(concurrent: bool, max_concurrency: Optional[int] = None) -> SequencingStrategy:
    if concurrent:
        return ConcurrentStrategy(max_concurrency)
    return SequentialStrategy()
