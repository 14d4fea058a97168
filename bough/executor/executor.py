"""Test executor — runs a suite tree and streams progress to a reporter."""

from __future__ import annotations

import inspect
import logging
import time
from functools import partial
from typing import Optional, Sequence

from bough.capture import capture_logs
from bough.collector import CollectedGroup, CollectedStep, collect_groups
from bough.models.results import OutcomeStatus, TestOutcome, TestResult
from bough.models.suite import (
    Group,
    HookFunction,
    LogLevel,
    LogStatement,
    SuitePath,
    TestCase,
)
from bough.reporter.base import NullReporter, RecordingReporter, Reporter

from .aggregator import aggregate
from .strategies import (
    OrderingPolicy,
    SequencingStrategy,
    SequentialStrategy,
    apply_ordering,
    declaration_order,
)

logger = logging.getLogger(__name__)


class Executor:
    """Runs collected suites with an injected reporter, ordering policy and sequencing strategy.

    The ordering policy is applied once to the flattened step list; the
    resulting order decides how steps run inside each group. Groups are always
    visited in declaration order, and the sequencing strategy applies per
    sibling set: first a group's own steps, then its child groups. Under a
    concurrent strategy reporter calls are buffered and replayed in
    declaration order once the barrier is reached.
    """

    def __init__(
        self,
        reporter: Reporter | None = None,
        ordering: OrderingPolicy = declaration_order,
        sequencing: SequencingStrategy | None = None,
    ):
        self.reporter = reporter or NullReporter()
        self.ordering = ordering
        self.sequencing = sequencing or SequentialStrategy()

    async def run(self, root: Group) -> list[TestResult]:
        """Run every case in ``root`` and return all results, failures included."""
        start_time = time.time()
        total = root.total_count
        logger.info("Starting suite %r (%d tests, %r)", root.name, total, self.sequencing)
        self.reporter.begin(total)

        collected = collect_groups(root)
        ordered = apply_ordering(self.ordering, list(collected.iter_steps()))
        rank = {id(step): index for index, step in enumerate(ordered)}

        results = await self._run_group(collected, rank, self.reporter)

        self.reporter.end(results)
        logger.info(
            "Suite %r complete: %d passed, %d failed, %d pending (%.2fs)",
            root.name,
            sum(1 for r in results if r.is_passed),
            sum(1 for r in results if r.is_failed),
            sum(1 for r in results if r.is_pending),
            time.time() - start_time,
        )
        return results

    async def run_test_case(
        self,
        path: SuitePath,
        case: TestCase,
        before_hooks: Sequence[HookFunction] = (),
        after_hooks: Sequence[HookFunction] = (),
    ) -> TestResult:
        """Run one case between its hooks, capturing everything logged meanwhile.

        A before-hook failure fails this case only and skips its body. After
        hooks always run; the first one to fail stops the rest and fails the
        case unless the body had already failed. Pending cases stay pending
        whatever their hooks do.
        """
        test_start = time.time()
        outcome: Optional[TestOutcome] = None

        with capture_logs() as capture:
            try:
                for hook in before_hooks:
                    await _invoke(hook)
            except Exception as e:
                outcome = self._hook_failure(path, case, e, "before")

            if outcome is None:
                if case.is_pending:
                    outcome = TestOutcome.pending(path, case.name)
                else:
                    try:
                        await _invoke(case.body)
                        outcome = TestOutcome.passed(path, case.name)
                    except Exception as e:
                        logger.debug("Case %s / %s failed: %s", path, case.name, e)
                        outcome = TestOutcome.failed(path, case.name, e, phase="body")

            try:
                for hook in after_hooks:
                    await _invoke(hook)
            except Exception as e:
                if outcome.status is OutcomeStatus.PASSED:
                    outcome = self._hook_failure(path, case, e, "after")
                else:
                    logger.warning(
                        "After hook for %s / %s raised %s: %s (keeping %s outcome)",
                        path, case.name, type(e).__name__, e, outcome.status.value,
                    )

        return TestResult(
            outcome=outcome,
            logs=capture.messages,
            duration_seconds=time.time() - test_start,
        )

    def _hook_failure(
        self, path: SuitePath, case: TestCase, error: Exception, phase: str,
    ) -> TestOutcome:
        logger.warning("%s hook failed for %s / %s: %s", phase.capitalize(), path, case.name, error)
        if case.is_pending:
            return TestOutcome.pending(path, case.name)
        return TestOutcome.failed(path, case.name, error, phase=phase)

    async def _run_group(
        self, group: CollectedGroup, rank: dict[int, int], reporter: Reporter,
    ) -> list[TestResult]:
        reporter.begin_suite(group.name, group.path)

        steps = sorted(group.steps, key=lambda step: rank[id(step)])
        own_results = await self._run_steps(steps, reporter)
        child_results = await self._run_children(group.children, rank, reporter)

        reporter.end_suite(group.name, group.path)
        return aggregate(own_results, child_results)

    async def _run_steps(
        self, steps: list[CollectedStep], reporter: Reporter,
    ) -> list[TestResult]:
        if self.sequencing.concurrent:
            outcomes = await self.sequencing([partial(self._execute_step, s) for s in steps])
            for step, result in zip(steps, outcomes):
                self._report_step(step, result, reporter)
        else:
            async def _execute_and_report(step: CollectedStep) -> Optional[TestResult]:
                result = await self._execute_step(step)
                self._report_step(step, result, reporter)
                return result

            outcomes = await self.sequencing([partial(_execute_and_report, s) for s in steps])
        return [result for result in outcomes if result is not None]

    async def _run_children(
        self, children: Sequence[CollectedGroup], rank: dict[int, int], reporter: Reporter,
    ) -> list[list[TestResult]]:
        if not self.sequencing.concurrent:
            return await self.sequencing(
                [partial(self._run_group, child, rank, reporter) for child in children]
            )

        buffers = [RecordingReporter() for _ in children]
        results = await self.sequencing(
            [partial(self._run_group, child, rank, buffer) for child, buffer in zip(children, buffers)]
        )
        for buffer in buffers:
            buffer.replay(reporter)
        return results

    async def _execute_step(self, step: CollectedStep) -> Optional[TestResult]:
        if isinstance(step.payload, LogStatement):
            return None
        return await self.run_test_case(
            step.path, step.payload, step.before_hooks, step.after_hooks,
        )

    @staticmethod
    def _report_step(
        step: CollectedStep, result: Optional[TestResult], reporter: Reporter,
    ) -> None:
        if result is None:
            _report_log(step.payload, step.path, reporter)
            return
        for log in result.logs:
            _report_log(log, step.path, reporter)
        reporter.report_result(result, step.path)


def _report_log(log: LogStatement, path: SuitePath, reporter: Reporter) -> None:
    if log.level is LogLevel.INFO:
        reporter.info(log.message, path)
    else:
        reporter.debug(log.message, path)


async def _invoke(fn: HookFunction) -> None:
    """Call a hook or body; await the result when it is awaitable."""
    result = fn()
    if inspect.isawaitable(result):
        await result
