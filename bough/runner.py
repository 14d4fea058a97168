"""Runner wiring — turns a RunnerConfig into reporters and an Executor and runs a suite."""

from __future__ import annotations

import asyncio
import importlib
import logging
from pathlib import Path

from rich.console import Console

from bough.errors import SuiteLoadError
from bough.executor.executor import Executor
from bough.executor.strategies import build_ordering, build_sequencing
from bough.models.config import RunnerConfig
from bough.models.results import TestResult
from bough.models.suite import Group
from bough.reporter.base import MultiReporter, Reporter
from bough.reporter.console import ConsoleReporter
from bough.reporter.json_report import JsonReporter
from bough.reporter.tap import TapReporter

logger = logging.getLogger(__name__)


def load_suite(target: str) -> Group:
    """Resolve ``package.module:attribute`` to a Group.

    The attribute may be a Group or a zero-argument callable returning one.
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise SuiteLoadError(f"Expected 'module:attribute', got {target!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise SuiteLoadError(f"Cannot import module {module_name!r}: {e}") from e

    obj = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise SuiteLoadError(f"{module_name!r} has no attribute {attr!r}") from e

    if callable(obj) and not isinstance(obj, Group):
        obj = obj()
    if not isinstance(obj, Group):
        raise SuiteLoadError(f"{target!r} resolved to {type(obj).__name__}, not a Group")
    logger.debug("Loaded suite %r from %s (%d tests)", obj.name, target, obj.total_count)
    return obj


def build_reporter(
    config: RunnerConfig,
    suite_name: str = "",
    console: Console | None = None,
) -> Reporter:
    """Create the configured reporters; several are combined into a MultiReporter."""
    reporters: list[Reporter] = []
    for name in config.reporters:
        if name == "console":
            reporters.append(ConsoleReporter(
                console=console,
                passed_symbol=config.passed_symbol,
                failed_symbol=config.failed_symbol,
                pending_symbol=config.pending_symbol,
                indent=config.indent,
            ))
        elif name == "tap":
            reporters.append(TapReporter())
        elif name == "json":
            filename = f"report_{_slug(suite_name) or 'suite'}.json"
            reporters.append(JsonReporter(Path(config.report_output_dir) / filename, suite_name))

    if len(reporters) == 1:
        return reporters[0]
    return MultiReporter(reporters)


def build_executor(config: RunnerConfig, reporter: Reporter) -> Executor:
    return Executor(
        reporter=reporter,
        ordering=build_ordering(config.order, config.seed),
        sequencing=build_sequencing(config.concurrent, config.max_concurrency),
    )


async def run_suite_async(
    root: Group,
    config: RunnerConfig | None = None,
    reporter: Reporter | None = None,
) -> list[TestResult]:
    config = config or RunnerConfig()
    reporter = reporter or build_reporter(config, root.name)
    return await build_executor(config, reporter).run(root)


def run_suite(
    root: Group,
    config: RunnerConfig | None = None,
    reporter: Reporter | None = None,
) -> list[TestResult]:
    """Synchronous entry point: run ``root`` to completion and return every result."""
    return asyncio.run(run_suite_async(root, config, reporter))


def _slug(name: str) -> str:
    return "".join(c if c.isalnum() else "_" for c in name.lower()).strip("_")
