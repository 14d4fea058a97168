"""JSON report output."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Sequence

from bough.executor.aggregator import summarize
from bough.models.results import TestResult
from bough.models.suite import SuitePath

from .base import NullReporter

logger = logging.getLogger(__name__)


class JsonReporter(NullReporter):
    """Writes a machine-readable RunReport when the run ends."""

    def __init__(self, output_path: Path, suite_name: str = ""):
        self.output_path = Path(output_path)
        self.suite_name = suite_name
        self._started_at = ""
        self._start_time = 0.0

    def begin(self, total_count: int) -> None:
        self._started_at = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        self._start_time = time.time()

    def begin_suite(self, name: str, path: SuitePath) -> None:
        if not self.suite_name and len(path) == 1:
            self.suite_name = name

    def end(self, results: Sequence[TestResult]) -> None:
        report = summarize(
            results,
            suite_name=self.suite_name,
            duration_seconds=time.time() - self._start_time if self._start_time else 0.0,
            started_at=self._started_at,
        )
        generate_json_report(report.model_dump(mode="json"), self.output_path)
        logger.info("JSON report: %s", self.output_path)


def generate_json_report(report: dict, output_path: Path) -> None:
    """Write a report dictionary as indented JSON, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, default=str, ensure_ascii=False)
