"""Configuration model for the suite runner."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

ReporterName = Literal["console", "tap", "json"]


class RunnerConfig(BaseModel):
    # Execution
    order: Literal["declaration", "reverse", "shuffle"] = "declaration"
    seed: Optional[int] = None
    concurrent: bool = False
    max_concurrency: Optional[int] = Field(default=None, ge=1)

    # Reporting
    reporters: list[ReporterName] = Field(default_factory=lambda: ["console"])
    report_output_dir: str = "./bough-reports"

    # Console reporter appearance
    passed_symbol: str = "✅"
    failed_symbol: str = "❌"
    pending_symbol: str = "❔"
    indent: str = "  "

    @field_validator("reporters")
    @classmethod
    def dedupe_reporters(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one reporter must be configured")
        return list(dict.fromkeys(v))

    @classmethod
    def load(cls, path: str | Path) -> "RunnerConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(), f, indent=2, ensure_ascii=False)
