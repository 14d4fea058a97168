"""Tests for configuration models."""

import json

import pytest
from pydantic import ValidationError

from bough.models.config import RunnerConfig


class TestRunnerConfig:
    """Tests for RunnerConfig model."""

    def test_default_values(self):
        config = RunnerConfig()
        assert config.order == "declaration"
        assert config.seed is None
        assert config.concurrent is False
        assert config.max_concurrency is None
        assert config.reporters == ["console"]
        assert config.indent == "  "

    def test_invalid_order(self):
        with pytest.raises(ValidationError):
            RunnerConfig(order="alphabetical")

    def test_invalid_reporter(self):
        with pytest.raises(ValidationError):
            RunnerConfig(reporters=["junit"])

    def test_reporters_required(self):
        with pytest.raises(ValidationError, match="At least one reporter"):
            RunnerConfig(reporters=[])

    def test_reporters_deduplicated(self):
        assert RunnerConfig(reporters=["tap", "json", "tap"]).reporters == ["tap", "json"]

    def test_max_concurrency_must_be_positive(self):
        with pytest.raises(ValidationError):
            RunnerConfig(max_concurrency=0)


class TestRunnerConfigPersistence:
    """Tests for load() and save()."""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "bough.json"
        RunnerConfig(order="shuffle", seed=42, concurrent=True, reporters=["tap"]).save(path)

        loaded = RunnerConfig.load(path)
        assert loaded.order == "shuffle"
        assert loaded.seed == 42
        assert loaded.concurrent is True
        assert loaded.reporters == ["tap"]

    def test_saved_file_is_json(self, tmp_path):
        path = tmp_path / "bough.json"
        RunnerConfig().save(path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["passed_symbol"] == "✅"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            RunnerConfig.load(tmp_path / "missing.json")

    def test_load_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "bough.json"
        path.write_text(json.dumps({"concurrent": True}))
        config = RunnerConfig.load(path)
        assert config.concurrent is True
        assert config.order == "declaration"
