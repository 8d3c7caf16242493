"""Shared fixtures for blockrun tests."""

from collections.abc import Mapping
from pathlib import Path

import pytest

from blockrun.runners.registry import BUILTIN_RUNNERS, RunnerDefinition


@pytest.fixture
def runners() -> Mapping[str, RunnerDefinition]:
    """Built-in runner registry."""
    return BUILTIN_RUNNERS


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a developer's $BLOCKRUN_CONFIG or ./.blockrun.yaml out of tests."""
    monkeypatch.delenv("BLOCKRUN_CONFIG", raising=False)
    monkeypatch.delenv("BLOCKRUN_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
