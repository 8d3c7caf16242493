"""Configuration model and YAML loader.

Example ``.blockrun.yaml``::

    show_affordance: true
    reuse_executor: true
    executor_mode: file
    timeout: 120
    runners:
      python:
        command: python3.12 "{file}"
        ext: .py

Lookup order in load_config(): explicit path, $BLOCKRUN_CONFIG,
./.blockrun.yaml, built-in defaults.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from blockrun.core.exceptions import ConfigError, ConfigValidationError
from blockrun.runners.registry import RunnerDefinition, build_registry

logger = logging.getLogger(__name__)

# Maximum config file size (1MB)
MAX_CONFIG_SIZE = 1024 * 1024

CONFIG_ENV_VAR = "BLOCKRUN_CONFIG"
DEFAULT_CONFIG_NAME = ".blockrun.yaml"


class BlockRunConfig(BaseModel):
    """Root configuration.

    Attributes:
        show_affordance: When False, block listings are suppressed.
            Detection itself is unaffected.
        reuse_executor: Share one executor (and its shell session) across runs.
        executor_mode: "file" writes the block to a temp file and runs the
            runner's command; "shell" sends it to a persistent bash session.
        timeout: Seconds before a file-mode run is aborted (None = no limit).
        runners: Per-language overrides. Each entry replaces the built-in
            runner for that language id, or adds a new language.

    Example:
        >>> config = BlockRunConfig()
        >>> config.show_affordance
        True
        >>> "python" in config.registry()
        True

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    show_affordance: bool = Field(
        default=True,
        description="List runnable blocks (False hides them without changing detection)",
    )
    reuse_executor: bool = Field(
        default=True,
        description="Reuse one executor across runs",
    )
    executor_mode: Literal["file", "shell"] = Field(
        default="file",
        description="file: temp file + command template; shell: persistent bash session",
    )
    timeout: int | None = Field(
        default=None,
        ge=1,
        description="Timeout for file-mode runs in seconds (None = no limit)",
    )
    runners: dict[str, RunnerDefinition] = Field(
        default_factory=dict,
        description="Runner overrides keyed by language id",
    )

    @field_validator("runners", mode="after")
    @classmethod
    def normalize_runner_keys(
        cls, v: dict[str, RunnerDefinition]
    ) -> dict[str, RunnerDefinition]:
        """Lower-case language ids and reject empty ones."""
        normalized: dict[str, RunnerDefinition] = {}
        for key, runner in v.items():
            language_id = key.strip().lower()
            if not language_id:
                raise ValueError("Runner language id cannot be empty")
            normalized[language_id] = runner
        return normalized

    def registry(self) -> Mapping[str, RunnerDefinition]:
        """Return the built-in runners overlaid with this config's overrides."""
        return build_registry(self.runners)


def _resolve_config_path(path: Path | None) -> Path | None:
    """Pick the config file to load, or None for defaults."""
    if path is not None:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        return path

    env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_path:
        candidate = Path(env_path).expanduser()
        if not candidate.exists():
            raise ConfigError(f"Config file from ${CONFIG_ENV_VAR} not found: {candidate}")
        return candidate

    candidate = Path.cwd() / DEFAULT_CONFIG_NAME
    if candidate.is_file():
        return candidate
    return None


def load_config(path: Path | None = None) -> BlockRunConfig:
    """Load and validate configuration.

    Args:
        path: Explicit config file. When None, $BLOCKRUN_CONFIG and then
            ./.blockrun.yaml are tried before falling back to defaults.

    Returns:
        Validated BlockRunConfig.

    Raises:
        ConfigError: On missing file, read or YAML errors.
        ConfigValidationError: When the YAML does not match the schema.

    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        logger.debug("No config file found, using defaults")
        return BlockRunConfig()

    if not config_path.is_file():
        raise ConfigError(f"Config path is not a file: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            content = f.read(MAX_CONFIG_SIZE + 1)
    except OSError as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e

    if len(content) > MAX_CONFIG_SIZE:
        raise ConfigError(f"Config {config_path} exceeds 1MB limit")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    # Empty file -> defaults
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config must be a YAML mapping, got {type(data).__name__}"
        )

    try:
        config = BlockRunConfig.model_validate(data)
    except ValidationError as e:
        errors = [
            {"loc": err["loc"], "msg": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        raise ConfigValidationError(
            f"Invalid config {config_path}: {e.error_count()} error(s)", errors
        ) from e

    logger.debug(
        "Loaded config from %s (%d runner override(s))", config_path, len(config.runners)
    )
    return config
