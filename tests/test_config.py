"""Tests for configuration loading.

Tests cover:
- BlockRunConfig defaults and validation
- YAML loading via load_config()
- Lookup order: explicit path, $BLOCKRUN_CONFIG, ./.blockrun.yaml
- File/parsing error handling
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from blockrun.config import MAX_CONFIG_SIZE, BlockRunConfig, load_config
from blockrun.core.exceptions import ConfigError, ConfigValidationError
from blockrun.runners.registry import BUILTIN_RUNNERS

VALID_YAML = """\
show_affordance: false
reuse_executor: false
executor_mode: shell
timeout: 30
runners:
  Python:
    command: pypy3 "{file}"
    ext: .py
  haskell:
    command: runghc "{file}"
    ext: .hs
"""


class TestBlockRunConfig:
    """Tests for the config model."""

    def test_defaults(self) -> None:
        config = BlockRunConfig()
        assert config.show_affordance is True
        assert config.reuse_executor is True
        assert config.executor_mode == "file"
        assert config.timeout is None
        assert config.runners == {}

    def test_default_registry_is_builtins(self) -> None:
        assert dict(BlockRunConfig().registry()) == dict(BUILTIN_RUNNERS)

    def test_unknown_mode_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BlockRunConfig(executor_mode="tmux")

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BlockRunConfig.model_validate({"show_codelens": True})

    def test_zero_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BlockRunConfig(timeout=0)

    def test_runner_keys_lowercased(self) -> None:
        config = BlockRunConfig.model_validate(
            {"runners": {"PY3": {"command": 'python3 "{file}"', "ext": ".py"}}}
        )
        assert list(config.runners) == ["py3"]

    def test_blank_runner_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BlockRunConfig.model_validate(
                {"runners": {"  ": {"command": 'x "{file}"', "ext": ".x"}}}
            )

    def test_frozen(self) -> None:
        config = BlockRunConfig()
        with pytest.raises(ValidationError):
            config.timeout = 5  # type: ignore[misc]


class TestLoadConfig:
    """Tests for load_config()."""

    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "blockrun.yaml"
        path.write_text(VALID_YAML)
        config = load_config(path)
        assert config.show_affordance is False
        assert config.reuse_executor is False
        assert config.executor_mode == "shell"
        assert config.timeout == 30
        registry = config.registry()
        assert registry["python"].command == 'pypy3 "{file}"'
        assert registry["haskell"].ext == ".hs"
        assert registry["ruby"] == BUILTIN_RUNNERS["ruby"]

    def test_no_file_uses_defaults(self) -> None:
        assert load_config() == BlockRunConfig()

    def test_missing_explicit_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_directory_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not a file"):
            load_config(tmp_path)

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == BlockRunConfig()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("runners: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_too_large(self, tmp_path: Path) -> None:
        path = tmp_path / "big.yaml"
        path.write_text("#" * (MAX_CONFIG_SIZE + 10))
        with pytest.raises(ConfigError, match="1MB"):
            load_config(path)

    def test_validation_error_details(self, tmp_path: Path) -> None:
        path = tmp_path / "invalid.yaml"
        path.write_text('runners:\n  python:\n    command: python3 script.py\n    ext: .py\n')
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(path)
        locs = [err["loc"] for err in exc_info.value.errors]
        assert ("runners", "python", "command") in locs

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "env.yaml"
        path.write_text("timeout: 7\n")
        monkeypatch.setenv("BLOCKRUN_CONFIG", str(path))
        assert load_config().timeout == 7

    def test_env_var_missing_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("BLOCKRUN_CONFIG", str(tmp_path / "nope.yaml"))
        with pytest.raises(ConfigError, match="BLOCKRUN_CONFIG"):
            load_config()

    def test_cwd_file(self, tmp_path: Path) -> None:
        # conftest chdirs into tmp_path
        (tmp_path / ".blockrun.yaml").write_text("show_affordance: false\n")
        assert load_config().show_affordance is False

    def test_explicit_path_beats_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env_path = tmp_path / "env.yaml"
        env_path.write_text("timeout: 7\n")
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("timeout: 9\n")
        monkeypatch.setenv("BLOCKRUN_CONFIG", str(env_path))
        assert load_config(explicit).timeout == 9
