"""Runner registry for language-id based interpreter lookup.

Maps a canonical language identifier (e.g. "python", "shellscript") to a
RunnerDefinition: a shell command template with a ``{file}`` placeholder
and the file extension the code must be written with.

Built-in runners:
    - "python": python3 "{file}"
    - "shellscript": bash "{file}"
    - "javascript", "typescript", "ruby", "go", "rust", "java",
      "c", "cpp", "php", "perl", "lua", "r"

User overrides (from the config file) are applied on top of the built-ins
by build_registry(). An override replaces the whole entry for its key;
fields are never merged.

Example:
    >>> registry = build_registry({"python": RunnerDefinition(command='pypy3 "{file}"', ext=".py")})
    >>> registry["python"].command
    'pypy3 "{file}"'
    >>> "ruby" in registry
    True

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

FILE_PLACEHOLDER = "{file}"


class RunnerDefinition(BaseModel):
    """How to run code written in one language.

    Attributes:
        command: Shell command template. Every ``{file}`` is replaced with
            the path of the temp file holding the block's code.
        ext: File extension for the temp file, including the leading dot.

    """

    model_config = ConfigDict(frozen=True)

    command: str = Field(
        ...,
        min_length=1,
        description='Command template, e.g. python3 "{file}"',
    )
    ext: str = Field(
        ...,
        min_length=2,
        description="Temp file extension with leading dot, e.g. .py",
    )

    @field_validator("command", mode="after")
    @classmethod
    def validate_placeholder(cls, v: str) -> str:
        """Require the {file} placeholder in the command template."""
        if FILE_PLACEHOLDER not in v:
            raise ValueError(f"Command template must contain {FILE_PLACEHOLDER}: {v!r}")
        return v

    @field_validator("ext", mode="after")
    @classmethod
    def validate_ext(cls, v: str) -> str:
        """Require a leading dot and no path separators."""
        if not v.startswith(".") or "/" in v or "\\" in v:
            raise ValueError(f"Extension must look like '.py', got {v!r}")
        return v

    def render(self, file_path: str) -> str:
        """Return the command with every placeholder replaced by file_path."""
        return self.command.replace(FILE_PLACEHOLDER, file_path)


BUILTIN_RUNNERS: Mapping[str, RunnerDefinition] = MappingProxyType(
    {
        "javascript": RunnerDefinition(command='node "{file}"', ext=".js"),
        "typescript": RunnerDefinition(command='npx ts-node "{file}"', ext=".ts"),
        "python": RunnerDefinition(command='python3 "{file}"', ext=".py"),
        "shellscript": RunnerDefinition(command='bash "{file}"', ext=".sh"),
        "ruby": RunnerDefinition(command='ruby "{file}"', ext=".rb"),
        "go": RunnerDefinition(command='go run "{file}"', ext=".go"),
        "rust": RunnerDefinition(
            command='rustc "{file}" -o "{file}.out" && "{file}.out"', ext=".rs"
        ),
        "java": RunnerDefinition(command='java "{file}"', ext=".java"),
        "c": RunnerDefinition(
            command='gcc "{file}" -o "{file}.out" && "{file}.out"', ext=".c"
        ),
        "cpp": RunnerDefinition(
            command='g++ "{file}" -o "{file}.out" && "{file}.out"', ext=".cpp"
        ),
        "php": RunnerDefinition(command='php "{file}"', ext=".php"),
        "perl": RunnerDefinition(command='perl "{file}"', ext=".pl"),
        "lua": RunnerDefinition(command='lua "{file}"', ext=".lua"),
        "r": RunnerDefinition(command='Rscript "{file}"', ext=".R"),
    }
)


def build_registry(
    overrides: Mapping[str, RunnerDefinition] | None = None,
) -> Mapping[str, RunnerDefinition]:
    """Build an immutable registry snapshot for one detection pass.

    Built-in entries form the base; each override replaces (or adds) the
    entry for its key. Override keys are lower-cased so they match the
    canonical ids produced by the language resolver.

    Args:
        overrides: Optional user-supplied runner definitions.

    Returns:
        Read-only mapping of canonical language id to RunnerDefinition.

    """
    merged: dict[str, RunnerDefinition] = dict(BUILTIN_RUNNERS)
    if overrides:
        for key, runner in overrides.items():
            language_id = key.lower()
            if language_id in merged:
                logger.debug("Runner override replaces built-in: %s", language_id)
            else:
                logger.debug("Runner override adds language: %s", language_id)
            merged[language_id] = runner
    return MappingProxyType(merged)


def list_languages(registry: Mapping[str, RunnerDefinition] | None = None) -> frozenset[str]:
    """List all language ids with a runner.

    Args:
        registry: Snapshot to inspect (defaults to the built-ins).

    Returns:
        Immutable frozenset of language ids.

    """
    if registry is None:
        registry = BUILTIN_RUNNERS
    return frozenset(registry.keys())
