"""Interpreter runners keyed by canonical language id."""

from blockrun.runners.registry import (
    BUILTIN_RUNNERS,
    FILE_PLACEHOLDER,
    RunnerDefinition,
    build_registry,
    list_languages,
)

__all__ = [
    "BUILTIN_RUNNERS",
    "FILE_PLACEHOLDER",
    "RunnerDefinition",
    "build_registry",
    "list_languages",
]
