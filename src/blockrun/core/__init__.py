"""Core infrastructure shared across blockrun modules."""

from blockrun.core.exceptions import (
    BlockRunError,
    ConfigError,
    ConfigValidationError,
    DocumentError,
    ExecutorError,
)

__all__ = [
    "BlockRunError",
    "ConfigError",
    "ConfigValidationError",
    "DocumentError",
    "ExecutorError",
]
