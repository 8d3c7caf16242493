"""Custom exception hierarchy for blockrun.

All custom exceptions inherit from BlockRunError to enable:
- Unified exception handling at the CLI boundary
- Clear distinction from built-in exceptions

The detection core never raises; these cover configuration, document
loading and block execution.
"""

from typing import Any

__all__ = [
    "BlockRunError",
    "ConfigError",
    "ConfigValidationError",
    "DocumentError",
    "ExecutorError",
]


class BlockRunError(Exception):
    """Base exception for all blockrun errors."""

    pass


class ConfigError(BlockRunError):
    """Configuration loading or validation error.

    Raised when:
    - An explicitly requested config file does not exist
    - The file is not valid YAML or not a YAML mapping
    - The file exceeds the size limit
    """

    pass


class ConfigValidationError(ConfigError):
    """Validation error with structured Pydantic details.

    Attributes:
        errors: List of error dicts with 'loc', 'msg', and 'type' fields.
            - loc: Tuple of field path components (e.g., ('runners', 'python', 'command'))
            - msg: Human-readable error message
            - type: Pydantic error type code (e.g., 'value_error')

    Example:
        >>> try:
        ...     load_config(Path(".blockrun.yaml"))
        ... except ConfigValidationError as e:
        ...     for err in e.errors:
        ...         path = ".".join(str(x) for x in err["loc"])
        ...         print(f"{path}: {err['msg']}")

    """

    def __init__(self, message: str, errors: list[dict[str, Any]]) -> None:
        """Initialize ConfigValidationError with message and structured errors.

        Args:
            message: Human-readable error message.
            errors: List of error dicts from Pydantic ValidationError.

        """
        super().__init__(message)
        self.errors = errors


class DocumentError(BlockRunError):
    """Document could not be loaded.

    Raised when the path does not exist, is not a regular file,
    or is not valid UTF-8 text.
    """

    pass


class ExecutorError(BlockRunError):
    """Block execution could not be carried out.

    Raised when:
    - No runner is registered for the block's language
    - The interpreter (or shell session) cannot be started
    - Execution exceeds the configured timeout

    A non-zero exit status of the block itself is NOT an error; it is
    reported through ExecutionResult.returncode.
    """

    pass
