"""Language tag normalization for fenced code blocks.

Maps informal fence tags (``py``, ``sh``, ``c++``) to the canonical ids used
as runner registry keys. Unknown tags pass through lower-cased: whether a
language is runnable is decided by the registry, not here.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

# Fence tag variations -> canonical language id
LANGUAGE_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "js": "javascript",
        "ts": "typescript",
        "py": "python",
        "sh": "shellscript",
        "bash": "shellscript",
        "zsh": "shellscript",
        "rb": "ruby",
        "rs": "rust",
        "c++": "cpp",
        "cxx": "cpp",
    }
)


def is_alias(raw_tag: str) -> bool:
    """Return True if raw_tag is found in the alias table."""
    return raw_tag.lower() in LANGUAGE_ALIASES


def resolve_language(raw_tag: str) -> str:
    """Normalize a fence tag to a canonical language id.

    Args:
        raw_tag: Tag as written after the backticks (any case, may be empty).

    Returns:
        The aliased canonical id, or the lower-cased tag unchanged.

    Example:
        >>> resolve_language("PY")
        'python'
        >>> resolve_language("Haskell")
        'haskell'

    """
    tag = raw_tag.lower()
    if tag in LANGUAGE_ALIASES:
        return LANGUAGE_ALIASES[tag]
    return tag
