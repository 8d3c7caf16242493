"""Load files into Documents and classify them.

Markdown files are TAGGED documents (fenced blocks); everything else is a
PLAIN document whose language comes from the file extension.
"""

from __future__ import annotations

import logging
from pathlib import Path

from blockrun.core.exceptions import DocumentError
from blockrun.detection.resolver import resolve_language
from blockrun.detection.types import Document, DocumentKind

logger = logging.getLogger(__name__)

MARKDOWN_LANGUAGE = "markdown"
UNKNOWN_LANGUAGE = "plaintext"

_MARKDOWN_SUFFIXES = frozenset({".md", ".markdown", ".mdx"})

# Language detection by file extension
_LANGUAGE_MAP: dict[str, str] = {
    ".py": "python",
    ".pyw": "python",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".sh": "shellscript",
    ".bash": "shellscript",
    ".zsh": "shellscript",
    ".rb": "ruby",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".php": "php",
    ".pl": "perl",
    ".lua": "lua",
    ".r": "r",
}


def detect_kind(path: Path) -> DocumentKind:
    """Classify a path as TAGGED (markdown) or PLAIN."""
    if path.suffix.lower() in _MARKDOWN_SUFFIXES:
        return DocumentKind.TAGGED
    return DocumentKind.PLAIN


def detect_language(path: Path) -> str:
    """Return the language id for a path's extension."""
    suffix = path.suffix.lower()
    if suffix in _MARKDOWN_SUFFIXES:
        return MARKDOWN_LANGUAGE
    return _LANGUAGE_MAP.get(suffix, UNKNOWN_LANGUAGE)


def load_document(
    path: Path,
    language: str | None = None,
    kind: DocumentKind | None = None,
) -> Document:
    """Read a text file into a Document.

    Args:
        path: File to read (UTF-8).
        language: Optional language override; aliases such as "py" are
            resolved to their canonical id.
        kind: Optional kind override (skips extension detection).

    Returns:
        Document ready for find_blocks().

    Raises:
        DocumentError: If the file is missing, not a regular file, or
            cannot be read as UTF-8.

    """
    if not path.exists():
        raise DocumentError(f"File not found: {path}")
    if not path.is_file():
        raise DocumentError(f"Not a file: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocumentError(f"File is not valid UTF-8: {path}") from e
    except OSError as e:
        raise DocumentError(f"Cannot read {path}: {e}") from e

    language_id = resolve_language(language) if language else detect_language(path)
    document_kind = kind if kind is not None else detect_kind(path)

    logger.debug(
        "Loaded %s as %s document (language=%s)", path, document_kind.value, language_id
    )
    return Document.from_text(text, language_id=language_id, kind=document_kind)
