"""Runnable block detection.

Two strategies selected by DocumentKind:
- TAGGED: fenced, language-tagged blocks (markdown)
- PLAIN: whole file plus sections split by 2+ blank lines (source files)

Pipeline: Document → find_blocks() → block_at_line() / block_title()
"""

from blockrun.detection.resolver import LANGUAGE_ALIASES, is_alias, resolve_language
from blockrun.detection.segmenter import (
    block_at_line,
    block_title,
    find_blocks,
    is_whole_file,
)
from blockrun.detection.types import Block, Document, DocumentKind, Line

__all__ = [
    "LANGUAGE_ALIASES",
    "is_alias",
    "resolve_language",
    "block_at_line",
    "block_title",
    "find_blocks",
    "is_whole_file",
    "Block",
    "Document",
    "DocumentKind",
    "Line",
]
