"""Block detection entry point.

Pipeline: pick strategy by DocumentKind → scan lines → list[Block].

Detection is pure and never cached; callers re-run find_blocks() whenever
they need an up-to-date view of a document.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from blockrun.detection.plain import find_plain_blocks
from blockrun.detection.tagged import find_tagged_blocks
from blockrun.detection.types import Block, Document, DocumentKind
from blockrun.runners.registry import BUILTIN_RUNNERS, RunnerDefinition

logger = logging.getLogger(__name__)

_Strategy = Callable[[Document, Mapping[str, RunnerDefinition]], list[Block]]

_STRATEGIES: dict[DocumentKind, _Strategy] = {
    DocumentKind.TAGGED: lambda doc, runners: find_tagged_blocks(doc.lines, runners),
    DocumentKind.PLAIN: lambda doc, runners: find_plain_blocks(
        doc.lines, doc.language_id, runners
    ),
}


def find_blocks(
    document: Document,
    runners: Mapping[str, RunnerDefinition] | None = None,
) -> list[Block]:
    """Find all runnable blocks in a document.

    Args:
        document: Document to scan.
        runners: Registry snapshot (defaults to the built-in runners).

    Returns:
        Blocks in emission order. Never raises; unsupported or malformed
        regions are simply left out.

    """
    if runners is None:
        runners = BUILTIN_RUNNERS

    blocks = _STRATEGIES[document.kind](document, runners)
    logger.debug(
        "Detected %d block(s) in %s document (%d lines)",
        len(blocks),
        document.kind.value,
        document.line_count,
    )
    return blocks


def block_at_line(blocks: Sequence[Block], line: int) -> Block | None:
    """Select the block under a cursor line.

    The first block whose anchor_line <= line <= end_line wins, so for
    plain documents the whole-file block takes precedence over sections.

    Args:
        blocks: Output of find_blocks().
        line: 0-indexed cursor line.

    Returns:
        Matching block, or None.

    """
    for block in blocks:
        if block.contains(line):
            return block
    return None


def is_whole_file(block: Block, document: Document) -> bool:
    """True for the whole-file block of a plain document."""
    return (
        document.kind is DocumentKind.PLAIN
        and block.start_line == 0
        and block.end_line == document.line_count - 1
    )


def block_title(block: Block, document: Document) -> str:
    """Human-readable action label for a block (1-indexed line numbers)."""
    if is_whole_file(block, document):
        return "Run Entire File"
    if block.start_line == block.end_line:
        return f"Run Block (line {block.start_line + 1})"
    return f"Run Block (lines {block.start_line + 1}–{block.end_line + 1})"
