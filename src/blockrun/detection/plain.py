"""Whole-file and section detection for plain source documents.

A supported source file always yields one whole-file block. When the file
is split into two or more sections by gaps of at least two blank lines,
each section is offered as an extra block after the whole-file one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from blockrun.detection.types import Block, Line
from blockrun.runners.registry import RunnerDefinition

logger = logging.getLogger(__name__)

# Consecutive blank lines needed to split two sections
SECTION_GAP = 2


def find_sections(lines: Sequence[Line]) -> list[tuple[int, int]]:
    """Find maximal non-blank runs separated by SECTION_GAP+ blank lines.

    A single blank line stays inside its section. Leading and trailing
    blank lines never belong to a section.

    Args:
        lines: Document lines.

    Returns:
        List of (start, end) inclusive line ranges in document order.

    """
    sections: list[tuple[int, int]] = []
    section_start: int | None = None
    last_content = 0
    count = len(lines)
    i = 0

    while i < count:
        if not lines[i].is_blank:
            if section_start is None:
                section_start = i
            last_content = i
            i += 1
            continue

        if section_start is not None:
            j = i
            while j < count and lines[j].is_blank:
                j += 1
            if j - i >= SECTION_GAP:
                sections.append((section_start, i - 1))
                section_start = None
                i = j
                continue
        i += 1

    # Close at the last non-blank line rather than the last line, so a
    # trailing newline never adds a blank line to the final section
    if section_start is not None:
        sections.append((section_start, last_content))

    return sections


def find_plain_blocks(
    lines: Sequence[Line],
    language_id: str,
    runners: Mapping[str, RunnerDefinition],
) -> list[Block]:
    """Find the whole-file block and, if there are several, section blocks.

    Args:
        lines: Document lines.
        language_id: The document's own language id.
        runners: Registry snapshot; only its keys are consulted.

    Returns:
        Empty list if language_id has no runner. Otherwise the whole-file
        block first, followed by section blocks when there are at least two
        sections.

    """
    if language_id not in runners:
        logger.debug("No runner for document language '%s'", language_id)
        return []

    blocks = [
        Block(
            start_line=0,
            end_line=len(lines) - 1,
            language_id=language_id,
            code="\n".join(line.text for line in lines),
            anchor_line=0,
        )
    ]

    sections = find_sections(lines)
    if len(sections) < 2:
        return blocks

    for start, end in sections:
        blocks.append(
            Block(
                start_line=start,
                end_line=end,
                language_id=language_id,
                code="\n".join(line.text for line in lines[start : end + 1]),
                anchor_line=start,
            )
        )

    logger.debug("Found %d sections in %s document", len(sections), language_id)
    return blocks
