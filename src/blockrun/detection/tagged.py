"""Fenced code block detection for markdown-style documents.

Every line starting with three backticks opens a fence, which runs to the
next line starting with three backticks. A fence is runnable when its
info string begins with a language tag (```python) or is blank (```),
which defaults to shellscript. Any other info string (``` python,
```{r}) still consumes its fence but yields no block.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence

from blockrun.detection.resolver import resolve_language
from blockrun.detection.types import Block, Line
from blockrun.runners.registry import RunnerDefinition

logger = logging.getLogger(__name__)

FENCE = "```"
DEFAULT_FENCE_LANGUAGE = "shellscript"

_TAGGED_FENCE = re.compile(r"^```(\w+)")
_BARE_FENCE = re.compile(r"^```\s*$")


def is_fence(text: str) -> bool:
    """True if text is a fence delimiter line."""
    return text.startswith(FENCE)


def opening_tag(text: str) -> str | None:
    """Return the raw tag of a runnable opening fence, else None.

    Bare fences yield DEFAULT_FENCE_LANGUAGE. Fences with any other info
    string return None even though is_fence() is true for them.
    """
    match = _TAGGED_FENCE.match(text)
    if match:
        return match.group(1).lower()
    if _BARE_FENCE.match(text):
        return DEFAULT_FENCE_LANGUAGE
    return None


def find_tagged_blocks(
    lines: Sequence[Line],
    runners: Mapping[str, RunnerDefinition],
) -> list[Block]:
    """Find runnable fenced blocks.

    Empty fences, unterminated fences, fences with an unrecognised info
    string and fences whose language has no runner produce no block.
    Scanning always resumes after the closing fence, so a skipped fence
    never hides the ones after it.

    Args:
        lines: Document lines.
        runners: Registry snapshot; only its keys are consulted.

    Returns:
        Blocks in document order.

    """
    blocks: list[Block] = []
    count = len(lines)
    i = 0

    while i < count:
        if not is_fence(lines[i].text):
            i += 1
            continue

        raw_tag = opening_tag(lines[i].text)
        anchor_line = i
        start_line = i + 1

        # First line starting with ``` closes, even if it looks like an opener
        i += 1
        while i < count and not is_fence(lines[i].text):
            i += 1

        if i >= count:
            logger.debug("Unterminated fence at line %d discarded", anchor_line)
            break

        end_line = i - 1
        language_id = resolve_language(raw_tag) if raw_tag is not None else None
        if language_id is None:
            logger.debug(
                "Fence at line %d skipped: unrecognised info string %r",
                anchor_line,
                lines[anchor_line].text[len(FENCE) :],
            )
        elif end_line < start_line:
            logger.debug("Empty fence at line %d skipped", anchor_line)
        elif language_id not in runners:
            logger.debug(
                "Fence at line %d skipped: no runner for '%s'", anchor_line, language_id
            )
        else:
            code = "\n".join(line.text for line in lines[start_line : end_line + 1])
            blocks.append(
                Block(
                    start_line=start_line,
                    end_line=end_line,
                    language_id=language_id,
                    code=code,
                    anchor_line=anchor_line,
                )
            )
        i += 1

    return blocks
