"""Core data types for block detection.

Defines Line, Block, DocumentKind and Document as the values exchanged
between the document loader, the two detection strategies and consumers
(CLI listing, cursor lookup, executor).

All line numbers are 0-indexed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True)
class Line:
    """One line of a document, without its line terminator."""

    text: str

    @property
    def is_blank(self) -> bool:
        """True for empty or whitespace-only lines."""
        return not self.text.strip()


@dataclass(frozen=True, slots=True)
class Block:
    """A contiguous, independently runnable span of document text.

    Attributes:
        start_line: First content line, inclusive.
        end_line: Last content line, inclusive.
        language_id: Canonical language id (a key of the runner registry).
        code: Content line texts joined with "\\n".
        anchor_line: Opening fence line for fenced blocks, first line
            otherwise. Always <= start_line.

    """

    start_line: int
    end_line: int
    language_id: str
    code: str
    anchor_line: int

    @property
    def line_count(self) -> int:
        """Number of content lines."""
        return self.end_line - self.start_line + 1

    def contains(self, line: int) -> bool:
        """True if line falls between the anchor and the last content line."""
        return self.anchor_line <= line <= self.end_line


class DocumentKind(str, Enum):
    """How a document's blocks are detected."""

    TAGGED = "tagged"
    PLAIN = "plain"


@dataclass(frozen=True, slots=True)
class Document:
    """An immutable, line-indexed document.

    Attributes:
        lines: Document lines in order.
        language_id: The document's own language id ("markdown" for
            tagged documents, e.g. "python" for a source file).
        kind: Detection strategy to apply.

    """

    lines: tuple[Line, ...]
    language_id: str
    kind: DocumentKind

    @classmethod
    def from_text(cls, text: str, language_id: str, kind: DocumentKind) -> Document:
        """Split text into lines the way an editor buffer does.

        A trailing line break produces a final empty line, and empty text
        is a single empty line.
        """
        lines = tuple(Line(part) for part in _LINE_BREAK.split(text))
        return cls(lines=lines, language_id=language_id, kind=kind)

    @property
    def line_count(self) -> int:
        """Number of lines."""
        return len(self.lines)

    def text_between(self, start: int, end: int) -> str:
        """Join line texts from start to end (inclusive) with "\\n"."""
        return "\n".join(line.text for line in self.lines[start : end + 1])
