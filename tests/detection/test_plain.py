"""Tests for whole-file and section detection."""

from blockrun.detection.plain import find_plain_blocks, find_sections
from blockrun.detection.types import Line


def _lines(*texts: str) -> tuple[Line, ...]:
    return tuple(Line(t) for t in texts)


class TestFindSections:
    """Tests for section splitting."""

    def test_single_blank_does_not_split(self) -> None:
        assert find_sections(_lines("a", "", "b")) == [(0, 2)]

    def test_double_blank_splits(self) -> None:
        assert find_sections(_lines("a", "", "", "b")) == [(0, 0), (3, 3)]

    def test_long_gap_skipped_entirely(self) -> None:
        assert find_sections(_lines("a", "b", "", "", "", "", "c")) == [(0, 1), (6, 6)]

    def test_whitespace_only_lines_are_blank(self) -> None:
        assert find_sections(_lines("a", "  ", "\t", "b")) == [(0, 0), (3, 3)]

    def test_leading_and_trailing_blanks_excluded(self) -> None:
        lines = _lines("", "", "a", "", "", "b", "", "", "")
        assert find_sections(lines) == [(2, 2), (5, 5)]

    def test_single_trailing_blank_excluded(self) -> None:
        assert find_sections(_lines("a", "", "", "b", "")) == [(0, 0), (3, 3)]

    def test_mixed_gaps(self) -> None:
        lines = _lines("a1", "", "a2", "", "", "b1", "b2", "", "c?", "", "", "d")
        assert find_sections(lines) == [(0, 2), (5, 8), (11, 11)]

    def test_all_blank(self) -> None:
        assert find_sections(_lines("", "   ", "")) == []

    def test_no_lines(self) -> None:
        assert find_sections(()) == []


class TestFindPlainBlocks:
    """Tests for find_plain_blocks()."""

    def test_single_blank_yields_whole_file_only(self, runners) -> None:
        blocks = find_plain_blocks(_lines("a", "", "b"), "python", runners)
        assert len(blocks) == 1
        whole = blocks[0]
        assert (whole.start_line, whole.end_line, whole.anchor_line) == (0, 2, 0)
        assert whole.code == "a\n\nb"
        assert whole.language_id == "python"

    def test_double_blank_yields_sections(self, runners) -> None:
        blocks = find_plain_blocks(_lines("a", "", "", "b"), "python", runners)
        assert len(blocks) == 3
        whole, first, second = blocks
        assert (whole.start_line, whole.end_line) == (0, 3)
        assert whole.code == "a\n\n\nb"
        assert (first.start_line, first.end_line, first.anchor_line) == (0, 0, 0)
        assert first.code == "a"
        assert (second.start_line, second.end_line, second.anchor_line) == (3, 3, 3)
        assert second.code == "b"

    def test_unsupported_language_yields_nothing(self, runners) -> None:
        assert find_plain_blocks(_lines("a", "", "", "b"), "plaintext", runners) == []

    def test_whole_file_first_even_with_leading_blanks(self, runners) -> None:
        blocks = find_plain_blocks(_lines("", "", "x=1", "", "", "y=2"), "python", runners)
        assert blocks[0].start_line == 0
        assert blocks[0].end_line == 5
        assert [b.start_line for b in blocks[1:]] == [2, 5]

    def test_section_code_keeps_internal_blank(self, runners) -> None:
        blocks = find_plain_blocks(
            _lines("a", "", "b", "", "", "c"), "shellscript", runners
        )
        assert blocks[1].code == "a\n\nb"
        assert blocks[2].code == "c"

    def test_all_blank_document(self, runners) -> None:
        blocks = find_plain_blocks(_lines("", ""), "python", runners)
        assert len(blocks) == 1
        assert blocks[0].code == "\n"

    def test_single_empty_line(self, runners) -> None:
        blocks = find_plain_blocks(_lines(""), "python", runners)
        assert len(blocks) == 1
        assert blocks[0].code == ""
        assert (blocks[0].start_line, blocks[0].end_line) == (0, 0)

    def test_sections_may_overlap_whole_file(self, runners) -> None:
        blocks = find_plain_blocks(_lines("a", "", "", "b"), "ruby", runners)
        whole = blocks[0]
        for section in blocks[1:]:
            assert whole.start_line <= section.start_line
            assert section.end_line <= whole.end_line
