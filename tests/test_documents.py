"""Tests for document loading and classification."""

from pathlib import Path

import pytest

from blockrun.core.exceptions import DocumentError
from blockrun.detection.types import DocumentKind
from blockrun.documents import detect_kind, detect_language, load_document


class TestDetectKind:
    """Tests for tagged/plain classification."""

    @pytest.mark.parametrize("name", ["README.md", "notes.MARKDOWN", "page.mdx"])
    def test_markdown_is_tagged(self, name: str) -> None:
        assert detect_kind(Path(name)) is DocumentKind.TAGGED

    @pytest.mark.parametrize("name", ["main.py", "run.sh", "Makefile", "notes.txt"])
    def test_everything_else_is_plain(self, name: str) -> None:
        assert detect_kind(Path(name)) is DocumentKind.PLAIN


class TestDetectLanguage:
    """Tests for extension-based language ids."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("a.py", "python"),
            ("a.mjs", "javascript"),
            ("a.ts", "typescript"),
            ("a.zsh", "shellscript"),
            ("a.rb", "ruby"),
            ("a.cc", "cpp"),
            ("a.R", "r"),
            ("README.md", "markdown"),
            ("notes.txt", "plaintext"),
            ("Makefile", "plaintext"),
        ],
    )
    def test_extensions(self, name: str, expected: str) -> None:
        assert detect_language(Path(name)) == expected


class TestLoadDocument:
    """Tests for load_document()."""

    def test_python_file(self, tmp_path: Path) -> None:
        path = tmp_path / "script.py"
        path.write_text("print(1)\n", encoding="utf-8")
        doc = load_document(path)
        assert doc.kind is DocumentKind.PLAIN
        assert doc.language_id == "python"
        assert [line.text for line in doc.lines] == ["print(1)", ""]

    def test_markdown_file(self, tmp_path: Path) -> None:
        path = tmp_path / "README.md"
        path.write_text("```py\nx = 1\n```\n", encoding="utf-8")
        doc = load_document(path)
        assert doc.kind is DocumentKind.TAGGED
        assert doc.language_id == "markdown"

    def test_language_override_is_resolved(self, tmp_path: Path) -> None:
        path = tmp_path / "script"
        path.write_text("echo hi\n", encoding="utf-8")
        doc = load_document(path, language="bash")
        assert doc.language_id == "shellscript"

    def test_kind_override(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("```sh\nls\n```\n", encoding="utf-8")
        doc = load_document(path, kind=DocumentKind.TAGGED)
        assert doc.kind is DocumentKind.TAGGED

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentError, match="not found"):
            load_document(tmp_path / "missing.py")

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentError, match="Not a file"):
            load_document(tmp_path)

    def test_binary_file(self, tmp_path: Path) -> None:
        path = tmp_path / "blob.py"
        path.write_bytes(b"\xff\xfe\x00\x80")
        with pytest.raises(DocumentError, match="UTF-8"):
            load_document(path)
