"""Tests for grammar selection and syntax error detection."""

import pytest

from js_test_generator.extractor.source_parser import (
    ParseError,
    language_for,
    parse_source,
)


class TestLanguageFor:
    """Tests for language_for function."""

    @pytest.mark.parametrize(
        "path, language",
        [
            ("src/a.ts", "typescript"),
            ("src/a.tsx", "typescript"),
            ("src/a.mts", "typescript"),
            ("SRC/A.TS", "typescript"),
            ("src/a.js", "javascript"),
            ("src/a.jsx", "javascript"),
            ("src/a.mjs", "javascript"),
            ("noextension", "javascript"),
        ],
    )
    def test_selects_language_by_extension(self, path, language):
        """Typed extensions select TypeScript, everything else JavaScript."""
        assert language_for(path) == language


class TestParseSource:
    """Tests for parse_source function."""

    def test_parses_valid_source(self):
        """Valid source yields a tree without errors."""
        tree = parse_source("const a = b?.c ?? [...d];", "a.js")

        assert tree.root_node.type == "program"
        assert not tree.root_node.has_error

    def test_type_annotations_rejected_in_untyped_files(self):
        """Type syntax is a syntax error for the untyped grammar."""
        with pytest.raises(ParseError):
            parse_source("function f(a: number) {}", "a.js")

    def test_error_carries_location(self):
        """ParseError reports file, line and column."""
        with pytest.raises(ParseError) as exc_info:
            parse_source("let x = 1;\nlet y = (;\n", "src/bad.ts")

        error = exc_info.value
        assert error.file_path == "src/bad.ts"
        assert error.line == 2
        assert error.column >= 0
        assert str(error).startswith("src/bad.ts:2:")

    def test_error_column_counts_characters(self):
        """Non-ASCII text before an error does not shift its column."""
        columns = []
        for text in ("const s = 'é'; let y = (;", "const s = 'e'; let y = (;"):
            with pytest.raises(ParseError) as exc_info:
                parse_source(text, "a.js")
            columns.append(exc_info.value.column)

        assert columns[0] == columns[1]

    def test_unencodable_text_raises_parse_error(self):
        """A lone surrogate is reported at its position."""
        with pytest.raises(ParseError) as exc_info:
            parse_source("const a = 1;\nconst b = '\ud800';\n", "a.js")

        error = exc_info.value
        assert (error.line, error.column) == (2, 11)
        assert "Invalid character" in error.reason
