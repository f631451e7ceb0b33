"""Source model extraction for JavaScript and TypeScript files."""

from js_test_generator.extractor.extractor import extract, extract_file
from js_test_generator.extractor.source_parser import (
    ParseError,
    language_for,
    parse_source,
)
from js_test_generator.extractor.type_renderer import render_annotation, render_type

__all__ = [
    # Parsing
    "ParseError",
    "language_for",
    "parse_source",
    # Type rendering
    "render_type",
    "render_annotation",
    # Extraction
    "extract",
    "extract_file",
]
