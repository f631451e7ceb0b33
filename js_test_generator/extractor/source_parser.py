"""Parse JavaScript/TypeScript source text with tree-sitter."""

import logging
from functools import cache

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

# Typed sources are parsed with the TSX grammar so markup expressions are
# accepted in every typed file, not only in .tsx files.
TYPED_EXTENSIONS = (".ts", ".tsx", ".mts", ".cts")


class ParseError(Exception):
    """Source text is not valid for its language."""

    def __init__(self, message: str, file_path: str, line: int, column: int):
        super().__init__(f"{file_path}:{line}:{column}: {message}")
        self.reason = message
        self.file_path = file_path
        self.line = line
        self.column = column


def language_for(file_path: str) -> str:
    """Return "typescript" or "javascript" for a file path hint."""
    if file_path.lower().endswith(TYPED_EXTENSIONS):
        return "typescript"
    return "javascript"


@cache
def _get_grammar(language: str) -> Language:
    if language == "typescript":
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_javascript.language())


def parse_source(source: str, file_path: str) -> Tree:
    """Parse source text into a syntax tree.

    Args:
        source: The file content
        file_path: Path hint used to pick the grammar and to report errors

    Returns:
        The tree-sitter syntax tree

    Raises:
        ParseError: If the text contains any syntax error
    """
    language = language_for(file_path)
    try:
        source_bytes = source.encode("utf-8")
    except UnicodeEncodeError as e:
        line = source.count("\n", 0, e.start) + 1
        column = e.start - (source.rfind("\n", 0, e.start) + 1)
        message = f"Invalid character {source[e.start]!r}"
        logger.error(f"Cannot encode {file_path} at {line}:{column}: {message}")
        raise ParseError(message, file_path, line, column) from e

    parser = Parser(_get_grammar(language))
    tree = parser.parse(source_bytes)

    error_node = find_first_error(tree.root_node)
    if error_node is not None:
        message = _describe_error(error_node)
        row, byte_column = error_node.start_point
        line = row + 1
        column = character_column(source_bytes.split(b"\n")[row], byte_column)
        logger.error(f"Syntax error in {file_path} at {line}:{column}: {message}")
        raise ParseError(message, file_path, line, column)

    logger.info(f"Parsed {file_path} as {language}")
    return tree


def character_column(line: bytes, byte_column: int) -> int:
    """Convert a byte offset within a UTF-8 encoded line to a character offset."""
    return len(line[:byte_column].decode("utf-8", errors="replace"))


def find_first_error(node: Node) -> Node | None:
    """Find the first ERROR or missing node in document order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = find_first_error(child)
        if found is not None:
            return found
    # has_error is set but no descendant was flagged
    return node


def _describe_error(node: Node) -> str:
    if node.is_missing:
        return f"Missing '{node.type}'"
    text = node.text.decode("utf-8", errors="replace") if node.text else ""
    snippet = text.strip().splitlines()[0][:40] if text.strip() else ""
    if snippet:
        return f"Unexpected token near '{snippet}'"
    return "Unexpected end of input"
