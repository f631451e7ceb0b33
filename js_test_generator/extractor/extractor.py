"""Extract a SourceModel from JavaScript/TypeScript source."""

import logging
from collections.abc import Iterator
from pathlib import Path

from tree_sitter import Node

from js_test_generator.extractor.source_parser import (
    character_column,
    language_for,
    parse_source,
)
from js_test_generator.extractor.type_renderer import render_annotation
from js_test_generator.models import (
    ClassInfo,
    ExportInfo,
    FunctionInfo,
    ImportInfo,
    Location,
    MethodInfo,
    ParamInfo,
    Position,
    PropertyInfo,
    SourceModel,
)

logger = logging.getLogger(__name__)

FUNCTION_NODES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        # named function expressions directly under `export default`
        "function_expression",
        "function",
        "generator_function",
    }
)

CLASS_NODES = frozenset({"class_declaration", "abstract_class_declaration", "class"})

VARIABLE_NODES = frozenset({"lexical_declaration", "variable_declaration"})

EXPORT_NODE = "export_statement"

# Root of the statement list; ancestor searches stop here
PROGRAM_NODE = "program"

METHOD_NODES = frozenset({"method_definition"})

FIELD_NODES = frozenset({"public_field_definition", "field_definition"})

# Default values rendered as literals; anything else is left unrendered
_LITERAL_DEFAULTS = frozenset(
    {"number", "true", "false", "null", "undefined", "identifier"}
)

Entity = FunctionInfo | ClassInfo | ImportInfo


def extract(source: str, file_path: str) -> SourceModel:
    """Extract the structural model of a source file.

    Args:
        source: The file content
        file_path: Path of the file; selects the grammar and names the module

    Returns:
        SourceModel with functions, classes, imports and exports in
        declaration order

    Raises:
        ParseError: If the source contains a syntax error
    """
    tree = parse_source(source, file_path)
    lines = tuple(source.encode("utf-8").split(b"\n"))
    entities = list(_walk_program(tree.root_node, lines))

    functions = tuple(e for e in entities if isinstance(e, FunctionInfo))
    classes = tuple(e for e in entities if isinstance(e, ClassInfo))
    imports = tuple(e for e in entities if isinstance(e, ImportInfo))
    exports = tuple(_export_entries(entities))

    logger.info(
        f"Extracted {len(functions)} functions, {len(classes)} classes, "
        f"{len(imports)} imports, {len(exports)} exports from {file_path}"
    )
    return SourceModel(
        file_path=file_path,
        language=language_for(file_path),
        functions=functions,
        classes=classes,
        imports=imports,
        exports=exports,
    )


def extract_file(path: Path | str) -> SourceModel:
    """Read a file from disk and extract its model.

    Bytes that are not valid UTF-8 are replaced with U+FFFD.
    """
    path = Path(path)
    logger.info(f"Analyzing {path}")
    return extract(path.read_text(encoding="utf-8", errors="replace"), str(path))


def _export_entries(entities: list[Entity]) -> Iterator[ExportInfo]:
    for entity in entities:
        if isinstance(entity, FunctionInfo) and entity.is_exported:
            yield ExportInfo(name=entity.name, kind="function")
        elif isinstance(entity, ClassInfo) and entity.is_exported:
            yield ExportInfo(name=entity.name, kind="class")


def _walk_program(root: Node, lines: tuple[bytes, ...]) -> Iterator[Entity]:
    """Visit top-level statements in document order."""
    for statement in root.named_children:
        if statement.type == EXPORT_NODE:
            declaration = statement.child_by_field_name(
                "declaration"
            ) or statement.child_by_field_name("value")
            if declaration is None:
                # `export { a, b }` and re-exports are not tracked
                continue
            comments = _leading_comments(statement)
            yield from _visit_declaration(declaration, comments, lines)
        else:
            yield from _visit_declaration(
                statement, _leading_comments(statement), lines
            )


def _visit_declaration(
    node: Node, comments: tuple[str, ...], lines: tuple[bytes, ...]
) -> Iterator[Entity]:
    if node.type == "import_statement":
        yield _extract_import(node)
    elif node.type in FUNCTION_NODES:
        function = _extract_function(node, comments, lines)
        if function is not None:
            yield function
    elif node.type in VARIABLE_NODES:
        yield from _extract_arrow_functions(node, comments, lines)
    elif node.type in CLASS_NODES:
        cls = _extract_class(node, lines)
        if cls is not None:
            yield cls


def _extract_import(node: Node) -> ImportInfo:
    source_node = node.child_by_field_name("source")
    source = _string_value(source_node) if source_node is not None else ""
    specifiers: list[str] = []
    is_default = False

    clause = next((c for c in node.named_children if c.type == "import_clause"), None)
    if clause is not None:
        for child in clause.named_children:
            if child.type == "identifier":
                is_default = True
                specifiers.append(_text(child))
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type != "import_specifier":
                        continue
                    local = spec.child_by_field_name(
                        "alias"
                    ) or spec.child_by_field_name("name")
                    if local is not None:
                        specifiers.append(_text(local))

    logger.debug(f"Import from {source}: {specifiers}")
    return ImportInfo(
        source=source, specifiers=tuple(specifiers), is_default=is_default
    )


def _extract_function(
    node: Node, comments: tuple[str, ...], lines: tuple[bytes, ...]
) -> FunctionInfo | None:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None

    function = FunctionInfo(
        name=_text(name_node),
        params=_extract_params(node),
        location=_location(node, lines),
        return_type=render_annotation(node.child_by_field_name("return_type")),
        is_async=_has_keyword(node, "async"),
        is_exported=_is_exported(node),
        leading_comments=comments,
    )
    logger.debug(f"Function {function.name} (exported={function.is_exported})")
    return function


def _extract_arrow_functions(
    declaration: Node, comments: tuple[str, ...], lines: tuple[bytes, ...]
) -> Iterator[FunctionInfo]:
    """Yield arrow functions bound directly to an identifier."""
    for declarator in declaration.named_children:
        if declarator.type != "variable_declarator":
            continue
        name_node = declarator.child_by_field_name("name")
        value = _unwrap_parentheses(declarator.child_by_field_name("value"))
        if name_node is None or name_node.type != "identifier":
            continue
        if value is None or value.type != "arrow_function":
            continue

        function = FunctionInfo(
            name=_text(name_node),
            params=_extract_params(value),
            location=_location(value, lines),
            return_type=render_annotation(value.child_by_field_name("return_type")),
            is_async=_has_keyword(value, "async"),
            is_exported=_has_export_ancestor(value),
            leading_comments=comments,
        )
        logger.debug(f"Arrow function {function.name} (exported={function.is_exported})")
        yield function


def _extract_class(node: Node, lines: tuple[bytes, ...]) -> ClassInfo | None:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None

    methods: list[MethodInfo] = []
    properties: list[PropertyInfo] = []
    body = node.child_by_field_name("body")
    for member in body.named_children if body is not None else []:
        if member.type in METHOD_NODES:
            method = _extract_method(member, lines)
            if method is not None:
                methods.append(method)
        elif member.type in FIELD_NODES:
            prop = _extract_property(member)
            if prop is not None:
                properties.append(prop)

    cls = ClassInfo(
        name=_text(name_node),
        location=_location(node, lines),
        methods=tuple(methods),
        properties=tuple(properties),
        is_exported=_is_exported(node),
    )
    logger.debug(
        f"Class {cls.name}: {len(methods)} methods, {len(properties)} properties"
    )
    return cls


def _extract_method(node: Node, lines: tuple[bytes, ...]) -> MethodInfo | None:
    name_node = node.child_by_field_name("name")
    # computed, string and #private keys are not modeled
    if name_node is None or name_node.type != "property_identifier":
        return None

    name = _text(name_node)
    return MethodInfo(
        name=name,
        params=_extract_params(node),
        location=_location(node, lines),
        return_type=render_annotation(node.child_by_field_name("return_type")),
        is_async=_has_keyword(node, "async"),
        is_public=_is_public(name, node),
        is_static=_has_keyword(node, "static"),
    )


def _extract_property(node: Node) -> PropertyInfo | None:
    name_node = node.child_by_field_name("name") or node.child_by_field_name(
        "property"
    )
    if name_node is None or name_node.type != "property_identifier":
        return None

    name = _text(name_node)
    return PropertyInfo(
        name=name,
        type=render_annotation(node.child_by_field_name("type")),
        is_public=_is_public(name, node),
    )


def _extract_params(node: Node) -> tuple[ParamInfo, ...]:
    single = node.child_by_field_name("parameter")
    if single is not None:
        # `x => ...` arrow function without parentheses
        return (ParamInfo(name=_text(single)),)

    parameters = node.child_by_field_name("parameters")
    if parameters is None:
        return ()
    return tuple(
        _extract_param(p)
        for p in parameters.named_children
        if p.type not in ("comment", "decorator")
    )


def _extract_param(node: Node) -> ParamInfo:
    """Classify one parameter by node shape."""
    if node.type in ("required_parameter", "optional_parameter"):
        # TypeScript wraps every parameter with its annotation and default
        pattern = node.child_by_field_name("pattern")
        type_ = render_annotation(node.child_by_field_name("type"))
        default = node.child_by_field_name("value")
        if pattern is not None and pattern.type == "rest_pattern":
            return ParamInfo(name=_rest_name(pattern), type=type_, optional=True)
        return ParamInfo(
            name=_text(pattern) if pattern is not None else "",
            type=type_,
            optional=node.type == "optional_parameter" or default is not None,
            default_value=_render_default(default) if default is not None else None,
        )

    if node.type == "assignment_pattern":
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        return ParamInfo(
            name=_text(left) if left is not None else "",
            optional=True,
            default_value=_render_default(right) if right is not None else None,
        )

    if node.type == "rest_pattern":
        return ParamInfo(name=_rest_name(node), optional=True)

    # identifier, or a destructuring pattern kept as written
    return ParamInfo(name=_text(node))


def _unwrap_parentheses(node: Node | None) -> Node | None:
    """Strip `(...)` around an expression, as in `const f = (() => 1);`."""
    while node is not None and node.type == "parenthesized_expression":
        node = next((c for c in node.named_children if c.type != "comment"), None)
    return node


def _rest_name(node: Node) -> str:
    target = next((c for c in node.named_children if c.type != "comment"), None)
    return f"...{_text(target) if target is not None else ''}"


def _render_default(node: Node) -> str | None:
    if node.type == "string":
        return f'"{_string_value(node)}"'
    if node.type in _LITERAL_DEFAULTS:
        return _text(node)
    return None


def _is_exported(node: Node) -> bool:
    """A declaration is exported when an export statement wraps it directly."""
    parent = node.parent
    return parent is not None and parent.type == EXPORT_NODE


def _has_export_ancestor(node: Node) -> bool:
    """Search upward from a bound arrow function for an export statement.

    The search ends at the program root. Exports made later through a
    separate `export { name }` statement are not followed.
    """
    parent = node.parent
    if parent is None or parent.type == PROGRAM_NODE:
        return False
    if parent.type == EXPORT_NODE:
        return True
    return _has_export_ancestor(parent)


def _is_public(name: str, node: Node) -> bool:
    """Public unless underscore-prefixed or declared with `private`."""
    if name.startswith("_"):
        return False
    for child in node.children:
        if child.type == "accessibility_modifier" and _text(child) == "private":
            return False
    return True


def _has_keyword(node: Node, keyword: str) -> bool:
    return any(child.type == keyword for child in node.children)


def _leading_comments(node: Node) -> tuple[str, ...]:
    """Collect the comments directly preceding a statement."""
    comments: list[str] = []
    sibling = node.prev_sibling
    while sibling is not None and sibling.type == "comment":
        if _trails_statement(sibling):
            break
        comments.append(_comment_body(_text(sibling)))
        sibling = sibling.prev_sibling
    return tuple(reversed(comments))


def _trails_statement(comment: Node) -> bool:
    """True for a comment on the same line as the end of the code before it."""
    previous = comment.prev_named_sibling
    return (
        previous is not None
        and previous.type != "comment"
        and previous.end_point[0] == comment.start_point[0]
    )


def _comment_body(text: str) -> str:
    if text.startswith("//"):
        return text[2:].strip()
    if text.startswith("/*"):
        return text[2:].removesuffix("*/").strip()
    return text.strip()


def _location(node: Node, lines: tuple[bytes, ...]) -> Location:
    return Location(
        start=_position(node.start_point, lines),
        end=_position(node.end_point, lines),
    )


def _position(point: tuple[int, int], lines: tuple[bytes, ...]) -> Position:
    row, byte_column = point
    line = lines[row] if row < len(lines) else b""
    return Position(line=row + 1, column=character_column(line, byte_column))


def _string_value(node: Node) -> str:
    return _text(node)[1:-1]


def _text(node: Node) -> str:
    return node.text.decode("utf-8")
