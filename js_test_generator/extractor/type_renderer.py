"""Render TypeScript type nodes to short canonical strings.

Only primitives, arrays of renderable types and plain named references are
kept. Unions, generics, tuples, function types, intersections, qualified
names and object literal types all collapse to ``any``; mock value synthesis
only distinguishes these coarse categories.
"""

from tree_sitter import Node

FALLBACK_TYPE = "any"

# predefined_type keywords are rendered as written
_LITERAL_KEYWORD_TYPES = frozenset({"null", "undefined"})


def render_type(node: Node | None) -> str:
    """Render a type node, e.g. ``string``, ``number[]``, ``User`` or ``any``."""
    if node is None:
        return FALLBACK_TYPE

    kind = node.type
    if kind == "predefined_type":
        return node.text.decode("utf-8")
    if kind == "type_identifier":
        return node.text.decode("utf-8")
    if kind == "array_type":
        element = _first_named_child(node)
        return f"{render_type(element)}[]"
    if kind == "parenthesized_type":
        return render_type(_first_named_child(node))
    if kind == "literal_type":
        literal = _first_named_child(node)
        if literal is not None and literal.type in _LITERAL_KEYWORD_TYPES:
            return literal.type
    return FALLBACK_TYPE


def render_annotation(node: Node | None) -> str | None:
    """Render a ``type_annotation`` node (``: T``), or None when absent."""
    if node is None:
        return None
    if node.type != "type_annotation":
        # asserts / type predicate annotations on return types
        return FALLBACK_TYPE
    return render_type(_first_named_child(node))


def _first_named_child(node: Node) -> Node | None:
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None
