"""Synthesize placeholder argument values from rendered type strings."""

# Used when the type is absent or not in the table
DEFAULT_MOCK_VALUE = "{}"

MOCK_VALUES = {
    "string": "'test'",
    "number": "42",
    "boolean": "true",
    "array": "[]",
    "object": "{}",
    "date": "new Date()",
    "promise": "Promise.resolve()",
    "void": "",
}


def mock_value(type_name: str | None, omitted: frozenset[str] = frozenset()) -> str:
    """Return a literal standing in for an argument of the given type.

    Args:
        type_name: Rendered type such as "string" or "number[]" (may be None)
        omitted: Table rows a convention does not use; they fall back to
            the default value

    Returns:
        JavaScript literal text
    """
    if not type_name:
        return DEFAULT_MOCK_VALUE

    key = type_name.strip().lower()
    if key.endswith("[]"):
        key = "array"
    if key in omitted:
        return DEFAULT_MOCK_VALUE
    return MOCK_VALUES.get(key, DEFAULT_MOCK_VALUE)


def mock_arguments(params, omitted: frozenset[str] = frozenset()) -> str:
    """Render a comma-separated argument list for a parameter sequence."""
    return ", ".join(mock_value(p.type, omitted) for p in params)
