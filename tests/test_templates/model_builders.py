"""Builders for hand-made source models."""

from js_test_generator.models import (
    ExportInfo,
    FunctionInfo,
    Location,
    MethodInfo,
    Position,
    SourceModel,
)

LOC = Location(start=Position(line=1, column=0), end=Position(line=1, column=10))


def make_function(name, params=(), is_async=False, is_exported=True):
    return FunctionInfo(
        name=name,
        params=tuple(params),
        location=LOC,
        is_async=is_async,
        is_exported=is_exported,
    )


def make_method(name, params=(), is_async=False, is_public=True):
    return MethodInfo(
        name=name,
        params=tuple(params),
        location=LOC,
        is_async=is_async,
        is_public=is_public,
    )


def make_model(file_path="src/math.ts", functions=(), classes=()):
    exports = [ExportInfo(f.name, "function") for f in functions if f.is_exported]
    exports += [ExportInfo(c.name, "class") for c in classes if c.is_exported]
    return SourceModel(
        file_path=file_path,
        language="typescript" if file_path.endswith((".ts", ".tsx")) else "javascript",
        functions=tuple(functions),
        classes=tuple(classes),
        exports=tuple(exports),
    )
