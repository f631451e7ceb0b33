"""Data models for the structural summary of a source file."""

import json
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Position:
    """A point in the source (1-based line, 0-based column counted in characters)."""

    line: int
    column: int


@dataclass(frozen=True)
class Location:
    """Start and end of a declaration."""

    start: Position
    end: Position


@dataclass(frozen=True)
class ParamInfo:
    """A function or method parameter."""

    name: str  # "...rest" for variadic parameters
    type: str | None = None
    optional: bool = False
    default_value: str | None = None


@dataclass(frozen=True)
class FunctionInfo:
    """A top-level function declaration or arrow function binding."""

    name: str
    params: tuple[ParamInfo, ...]
    location: Location
    return_type: str | None = None
    is_async: bool = False
    is_exported: bool = False
    leading_comments: tuple[str, ...] = ()


@dataclass(frozen=True)
class MethodInfo:
    """A class method, including the constructor."""

    name: str
    params: tuple[ParamInfo, ...]
    location: Location
    return_type: str | None = None
    is_async: bool = False
    is_public: bool = True
    is_static: bool = False


@dataclass(frozen=True)
class PropertyInfo:
    """A class field."""

    name: str
    type: str | None = None
    is_public: bool = True


@dataclass(frozen=True)
class ClassInfo:
    """A top-level class declaration."""

    name: str
    location: Location
    methods: tuple[MethodInfo, ...] = ()
    properties: tuple[PropertyInfo, ...] = ()
    is_exported: bool = False

    @property
    def constructor(self) -> MethodInfo | None:
        """The declared constructor, if any."""
        return next((m for m in self.methods if m.name == "constructor"), None)

    @property
    def public_methods(self) -> list[MethodInfo]:
        """Public methods other than the constructor, in declaration order."""
        return [m for m in self.methods if m.is_public and m.name != "constructor"]


@dataclass(frozen=True)
class ImportInfo:
    """An import statement."""

    source: str
    specifiers: tuple[str, ...] = ()
    is_default: bool = False


@dataclass(frozen=True)
class ExportInfo:
    """A symbol exported directly by its declaration."""

    name: str
    kind: str  # "function", "class" or "variable"


@dataclass(frozen=True)
class SourceModel:
    """Complete structural model of one source file."""

    file_path: str
    language: str  # "typescript" or "javascript"
    functions: tuple[FunctionInfo, ...] = ()
    classes: tuple[ClassInfo, ...] = ()
    imports: tuple[ImportInfo, ...] = ()
    exports: tuple[ExportInfo, ...] = ()

    @property
    def is_typed(self) -> bool:
        return self.language == "typescript"

    @property
    def exported_functions(self) -> list[FunctionInfo]:
        return [f for f in self.functions if f.is_exported]

    @property
    def exported_classes(self) -> list[ClassInfo]:
        return [c for c in self.classes if c.is_exported]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "file_path": self.file_path,
            "language": self.language,
            "functions": [_without_none(asdict(f)) for f in self.functions],
            "classes": [_without_none(asdict(c)) for c in self.classes],
            "imports": [asdict(i) for i in self.imports],
            "exports": [asdict(e) for e in self.exports],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def _without_none(value):
    """Recursively drop None values from nested dicts."""
    if isinstance(value, dict):
        return {k: _without_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list | tuple):
        return [_without_none(v) for v in value]
    return value
