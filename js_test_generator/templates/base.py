"""Shared structure of the test templates."""

import logging
import re
from abc import ABC, abstractmethod

from js_test_generator.models import ClassInfo, FunctionInfo, MethodInfo, SourceModel
from js_test_generator.templates.mock_values import mock_arguments

logger = logging.getLogger(__name__)

SOURCE_EXTENSION_PATTERN = re.compile(r"\.[mc]?(ts|js)x?$")


def escape_string(s: str) -> str:
    """Escape a string for use in single-quoted JavaScript strings."""
    return s.replace("\\", "\\\\").replace("'", "\\'")


def module_name(file_path: str) -> str:
    """Name of the module under test: last path segment without extension."""
    last_segment = file_path.replace("\\", "/").rsplit("/", 1)[-1]
    return SOURCE_EXTENSION_PATTERN.sub("", last_segment) or "module"


class TestTemplate(ABC):
    """Renders a test file for one test-authoring convention.

    Subclasses decide how functions, classes and methods are laid out. The
    import line and the outer suite are the same for every convention.
    """

    __test__ = False  # not a pytest test class

    # Mock value table rows this convention does not use
    omitted_mock_types: frozenset[str] = frozenset()

    def render_imports(self, model: SourceModel) -> str:
        """Import every exported name from the module under test."""
        names = [e.name for e in model.exports]
        if not names:
            return ""
        return f"import {{ {', '.join(names)} }} from './{module_name(model.file_path)}';"

    def render_suite(self, model: SourceModel) -> str:
        """Render the top-level describe block for the module."""
        blocks = [self.render_function_test(f) for f in model.exported_functions]
        blocks.extend(
            self.render_class_test(c, typed=model.is_typed)
            for c in model.exported_classes
        )

        lines = [f"describe('{escape_string(module_name(model.file_path))}', () => {{"]
        if blocks:
            lines.append("\n\n".join(blocks))
        lines.append("});")
        return "\n".join(lines) + "\n"

    @abstractmethod
    def render_function_test(self, func: FunctionInfo) -> str:
        """Render the tests for one exported function."""

    @abstractmethod
    def render_class_test(self, cls: ClassInfo, typed: bool = True) -> str:
        """Render the tests for one exported class."""

    @abstractmethod
    def render_method_test(self, method: MethodInfo) -> str:
        """Render the tests for one public method of an instance."""

    def _invocation(
        self, callee: str, target: FunctionInfo | MethodInfo, indent: str
    ) -> list[str]:
        """Call with mock arguments and assert the result is defined."""
        args = mock_arguments(target.params, self.omitted_mock_types)
        await_ = "await " if target.is_async else ""
        return [
            f"{indent}const result = {await_}{callee}({args});",
            f"{indent}expect(result).toBeDefined();",
        ]

    def _instance_setup(self, cls: ClassInfo, typed: bool, indent: str) -> list[str]:
        """Declare the instance and construct it before each test."""
        declaration = f"let instance: {cls.name};" if typed else "let instance;"
        constructor = cls.constructor
        args = (
            mock_arguments(constructor.params, self.omitted_mock_types)
            if constructor is not None
            else ""
        )
        return [
            f"{indent}{declaration}",
            "",
            f"{indent}beforeEach(() => {{",
            f"{indent}  instance = new {cls.name}({args});",
            f"{indent}}});",
        ]

    @staticmethod
    def _async_prefix(target: FunctionInfo | MethodInfo) -> str:
        return "async " if target.is_async else ""
