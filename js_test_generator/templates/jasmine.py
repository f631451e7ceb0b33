"""Jasmine/Karma test template."""

from js_test_generator.models import ClassInfo, FunctionInfo, MethodInfo
from js_test_generator.templates.base import TestTemplate, escape_string


class JasmineTemplate(TestTemplate):
    """Flat method specs inside the class block and no edge case stubs.

    Date and Promise parameters get the default mock value.
    """

    omitted_mock_types = frozenset({"date", "promise"})

    def render_function_test(self, func: FunctionInfo) -> str:
        lines = [
            f"  describe('{escape_string(func.name)}', () => {{",
            "    it('should be defined', () => {",
            f"      expect({func.name}).toBeDefined();",
            "    });",
            "",
            f"    it('should execute without errors', {self._async_prefix(func)}() => {{",
            *self._invocation(func.name, func, indent="      "),
            "    });",
            "  });",
        ]
        return "\n".join(lines)

    def render_class_test(self, cls: ClassInfo, typed: bool = True) -> str:
        lines = [
            f"  describe('{escape_string(cls.name)}', () => {{",
            *self._instance_setup(cls, typed, indent="    "),
            "",
            "    it('should create an instance', () => {",
            "      expect(instance).toBeDefined();",
            "    });",
        ]
        for method in cls.public_methods:
            lines.extend(["", self.render_method_test(method)])
        lines.append("  });")
        return "\n".join(lines)

    def render_method_test(self, method: MethodInfo) -> str:
        name = escape_string(method.name)
        lines = [
            f"    it('{name} should be defined', () => {{",
            f"      expect(instance.{method.name}).toBeDefined();",
            "    });",
            "",
            f"    it('{name} should execute without errors', {self._async_prefix(method)}() => {{",
            *self._invocation(f"instance.{method.name}", method, indent="      "),
            "    });",
        ]
        return "\n".join(lines)
