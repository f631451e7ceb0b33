"""Jest test template."""

from js_test_generator.models import ClassInfo, FunctionInfo, MethodInfo
from js_test_generator.templates.base import TestTemplate, escape_string


class JestTemplate(TestTemplate):
    """Nested describe blocks per callable, with edge case stubs."""

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
        ]
        if func.params:
            lines.extend(["", *self._edge_case_stub(indent="    ")])
        lines.append("  });")
        return "\n".join(lines)

    def render_class_test(self, cls: ClassInfo, typed: bool = True) -> str:
        lines = [
            f"  describe('{escape_string(cls.name)}', () => {{",
            *self._instance_setup(cls, typed, indent="    "),
            "",
            "    it('should create an instance', () => {",
            "      expect(instance).toBeDefined();",
            f"      expect(instance).toBeInstanceOf({cls.name});",
            "    });",
        ]
        for method in cls.public_methods:
            lines.extend(["", self.render_method_test(method)])
        lines.append("  });")
        return "\n".join(lines)

    def render_method_test(self, method: MethodInfo) -> str:
        lines = [
            f"    describe('{escape_string(method.name)}', () => {{",
            "      it('should be defined', () => {",
            f"        expect(instance.{method.name}).toBeDefined();",
            "      });",
            "",
            f"      it('should execute without errors', {self._async_prefix(method)}() => {{",
            *self._invocation(f"instance.{method.name}", method, indent="        "),
            "      });",
        ]
        if method.params:
            lines.extend(["", *self._edge_case_stub(indent="      ")])
        lines.append("    });")
        return "\n".join(lines)

    def _edge_case_stub(self, indent: str) -> list[str]:
        return [
            f"{indent}it('should handle edge cases', () => {{",
            f"{indent}  // Add edge case tests for different input scenarios",
            f"{indent}  expect(true).toBe(true);",
            f"{indent}}});",
        ]
