"""Tests for test skeleton synthesis."""

from dataclasses import replace

import pytest
from model_builders import make_function, make_model

from js_test_generator.extractor import extract
from js_test_generator.models import ExportInfo
from js_test_generator.templates import (
    JasmineTemplate,
    JestTemplate,
    ModelInvariantViolation,
    UnsupportedConventionError,
    get_template,
    synthesize,
    validate_model,
)


class TestGetTemplate:
    """Tests for get_template function."""

    @pytest.mark.parametrize(
        "convention, template_cls",
        [
            ("jest", JestTemplate),
            ("jasmine", JasmineTemplate),
            ("karma", JasmineTemplate),
            ("Karma ", JasmineTemplate),
        ],
    )
    def test_known_conventions(self, convention, template_cls):
        """Known identifiers map to their template."""
        assert isinstance(get_template(convention), template_cls)

    def test_unknown_convention(self):
        """Unknown identifiers are rejected."""
        with pytest.raises(UnsupportedConventionError) as exc_info:
            get_template("mocha")

        assert exc_info.value.convention == "mocha"
        assert "jest" in str(exc_info.value)


class TestValidateModel:
    """Tests for validate_model function."""

    def test_consistent_model_passes(self, add_model):
        """A model built from its declarations is valid."""
        validate_model(add_model)

    def test_orphan_export(self, add_model):
        """An export without a declaration is rejected."""
        model = replace(
            add_model, exports=add_model.exports + (ExportInfo("ghost", "function"),)
        )

        with pytest.raises(ModelInvariantViolation, match="ghost"):
            validate_model(model)

    def test_exported_declaration_without_entry(self, add_model):
        """An exported declaration missing from exports is rejected."""
        model = replace(add_model, exports=())

        with pytest.raises(ModelInvariantViolation, match="add"):
            validate_model(model)

    def test_export_of_unexported_declaration(self):
        """An export entry must point at an exported declaration."""
        model = make_model(functions=[make_function("hidden", is_exported=False)])
        model = replace(model, exports=(ExportInfo("hidden", "function"),))

        with pytest.raises(ModelInvariantViolation):
            validate_model(model)


class TestSynthesize:
    """Tests for synthesize function."""

    def given_source(self, source, file_path):
        self.model = extract(source, file_path)

    def when_synthesized(self, convention):
        self.result = synthesize(self.model, convention)

    def then_suite_contains(self, *fragments):
        for fragment in fragments:
            assert fragment in self.result.suite_body

    def test_add_scenario(self):
        """An exported add function gets existence and invocation assertions."""
        self.given_source(
            "export function add(a: number, b: number): number { return a+b; }",
            "src/math.ts",
        )
        self.when_synthesized("jest")
        assert self.result.imports == "import { add } from './math';"
        self.then_suite_contains("expect(add).toBeDefined();", "add(42, 42)")

    def test_unexported_class_scenario(self):
        """Unexported classes get no test block."""
        self.given_source(
            "class Counter { private count = 0; increment() {} }", "counter.ts"
        )
        self.when_synthesized("jest")
        assert "Counter" not in self.result.suite_body
        assert self.result.imports == ""

    def test_unknown_convention_produces_nothing(self, add_model):
        """An unknown convention fails before any text is produced."""
        with pytest.raises(UnsupportedConventionError):
            synthesize(add_model, "unknown-convention")

    def test_invalid_model_is_refused(self, add_model):
        """Inconsistent models are not rendered."""
        with pytest.raises(ModelInvariantViolation):
            synthesize(replace(add_model, exports=()), "jest")

    @pytest.mark.parametrize("convention", ["jest", "jasmine"])
    def test_resynthesis_is_identical(self, add_model, convention):
        """Synthesizing twice gives byte-identical output."""
        assert synthesize(add_model, convention) == synthesize(add_model, convention)

    @pytest.mark.parametrize("convention", ["jest", "karma"])
    def test_order_follows_declarations(self, convention):
        """Functions then classes, each in declaration order."""
        self.given_source(
            "export class Beta {}\n"
            "export function zeta() {}\n"
            "export class Alpha {}\n"
            "export const mid = () => 1;\n",
            "order.js",
        )
        self.when_synthesized(convention)
        body = self.result.suite_body
        positions = [
            body.index(f"describe('{name}'") for name in ["zeta", "mid", "Beta", "Alpha"]
        ]
        assert positions == sorted(positions)

    def test_combined_output(self, add_model):
        """The combined file joins imports and suite with a blank line."""
        result = synthesize(add_model, "jest")

        assert result.combined() == f"{result.imports}\n\n{result.suite_body}"
        assert result.combined().startswith("import { add } from './math';\n\ndescribe(")

    def test_untyped_class_scaffold(self):
        """JavaScript classes are declared without type annotations."""
        self.given_source(
            "export class Store { constructor(initial) {} save(key, value) {} }",
            "store.js",
        )
        self.when_synthesized("jasmine")
        self.then_suite_contains(
            "let instance;",
            "instance = new Store({});",
            "const result = instance.save({}, {});",
        )
