"""Test skeleton synthesis for the supported test conventions."""

from js_test_generator.templates.base import TestTemplate, escape_string, module_name
from js_test_generator.templates.jasmine import JasmineTemplate
from js_test_generator.templates.jest import JestTemplate
from js_test_generator.templates.mock_values import mock_arguments, mock_value
from js_test_generator.templates.synthesizer import (
    ModelInvariantViolation,
    SynthesizedTest,
    UnsupportedConventionError,
    get_template,
    synthesize,
    validate_model,
)

__all__ = [
    # Templates
    "TestTemplate",
    "JestTemplate",
    "JasmineTemplate",
    "escape_string",
    "module_name",
    # Mock values
    "mock_value",
    "mock_arguments",
    # Synthesis
    "SynthesizedTest",
    "UnsupportedConventionError",
    "ModelInvariantViolation",
    "get_template",
    "synthesize",
    "validate_model",
]
