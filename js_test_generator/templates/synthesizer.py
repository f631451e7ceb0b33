"""Turn a SourceModel into test source for a chosen convention."""

import logging
from collections import Counter
from dataclasses import dataclass

from js_test_generator.models import SourceModel
from js_test_generator.templates.base import TestTemplate
from js_test_generator.templates.jasmine import JasmineTemplate
from js_test_generator.templates.jest import JestTemplate

logger = logging.getLogger(__name__)

TEMPLATES: dict[str, type[TestTemplate]] = {
    "jest": JestTemplate,
    "jasmine": JasmineTemplate,
    "karma": JasmineTemplate,
}


class UnsupportedConventionError(Exception):
    """No template exists for the requested test convention."""

    def __init__(self, convention: str):
        supported = ", ".join(sorted(TEMPLATES))
        super().__init__(
            f"Unsupported test convention '{convention}' (supported: {supported})"
        )
        self.convention = convention


class ModelInvariantViolation(Exception):
    """The model's exports do not match its declarations."""


@dataclass(frozen=True)
class SynthesizedTest:
    """Generated import block and suite body."""

    imports: str
    suite_body: str

    def combined(self) -> str:
        """Full test file content."""
        return f"{self.imports}\n\n{self.suite_body}"


def get_template(convention: str) -> TestTemplate:
    """Return the template for a convention identifier.

    Raises:
        UnsupportedConventionError: If no template matches
    """
    template_cls = TEMPLATES.get(convention.strip().lower())
    if template_cls is None:
        raise UnsupportedConventionError(convention)
    return template_cls()


def validate_model(model: SourceModel) -> None:
    """Check that exports and exported declarations correspond one to one.

    Raises:
        ModelInvariantViolation: If an export has no single matching
            declaration, or an exported declaration has no export entry
    """
    declared = Counter(
        [f.name for f in model.exported_functions]
        + [c.name for c in model.exported_classes]
    )
    listed = Counter(e.name for e in model.exports)

    for name, count in listed.items():
        if declared[name] != count:
            raise ModelInvariantViolation(
                f"Export '{name}' in {model.file_path} has {declared[name]} "
                f"matching exported declarations, expected {count}"
            )
    for name in declared:
        if name not in listed:
            raise ModelInvariantViolation(
                f"Exported declaration '{name}' in {model.file_path} "
                "has no export entry"
            )
    if any(not f.name for f in model.functions):
        raise ModelInvariantViolation(f"Unnamed function in {model.file_path}")


def synthesize(model: SourceModel, convention: str) -> SynthesizedTest:
    """Render the imports and suite body for a model.

    Args:
        model: Extracted source model
        convention: "jest", "jasmine" or "karma"

    Returns:
        SynthesizedTest holding the import block and suite body

    Raises:
        UnsupportedConventionError: If the convention is unknown
        ModelInvariantViolation: If the model is internally inconsistent
    """
    template = get_template(convention)
    validate_model(model)

    imports = template.render_imports(model)
    suite_body = template.render_suite(model)
    logger.info(
        f"Synthesized {convention} tests for {model.file_path}: "
        f"{len(model.exported_functions)} functions, "
        f"{len(model.exported_classes)} classes"
    )
    return SynthesizedTest(imports=imports, suite_body=suite_body)
