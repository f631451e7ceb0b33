"""Generation pipeline: analyze a source file and write its test scaffold."""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from js_test_generator.extractor import ParseError, extract
from js_test_generator.models import SourceModel
from js_test_generator.project import (
    detect_project,
    get_recommended_framework,
    get_test_file_name,
    write_test_file,
)
from js_test_generator.templates import (
    ModelInvariantViolation,
    UnsupportedConventionError,
    synthesize,
)

logger = logging.getLogger(__name__)


@dataclass
class TestGenerationRequest:
    """What to generate and where to put it."""

    __test__ = False  # not a pytest test class

    file_path: str
    framework: str | None = None  # detected from package.json when None
    output_path: str | None = None
    write: bool = True


@dataclass
class TestGenerationResult:
    """Outcome of one generation; failures carry their error messages."""

    __test__ = False  # not a pytest test class

    success: bool
    test_file_path: str = ""
    test_code: str = ""
    original_code: str = ""
    framework: str | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def resolve_framework(file_path: str, framework: str | None) -> str:
    """Use the requested framework, or recommend one for the project."""
    if framework:
        return framework
    recommended = get_recommended_framework(detect_project(file_path))
    logger.info(f"No framework requested, using {recommended} for {file_path}")
    return recommended


def build_test_code(model: SourceModel, framework: str) -> str:
    """Synthesize the full test file text for a model."""
    return synthesize(model, framework).combined()


def generate_unit_test(request: TestGenerationRequest) -> TestGenerationResult:
    """Generate (and by default write) a test scaffold for a source file.

    Args:
        request: The generation request

    Returns:
        TestGenerationResult; errors are reported in the result, not raised
    """
    logger.info(f"Generating tests for {request.file_path}")
    framework = None
    try:
        # undecodable bytes become U+FFFD
        original_code = Path(request.file_path).read_text(
            encoding="utf-8", errors="replace"
        )
        model = extract(original_code, request.file_path)
        framework = resolve_framework(request.file_path, request.framework)
        test_code = build_test_code(model, framework)

        test_file_path = Path(
            request.output_path or get_test_file_name(request.file_path, framework)
        )
        if request.write:
            write_test_file(test_file_path, test_code)

    except ParseError as e:
        logger.error(f"Could not parse {request.file_path}: {e}")
        return TestGenerationResult(success=False, framework=framework, errors=[str(e)])
    except (UnsupportedConventionError, ModelInvariantViolation) as e:
        logger.error(f"Could not generate tests for {request.file_path}: {e}")
        return TestGenerationResult(success=False, framework=framework, errors=[str(e)])
    except OSError as e:
        logger.error(f"File error for {request.file_path}: {e}")
        return TestGenerationResult(success=False, framework=framework, errors=[str(e)])

    logger.info(f"Generated {framework} tests for {request.file_path}")
    return TestGenerationResult(
        success=True,
        test_file_path=str(test_file_path),
        test_code=test_code,
        original_code=original_code,
        framework=framework,
    )
