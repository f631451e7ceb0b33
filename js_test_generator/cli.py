"""Command-line interface for js-test-generator."""

import argparse
import json
import logging
import sys
from pathlib import Path

from js_test_generator.extractor import ParseError, extract_file
from js_test_generator.generator import (
    TestGenerationRequest,
    build_test_code,
    generate_unit_test,
    resolve_framework,
)
from js_test_generator.project import (
    detect_project,
    get_install_commands,
    get_recommended_framework,
)
from js_test_generator.prompts import (
    DEFAULT_COVERAGE_TARGET,
    get_edge_case_prompt,
    get_mock_generation_prompt,
    get_test_generation_prompt,
)
from js_test_generator.templates import (
    ModelInvariantViolation,
    UnsupportedConventionError,
)

logger = logging.getLogger(__name__)

COMMANDS = ("analyze", "generate", "detect", "prompt")

FRAMEWORK_CHOICES = ("jest", "jasmine", "karma")


def setup_logging(verbose: bool = False):
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="js-test-generator",
        description="Generate unit test scaffolds for JavaScript and TypeScript files",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # analyze subcommand
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Print the structural model of a source file as JSON (default)",
    )
    analyze_parser.add_argument("file", help="Source file to analyze")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a test scaffold for a source file",
    )
    generate_parser.add_argument("file", help="Source file to generate tests for")
    generate_parser.add_argument(
        "--framework",
        "-f",
        choices=FRAMEWORK_CHOICES,
        help="Test framework (default: detected from package.json)",
    )
    generate_parser.add_argument(
        "--output",
        "-o",
        help="Output path (default: <name>.test.<ext> or <name>.spec.<ext> next to the source)",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Do not write the test file",
    )

    # detect subcommand
    detect_parser = subparsers.add_parser(
        "detect",
        help="Detect project type and test framework",
    )
    detect_parser.add_argument("file", help="Any file inside the project")

    # prompt subcommand
    prompt_parser = subparsers.add_parser(
        "prompt",
        help="Print an LLM prompt for refining the generated tests",
    )
    prompt_parser.add_argument("file", help="Source file to build the prompt for")
    prompt_parser.add_argument(
        "--kind",
        choices=("unit", "edge-cases", "mocks"),
        default="unit",
        help="Prompt to build (default: unit)",
    )
    prompt_parser.add_argument(
        "--framework",
        "-f",
        choices=FRAMEWORK_CHOICES,
        help="Test framework (default: detected from package.json)",
    )
    prompt_parser.add_argument(
        "--function",
        help="Function to build an edge-case prompt for (default: first exported)",
    )
    prompt_parser.add_argument(
        "--docs",
        help="Path to framework documentation to embed in the prompt",
    )
    prompt_parser.add_argument(
        "--coverage-target",
        type=int,
        default=DEFAULT_COVERAGE_TARGET,
        help=f"Target coverage percentage (default: {DEFAULT_COVERAGE_TARGET})",
    )

    return parser


def parse_args(args: list[str]) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = create_parser()

    # A bare file path without a subcommand means 'analyze'
    if args and not args[0].startswith("-") and args[0] not in COMMANDS:
        args = ["analyze"] + args

    return parser.parse_args(args)


def run_analyze(file: str) -> int:
    """Run the analyze command."""
    try:
        model = extract_file(file)
    except (ParseError, OSError) as e:
        logger.error(f"Analysis failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(model.to_json())
    return 0


def run_generate(
    file: str, framework: str | None, output: str | None, dry_run: bool = False
) -> int:
    """Run the generate command.

    Returns:
        Exit code (0 for success, 1 if generation failed)
    """
    request = TestGenerationRequest(
        file_path=file,
        framework=framework,
        output_path=output,
        write=not dry_run,
    )
    result = generate_unit_test(request)
    print(result.to_json())

    if not result.success:
        print(f"Error: {'; '.join(result.errors)}", file=sys.stderr)
        return 1
    if not dry_run:
        print(f"Test written to: {result.test_file_path}", file=sys.stderr)
    return 0


def run_detect(file: str) -> int:
    """Run the detect command."""
    info = detect_project(file)
    framework = get_recommended_framework(info)
    output = {
        "project": info.to_dict(),
        "recommended_framework": framework,
        "install_commands": get_install_commands(
            framework, info.type, info.package_manager
        ),
    }
    print(json.dumps(output, indent=2))
    return 0


def run_prompt(
    file: str,
    kind: str,
    framework: str | None,
    function: str | None = None,
    docs: str | None = None,
    coverage_target: int = DEFAULT_COVERAGE_TARGET,
) -> int:
    """Run the prompt command."""
    try:
        model = extract_file(file)
        source_code = Path(file).read_text(encoding="utf-8", errors="replace")
        framework = resolve_framework(file, framework)

        if kind == "mocks":
            prompt = get_mock_generation_prompt(
                [i.source for i in model.imports], framework
            )
        elif kind == "edge-cases":
            prompt = get_edge_case_prompt(
                _function_source(source_code, model, function), framework
            )
        else:
            docs_text = (
                Path(docs).read_text(encoding="utf-8", errors="replace") if docs else ""
            )
            prompt = get_test_generation_prompt(
                source_code,
                framework,
                docs=docs_text,
                coverage_target=coverage_target,
                baseline_tests=build_test_code(model, framework),
            )
    except (
        ParseError,
        UnsupportedConventionError,
        ModelInvariantViolation,
        LookupError,
        OSError,
    ) as e:
        logger.error(f"Could not build prompt: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(prompt)
    return 0


def _function_source(source_code: str, model, name: str | None) -> str:
    """Source lines of the named (or first exported) function."""
    if name is not None:
        candidates = [f for f in model.functions if f.name == name]
    else:
        candidates = model.exported_functions or list(model.functions)
    if not candidates:
        target = f"function '{name}'" if name else "functions"
        raise LookupError(f"No {target} found in {model.file_path}")

    location = candidates[0].location
    lines = source_code.splitlines()
    return "\n".join(lines[location.start.line - 1 : location.end.line])


def run_cli(args: list[str]) -> int:
    """Run the CLI with the given arguments.

    Args:
        args: Command-line arguments (without program name)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        parsed = parse_args(args)
    except SystemExit as e:
        return e.code if e.code else 1

    setup_logging(parsed.verbose)

    if parsed.command is None:
        create_parser().print_help(sys.stderr)
        return 1

    if parsed.command == "analyze":
        return run_analyze(parsed.file)
    elif parsed.command == "generate":
        return run_generate(
            parsed.file, parsed.framework, parsed.output, parsed.dry_run
        )
    elif parsed.command == "detect":
        return run_detect(parsed.file)
    elif parsed.command == "prompt":
        return run_prompt(
            parsed.file,
            parsed.kind,
            parsed.framework,
            parsed.function,
            parsed.docs,
            parsed.coverage_target,
        )

    return 1


def main():
    """Entry point for the CLI."""
    sys.exit(run_cli(sys.argv[1:]))


if __name__ == "__main__":
    main()
