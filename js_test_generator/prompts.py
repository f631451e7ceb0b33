"""Build LLM prompts that refine the generated test scaffolds."""

import logging

logger = logging.getLogger(__name__)

DEFAULT_COVERAGE_TARGET = 85

# Framework documentation beyond this is cut off
MAX_DOCS_CHARS = 10000

PROMPT_DEFINITIONS = {
    "generate-unit-test": {
        "description": "Generate comprehensive unit tests for a given source file",
        "arguments": [
            {"name": "sourceCode", "description": "The source code to generate tests for", "required": True},
            {"name": "framework", "description": "Testing framework (jest, jasmine, karma)", "required": True},
            {"name": "projectType", "description": "Project type (angular, react, nextjs)", "required": False},
            {"name": "coverageTarget", "description": "Target coverage percentage (default: 85)", "required": False},
        ],
    },
    "generate-edge-cases": {
        "description": "Generate edge case tests for a function",
        "arguments": [
            {"name": "functionCode", "description": "The function code to test", "required": True},
            {"name": "framework", "description": "Testing framework", "required": True},
        ],
    },
    "generate-mocks": {
        "description": "Generate mock implementations for dependencies",
        "arguments": [
            {"name": "dependencies", "description": "List of dependencies to mock", "required": True},
            {"name": "framework", "description": "Testing framework", "required": True},
        ],
    },
}


def get_test_generation_prompt(
    source_code: str,
    framework: str,
    docs: str = "",
    coverage_target: int = DEFAULT_COVERAGE_TARGET,
    baseline_tests: str | None = None,
) -> str:
    """Prompt asking for complete unit tests of a source file.

    Args:
        source_code: The code under test
        framework: Test framework name
        docs: Framework documentation, truncated to MAX_DOCS_CHARS
        coverage_target: Coverage percentage to aim for
        baseline_tests: Generated scaffold the model should extend

    Returns:
        The prompt text
    """
    if len(docs) > MAX_DOCS_CHARS:
        logger.info(f"Truncating documentation from {len(docs)} to {MAX_DOCS_CHARS} chars")
        docs = docs[:MAX_DOCS_CHARS]

    sections = [
        "You are an expert test engineer. Generate comprehensive unit tests for the following code.",
        f"TESTING FRAMEWORK: {framework}",
    ]
    if docs:
        sections.append(f"FRAMEWORK DOCUMENTATION:\n{docs}")
    sections.append(f"SOURCE CODE TO TEST:\n```\n{source_code}\n```")
    if baseline_tests:
        sections.append(
            f"BASELINE TESTS (extend these, keep their structure):\n```\n{baseline_tests}\n```"
        )
    sections.append(
        f"""REQUIREMENTS:
1. Generate tests for ALL public functions and methods
2. Target minimum {coverage_target}% code coverage
3. Include edge cases and error handling tests
4. Use appropriate matchers and assertions
5. Follow {framework} best practices
6. Include setup and teardown where needed
7. Mock external dependencies
8. Test both success and failure scenarios"""
    )
    sections.append("Generate ONLY the test code, properly formatted and ready to run.")
    return "\n\n".join(sections)


def get_edge_case_prompt(function_code: str, framework: str) -> str:
    """Prompt asking for edge case tests of a single function."""
    return f"""Generate edge case tests for this function using {framework}:

```
{function_code}
```

Include tests for:
- Null/undefined inputs
- Empty strings/arrays
- Boundary values
- Type errors
- Invalid inputs
- Async errors (if applicable)"""


def get_mock_generation_prompt(dependencies: list[str], framework: str) -> str:
    """Prompt asking for mocks of the given dependencies."""
    dependency_list = "\n".join(dependencies)
    return f"""Generate mock implementations for these dependencies using {framework}:

{dependency_list}

Create realistic mocks with:
- Proper method signatures
- Spy/mock functions
- Return value configuration
- Call verification"""
