"""Detect the project type and test framework from package.json."""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from js_test_generator.project.test_files import get_project_root

logger = logging.getLogger(__name__)

DEFAULT_FRAMEWORK = "jest"

SUPPORTED_FRAMEWORKS = ("jest", "karma", "jasmine")

TEST_CONFIG_FILES = (
    "jest.config.js",
    "jest.config.ts",
    "jest.config.json",
    "karma.conf.js",
    "jasmine.json",
    "vitest.config.js",
    "vitest.config.ts",
)

# First matching dependency wins
PROJECT_TYPE_DEPENDENCIES = (
    ("angular", ("@angular/core",)),
    ("nextjs", ("next",)),
    ("react", ("react",)),
)

FRAMEWORK_DEPENDENCIES = (
    ("jest", ("jest", "@jest/core")),
    ("karma", ("karma", "karma-jasmine")),
    ("jasmine", ("jasmine",)),
    ("vitest", ("vitest",)),
)


@dataclass
class ProjectInfo:
    """What was learned about the project containing a source file."""

    type: str = "unknown"  # "angular", "react", "nextjs", "unknown"
    version: str = ""
    test_framework: str = "none"  # "jest", "karma", "jasmine", "vitest", "none"
    test_framework_version: str | None = None
    package_manager: str = "npm"  # "npm", "yarn", "pnpm"
    has_test_config: bool = False
    config_files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def detect_project(file_path: str | Path) -> ProjectInfo:
    """Inspect the nearest package.json above a source file.

    Args:
        file_path: Any file inside the project

    Returns:
        ProjectInfo; defaults are kept for anything that cannot be determined
    """
    root = get_project_root(file_path)
    info = ProjectInfo(package_manager=detect_package_manager(root))

    package_json = _read_json(root / "package.json")
    if package_json is None:
        logger.info(f"No usable package.json in {root}")
        return info

    deps = {
        **(package_json.get("dependencies") or {}),
        **(package_json.get("devDependencies") or {}),
    }

    for project_type, names in PROJECT_TYPE_DEPENDENCIES:
        name = next((n for n in names if deps.get(n)), None)
        if name is not None:
            info.type = project_type
            info.version = deps[name]
            break

    for framework, names in FRAMEWORK_DEPENDENCIES:
        name = next((n for n in names if deps.get(n)), None)
        if name is not None:
            info.test_framework = framework
            info.test_framework_version = deps.get(names[0]) or deps[name]
            break

    for config_file in TEST_CONFIG_FILES:
        if (root / config_file).is_file():
            info.has_test_config = True
            info.config_files.append(config_file)

    if info.type == "angular" and (root / "angular.json").is_file():
        info.config_files.append("angular.json")

    logger.info(
        f"Detected {info.type} project using {info.test_framework} "
        f"({info.package_manager}) at {root}"
    )
    return info


def detect_package_manager(project_root: Path) -> str:
    """Infer the package manager from lock files."""
    if (project_root / "pnpm-lock.yaml").is_file():
        return "pnpm"
    if (project_root / "yarn.lock").is_file():
        return "yarn"
    return "npm"


def get_recommended_framework(info: ProjectInfo) -> str:
    """Keep a supported framework already in use, else pick by project type."""
    if info.test_framework in SUPPORTED_FRAMEWORKS:
        return info.test_framework
    if info.type == "angular":
        return "karma"
    return DEFAULT_FRAMEWORK


def get_install_commands(
    framework: str, project_type: str, package_manager: str
) -> list[str]:
    """Commands that would install a test framework as dev dependencies.

    The commands are only returned; nothing is executed.
    """
    if package_manager == "yarn":
        install = "yarn add -D"
    elif package_manager == "pnpm":
        install = "pnpm add -D"
    else:
        install = "npm install --save-dev"

    if framework == "jest":
        if project_type == "nextjs":
            packages = "jest @testing-library/react @testing-library/jest-dom jest-environment-jsdom"
        elif project_type == "react":
            packages = "jest @testing-library/react @testing-library/jest-dom @babel/preset-react"
        elif project_type == "angular":
            packages = "jest @types/jest jest-preset-angular"
        else:
            packages = "jest @types/jest"
    elif framework == "karma":
        packages = "karma karma-jasmine karma-chrome-launcher jasmine-core @types/jasmine"
    elif framework == "jasmine":
        packages = "jasmine @types/jasmine"
    else:
        return []

    return [f"{install} {packages}"]


def _read_json(path: Path) -> dict | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return None
    return data if isinstance(data, dict) else None
