"""Project inspection and test file placement."""

from js_test_generator.project.detector import (
    ProjectInfo,
    detect_package_manager,
    detect_project,
    get_install_commands,
    get_recommended_framework,
)
from js_test_generator.project.test_files import (
    find_file_up,
    get_project_root,
    get_test_file_name,
    write_test_file,
)

__all__ = [
    # Detection
    "ProjectInfo",
    "detect_project",
    "detect_package_manager",
    "get_recommended_framework",
    "get_install_commands",
    # Test files
    "find_file_up",
    "get_project_root",
    "get_test_file_name",
    "write_test_file",
]
