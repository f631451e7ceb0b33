"""Allow running as ``python -m js_test_generator``."""

from js_test_generator.cli import main

main()
