"""Generate unit test scaffolds for JavaScript and TypeScript source files."""

__version__ = "0.1.0"
