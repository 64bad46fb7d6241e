"""
symsub Command-Line Interface
=============================

- **symsub**: token search and replace over a file

The tool is a Click-based CLI application with help text and unified
error reporting (see symsub.cli.errors).
"""

__all__ = ["symsub"]
