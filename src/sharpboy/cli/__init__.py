"""
SharpBoy Command-Line Interface
===============================

This package provides the command-line tool for the opcode reference:

- **sbops**: print opcode tables, show one opcode, search instructions

The tool is a Click-based CLI application with help text and unified error
reporting (see ``sharpboy.cli.errors``).

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

__all__ = ["sbops"]
