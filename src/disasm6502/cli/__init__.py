"""
disasm6502 Command-Line Interface
=================================

This package provides the command-line tool for the package:

- **disasm6502**: MOS 6502 disassembler

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["disasm"]
