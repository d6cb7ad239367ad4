"""
CLI entry point for facetsearch.

This module serves as the entry point when facetsearch.cli is executed as a module
with `python -m facetsearch.cli`.
"""

from .main import cli

if __name__ == "__main__":
    cli(prog_name="facetsearch")
