"""
Module entrypoint for the cursorlist CLI.

This file exists so that `python -m cursorlist ...` works consistently in all
environments, including when the console-script wrapper is not installed.
"""

from __future__ import annotations

from cursorlist.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
