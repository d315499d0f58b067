"""Module entry-point for `python -m crimelog`."""

from __future__ import annotations

from crimelog.cli.app import console_main

if __name__ == "__main__":
    console_main()
