"""Mindful Journal application package."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["main"]


def main() -> None:
    from .ui.app import run_gui

    run_gui()
