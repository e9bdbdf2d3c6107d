"""Textual interface for depsize."""

from depsize.tui.app import DepsizeApp, run_tui

__all__ = ["DepsizeApp", "run_tui"]
