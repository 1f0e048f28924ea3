"""Command-line interface package for inspecting and checking plans."""

from .app import build_matcher, build_parser, load_plan, main, render_table, run, summarize

__all__ = [
    "build_matcher",
    "build_parser",
    "load_plan",
    "main",
    "render_table",
    "run",
    "summarize",
]
