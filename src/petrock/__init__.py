"""Scaffolding for petrock projects, with a small buffer editor for source edits."""

__all__ = [
    "cli",
    "ed",
    "generator",
    "runtime",
]

__version__ = "0.1.0"
