"""Errors raised while generating components."""

from __future__ import annotations

from typing import Optional


class GeneratorError(RuntimeError):
    """A generation step could not be completed."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class InspectionError(GeneratorError):
    """The project's ``self inspect`` output could not be obtained or parsed."""


__all__ = ["GeneratorError", "InspectionError"]
