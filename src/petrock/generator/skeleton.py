"""Access to the Go templates shipped as package data."""

from __future__ import annotations

from importlib import resources
from typing import TYPE_CHECKING

from .errors import GeneratorError

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

SKELETON_PACKAGE = "petrock.skeleton"


def _resolve(path: str) -> Traversable:
    node = resources.files(SKELETON_PACKAGE)
    for part in path.split("/"):
        node = node.joinpath(part)
    return node


def exists(path: str) -> bool:
    return _resolve(path).is_file()


def read(path: str) -> str:
    node = _resolve(path)
    if not node.is_file():
        raise GeneratorError(f"skeleton file {path!r} not found", path=path)
    return node.read_text(encoding="utf-8")


__all__ = ["SKELETON_PACKAGE", "exists", "read"]
