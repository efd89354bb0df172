"""Component kinds, entity names and field definitions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from .errors import GeneratorError

_ENTITY_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ComponentType(str, Enum):
    COMMAND = "command"
    QUERY = "query"
    WORKER = "worker"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Field:
    """A ``name:type`` pair given on the command line."""

    name: str
    type: str

    @property
    def exported_name(self) -> str:
        return self.name[:1].upper() + self.name[1:]


def to_title_case(value: str) -> str:
    """``create_post`` / ``schedule-publication`` -> ``CreatePost`` / ``SchedulePublication``."""

    parts = re.split(r"[_-]", value)
    return "".join(part[:1].upper() + part[1:].lower() for part in parts if part)


def to_snake_case(value: str) -> str:
    return value.replace("-", "_")


def validate_entity_name(name: str) -> str:
    if not name:
        raise GeneratorError("entity name cannot be empty")
    if not _ENTITY_PATTERN.match(name):
        raise GeneratorError(
            f"invalid entity name {name!r}: must start with a letter and contain "
            "only letters, numbers, underscores and hyphens"
        )
    return name


def parse_feature_entity(value: str) -> Tuple[str, str]:
    """Split ``posts/create`` into ``("posts", "create")``."""

    parts = value.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise GeneratorError(f"expected '<feature>/<name>', got {value!r}")
    feature, entity = parts
    if not _IDENTIFIER_PATTERN.match(feature):
        raise GeneratorError(f"feature name {feature!r} is not a valid Go identifier")
    return feature, validate_entity_name(entity)


def is_go_identifier(value: str) -> bool:
    return bool(_IDENTIFIER_PATTERN.match(value))


def parse_field(value: str) -> Field:
    """Parse ``postID:string`` into a :class:`Field`."""

    parts = value.split(":")
    if len(parts) != 2:
        raise GeneratorError(f"expected format 'name:type', got {value!r}")
    name, type_ = (part.strip() for part in parts)
    if not name:
        raise GeneratorError("field name cannot be empty")
    if not type_:
        raise GeneratorError("field type cannot be empty")
    if not is_go_identifier(name):
        raise GeneratorError(f"field name {name!r} is not a valid Go identifier")
    return Field(name=name, type=type_)


def parse_fields(values: Iterable[str]) -> List[Field]:
    return [parse_field(value) for value in values]


__all__ = [
    "ComponentType",
    "Field",
    "to_title_case",
    "to_snake_case",
    "validate_entity_name",
    "parse_feature_entity",
    "is_go_identifier",
    "parse_field",
    "parse_fields",
]
