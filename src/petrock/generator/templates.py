"""Placeholder substitution and skeleton-to-target file maps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

from .naming import ComponentType, to_snake_case, to_title_case

FEATURE_PLACEHOLDER = "petrock_example_feature_name"
MODULE_PLACEHOLDER = "github.com/petrock/example_module_path"

_STRUCT_SUFFIX = {
    ComponentType.COMMAND: "Command",
    ComponentType.QUERY: "Query",
    ComponentType.WORKER: "Worker",
}
_METHOD_PREFIX = {
    ComponentType.COMMAND: "Handle",
    ComponentType.QUERY: "Handle",
    ComponentType.WORKER: "Process",
}
_PACKAGE_DIR = {
    ComponentType.COMMAND: "commands",
    ComponentType.QUERY: "queries",
    ComponentType.WORKER: "workers",
}

# Files created once per feature and left alone afterwards.
_SHARED_FILES: Dict[ComponentType, Dict[str, str]] = {
    ComponentType.COMMAND: {
        "feature/commands/base.go": "{{feature}}/commands/base.go",
        "feature/commands/register.go": "{{feature}}/commands/register.go",
    },
    ComponentType.QUERY: {
        "feature/queries/base.go": "{{feature}}/queries/base.go",
    },
    ComponentType.WORKER: {
        "feature/workers/types.go": "{{feature}}/workers/types.go",
    },
}
_ENTITY_FILES: Dict[ComponentType, Dict[str, str]] = {
    ComponentType.COMMAND: {
        "feature/commands/entity.go": "{{feature}}/commands/{{entity_file}}.go",
    },
    ComponentType.QUERY: {
        "feature/queries/entity.go": "{{feature}}/queries/{{entity_file}}.go",
    },
    ComponentType.WORKER: {
        "feature/workers/main.go": "{{feature}}/workers/main.go",
    },
}

FEATURE_FILES = {"feature/main.go": "{{feature}}/main.go"}
FEATURES_REGISTRY_FILE = "cmd/features.go"


@dataclass(frozen=True, slots=True)
class Placeholders:
    component_type: ComponentType
    feature: str
    entity: str
    module_path: str
    struct_name: str
    method_name: str
    package_path: str

    @property
    def entity_file(self) -> str:
        return to_snake_case(self.entity)


def build_placeholders(
    component_type: ComponentType, feature: str, entity: str, module_path: str
) -> Placeholders:
    """Derive names, e.g. ``posts/create`` -> ``CreateCommand`` / ``HandleCreate``."""

    component_type = ComponentType(component_type)
    title = to_title_case(entity)
    return Placeholders(
        component_type=component_type,
        feature=feature,
        entity=entity,
        module_path=module_path,
        struct_name=title + _STRUCT_SUFFIX[component_type],
        method_name=_METHOD_PREFIX[component_type] + title,
        package_path=f"{module_path}/{feature}/{_PACKAGE_DIR[component_type]}",
    )


def replacements(placeholders: Placeholders) -> Dict[str, str]:
    """Return placeholder tokens mapped to values, longest token first."""

    mapping = {
        FEATURE_PLACEHOLDER: placeholders.feature,
        MODULE_PLACEHOLDER: placeholders.module_path,
        "{{feature}}": placeholders.feature,
        "{{entity}}": placeholders.entity,
        "{{entity_file}}": placeholders.entity_file,
        "{{module_path}}": placeholders.module_path,
        "{{struct}}": placeholders.struct_name,
        "{{method}}": placeholders.method_name,
        "{{package}}": placeholders.package_path,
    }
    return dict(sorted(mapping.items(), key=lambda item: len(item[0]), reverse=True))


def feature_replacements(feature: str, module_path: str) -> Dict[str, str]:
    return {
        MODULE_PLACEHOLDER: module_path,
        FEATURE_PLACEHOLDER: feature,
        "{{module_path}}": module_path,
        "{{feature}}": feature,
    }


def apply_replacements(text: str, mapping: Mapping[str, str]) -> str:
    for token, value in mapping.items():
        text = text.replace(token, value)
    return text


def shared_files(component_type: ComponentType) -> Dict[str, str]:
    return dict(_SHARED_FILES[ComponentType(component_type)])


def entity_files(component_type: ComponentType) -> Dict[str, str]:
    return dict(_ENTITY_FILES[ComponentType(component_type)])


def template_files(component_type: ComponentType) -> Dict[str, str]:
    """Map skeleton paths to target path templates for ``component_type``."""

    return {**shared_files(component_type), **entity_files(component_type)}


__all__ = [
    "FEATURE_PLACEHOLDER",
    "MODULE_PLACEHOLDER",
    "FEATURE_FILES",
    "FEATURES_REGISTRY_FILE",
    "Placeholders",
    "build_placeholders",
    "replacements",
    "feature_replacements",
    "apply_replacements",
    "shared_files",
    "entity_files",
    "template_files",
]
