"""Component generation on top of the packaged Go skeleton."""

from .component import ComponentGenerator, GenerationResult
from .errors import GeneratorError, InspectionError
from .inspector import ComponentInfo, ComponentInspector, InspectResult, component_exists
from .naming import (
    ComponentType,
    Field,
    parse_feature_entity,
    parse_field,
    parse_fields,
    to_title_case,
    validate_entity_name,
)
from .templates import Placeholders, build_placeholders, replacements

__all__ = [
    "ComponentGenerator",
    "GenerationResult",
    "GeneratorError",
    "InspectionError",
    "ComponentInfo",
    "ComponentInspector",
    "InspectResult",
    "component_exists",
    "ComponentType",
    "Field",
    "parse_feature_entity",
    "parse_field",
    "parse_fields",
    "to_title_case",
    "validate_entity_name",
    "Placeholders",
    "build_placeholders",
    "replacements",
]
