"""Structural edits on generated Go source, expressed as editor scripts.

Every function here takes source text and returns edited text. None of them
parse Go: they navigate with literal searches, which is enough for the
gofmt-formatted skeletons we ship. Required edits raise
:class:`~petrock.generator.errors.GeneratorError`; optional ones return the
input unchanged when their anchor is missing.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from petrock import ed
from petrock.runtime import telemetry

from .errors import GeneratorError
from .naming import Field

LOGGER_NAME = "petrock.generator"

IMPORT_FEATURE_MARKER = "// petrock:import-feature"
REGISTER_FEATURE_MARKER = "// petrock:register-feature"
REGISTER_COMMAND_TYPE_MARKER = "// petrock:register-command-type"
QUERY_HANDLERS_MARKER = "// --- 5. Register Core Query Handlers ---"
MESSAGE_TYPES_MARKER = "// --- 6. Register Message Types for Decoding ---"

# gofmt puts the closing brace of a top-level declaration in column 0.
_DECLARATION_END = "\n}"


def _run(text: str, ops: Sequence[ed.Command], *, what: str) -> str:
    try:
        return ed.run(text, *ops)
    except ed.EditError as exc:
        raise GeneratorError(f"failed to {what}: {exc}") from exc


def _try_run(text: str, ops: Sequence[ed.Command], *, what: str) -> Optional[str]:
    try:
        return ed.run(text, *ops)
    except ed.PatternNotFoundError as exc:
        telemetry.record_event(
            "edit.skipped",
            level="debug",
            data={"edit": what, "pattern": exc.pattern},
            logger_name=LOGGER_NAME,
        )
        return None


def format_command_fields(fields: Sequence[Field]) -> str:
    return "\n".join(f"\t{field.exported_name} {field.type}" for field in fields)


def format_query_fields(fields: Sequence[Field]) -> str:
    return "\n".join(
        f'\t{field.exported_name} {field.type} `json:"{field.name}" validate:"required"`'
        for field in fields
    )


def format_result_fields(fields: Sequence[Field]) -> str:
    return "\n".join(
        f'\t{field.exported_name} {field.type} `json:"{field.name}"`'
        for field in fields
    )


def replace_struct_fields(text: str, struct_header: str, field_lines: str) -> str:
    """Replace the body of the struct introduced by ``struct_header``."""

    ops = [
        ed.beginning_of_buffer(),
        ed.search(struct_header),
        ed.search("{"),
        ed.forward_char(1),
        ed.set_mark(),
        ed.search("}"),
        ed.replace_region("\n" + field_lines + "\n"),
    ]
    return _run(text, ops, what=f"replace fields of {struct_header!r}")


def simplify_method(text: str, signature: Sequence[str], body: str) -> str:
    """Collapse a method body to ``body`` if the method can be found.

    ``signature`` is a series of literal fragments searched in order, e.g.
    ``("func (c *", ") Validate(")``. Returns ``text`` unchanged when any
    fragment is missing.
    """

    ops: List[ed.Command] = [ed.beginning_of_buffer()]
    ops.extend(ed.search(fragment) for fragment in signature)
    ops.extend(
        [
            ed.search("{"),
            ed.forward_char(1),
            ed.set_mark(),
            ed.search(_DECLARATION_END),
            ed.replace_region("\n\t" + body),
        ]
    )
    edited = _try_run(text, ops, what="simplify " + "".join(signature))
    return text if edited is None else edited


def insert_before_marker(text: str, marker: str, insertion: str) -> str:
    """Insert ``insertion`` directly in front of ``marker``, keeping the marker."""

    ops = [
        ed.beginning_of_buffer(),
        ed.search(marker),
        ed.set_mark(),
        ed.forward_char(0),
        ed.replace_region(insertion),
    ]
    return _run(text, ops, what=f"insert before {marker!r}")


def marker_indentation(text: str, marker: str) -> str:
    """Return the whitespace preceding ``marker`` on its line."""

    index = text.find(marker)
    if index == -1:
        raise GeneratorError(f"marker {marker!r} not found")
    line_start = text.rfind("\n", 0, index) + 1
    prefix = text[line_start:index]
    return prefix[: len(prefix) - len(prefix.lstrip(" \t"))]


def insert_line_before_marker(text: str, marker: str, line: str) -> str:
    """Insert ``line`` on its own line above ``marker``, matching its indent."""

    indent = marker_indentation(text, marker)
    return insert_before_marker(text, marker, f"{line}\n{indent}")


def register_feature(text: str, module_path: str, feature: str) -> str:
    """Add the import and registration call for ``feature`` to ``features.go``."""

    if f'"{module_path}/{feature}"' in text:
        raise GeneratorError(f"feature {feature!r} is already registered")
    text = insert_line_before_marker(
        text, IMPORT_FEATURE_MARKER, f'{feature} "{module_path}/{feature}"'
    )
    indent = marker_indentation(text, REGISTER_FEATURE_MARKER)
    block = (
        f"{feature}State := {feature}.NewState()\n"
        f"{indent}{feature}.RegisterFeature(app, {feature}State)"
    )
    return insert_line_before_marker(text, REGISTER_FEATURE_MARKER, block)


def rewrite_command(text: str, struct_name: str, fields: Sequence[Field]) -> str:
    text = replace_struct_fields(
        text, f"type {struct_name} struct {{", format_command_fields(fields)
    )
    text = simplify_method(text, ("func (c *", ") Validate("), "return nil")
    return simplify_method(text, ("func (e *Executor) Handle",), "return nil")


def rewrite_query(text: str, struct_name: str, fields: Sequence[Field]) -> str:
    text = replace_struct_fields(
        text, f"type {struct_name} struct {{", format_query_fields(fields)
    )
    return simplify_method(text, ("func (q *Querier) Handle",), "return nil, nil")


def rewrite_item_result(text: str, fields: Sequence[Field]) -> str:
    return replace_struct_fields(
        text, "type ItemResult struct {", format_result_fields(fields)
    )


__all__ = [
    "IMPORT_FEATURE_MARKER",
    "REGISTER_FEATURE_MARKER",
    "REGISTER_COMMAND_TYPE_MARKER",
    "QUERY_HANDLERS_MARKER",
    "MESSAGE_TYPES_MARKER",
    "format_command_fields",
    "format_query_fields",
    "format_result_fields",
    "replace_struct_fields",
    "simplify_method",
    "insert_before_marker",
    "insert_line_before_marker",
    "marker_indentation",
    "register_feature",
    "rewrite_command",
    "rewrite_query",
    "rewrite_item_result",
]
