"""Generate command, query and worker components from the skeleton."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from petrock.runtime import telemetry

from . import edits, skeleton, templates
from .errors import GeneratorError, InspectionError
from .inspector import ComponentInspector
from .naming import ComponentType, Field, is_go_identifier, validate_entity_name
from .templates import Placeholders

LOGGER_NAME = "petrock.generator"


@dataclass(slots=True)
class GenerationResult:
    """Paths touched by one generation run, relative to the target dir."""

    created: List[Path] = field(default_factory=list)
    modified: List[Path] = field(default_factory=list)
    kept: List[Path] = field(default_factory=list)


class ComponentGenerator:
    """Extracts skeleton files for a component and specializes them."""

    def __init__(
        self,
        project_path: Path | str = ".",
        *,
        inspector: Optional[ComponentInspector] = None,
        check_collisions: bool = True,
    ) -> None:
        self.project_path = Path(project_path)
        self.inspector = inspector or ComponentInspector(self.project_path)
        self.check_collisions = check_collisions

    def generate(
        self,
        component_type: ComponentType | str,
        feature: str,
        entity: str,
        *,
        module_path: str,
        target_dir: Path | str | None = None,
        fields: Sequence[Field] = (),
    ) -> GenerationResult:
        component_type = ComponentType(component_type)
        target = Path(target_dir) if target_dir is not None else self.project_path
        if not is_go_identifier(feature):
            raise GeneratorError(f"invalid feature name: {feature!r}")
        validate_entity_name(entity)
        if fields and component_type is ComponentType.WORKER:
            raise GeneratorError("workers do not accept field definitions")

        with telemetry.span(
            f"generator::{component_type.value}",
            logger_name=LOGGER_NAME,
            component="generator",
            metadata={"feature": feature, "entity": entity, "fields": len(fields)},
        ):
            self._ensure_new(component_type, feature, entity)
            placeholders = templates.build_placeholders(
                component_type, feature, entity, module_path
            )
            result = GenerationResult()
            mapping = templates.replacements(placeholders)
            entity_files = templates.entity_files(component_type)
            # Nothing may be written when the component itself already exists.
            for relative in self._destinations(entity_files, mapping):
                if (target / relative).exists():
                    raise GeneratorError(
                        f"{relative} already exists", path=str(target / relative)
                    )
            self._extract(
                templates.shared_files(component_type), mapping, target, result,
                overwrite=False,
            )
            self._extract(entity_files, mapping, target, result, overwrite=None)
            if component_type is ComponentType.COMMAND:
                self._finish_command(placeholders, target, fields, result)
            elif component_type is ComponentType.QUERY:
                self._finish_query(placeholders, target, fields, result)

        telemetry.record_event(
            "component.generated",
            data={
                "type": component_type.value,
                "name": f"{feature}/{entity}",
                "created": len(result.created),
                "modified": len(result.modified),
            },
            logger_name=LOGGER_NAME,
        )
        return result

    def add_feature(
        self, feature: str, *, module_path: str, target_dir: Path | str | None = None
    ) -> GenerationResult:
        """Create ``<feature>/main.go`` and register it in ``cmd/<project>/features.go``."""

        if not is_go_identifier(feature):
            raise GeneratorError(f"invalid feature name: {feature!r}")
        target = Path(target_dir) if target_dir is not None else self.project_path
        result = GenerationResult()
        with telemetry.span(
            "generator::feature",
            logger_name=LOGGER_NAME,
            component="generator",
            metadata={"feature": feature},
        ):
            mapping = templates.feature_replacements(feature, module_path)
            self._extract(templates.FEATURE_FILES, mapping, target, result, overwrite=None)
            features_file = self._features_file(target)
            if not features_file.exists():
                features_file.parent.mkdir(parents=True, exist_ok=True)
                features_file.write_text(
                    templates.apply_replacements(
                        skeleton.read(templates.FEATURES_REGISTRY_FILE), mapping
                    ),
                    encoding="utf-8",
                )
                result.created.append(features_file.relative_to(target))
            self._edit(
                features_file,
                target,
                result,
                lambda text: edits.register_feature(text, module_path, feature),
            )
        return result

    def _features_file(self, target: Path) -> Path:
        try:
            binary = ComponentInspector(target).detect_project_binary()
        except InspectionError:
            binary = target.resolve().name
        return target / "cmd" / binary / "features.go"

    def _ensure_new(
        self, component_type: ComponentType, feature: str, entity: str
    ) -> None:
        if not self.check_collisions:
            return
        try:
            exists = self.inspector.component_exists(component_type, feature, entity)
        except InspectionError as exc:
            telemetry.record_event(
                "collision_check.unavailable",
                level="warning",
                data={"error": str(exc)},
                logger_name=LOGGER_NAME,
            )
            return
        if exists:
            raise GeneratorError(f"{component_type.value} {feature}/{entity} already exists")

    def _destinations(self, files: Dict[str, str], mapping: Dict[str, str]) -> List[Path]:
        return [
            Path(templates.apply_replacements(destination, mapping))
            for destination in files.values()
        ]

    def _extract(
        self,
        files: Dict[str, str],
        mapping: Dict[str, str],
        target: Path,
        result: GenerationResult,
        *,
        overwrite: Optional[bool],
    ) -> None:
        """Copy skeleton files with placeholders replaced.

        ``overwrite=False`` keeps an existing file and lists it in ``kept``;
        ``overwrite=None`` treats an existing file as a collision.
        """

        for source, relative in zip(files, self._destinations(files, mapping)):
            path = target / relative
            if path.exists():
                if overwrite is None:
                    raise GeneratorError(f"{relative} already exists", path=str(path))
                if not overwrite:
                    result.kept.append(relative)
                    continue
            content = templates.apply_replacements(skeleton.read(source), mapping)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            result.created.append(relative)

    def _edit(self, path: Path, target: Path, result: GenerationResult, change) -> None:
        try:
            original = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise GeneratorError(f"failed to read {path}: {exc}", path=str(path)) from exc
        updated = change(original)
        if updated == original:
            return
        path.write_text(updated, encoding="utf-8")
        relative = path.relative_to(target)
        if relative not in result.created and relative not in result.modified:
            result.modified.append(relative)

    def _finish_command(
        self,
        placeholders: Placeholders,
        target: Path,
        fields: Sequence[Field],
        result: GenerationResult,
    ) -> None:
        feature_dir = target / placeholders.feature
        if fields:
            self._edit(
                feature_dir / "commands" / f"{placeholders.entity_file}.go",
                target,
                result,
                lambda text: edits.rewrite_command(text, placeholders.struct_name, fields),
            )
        self._edit(
            feature_dir / "commands" / "register.go",
            target,
            result,
            lambda text: edits.insert_line_before_marker(
                text,
                edits.REGISTER_COMMAND_TYPE_MARKER,
                f"log.RegisterType(&{placeholders.struct_name}{{}})",
            ),
        )
        main_file = feature_dir / "main.go"
        if main_file.exists():
            line = (
                f"app.CommandRegistry.Register(&commands.{placeholders.struct_name}{{}}, "
                f"featureExecutor.{placeholders.method_name}, featureExecutor)"
            )
            self._edit(
                main_file,
                target,
                result,
                lambda text: edits.insert_before_marker(
                    text, edits.QUERY_HANDLERS_MARKER, f"{line}\n\n\t"
                ),
            )

    def _finish_query(
        self,
        placeholders: Placeholders,
        target: Path,
        fields: Sequence[Field],
        result: GenerationResult,
    ) -> None:
        feature_dir = target / placeholders.feature
        if fields:
            self._edit(
                feature_dir / "queries" / f"{placeholders.entity_file}.go",
                target,
                result,
                lambda text: edits.rewrite_query(text, placeholders.struct_name, fields),
            )
            # An existing base.go already carries the fields of earlier queries.
            if Path(placeholders.feature, "queries", "base.go") in result.created:
                self._edit(
                    feature_dir / "queries" / "base.go",
                    target,
                    result,
                    lambda text: edits.rewrite_item_result(text, fields),
                )
        main_file = feature_dir / "main.go"
        if main_file.exists():
            line = (
                f"app.QueryRegistry.Register(queries.{placeholders.struct_name}{{}}, "
                f"featureQuerier.{placeholders.method_name})"
            )
            self._edit(
                main_file,
                target,
                result,
                lambda text: edits.insert_before_marker(
                    text, edits.MESSAGE_TYPES_MARKER, f"{line}\n\n\t"
                ),
            )


__all__ = ["ComponentGenerator", "GenerationResult"]
