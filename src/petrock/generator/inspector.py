"""Collision detection through the generated project's ``self inspect`` command."""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from petrock.runtime import telemetry

from .errors import InspectionError
from .naming import ComponentType

LOGGER_NAME = "petrock.generator"
# `go run` compiles the project first, which can take a while on a cold cache.
DEFAULT_TIMEOUT_SECONDS = 120.0

Runner = Callable[[List[str], Path], subprocess.CompletedProcess]


@dataclass(slots=True)
class ComponentInfo:
    name: str
    description: str = ""
    type: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ComponentInfo":
        return cls(
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            type=str(data.get("type", "")),
        )


@dataclass(slots=True)
class InspectResult:
    commands: List[ComponentInfo] = field(default_factory=list)
    queries: List[ComponentInfo] = field(default_factory=list)
    workers: List[ComponentInfo] = field(default_factory=list)
    routes: List[str] = field(default_factory=list)
    features: List[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: str) -> "InspectResult":
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise InspectionError(
                f"failed to parse self inspect JSON output: {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise InspectionError("self inspect output is not a JSON object")

        def infos(key: str) -> List[ComponentInfo]:
            return [ComponentInfo.from_json(item) for item in data.get(key) or ()]

        return cls(
            commands=infos("commands"),
            queries=infos("queries"),
            workers=infos("workers"),
            routes=list(data.get("routes") or ()),
            features=list(data.get("features") or ()),
        )


def _run_go(
    args: List[str], cwd: Path, *, timeout: float = DEFAULT_TIMEOUT_SECONDS
) -> subprocess.CompletedProcess:
    """Run a go command and return the result."""
    return subprocess.run(
        ["go"] + args,
        cwd=cwd,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=False,
    )


class ComponentInspector:
    """Asks a petrock project which components it already contains."""

    def __init__(
        self,
        project_path: Path | str = ".",
        *,
        runner: Optional[Runner] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.project_path = Path(project_path)
        self.timeout = timeout
        self._runner = runner or partial(_run_go, timeout=timeout)

    def detect_project_binary(self) -> str:
        cmd_dir = self.project_path / "cmd"
        if not cmd_dir.is_dir():
            raise InspectionError(f"no cmd directory in {self.project_path}")
        for entry in sorted(cmd_dir.iterdir()):
            if entry.is_dir() and not entry.name.startswith("."):
                return entry.name
        raise InspectionError("no project binary found in cmd directory")

    def inspect(self) -> InspectResult:
        binary = self.detect_project_binary()
        args = ["run", f"./cmd/{binary}", "self", "inspect", "--format=json"]
        with telemetry.span(
            "inspector::self_inspect",
            logger_name=LOGGER_NAME,
            metadata={"binary": binary},
        ):
            try:
                result = self._runner(args, self.project_path)
            except subprocess.TimeoutExpired as exc:
                raise InspectionError(
                    f"self inspect timed out after {exc.timeout:.0f}s"
                ) from exc
            except OSError as exc:
                raise InspectionError(f"failed to execute self inspect: {exc}") from exc
            if result.returncode != 0:
                raise InspectionError(
                    "self inspect failed (are you in a petrock project?): "
                    + (result.stderr or "").strip()
                )
            inspected = InspectResult.from_json(result.stdout)

        telemetry.record_event(
            "inspect.completed",
            level="debug",
            data={
                "commands": len(inspected.commands),
                "queries": len(inspected.queries),
                "workers": len(inspected.workers),
                "features": len(inspected.features),
            },
            logger_name=LOGGER_NAME,
        )
        return inspected

    def component_exists(
        self, component_type: ComponentType, feature: str, entity: str
    ) -> bool:
        return component_exists(self.inspect(), component_type, feature, entity)


def component_exists(
    result: InspectResult, component_type: ComponentType, feature: str, entity: str
) -> bool:
    component_type = ComponentType(component_type)
    expected = f"{feature}/{entity}"
    if component_type is ComponentType.COMMAND:
        return any(info.name == expected for info in result.commands)
    if component_type is ComponentType.QUERY:
        return any(info.name == expected for info in result.queries)
    if component_type is ComponentType.WORKER:
        # One worker serves a whole feature.
        return any(info.name.startswith(feature + "/") for info in result.workers)
    raise ValueError(f"unknown component type: {component_type}")


__all__ = [
    "ComponentInfo",
    "InspectResult",
    "ComponentInspector",
    "component_exists",
]
