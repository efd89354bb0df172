"""Command-line entry point: ``petrock new command|query|worker|feature``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from petrock.generator import (
    ComponentGenerator,
    ComponentType,
    GeneratorError,
    parse_feature_entity,
    parse_fields,
)
from petrock.runtime import telemetry


def detect_module_path(directory: Path) -> str:
    """Read the module path from ``go.mod`` in ``directory``."""

    go_mod = directory / "go.mod"
    try:
        lines = go_mod.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise GeneratorError(f"failed to read {go_mod}: {exc}") from exc
    for line in lines:
        parts = line.split()
        if len(parts) >= 2 and parts[0] == "module":
            return parts[1].strip('"')
    raise GeneratorError(f"no module directive in {go_mod}")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--target-dir",
        default=".",
        help="Project directory to generate into (default: current directory)",
    )
    parser.add_argument(
        "--module-path",
        default=None,
        help="Go module path (default: read from go.mod in the target directory)",
    )
    parser.add_argument(
        "--no-collision-check",
        action="store_true",
        help="Skip asking the project which components already exist",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="petrock", description="Generate petrock project components."
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=telemetry.env_setting("LOG_PRESET"),
        help="Logging preset (default: PETROCK_LOG_PRESET, else PETROCK_* variables)",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    new = commands.add_parser("new", help="Generate a new component")
    kinds = new.add_subparsers(dest="kind", required=True)

    for kind, accepts_fields in (
        (ComponentType.COMMAND, True),
        (ComponentType.QUERY, True),
        (ComponentType.WORKER, False),
    ):
        sub = kinds.add_parser(kind.value, help=f"Generate a {kind.value} component")
        sub.add_argument("name", help="<feature>/<name-of-thing>, e.g. posts/create")
        if accepts_fields:
            sub.add_argument(
                "fields", nargs="*", help="Field definitions such as postID:string"
            )
        _add_common_arguments(sub)

    feature = kinds.add_parser("feature", help="Add and register a new feature")
    feature.add_argument("name", help="Feature name, e.g. posts")
    _add_common_arguments(feature)
    return parser


def run(args: argparse.Namespace) -> int:
    target = Path(args.target_dir)
    module_path = args.module_path or detect_module_path(target)
    generator = ComponentGenerator(target, check_collisions=not args.no_collision_check)

    if args.kind == "feature":
        result = generator.add_feature(args.name, module_path=module_path)
    else:
        feature, entity = parse_feature_entity(args.name)
        fields = parse_fields(getattr(args, "fields", None) or ())
        result = generator.generate(
            args.kind, feature, entity, module_path=module_path, fields=fields
        )

    for path in result.created:
        print(f"created  {path}")
    for path in result.modified:
        print(f"modified {path}")
    for path in result.kept:
        print(f"kept     {path}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if args.log_preset:
            telemetry.configure(preset=args.log_preset)
    except ValueError as exc:
        print(f"petrock: {exc}", file=sys.stderr)
        return 1
    try:
        return run(args)
    except GeneratorError as exc:
        print(f"petrock: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
