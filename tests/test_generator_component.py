from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import pytest

from petrock.generator import (
    ComponentGenerator,
    ComponentType,
    Field,
    GeneratorError,
    InspectionError,
)

MODULE = "example.com/blog"


class FakeInspector:
    def __init__(self, *, exists: bool = False, error: bool = False) -> None:
        self.exists = exists
        self.error = error
        self.calls: List[Tuple[ComponentType, str, str]] = []

    def component_exists(
        self, component_type: ComponentType, feature: str, entity: str
    ) -> bool:
        self.calls.append((component_type, feature, entity))
        if self.error:
            raise InspectionError("self inspect failed")
        return self.exists


def make_generator(tmp_path: Path, **inspector_kwargs: bool) -> ComponentGenerator:
    return ComponentGenerator(tmp_path, inspector=FakeInspector(**inspector_kwargs))  # type: ignore[arg-type]


def read(tmp_path: Path, relative: str) -> str:
    return (tmp_path / relative).read_text(encoding="utf-8")


def test_generate_command_without_fields(tmp_path: Path) -> None:
    generator = make_generator(tmp_path)

    result = generator.generate("command", "posts", "create", module_path=MODULE)

    assert result.created == [
        Path("posts/commands/base.go"),
        Path("posts/commands/register.go"),
        Path("posts/commands/create.go"),
    ]
    source = read(tmp_path, "posts/commands/create.go")
    assert "type CreateCommand struct {" in source
    assert 'return "posts/create"' in source
    assert "func (e *Executor) HandleCreate(" in source
    assert '"example.com/blog/posts/state"' in source
    assert "petrock_example" not in source
    assert "{{" not in source
    assert (
        "\tlog.RegisterType(&CreateCommand{})\n\t// petrock:register-command-type"
        in read(tmp_path, "posts/commands/register.go")
    )
    assert generator.inspector.calls == [(ComponentType.COMMAND, "posts", "create")]


def test_generate_command_with_fields(tmp_path: Path) -> None:
    generator = make_generator(tmp_path)
    fields = [Field("postID", "string"), Field("publishAt", "time.Time")]

    generator.generate(
        ComponentType.COMMAND, "posts", "publish", module_path=MODULE, fields=fields
    )

    source = read(tmp_path, "posts/commands/publish.go")
    assert "type PublishCommand struct {\n\tPostID string\n\tPublishAt time.Time\n}" in source
    assert (
        "func (c *PublishCommand) Validate(state *state.State) error {\n\treturn nil\n}"
        in source
    )
    assert "*core.ProcessingContext) error {\n\treturn nil\n}" in source
    assert "Type assertion failed" not in source


def test_second_command_reuses_shared_files(tmp_path: Path) -> None:
    generator = make_generator(tmp_path)
    generator.generate("command", "posts", "create", module_path=MODULE)

    result = generator.generate("command", "posts", "schedule-publication", module_path=MODULE)

    assert result.created == [Path("posts/commands/schedule_publication.go")]
    assert result.kept == [
        Path("posts/commands/base.go"),
        Path("posts/commands/register.go"),
    ]
    assert result.modified == [Path("posts/commands/register.go")]
    register = read(tmp_path, "posts/commands/register.go")
    assert "RegisterType(&CreateCommand{})" in register
    assert "RegisterType(&SchedulePublicationCommand{})" in register
    source = read(tmp_path, "posts/commands/schedule_publication.go")
    assert 'return "posts/schedule-publication"' in source


def test_generate_refuses_existing_entity_file(tmp_path: Path) -> None:
    generator = make_generator(tmp_path)
    generator.generate("command", "posts", "create", module_path=MODULE)

    with pytest.raises(GeneratorError):
        generator.generate("command", "posts", "create", module_path=MODULE)


def test_generate_refuses_reported_collision(tmp_path: Path) -> None:
    generator = make_generator(tmp_path, exists=True)

    with pytest.raises(GeneratorError) as excinfo:
        generator.generate("query", "posts", "get", module_path=MODULE)

    assert "query posts/get already exists" in str(excinfo.value)
    assert not (tmp_path / "posts").exists()


def test_generate_proceeds_when_inspection_unavailable(tmp_path: Path) -> None:
    generator = make_generator(tmp_path, error=True)

    result = generator.generate("worker", "posts", "summary", module_path=MODULE)

    assert Path("posts/workers/main.go") in result.created


def test_collision_check_can_be_disabled(tmp_path: Path) -> None:
    inspector = FakeInspector(exists=True)
    generator = ComponentGenerator(
        tmp_path, inspector=inspector, check_collisions=False  # type: ignore[arg-type]
    )

    generator.generate("command", "posts", "create", module_path=MODULE)

    assert inspector.calls == []


def test_generate_worker(tmp_path: Path) -> None:
    generator = make_generator(tmp_path)

    result = generator.generate("worker", "posts", "summary", module_path=MODULE)

    assert result.created == [
        Path("posts/workers/types.go"),
        Path("posts/workers/main.go"),
    ]
    source = read(tmp_path, "posts/workers/main.go")
    assert "type SummaryWorker struct {" in source
    assert "func NewSummaryWorker(" in source
    assert "func (w *SummaryWorker) ProcessSummary(ctx context.Context) error {" in source


def test_worker_rejects_fields(tmp_path: Path) -> None:
    generator = make_generator(tmp_path)

    with pytest.raises(GeneratorError):
        generator.generate(
            "worker", "posts", "summary", module_path=MODULE, fields=[Field("a", "int")]
        )


def test_generate_rejects_invalid_entity(tmp_path: Path) -> None:
    generator = make_generator(tmp_path)

    with pytest.raises(GeneratorError):
        generator.generate("command", "posts", "9lives", module_path=MODULE)


def test_add_feature_then_register_components(tmp_path: Path) -> None:
    (tmp_path / "cmd" / "blog").mkdir(parents=True)
    generator = make_generator(tmp_path)

    feature = generator.add_feature("posts", module_path=MODULE)

    assert feature.created == [Path("posts/main.go"), Path("cmd/blog/features.go")]
    features = read(tmp_path, "cmd/blog/features.go")
    assert '\tposts "example.com/blog/posts"\n\t// petrock:import-feature' in features
    assert "\tposts.RegisterFeature(app, postsState)\n\t// petrock:register-feature" in features
    assert "package posts" in read(tmp_path, "posts/main.go")

    command = generator.generate("command", "posts", "create", module_path=MODULE)
    query = generator.generate(
        "query", "posts", "get", module_path=MODULE, fields=[Field("slug", "string")]
    )

    assert Path("posts/main.go") in command.modified
    assert Path("posts/main.go") in query.modified
    main = read(tmp_path, "posts/main.go")
    assert (
        "\tapp.CommandRegistry.Register(&commands.CreateCommand{}, "
        "featureExecutor.HandleCreate, featureExecutor)\n\n"
        "\t// --- 5. Register Core Query Handlers ---"
    ) in main
    assert (
        "\tapp.QueryRegistry.Register(queries.GetQuery{}, featureQuerier.HandleGet)\n\n"
        "\t// --- 6. Register Message Types for Decoding ---"
    ) in main

    query_source = read(tmp_path, "posts/queries/get.go")
    assert '\tSlug string `json:"slug" validate:"required"`\n}' in query_source
    assert "(core.QueryResult, error) {\n\treturn nil, nil\n}" in query_source
    base = read(tmp_path, "posts/queries/base.go")
    assert 'type ItemResult struct {\n\tSlug string `json:"slug"`\n}' in base


def test_add_feature_updates_existing_registry(tmp_path: Path) -> None:
    features = tmp_path / "cmd" / "blog" / "features.go"
    features.parent.mkdir(parents=True)
    features.write_text(
        "package main\n\nimport (\n\t// petrock:import-feature\n)\n\n"
        "func RegisterAllFeatures(app *core.App) {\n\t// petrock:register-feature\n}\n",
        encoding="utf-8",
    )
    generator = make_generator(tmp_path)

    result = generator.add_feature("posts", module_path=MODULE)

    assert result.created == [Path("posts/main.go")]
    assert result.modified == [Path("cmd/blog/features.go")]
    with pytest.raises(GeneratorError):
        generator.add_feature("posts", module_path=MODULE, target_dir=tmp_path)


def test_existing_entity_file_blocks_shared_files(tmp_path: Path) -> None:
    existing = tmp_path / "posts" / "commands" / "create.go"
    existing.parent.mkdir(parents=True)
    existing.write_text("package commands\n", encoding="utf-8")
    generator = make_generator(tmp_path)

    with pytest.raises(GeneratorError) as excinfo:
        generator.generate("command", "posts", "create", module_path=MODULE)

    assert excinfo.value.path == str(existing)
    assert sorted(p.name for p in existing.parent.iterdir()) == ["create.go"]
    assert existing.read_text(encoding="utf-8") == "package commands\n"
