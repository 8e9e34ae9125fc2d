"""
tests/test_generator.py
Integration tests for scaffoldgen.generator (ScaffoldGenerator and
definition-file loading).

Tests cover:
- End-to-end generation for every variant
- The worked examples: Post, empty Category, validated boolean schema,
  unknown type, unresolved placeholder
- All-or-nothing failure behaviour and warnings
- Definition files (YAML/JSON) and the application shell
"""

from __future__ import annotations

import json
import pathlib
import re
from typing import Any, Dict

import pytest

from scaffoldgen.assembler import find_placeholders
from scaffoldgen.errors import (
    EmptyFormFieldList,
    MalformedFieldToken,
    ReservedFieldNameConflict,
    UnknownFieldType,
    UnresolvedPlaceholder,
    UnsupportedStackCombination,
)
from scaffoldgen.generator import (
    APPLICATION_FILES,
    ScaffoldGenerator,
    load_definition_file,
    parse_raw_definition,
)
from scaffoldgen.models import GenerationConfig, ModelSpec, StackConfig, TemplateVariant
from scaffoldgen.utils import write_files_batch

from tests.conftest import ORBITA_STACK, STACKS, VALIDATED_STACK, make_model


def _generator(variant: TemplateVariant, **kwargs: Any) -> ScaffoldGenerator:
    return ScaffoldGenerator(GenerationConfig(stack=STACKS[variant], **kwargs))


# ===========================================================================
# End to end
# ===========================================================================


class TestGenerate:
    """Full passes over every variant."""

    @pytest.mark.parametrize("variant", list(TemplateVariant))
    def test_every_placeholder_is_resolved(
        self, variant: TemplateVariant, every_type_model: ModelSpec
    ) -> None:
        result = _generator(variant).generate(every_type_model)
        assert result.variant is variant
        for role, text in result.files.items():
            assert find_placeholders(text) == [], role
            assert "BlogPost" in text or role in ("types", "schema")
        assert result.warnings == []

    def test_example_post(self, post_model: ModelSpec) -> None:
        result = _generator(TemplateVariant.REACT_ROUTER).generate(post_model)
        assert result.roles == ("index", "show", "form")
        assert result.paths == {
            "index": "posts/index.tsx",
            "show": "posts/show.tsx",
            "form": "posts/form.tsx",
        }
        names = result.names
        assert names is not None
        assert (
            names.singular_name,
            names.plural_name,
            names.kebab_name,
            names.route_path,
            names.singular_title,
            names.plural_title,
        ) == ("post", "posts", "post", "posts", "Post", "Posts")

        index = result.files["index"]
        assert "export default function PostIndex({ posts }: PostIndexProps)" in index
        assert "{posts.length === 0 ? (" in index
        assert '<Link to="/posts/new" className="btn btn-primary">' in index
        assert "<th>Title</th>" in index
        assert "<td>{post.title}</td>" in index
        assert "  title: string;\n  content: string;" in index

        form = result.files["form"]
        assert 'id="title"' in form
        assert 'id="content"' in form
        assert form.index('id="title"') < form.index('id="content"')

    def test_stack_argument_overrides_config(self, post_model: ModelSpec) -> None:
        generator = _generator(TemplateVariant.REACT_ROUTER)
        result = generator.generate(post_model, stack=ORBITA_STACK)
        assert result.variant is TemplateVariant.ORBITA_STATE
        assert result.roles == ("types", "index", "show", "form")
        assert result.paths["types"] == "posts/types.ts"

    def test_generate_from_tokens(self) -> None:
        generator = _generator(TemplateVariant.ORBITA_STATE)
        result = generator.generate_from_tokens("BlogPost", ["title:string", "published:boolean"])
        assert "published: boolean;" in result.files["types"]
        assert "published: blogPost.published ?? false," in result.files["form"]
        assert result.paths["index"] == "blog-posts/index.tsx"

    def test_generate_from_tokens_rejects_bad_tokens(self) -> None:
        generator = _generator(TemplateVariant.REACT_ROUTER)
        with pytest.raises(MalformedFieldToken):
            generator.generate_from_tokens("Post", ["title"])

    def test_unsupported_stack(self, post_model: ModelSpec) -> None:
        stack = StackConfig(client="react", router="react-router", validation="zod")
        with pytest.raises(UnsupportedStackCombination):
            ScaffoldGenerator(GenerationConfig(stack=stack)).generate(post_model)

    def test_reserved_model_is_rejected(self, reserved_model: ModelSpec) -> None:
        with pytest.raises(ReservedFieldNameConflict):
            _generator(TemplateVariant.ORBITA_VALIDATED).generate(reserved_model)

    def test_declared_id_is_rejected(self) -> None:
        with pytest.raises(ReservedFieldNameConflict) as exc_info:
            ScaffoldGenerator().generate_from_tokens("Post", ["id:integer", "title:string"])
        assert exc_info.value.context["field"] == "id"

    @pytest.mark.parametrize("variant", list(TemplateVariant))
    def test_managed_columns_with_default_config(self, variant: TemplateVariant) -> None:
        result = _generator(variant).generate_from_tokens("Post", ["title:string"])
        index = result.files["index"]
        columns = [
            "<th>Id</th>",
            "<th>Title</th>",
            "<th>Created At</th>",
            "<th>Updated At</th>",
            "<th>Actions</th>",
        ]
        positions = [index.index(column) for column in columns]
        assert positions == sorted(positions)
        assert "{post.id}</td>" in index
        assert "new Date(post.created_at).toLocaleString()" in index

        show = result.files["show"]
        assert show.index("<strong>Id:</strong>") < show.index("<strong>Title:</strong>")
        assert show.index("<strong>Title:</strong>") < show.index("<strong>Updated At:</strong>")

        assert "created_at" not in result.files["form"]
        declarations = "".join(result.files.values())
        assert "created_at: string;" in declarations
        if "schema" in result.files:
            assert "created_at: z." not in result.files["schema"]

    def test_summary(self, post_model: ModelSpec) -> None:
        result = _generator(TemplateVariant.REACT_ROUTER).generate(post_model)
        summary = result.summary()
        assert "Post" in summary
        assert "react-router" in summary
        assert "posts/form.tsx" in summary
        assert result.elapsed_seconds >= 0.0

    def test_written_files_match_result(
        self, post_model: ModelSpec, tmp_path: pathlib.Path
    ) -> None:
        result = _generator(TemplateVariant.ORBITA_STATE).generate(post_model)
        files_written, _ = write_files_batch(result.files_by_path(), tmp_path)
        assert files_written == 4
        for role, text in result.files.items():
            assert (tmp_path / result.paths[role]).read_text(encoding="utf-8") == text


# ===========================================================================
# Worked examples: edge cases
# ===========================================================================


class TestEdgeCases:
    """Empty models, type-specific schemas and failures."""

    def test_empty_category_plain_variant(self, category_model: ModelSpec) -> None:
        result = _generator(TemplateVariant.REACT_ROUTER).generate(category_model)
        assert result.names is not None
        assert result.names.route_path == "categories"
        index = result.files["index"]
        assert "<th>Id</th>\n\n                  <th>Created At</th>" in index
        assert '<button type="submit"' in result.files["form"]
        assert any(w.startswith("NoEditableFields") for w in result.warnings)

    def test_empty_category_validated_variant(self, category_model: ModelSpec) -> None:
        with pytest.raises(EmptyFormFieldList):
            _generator(TemplateVariant.ORBITA_VALIDATED).generate(category_model)

    def test_boolean_schema_is_variant_specific(self) -> None:
        model = make_model("Task", "status:boolean")
        validated = _generator(TemplateVariant.ORBITA_VALIDATED).generate(model)
        plain = _generator(TemplateVariant.ORBITA_STATE).generate(model)
        assert "status: z.boolean()," in validated.files["schema"]
        assert "status: boolean;" in plain.files["types"]
        assert "z.boolean()" not in plain.files["types"]

    def test_unknown_type_fails_before_templates_load(
        self, broken_template_dir: pathlib.Path
    ) -> None:
        generator = ScaffoldGenerator(GenerationConfig(template_dir=broken_template_dir))
        with pytest.raises(UnknownFieldType):
            generator.generate(make_model("Invoice", "total:money"))

    def test_unresolved_placeholder_returns_nothing(
        self, post_model: ModelSpec, broken_template_dir: pathlib.Path
    ) -> None:
        generator = ScaffoldGenerator(GenerationConfig(template_dir=broken_template_dir))
        result = None
        with pytest.raises(UnresolvedPlaceholder) as exc_info:
            result = generator.generate(post_model)
        assert result is None
        assert exc_info.value.context["placeholders"] == ["nonexistent_field"]
        assert exc_info.value.context["template"] == "react_router/index.tsx"

    def test_unused_block_warning(self, post_model: ModelSpec, tmp_path: pathlib.Path) -> None:
        override = tmp_path / "react_router"
        override.mkdir()
        (override / "show.tsx").write_text(
            "<h1>{{singular_title}}</h1>\n{{detail_fields}}\n", encoding="utf-8"
        )
        result = ScaffoldGenerator(GenerationConfig(template_dir=tmp_path)).generate(post_model)
        assert result.files["show"].startswith("<h1>Post</h1>")
        assert len(result.warnings) == 1
        assert "interface_fields" in result.warnings[0]
        assert "react_router/show.tsx" in result.warnings[0]


# ===========================================================================
# Definition files
# ===========================================================================


class TestDefinitionFiles:
    """YAML / JSON model definitions."""

    def test_reference_definition(self, definition_yaml_path: pathlib.Path) -> None:
        model, config = parse_raw_definition(load_definition_file(definition_yaml_path))
        assert model.class_name == "BlogPost"
        assert [f.name for f in model.fields][:3] == ["title", "body", "views"]
        assert config.stack == VALIDATED_STACK

        result = ScaffoldGenerator(config).generate(model)
        assert result.variant is TemplateVariant.ORBITA_VALIDATED
        assert "<th>Created At</th>" in result.files["index"]
        assert "author_id: z.number().int().positive()," in result.files["schema"]

    def test_json_definition(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "post.json"
        path.write_text(
            json.dumps(
                {
                    "model": {
                        "name": "Post",
                        "fields": [{"name": "title", "type": "string"}],
                    }
                }
            ),
            encoding="utf-8",
        )
        model, config = parse_raw_definition(load_definition_file(path))
        assert model.fields[0].token == "title:string"
        assert config == GenerationConfig()

    def test_fields_as_mapping(self) -> None:
        raw: Dict[str, Any] = {"model": {"name": "Post", "fields": {"title": "string", "body": "text"}}}
        model, _ = parse_raw_definition(raw)
        assert [f.token for f in model.fields] == ["title:string", "body:text"]

    def test_missing_model(self) -> None:
        with pytest.raises(ValueError, match="model"):
            parse_raw_definition({"config": {}})

    def test_unknown_config_key(self, definition_dict: Dict[str, Any]) -> None:
        definition_dict["config"]["colour"] = "blue"
        with pytest.raises(ValueError, match="Config validation failed"):
            parse_raw_definition(definition_dict)

    def test_bad_field_token(self, definition_dict: Dict[str, Any]) -> None:
        definition_dict["model"]["fields"].append("price:money")
        with pytest.raises(UnknownFieldType):
            parse_raw_definition(definition_dict)

    def test_missing_file(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_definition_file(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("model: [unclosed\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_definition_file(path)


# ===========================================================================
# Application shell
# ===========================================================================


class TestGenerateApplication:
    """main.tsx, home page and vite config."""

    def test_application_files(self) -> None:
        files = ScaffoldGenerator().generate_application("Demo")
        assert set(files) == set(APPLICATION_FILES.values())
        home = files["app/views/home/index.tsx"]
        assert "<h1>Welcome to Demo!</h1>" in home
        assert 'style={{ marginTop: "2rem" }}' in home
        assert "createOrbitaApp" in files["app/main.tsx"]

    def test_application_files_reference_each_other(self) -> None:
        files = ScaffoldGenerator().generate_application("Demo")
        entry = re.search(r'input: "([^"]+)"', files["vite.config.js"])
        assert entry is not None
        assert entry.group(1) in files

        main_dir = entry.group(1).rsplit("/", 1)[0]
        imports = re.findall(r'import\(\s*"\./([^"]+)"\s*\)', files[entry.group(1)])
        assert imports == ["views/home/index.tsx"]
        for target in imports:
            assert f"{main_dir}/{target}" in files
        assert not re.search(r'^import "\./', files[entry.group(1)], re.MULTILINE)

    def test_empty_app_name(self) -> None:
        with pytest.raises(ValueError):
            ScaffoldGenerator().generate_application("  ")
