"""
tests/conftest.py
Shared fixtures for the scaffoldgen test suite.

No external mocking libraries are used; real file I/O is performed inside
temporary directories managed by pytest's tmp_path fixtures.
"""

from __future__ import annotations

import copy
import logging
import pathlib
from typing import Any, Dict, Iterator, Optional

import pytest
import yaml

from scaffoldgen.models import (
    FieldSpec,
    GenerationConfig,
    ModelSpec,
    StackConfig,
    TemplateVariant,
)
from scaffoldgen.naming import derive_names
from scaffoldgen.renderers import BlockRenderer
from scaffoldgen.variants import get_template_set


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
SCAFFOLD_EXAMPLE_PATH: pathlib.Path = ROOT_DIR / "scaffold_example.yaml"

REACT_STACK: StackConfig = StackConfig(client="react", router="react-router", validation="none")
ORBITA_STACK: StackConfig = StackConfig(client="preact", router="orbita", validation="none")
VALIDATED_STACK: StackConfig = StackConfig(client="preact", router="orbita", validation="zod")

STACKS: Dict[TemplateVariant, StackConfig] = {
    TemplateVariant.REACT_ROUTER: REACT_STACK,
    TemplateVariant.ORBITA_STATE: ORBITA_STACK,
    TemplateVariant.ORBITA_VALIDATED: VALIDATED_STACK,
}


def make_model(class_name: str, *tokens: str) -> ModelSpec:
    """Build a ModelSpec from ``name:type`` tokens without validation."""
    fields = []
    for token in tokens:
        name, type_name = token.split(":")
        fields.append(FieldSpec(name=name, type=type_name))
    return ModelSpec(class_name=class_name, fields=tuple(fields))


def make_renderer(
    class_name: str,
    variant: TemplateVariant,
    config: Optional[GenerationConfig] = None,
) -> BlockRenderer:
    return BlockRenderer(derive_names(class_name), get_template_set(variant), config)


# ---------------------------------------------------------------------------
# Raw definition fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def raw_definition_dict() -> Dict[str, Any]:
    """Load the reference scaffold_example.yaml once per session."""
    assert SCAFFOLD_EXAMPLE_PATH.exists(), (
        f"Reference definition not found at {SCAFFOLD_EXAMPLE_PATH}. "
        "Make sure scaffold_example.yaml is in the project root."
    )
    with open(SCAFFOLD_EXAMPLE_PATH, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    assert isinstance(data, dict), "Top-level YAML must be a mapping."
    return data


@pytest.fixture()
def definition_dict(raw_definition_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Return a deep copy so each test can mutate freely."""
    return copy.deepcopy(raw_definition_dict)


@pytest.fixture()
def definition_yaml_path(
    definition_dict: Dict[str, Any], tmp_path: pathlib.Path
) -> pathlib.Path:
    """Write the definition dict to a temporary YAML file and return its path."""
    path = tmp_path / "definition.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(definition_dict, fh, default_flow_style=False, allow_unicode=True)
    return path


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def post_model() -> ModelSpec:
    return make_model("Post", "title:string", "content:text")


@pytest.fixture()
def category_model() -> ModelSpec:
    """A model with no fields at all."""
    return ModelSpec(class_name="Category", fields=())


@pytest.fixture()
def every_type_model() -> ModelSpec:
    """One field of each registry type, in registry order."""
    return make_model(
        "BlogPost",
        "title:string",
        "body:text",
        "views:integer",
        "rating:float",
        "published:boolean",
        "published_on:date",
        "released_at:datetime",
        "author_id:reference",
    )


@pytest.fixture()
def reserved_model() -> ModelSpec:
    """Declares every auto-managed name; validation rejects it."""
    return make_model(
        "Comment",
        "id:integer",
        "body:text",
        "created_at:datetime",
        "updated_at:datetime",
    )


# ---------------------------------------------------------------------------
# Template override fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def broken_template_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """Override directory whose react-router index references an unknown token."""
    directory = tmp_path / "templates" / "react_router"
    directory.mkdir(parents=True)
    (directory / "index.tsx").write_text(
        "<h1>{{title_name}}</h1>\n{{nonexistent_field}}\n{{table_headers}}\n{{table_cells}}\n",
        encoding="utf-8",
    )
    return tmp_path / "templates"


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_scaffoldgen_logger() -> Iterator[None]:
    """The CLI installs its own stderr handler; undo it after every test."""
    yield
    root_logger = logging.getLogger("scaffoldgen")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
