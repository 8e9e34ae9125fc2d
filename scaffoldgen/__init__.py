# File: scaffoldgen/__init__.py
"""
Scaffoldgen - CRUD View Generator
==================================

Turns a model name and an ordered list of typed fields into a consistent set
of list, detail and form views (plus their type or schema declarations) for
a React or Preact client.

Architecture overview::

    ┌──────────────┐     ┌────────────────────┐     ┌────────────┐
    │  CLI / Entry │────▶│ ScaffoldGenerator  │────▶│  variants  │
    │   (cli.py)   │     │   (generator.py)   │     │ (selector) │
    └──────────────┘     └─────────┬──────────┘     └────────────┘
                                   │
                ┌──────────┬───────┼──────────┬───────────┐
                ▼          ▼       ▼          ▼           ▼
          ┌──────────┐ ┌────────┐ ┌─────────┐ ┌─────────┐ ┌──────────┐
          │validators│ │ naming │ │renderers│ │assembler│ │ registry │
          └──────────┘ └────────┘ └─────────┘ └─────────┘ └──────────┘

Usage::

    # As a library
    from scaffoldgen import ScaffoldGenerator, GenerationConfig
    result = ScaffoldGenerator(GenerationConfig()).generate_from_tokens(
        "Post", ["title:string", "content:text"]
    )
    result.files["index"]

    # From the command line
    python -m scaffoldgen scaffold Post title:string content:text

Public API:
    - ScaffoldGenerator  - Orchestrator
    - derive_names       - Naming deriver
    - lookup             - Field type registry
    - BlockRenderer      - Per-field block renderers
    - render_template    - Placeholder substitution
    - select_variant     - Stack → template variant
"""

from __future__ import annotations

__version__: str = "0.1.0"
__license__: str = "MIT"

from scaffoldgen.assembler import AssembledTemplate, find_placeholders, render_template
from scaffoldgen.errors import (
    DuplicateFieldName,
    EmptyFormFieldList,
    InvalidIdentifier,
    MalformedFieldToken,
    ReservedFieldNameConflict,
    ScaffoldError,
    TemplateNotFound,
    UnknownFieldType,
    UnresolvedPlaceholder,
    UnsupportedStackCombination,
)
from scaffoldgen.generator import (
    ScaffoldGenerator,
    ScaffoldResult,
    load_definition_file,
    parse_raw_definition,
)
from scaffoldgen.models import (
    EmptyFormPolicy,
    FieldSpec,
    GenerationConfig,
    ModelSpec,
    NameSet,
    RenderedBlock,
    StackConfig,
    TemplateVariant,
)
from scaffoldgen.naming import derive_names, pluralize, singularize
from scaffoldgen.registry import REGISTRY_VERSION, FieldTypeRule, lookup, supported_types
from scaffoldgen.renderers import BlockRenderer, render_schema_fragment
from scaffoldgen.validators import ValidationResult, parse_field_token, validate_model
from scaffoldgen.variants import TemplateSet, get_template_set, load_template, select_variant

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    "__version__",
    "__license__",
    # Orchestrator
    "ScaffoldGenerator",
    "ScaffoldResult",
    "load_definition_file",
    "parse_raw_definition",
    # Models
    "EmptyFormPolicy",
    "FieldSpec",
    "GenerationConfig",
    "ModelSpec",
    "NameSet",
    "RenderedBlock",
    "StackConfig",
    "TemplateVariant",
    # Components
    "derive_names",
    "pluralize",
    "singularize",
    "REGISTRY_VERSION",
    "FieldTypeRule",
    "lookup",
    "supported_types",
    "BlockRenderer",
    "render_schema_fragment",
    "AssembledTemplate",
    "find_placeholders",
    "render_template",
    "TemplateSet",
    "get_template_set",
    "load_template",
    "select_variant",
    # Validation
    "ValidationResult",
    "parse_field_token",
    "validate_model",
    # Errors
    "ScaffoldError",
    "InvalidIdentifier",
    "UnknownFieldType",
    "DuplicateFieldName",
    "ReservedFieldNameConflict",
    "UnsupportedStackCombination",
    "UnresolvedPlaceholder",
    "EmptyFormFieldList",
    "MalformedFieldToken",
    "TemplateNotFound",
]
