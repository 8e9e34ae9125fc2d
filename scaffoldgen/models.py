# File: scaffoldgen/models.py
"""
Scaffoldgen - Core Data Models
===============================
Pydantic V2 models for one generation pass:

    FieldSpec  → ModelSpec  (caller input, frozen)
    NameSet                 (derived once per class name, frozen)
    RenderedBlock           (one per placeholder per role, frozen)
    StackConfig / GenerationConfig (selection and policy)

Nothing here is mutated after construction, so a single ``ModelSpec`` and its
``NameSet`` can be shared by every renderer of every role.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scaffoldgen.utils import to_title_words

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.models")

# ---------------------------------------------------------------------------
# Reserved, auto-managed fields
# ---------------------------------------------------------------------------

# Rendered by every view template; a model may not declare them.
RESERVED_FIELDS: Tuple[str, ...] = ("id", "created_at", "updated_at")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TemplateVariant(str, Enum):
    """Supported output dialects."""

    REACT_ROUTER = "react-router"
    ORBITA_STATE = "orbita-state"
    ORBITA_VALIDATED = "orbita-validated"


class EmptyFormPolicy(str, Enum):
    """What to do when a model has no editable fields."""

    AUTO = "auto"
    ERROR = "error"
    SUBMIT_ONLY = "submit_only"


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_FROZEN_CONFIG: ConfigDict = ConfigDict(
    frozen=True,
    extra="forbid",
    populate_by_name=True,
)

_SETTINGS_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    validate_assignment=True,
    extra="forbid",
)


# ---------------------------------------------------------------------------
# Model definition
# ---------------------------------------------------------------------------


class FieldSpec(BaseModel):
    """
    One declared model attribute.

    Identifier and type checks live in ``scaffoldgen.validators`` so that
    they surface as the typed ``ScaffoldError`` subclasses instead of a
    pydantic ``ValidationError``.
    """

    model_config = _FROZEN_CONFIG

    name: str = Field(..., min_length=1, description="Attribute name.")
    type: str = Field(..., min_length=1, description="Symbolic field type.")

    @field_validator("type")
    @classmethod
    def _normalise_type(cls, v: str) -> str:
        return v.strip().lower()

    @property
    def label(self) -> str:
        return to_title_words(self.name)

    @property
    def is_reserved(self) -> bool:
        return self.name in RESERVED_FIELDS

    @property
    def token(self) -> str:
        return f"{self.name}:{self.type}"

    def __repr__(self) -> str:
        return f"<Field {self.token}>"


class ModelSpec(BaseModel):
    """The generation unit: a class name plus an ordered field tuple."""

    model_config = _FROZEN_CONFIG

    class_name: str = Field(..., alias="className", description="PascalCase type name.")
    fields: Tuple[FieldSpec, ...] = Field(default=(), description="Ordered fields.")

    @property
    def editable_fields(self) -> Tuple[FieldSpec, ...]:
        """Declared fields minus the auto-managed ones, in order."""
        return tuple(f for f in self.fields if not f.is_reserved)

    def __repr__(self) -> str:
        tokens: str = " ".join(f.token for f in self.fields)
        return f"<Model {self.class_name} {tokens}>"


# ---------------------------------------------------------------------------
# Derived naming bundle
# ---------------------------------------------------------------------------


class NameSet(BaseModel):
    """Every naming form of one class name; see ``scaffoldgen.naming``."""

    model_config = _FROZEN_CONFIG

    class_name: str
    singular_name: str
    plural_name: str
    kebab_name: str
    route_path: str
    singular_title: str
    plural_title: str

    @property
    def title_name(self) -> str:
        return self.plural_title

    def placeholders(self) -> Dict[str, str]:
        """Scalar placeholder name → substitution text."""
        return {
            "class_name": self.class_name,
            "singular_name": self.singular_name,
            "plural_name": self.plural_name,
            "kebab_name": self.kebab_name,
            "route_path": self.route_path,
            "title_name": self.title_name,
            "singular_title": self.singular_title,
            "plural_title": self.plural_title,
        }


class RenderedBlock(BaseModel):
    """Text for one per-field placeholder, already indented."""

    model_config = _FROZEN_CONFIG

    key: str
    text: str = ""
    entry_count: int = Field(default=0, ge=0)

    @property
    def is_empty(self) -> bool:
        return self.entry_count == 0


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class StackConfig(BaseModel):
    """Client stack as described by the host application."""

    model_config = _SETTINGS_CONFIG

    client: Literal["react", "preact"] = "react"
    router: Literal["react-router", "orbita"] = "react-router"
    validation: Literal["none", "zod"] = "none"

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.client, self.router, self.validation)


class GenerationConfig(BaseModel):
    """Settings for a generation pass."""

    model_config = _SETTINGS_CONFIG

    stack: StackConfig = Field(default_factory=StackConfig)
    indent_size: int = Field(default=2, ge=1, le=8)
    template_dir: Optional[Path] = Field(
        default=None,
        description="Directory of override templates laid out as <variant>/<file>.",
    )
    empty_form_policy: EmptyFormPolicy = EmptyFormPolicy.AUTO


__all__: List[str] = [
    "RESERVED_FIELDS",
    "TemplateVariant",
    "EmptyFormPolicy",
    "FieldSpec",
    "ModelSpec",
    "NameSet",
    "RenderedBlock",
    "StackConfig",
    "GenerationConfig",
]
