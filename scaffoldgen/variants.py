# File: scaffoldgen/variants.py
"""
Scaffoldgen - Variant Selector & Template Sets
===============================================
Maps a ``StackConfig`` to exactly one ``TemplateVariant`` and describes, per
variant, everything the rest of the engine needs to know about it:

    - which template files make up each output role,
    - which per-field blocks each role needs,
    - how deep each block is nested in its template,
    - which renderer dialect applies,
    - whether a form without editable fields is acceptable.

A new output dialect is added here (plus its template directory) without
touching the registry, the naming deriver, or the assembler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from scaffoldgen.errors import TemplateNotFound, UnsupportedStackCombination
from scaffoldgen.models import StackConfig, TemplateVariant

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.variants")

_TEMPLATE_PACKAGE: str = "scaffoldgen"
_TEMPLATE_ROOT: str = "templates"
APPLICATION_DIRECTORY: str = "application"


# ---------------------------------------------------------------------------
# Dialects
# ---------------------------------------------------------------------------

DIALECT_REACT: str = "react"
DIALECT_PREACT_STATE: str = "preact-state"
DIALECT_PREACT_VALIDATED: str = "preact-validated"


# ---------------------------------------------------------------------------
# Template set descriptor
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TemplateSet:
    """Static description of one variant's templates."""

    variant: TemplateVariant
    directory: str
    dialect: str
    # role → template file name, in output order
    roles: Dict[str, str]
    # role → block placeholder keys rendered for that role
    blocks: Dict[str, Tuple[str, ...]]
    # block key → nesting depth (in indent levels) inside its template
    block_depth: Dict[str, int]
    requires_editable_fields: bool = False
    description: str = ""

    def file_name(self, role: str) -> str:
        try:
            return self.roles[role]
        except KeyError:
            raise TemplateNotFound(
                f"Variant '{self.variant.value}' has no '{role}' role. "
                f"Available roles: {', '.join(self.roles)}.",
                variant=self.variant.value,
                role=role,
            ) from None

    def blocks_for(self, role: str) -> Tuple[str, ...]:
        return self.blocks.get(role, ())


_VIEW_DEPTHS: Dict[str, int] = {
    "interface_fields": 1,
    "table_headers": 9,
    "table_cells": 10,
    "detail_fields": 4,
    "form_fields": 4,
}

TEMPLATE_SETS: Dict[TemplateVariant, TemplateSet] = {
    TemplateVariant.REACT_ROUTER: TemplateSet(
        variant=TemplateVariant.REACT_ROUTER,
        directory="react_router",
        dialect=DIALECT_REACT,
        roles={"index": "index.tsx", "show": "show.tsx", "form": "form.tsx"},
        blocks={
            "index": ("interface_fields", "table_headers", "table_cells"),
            "show": ("interface_fields", "detail_fields"),
            "form": ("interface_fields", "form_fields"),
        },
        block_depth=dict(_VIEW_DEPTHS),
        description="React + react-router-dom, fetch-based form",
    ),
    TemplateVariant.ORBITA_STATE: TemplateSet(
        variant=TemplateVariant.ORBITA_STATE,
        directory="orbita_state",
        dialect=DIALECT_PREACT_STATE,
        roles={
            "types": "types.ts",
            "index": "index.tsx",
            "show": "show.tsx",
            "form": "form.tsx",
        },
        blocks={
            "types": ("interface_fields",),
            "index": ("table_headers", "table_cells"),
            "show": ("detail_fields",),
            "form": ("form_data_mapping", "form_fields"),
        },
        block_depth={**_VIEW_DEPTHS, "form_data_mapping": 2},
        description="Preact + orbita router, useState form",
    ),
    TemplateVariant.ORBITA_VALIDATED: TemplateSet(
        variant=TemplateVariant.ORBITA_VALIDATED,
        directory="orbita_validated",
        dialect=DIALECT_PREACT_VALIDATED,
        roles={
            "schema": "schema.ts",
            "index": "index.tsx",
            "show": "show.tsx",
            "form": "form.tsx",
        },
        blocks={
            "schema": ("schema_fields", "interface_fields"),
            "index": ("table_headers", "table_cells"),
            "show": ("detail_fields",),
            "form": ("form_schema_fields", "form_data_mapping", "form_fields"),
        },
        block_depth={
            **_VIEW_DEPTHS,
            "schema_fields": 1,
            "form_schema_fields": 1,
            "form_data_mapping": 3,
        },
        requires_editable_fields=True,
        description="Preact + orbita router, zod-validated useForm",
    ),
}

# (client, router, validation) → variant
_STACK_TABLE: Dict[Tuple[str, str, str], TemplateVariant] = {
    ("react", "react-router", "none"): TemplateVariant.REACT_ROUTER,
    ("preact", "orbita", "none"): TemplateVariant.ORBITA_STATE,
    ("preact", "orbita", "zod"): TemplateVariant.ORBITA_VALIDATED,
}


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def select_variant(stack: StackConfig) -> TemplateVariant:
    """
    Choose the template variant for *stack*.

    Raises:
        UnsupportedStackCombination: No template set matches the stack.
    """
    variant: Optional[TemplateVariant] = _STACK_TABLE.get(stack.key)
    if variant is None:
        supported: str = "; ".join("/".join(k) for k in _STACK_TABLE)
        raise UnsupportedStackCombination(
            f"No templates for client={stack.client}, router={stack.router}, "
            f"validation={stack.validation}. Supported: {supported}.",
            client=stack.client,
            router=stack.router,
            validation=stack.validation,
        )
    logger.debug("Selected variant %s for stack %s.", variant.value, stack.key)
    return variant


def stack_for_variant(variant: TemplateVariant) -> StackConfig:
    """Inverse of ``select_variant``."""
    for (client, router, validation), candidate in _STACK_TABLE.items():
        if candidate == variant:
            return StackConfig(client=client, router=router, validation=validation)
    raise UnsupportedStackCombination(
        f"Variant '{variant}' has no stack mapping.", variant=str(variant)
    )


def get_template_set(variant: TemplateVariant) -> TemplateSet:
    return TEMPLATE_SETS[TemplateVariant(variant)]


# ---------------------------------------------------------------------------
# Template loading
# ---------------------------------------------------------------------------


def _read_bundled(directory: str, file_name: str) -> str:
    resource = resources.files(_TEMPLATE_PACKAGE) / _TEMPLATE_ROOT / directory / file_name
    if not resource.is_file():
        raise TemplateNotFound(
            f"Bundled template not found: {directory}/{file_name}",
            template=f"{directory}/{file_name}",
        )
    return resource.read_text(encoding="utf-8")


def load_template_file(
    directory: str,
    file_name: str,
    template_dir: Optional[Path] = None,
) -> str:
    """
    Read ``<directory>/<file_name>``.

    An override in *template_dir* wins over the bundled copy; a missing
    override silently falls back to the bundled template.
    """
    if template_dir is not None:
        override: Path = Path(template_dir) / directory / file_name
        if override.is_file():
            logger.info("Using override template %s", override)
            return override.read_text(encoding="utf-8")
    return _read_bundled(directory, file_name)


def load_template(
    variant: TemplateVariant,
    role: str,
    template_dir: Optional[Path] = None,
) -> str:
    """Raw template text for *role* of *variant*."""
    template_set: TemplateSet = get_template_set(variant)
    return load_template_file(
        template_set.directory, template_set.file_name(role), template_dir
    )


__all__: List[str] = [
    "DIALECT_REACT",
    "DIALECT_PREACT_STATE",
    "DIALECT_PREACT_VALIDATED",
    "APPLICATION_DIRECTORY",
    "TemplateSet",
    "TEMPLATE_SETS",
    "select_variant",
    "stack_for_variant",
    "get_template_set",
    "load_template_file",
    "load_template",
]
