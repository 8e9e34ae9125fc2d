# File: scaffoldgen/registry.py
"""
Scaffoldgen - Field Type Registry
==================================
The closed table of supported field types.  Each entry is a frozen
``FieldTypeRule`` holding pure data that the block renderers consume:

    value_type     TypeScript type used in interface declarations
    default_value  literal used as the empty form value
    input_kind     editable widget family (text, textarea, number, ...)
    schema_kind    validation-schema fragment family
    display_kind   read-only rendering in tables and detail pages

Adding a type is a registry edit (and a ``REGISTRY_VERSION`` bump); renderers
never branch on the type symbol itself, only on the kinds declared here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from scaffoldgen.errors import UnknownFieldType

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.registry")

REGISTRY_VERSION: int = 1


# ---------------------------------------------------------------------------
# Kind enums
# ---------------------------------------------------------------------------


class InputKind(str, Enum):
    """Editable widget families."""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    DATE_PICKER = "date-picker"
    SELECT_REFERENCE = "select-reference"


class SchemaKind(str, Enum):
    """Validation-schema fragment families."""

    NON_EMPTY_STRING = "non-empty-string"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    REFERENCE = "reference"


class DisplayKind(str, Enum):
    """Read-only rendering families."""

    PLAIN = "plain"
    EXCERPT = "excerpt"
    BADGE = "badge"
    DATE = "date"
    DATETIME = "datetime"
    LINK = "link"


# ---------------------------------------------------------------------------
# Rule
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FieldTypeRule:
    """Rendering data for one field type."""

    type_name: str
    value_type: str
    default_value: str
    input_kind: InputKind
    schema_kind: SchemaKind
    display_kind: DisplayKind
    html_input_type: Optional[str] = None
    step: Optional[str] = None


_RULES: Tuple[FieldTypeRule, ...] = (
    FieldTypeRule(
        type_name="string",
        value_type="string",
        default_value='""',
        input_kind=InputKind.TEXT,
        schema_kind=SchemaKind.NON_EMPTY_STRING,
        display_kind=DisplayKind.PLAIN,
        html_input_type="text",
    ),
    FieldTypeRule(
        type_name="text",
        value_type="string",
        default_value='""',
        input_kind=InputKind.TEXTAREA,
        schema_kind=SchemaKind.STRING,
        display_kind=DisplayKind.EXCERPT,
    ),
    FieldTypeRule(
        type_name="integer",
        value_type="number",
        default_value="0",
        input_kind=InputKind.NUMBER,
        schema_kind=SchemaKind.INTEGER,
        display_kind=DisplayKind.PLAIN,
        html_input_type="number",
        step="1",
    ),
    FieldTypeRule(
        type_name="float",
        value_type="number",
        default_value="0",
        input_kind=InputKind.NUMBER,
        schema_kind=SchemaKind.NUMBER,
        display_kind=DisplayKind.PLAIN,
        html_input_type="number",
        step="any",
    ),
    FieldTypeRule(
        type_name="boolean",
        value_type="boolean",
        default_value="false",
        input_kind=InputKind.CHECKBOX,
        schema_kind=SchemaKind.BOOLEAN,
        display_kind=DisplayKind.BADGE,
        html_input_type="checkbox",
    ),
    FieldTypeRule(
        type_name="date",
        value_type="string",
        default_value='""',
        input_kind=InputKind.DATE_PICKER,
        schema_kind=SchemaKind.DATE,
        display_kind=DisplayKind.DATE,
        html_input_type="date",
    ),
    FieldTypeRule(
        type_name="datetime",
        value_type="string",
        default_value='""',
        input_kind=InputKind.DATE_PICKER,
        schema_kind=SchemaKind.DATETIME,
        display_kind=DisplayKind.DATETIME,
        html_input_type="datetime-local",
    ),
    FieldTypeRule(
        type_name="reference",
        value_type="number",
        default_value="null",
        input_kind=InputKind.SELECT_REFERENCE,
        schema_kind=SchemaKind.REFERENCE,
        display_kind=DisplayKind.LINK,
    ),
)

FIELD_TYPE_REGISTRY: Dict[str, FieldTypeRule] = {
    rule.type_name: rule for rule in _RULES
}


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def lookup(type_name: str) -> FieldTypeRule:
    """
    Return the rule for *type_name*.

    Raises:
        UnknownFieldType: If the symbol is not in the registry.
    """
    rule: Optional[FieldTypeRule] = FIELD_TYPE_REGISTRY.get(type_name)
    if rule is None:
        raise UnknownFieldType(
            f"Unknown field type '{type_name}'. "
            f"Supported types: {', '.join(supported_types())}.",
            field_type=type_name,
        )
    return rule


def is_supported(type_name: str) -> bool:
    return type_name in FIELD_TYPE_REGISTRY


def supported_types() -> Tuple[str, ...]:
    """The closed set of type symbols, in declaration order."""
    return tuple(rule.type_name for rule in _RULES)


__all__: List[str] = [
    "REGISTRY_VERSION",
    "InputKind",
    "SchemaKind",
    "DisplayKind",
    "FieldTypeRule",
    "FIELD_TYPE_REGISTRY",
    "lookup",
    "is_supported",
    "supported_types",
]

logger.debug(
    "scaffoldgen.registry loaded: %d field types (v%d).",
    len(FIELD_TYPE_REGISTRY),
    REGISTRY_VERSION,
)
