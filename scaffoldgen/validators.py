# File: scaffoldgen/validators.py
"""
Scaffoldgen - Model Validators
===============================
Checks a ``ModelSpec`` before any template is touched, and parses the
``name:type`` tokens a command line hands over.

Issues are accumulated into a ``ValidationResult`` so a report can list all
of them at once; ``raise_for_errors()`` turns the first error into its typed
``ScaffoldError`` for callers that want fail-fast behaviour.

Checks (single pass over the field list):
    - class name is PascalCase ASCII           → InvalidIdentifier
    - field names are identifiers              → InvalidIdentifier
    - field types are in the registry          → UnknownFieldType
    - field names are unique (case-sensitive)  → DuplicateFieldName
    - no field uses a reserved name            → ReservedFieldNameConflict
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Set

from scaffoldgen.errors import (
    ERROR_CLASSES,
    InvalidIdentifier,
    MalformedFieldToken,
    ScaffoldError,
)
from scaffoldgen.models import (
    EmptyFormPolicy,
    FieldSpec,
    GenerationConfig,
    ModelSpec,
)
from scaffoldgen.naming import validate_class_name
from scaffoldgen.registry import is_supported, lookup, supported_types

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.validators")

_FIELD_NAME_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_TOKEN_RE: re.Pattern[str] = re.compile(r"^([^:\s]+):([^:\s]+)$")


# ---------------------------------------------------------------------------
# Validation result container
# ---------------------------------------------------------------------------


class ValidationIssue:
    """Lightweight issue descriptor (no Pydantic overhead)."""

    __slots__ = ("level", "code", "message", "context")

    def __init__(
        self,
        level: str,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.level: str = level  # "error" | "warning"
        self.code: str = code
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    @property
    def is_error(self) -> bool:
        return self.level == "error"

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"

    def to_exception(self) -> ScaffoldError:
        cls = ERROR_CLASSES.get(self.code, ScaffoldError)
        return cls(self.message, **self.context)

    def __repr__(self) -> str:
        return f"[{self.level.upper()}] {self.code}: {self.message}"

    def __str__(self) -> str:
        return self.__repr__()


class ValidationResult:
    """Accumulates ``ValidationIssue`` instances."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[ValidationIssue] = []

    # -- Mutation -----------------------------------------------------------

    def add_error(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationIssue("error", code, message, context))

    def add_warning(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationIssue("warning", code, message, context))

    def add_exception(self, exc: ScaffoldError) -> None:
        self.add_error(exc.code, exc.message, exc.context)

    # -- Query --------------------------------------------------------------

    @property
    def errors(self) -> List[ValidationIssue]:
        return [e for e in self._items if e.is_error]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [e for e in self._items if e.is_warning]

    @property
    def is_valid(self) -> bool:
        return not any(e.is_error for e in self._items)

    def codes(self) -> List[str]:
        return [e.code for e in self._items]

    def summary(self) -> str:
        return (
            f"Validation: {len(self.errors)} error(s), "
            f"{len(self.warnings)} warning(s)."
        )

    def raise_for_errors(self) -> None:
        """Raise the first error as its typed exception."""
        errors: List[ValidationIssue] = self.errors
        if errors:
            raise errors[0].to_exception()

    def format_report(self) -> str:
        lines: List[str] = [self.summary()]
        for item in self._items:
            prefix: str = "✗" if item.is_error else "⚠"
            lines.append(f"  {prefix} [{item.code}] {item.message}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"<ValidationResult {self.summary()}>"

    def __bool__(self) -> bool:
        """Truthy when there are NO errors (i.e. valid)."""
        return self.is_valid

    def __len__(self) -> int:
        return len(self._items)


# ---------------------------------------------------------------------------
# Token parsing (command-line input contract)
# ---------------------------------------------------------------------------


def parse_field_token(token: str) -> FieldSpec:
    """
    Parse one ``name:type`` token.

    Raises:
        MalformedFieldToken: Not exactly one ``:`` separating two parts.
        InvalidIdentifier: The name is not an identifier.
        UnknownFieldType: The type is not in the registry.
    """
    match = _TOKEN_RE.match(token.strip()) if isinstance(token, str) else None
    if match is None:
        raise MalformedFieldToken(
            f"Malformed field '{token}': expected name:type (e.g. title:string).",
            token=token,
        )
    name, type_name = match.group(1), match.group(2).lower()
    _check_field_name(name)
    lookup(type_name)
    return FieldSpec(name=name, type=type_name)


def parse_field_tokens(tokens: Iterable[str]) -> List[FieldSpec]:
    return [parse_field_token(token) for token in tokens]


def _check_field_name(name: str) -> None:
    if not _FIELD_NAME_RE.match(name):
        raise InvalidIdentifier(
            f"Invalid field name '{name}': expected [A-Za-z_][A-Za-z0-9_]*.",
            field=name,
        )


# ---------------------------------------------------------------------------
# Model validation
# ---------------------------------------------------------------------------


def validate_model(
    model: ModelSpec,
    config: Optional[GenerationConfig] = None,
) -> ValidationResult:
    """
    Run every model check and collect the issues.

    A model without editable fields is a warning, or an error when
    *config* sets ``empty_form_policy`` to ``error``.
    """
    result = ValidationResult()

    try:
        validate_class_name(model.class_name)
    except ScaffoldError as exc:
        result.add_exception(exc)

    seen: Set[str] = set()
    for spec in model.fields:
        if not _FIELD_NAME_RE.match(spec.name):
            result.add_error(
                InvalidIdentifier.code,
                f"Invalid field name '{spec.name}' in model '{model.class_name}'.",
                {"model": model.class_name, "field": spec.name},
            )

        if not is_supported(spec.type):
            result.add_error(
                "UnknownFieldType",
                f"Unknown field type '{spec.type}' for field '{spec.name}'. "
                f"Supported types: {', '.join(supported_types())}.",
                {"model": model.class_name, "field": spec.name, "field_type": spec.type},
            )

        if spec.name in seen:
            result.add_error(
                "DuplicateFieldName",
                f"Field '{spec.name}' is declared more than once in '{model.class_name}'.",
                {"model": model.class_name, "field": spec.name},
            )
        seen.add(spec.name)

        if spec.is_reserved:
            result.add_error(
                "ReservedFieldNameConflict",
                f"'{spec.name}' is managed automatically and cannot be declared "
                f"in '{model.class_name}'.",
                {"model": model.class_name, "field": spec.name, "field_type": spec.type},
            )

    if not model.editable_fields:
        policy = config.empty_form_policy if config else EmptyFormPolicy.AUTO
        message: str = f"Model '{model.class_name}' has no editable fields."
        if policy == EmptyFormPolicy.ERROR:
            result.add_error("EmptyFormFieldList", message, {"model": model.class_name})
        else:
            result.add_warning("NoEditableFields", message, {"model": model.class_name})

    if result.is_valid:
        logger.debug("Model %s passed validation.", model.class_name)
    else:
        logger.debug("Model %s: %s", model.class_name, result.summary())
    return result


def ensure_valid_model(
    model: ModelSpec,
    config: Optional[GenerationConfig] = None,
) -> ValidationResult:
    """``validate_model`` that raises the first error."""
    result: ValidationResult = validate_model(model, config)
    result.raise_for_errors()
    return result


__all__: List[str] = [
    "ValidationIssue",
    "ValidationResult",
    "parse_field_token",
    "parse_field_tokens",
    "validate_model",
    "ensure_valid_model",
]
