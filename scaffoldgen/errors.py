# File: scaffoldgen/errors.py
"""
Scaffoldgen - Error Taxonomy
=============================
Every failure the generation pass can raise.  All errors derive from
``ScaffoldError`` (itself a ``ValueError``) and carry a stable ``code`` plus a
``context`` dict naming the offending model, field, type or token, so the CLI
can report the first failure precisely.

``UnusedBlock`` is deliberately absent: it is the one non-fatal condition and
travels as a warning string on the result, never as an exception.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Type

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.errors")


class ScaffoldError(ValueError):
    """Base class for all generation failures."""

    code: str = "ScaffoldError"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message: str = message
        self.context: Dict[str, Any] = context

    def __repr__(self) -> str:
        return f"<{self.code}: {self.message}>"


class InvalidIdentifier(ScaffoldError):
    """Model or field name is not a usable identifier."""

    code = "InvalidIdentifier"


class UnknownFieldType(ScaffoldError):
    """Field type symbol is outside the closed registry."""

    code = "UnknownFieldType"


class DuplicateFieldName(ScaffoldError):
    code = "DuplicateFieldName"


class ReservedFieldNameConflict(ScaffoldError):
    """A declared field uses an auto-managed name (``id``, ``created_at``, ``updated_at``)."""

    code = "ReservedFieldNameConflict"


class UnsupportedStackCombination(ScaffoldError):
    code = "UnsupportedStackCombination"


class UnresolvedPlaceholder(ScaffoldError):
    """Template references a token with no scalar or block source."""

    code = "UnresolvedPlaceholder"


class EmptyFormFieldList(ScaffoldError):
    code = "EmptyFormFieldList"


class MalformedFieldToken(ScaffoldError):
    """A ``name:type`` token could not be split into name and type."""

    code = "MalformedFieldToken"


class TemplateNotFound(ScaffoldError):
    code = "TemplateNotFound"


# Lookup used by ValidationResult.raise_for_errors()
ERROR_CLASSES: Dict[str, Type[ScaffoldError]] = {
    cls.code: cls
    for cls in (
        InvalidIdentifier,
        UnknownFieldType,
        DuplicateFieldName,
        ReservedFieldNameConflict,
        UnsupportedStackCombination,
        UnresolvedPlaceholder,
        EmptyFormFieldList,
        MalformedFieldToken,
        TemplateNotFound,
    )
}

UNUSED_BLOCK: str = "UnusedBlock"


__all__: List[str] = [
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
    "ERROR_CLASSES",
    "UNUSED_BLOCK",
]
