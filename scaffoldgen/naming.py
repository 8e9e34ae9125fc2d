# File: scaffoldgen/naming.py
"""
Scaffoldgen - Naming Deriver
=============================
Derives every naming form a scaffold needs from one PascalCase class name:

    >>> derive_names("BlogPost")
    NameSet(class_name='BlogPost', singular_name='blogPost',
            plural_name='blogPosts', kebab_name='blog-post',
            route_path='blog-posts', singular_title='Blog Post',
            plural_title='Blog Posts')

Pluralisation is table-driven: an override table for irregular and
uncountable nouns, then ordered suffix rules.  Rules apply to the final word
segment only, so ``SalesPerson`` becomes ``salesPeople`` and
``sales-people``.  The override table is the single place irregular nouns
are added.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

from scaffoldgen.errors import InvalidIdentifier
from scaffoldgen.models import NameSet
from scaffoldgen.utils import lower_first, split_case_words, to_kebab_case, to_title_words

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.naming")

_CLASS_NAME_RE: re.Pattern[str] = re.compile(r"^[A-Z][A-Za-z0-9]*$")

# ---------------------------------------------------------------------------
# Pluralisation tables
# ---------------------------------------------------------------------------

PLURAL_OVERRIDES: Dict[str, str] = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
    "tooth": "teeth",
    "foot": "feet",
    "ox": "oxen",
    "datum": "data",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
    "axis": "axes",
    "analysis": "analyses",
    "crisis": "crises",
    "thesis": "theses",
    "leaf": "leaves",
    "life": "lives",
    "knife": "knives",
    "wife": "wives",
    "half": "halves",
    "shelf": "shelves",
    "quiz": "quizzes",
    "sheep": "sheep",
    "fish": "fish",
    "deer": "deer",
    "series": "series",
    "species": "species",
    "news": "news",
    "equipment": "equipment",
    "information": "information",
}

SINGULAR_OVERRIDES: Dict[str, str] = {v: k for k, v in PLURAL_OVERRIDES.items()}

_VOWELS: str = "aeiou"


def _consonant_y(word: str) -> bool:
    return len(word) > 1 and word.endswith("y") and word[-2] not in _VOWELS


def _sibilant(word: str) -> bool:
    return word.endswith(("s", "x", "z", "ch", "sh"))


# (predicate, characters to strip, suffix); first match wins
PLURAL_RULES: Tuple[Tuple[Callable[[str], bool], int, str], ...] = (
    (_consonant_y, 1, "ies"),
    (_sibilant, 0, "es"),
    (lambda word: True, 0, "s"),
)

SINGULAR_RULES: Tuple[Tuple[Callable[[str], bool], int, str], ...] = (
    (lambda word: len(word) > 3 and word.endswith("ies"), 3, "y"),
    (lambda word: word.endswith(("ses", "xes", "zes", "ches", "shes")), 2, ""),
    (lambda word: word.endswith("s") and not word.endswith("ss"), 1, ""),
)


def _apply_rules(
    word: str,
    overrides: Dict[str, str],
    rules: Tuple[Tuple[Callable[[str], bool], int, str], ...],
) -> str:
    lower: str = word.lower()
    override: Optional[str] = overrides.get(lower)
    if override is not None:
        return word[:1] + override[1:] if word[:1].isupper() else override
    for predicate, strip, suffix in rules:
        if predicate(lower):
            return (word[:-strip] if strip else word) + suffix
    return word


def _on_last_segment(name: str, transform: Callable[[str], str]) -> str:
    """Apply *transform* to the final word segment of *name*."""
    if not name:
        return name
    start: int = 0
    for i in range(1, len(name)):
        if name[i - 1] in "-_" or (name[i - 1].islower() and name[i].isupper()):
            start = i
    if start >= len(name):
        return name
    return name[:start] + transform(name[start:])


@functools.lru_cache(maxsize=None)
def pluralize(name: str) -> str:
    """
    Pluralise the final word segment of a camelCase, kebab or snake name.

    Examples:
        >>> pluralize("category")
        'categories'
        >>> pluralize("salesPerson")
        'salesPeople'
        >>> pluralize("blog-post")
        'blog-posts'
    """
    return _on_last_segment(
        name, lambda word: _apply_rules(word, PLURAL_OVERRIDES, PLURAL_RULES)
    )


@functools.lru_cache(maxsize=None)
def singularize(name: str) -> str:
    """Reverse of ``pluralize`` for the same tables."""
    return _on_last_segment(
        name, lambda word: _apply_rules(word, SINGULAR_OVERRIDES, SINGULAR_RULES)
    )


# ---------------------------------------------------------------------------
# Deriver
# ---------------------------------------------------------------------------


def validate_class_name(class_name: str) -> None:
    """Raise ``InvalidIdentifier`` unless *class_name* is PascalCase ASCII."""
    if not isinstance(class_name, str) or not _CLASS_NAME_RE.match(class_name):
        raise InvalidIdentifier(
            f"Invalid model name '{class_name}': expected a PascalCase identifier "
            "made of [A-Za-z0-9] and starting with an uppercase letter.",
            model=class_name,
        )


def derive_names(class_name: str) -> NameSet:
    """
    Compute the ``NameSet`` for *class_name*.

    Raises:
        InvalidIdentifier: If *class_name* is not PascalCase ASCII.
    """
    validate_class_name(class_name)
    return _derive_names(class_name)


@functools.lru_cache(maxsize=None)
def _derive_names(class_name: str) -> NameSet:
    singular_name: str = lower_first(class_name)
    plural_name: str = pluralize(singular_name)
    kebab_name: str = to_kebab_case(class_name)

    names = NameSet(
        class_name=class_name,
        singular_name=singular_name,
        plural_name=plural_name,
        kebab_name=kebab_name,
        route_path=pluralize(kebab_name),
        singular_title=to_title_words(singular_name),
        plural_title=to_title_words(plural_name),
    )
    logger.debug("Derived names for %s: %s", class_name, names.placeholders())
    return names


def field_label(field_name: str) -> str:
    """Human label for a field name (``published_on`` → ``Published On``)."""
    return to_title_words(field_name)


def reference_route(field_name: str) -> str:
    """
    Route segment of the resource a reference field points at.

    ``author_id`` and ``author`` both give ``authors``; ``blogPost_id`` gives
    ``blog-posts``.
    """
    base: str = field_name[:-3] if field_name.endswith("_id") else field_name
    words: Tuple[str, ...] = split_case_words(base)
    return pluralize("-".join(w.lower() for w in words))


__all__: List[str] = [
    "PLURAL_OVERRIDES",
    "SINGULAR_OVERRIDES",
    "PLURAL_RULES",
    "SINGULAR_RULES",
    "pluralize",
    "singularize",
    "validate_class_name",
    "derive_names",
    "field_label",
    "reference_route",
]
