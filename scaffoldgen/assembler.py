# File: scaffoldgen/assembler.py
"""
Scaffoldgen - Template Assembler / Substitution Engine
=======================================================
Replaces ``{{placeholder}}`` tokens in raw template text.

Token syntax is ``{{identifier}}`` with no whitespace inside the braces.
That keeps JSX object literals such as ``style={{ marginTop: "2rem" }}``
out of scope, while ``{{{plural_name}}.length`` still reads as a JSX brace
followed by a placeholder.

The pass is fail-fast and single-pass:

    1. Scan the template for every token.
    2. If any token has neither a scalar nor a block source, raise
       ``UnresolvedPlaceholder`` listing all of them; no text is produced.
    3. Substitute with one ``re.sub`` call.  Inserted text is never
       rescanned, so substitution always terminates.
    4. Report blocks that were provided but never referenced as
       ``UnusedBlock`` warnings.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from scaffoldgen.errors import UNUSED_BLOCK, UnresolvedPlaceholder
from scaffoldgen.models import NameSet, RenderedBlock

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.assembler")

PLACEHOLDER_RE: re.Pattern[str] = re.compile(r"\{\{([A-Za-z_][A-Za-z0-9_]*)\}\}")


@dataclass(frozen=True, slots=True)
class AssembledTemplate:
    """Rendered text plus any non-fatal warnings."""

    text: str
    warnings: Tuple[str, ...] = field(default=())


def find_placeholders(template_text: str) -> List[str]:
    """Placeholder names in order of appearance (duplicates kept)."""
    return PLACEHOLDER_RE.findall(template_text)


def build_sources(
    names: Optional[NameSet],
    blocks: Mapping[str, RenderedBlock],
    extra: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Merge scalar names, block texts and extra scalars into one mapping."""
    sources: Dict[str, str] = {}
    if names is not None:
        sources.update(names.placeholders())
    if extra:
        sources.update(extra)
    for key, block in blocks.items():
        sources[key] = block.text
    return sources


def render_template(
    template_text: str,
    names: Optional[NameSet],
    blocks: Mapping[str, RenderedBlock],
    *,
    extra: Optional[Mapping[str, str]] = None,
    template_name: str = "<template>",
) -> AssembledTemplate:
    """
    Substitute every placeholder in *template_text*.

    Args:
        template_text: Raw template.
        names: Scalar naming source (may be None for application templates).
        blocks: Block key → rendered block.
        extra: Additional scalar placeholders (e.g. ``app_name``).
        template_name: Used in error and warning messages.

    Raises:
        UnresolvedPlaceholder: A token has no matching source.
    """
    sources: Dict[str, str] = build_sources(names, blocks, extra)
    tokens: List[str] = find_placeholders(template_text)

    missing: List[str] = []
    for token in tokens:
        if token not in sources and token not in missing:
            missing.append(token)
    if missing:
        raise UnresolvedPlaceholder(
            f"Template {template_name} references unknown placeholder(s): "
            + ", ".join(f"{{{{{t}}}}}" for t in missing),
            template=template_name,
            placeholders=missing,
        )

    text: str = PLACEHOLDER_RE.sub(lambda m: sources[m.group(1)], template_text)

    referenced = set(tokens)
    warnings: List[str] = []
    for key in blocks:
        if key not in referenced:
            message: str = (
                f"{UNUSED_BLOCK}: block '{key}' is never referenced by {template_name}."
            )
            logger.warning("%s", message)
            warnings.append(message)

    logger.debug(
        "Assembled %s: %d placeholder(s) substituted.", template_name, len(tokens)
    )
    return AssembledTemplate(text=text, warnings=tuple(warnings))


__all__: List[str] = [
    "PLACEHOLDER_RE",
    "AssembledTemplate",
    "find_placeholders",
    "build_sources",
    "render_template",
]
