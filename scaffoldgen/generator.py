# File: scaffoldgen/generator.py
"""
Scaffoldgen - Scaffold Generation Pipeline (Orchestrator)
==========================================================

Connects every engine component for one model:

    Stack → Variant → Validation → Names → Blocks → Assembled files

The ``ScaffoldGenerator`` class provides both a programmatic API and the
backend for the CLI.

Workflow::

    1. Select the template variant for the configured stack (variants.py).
    2. Validate the model; the first error is raised (validators.py).
    3. Derive the naming bundle once (naming.py).
    4. For every role of the variant: load the template, render the blocks
       that role declares (renderers.py), substitute (assembler.py).
    5. Return a ``ScaffoldResult`` with the role → text mapping.

Error handling strategy:
    - Generation is all-or-nothing: any ``ScaffoldError`` propagates and no
      partial mapping is ever returned.
    - ``UnusedBlock`` and validation warnings are collected on the result
      and logged; they never fail the pass.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from scaffoldgen.assembler import AssembledTemplate, render_template
from scaffoldgen.models import (
    GenerationConfig,
    ModelSpec,
    NameSet,
    RenderedBlock,
    StackConfig,
    TemplateVariant,
)
from scaffoldgen.naming import derive_names
from scaffoldgen.renderers import BlockRenderer
from scaffoldgen.utils import Timer, count_lines
from scaffoldgen.validators import ValidationResult, ensure_valid_model, parse_field_tokens
from scaffoldgen.variants import (
    APPLICATION_DIRECTORY,
    TemplateSet,
    get_template_set,
    load_template,
    load_template_file,
    select_variant,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.generator")

# application template → output path
APPLICATION_FILES: Dict[str, str] = {
    "main.tsx": "app/main.tsx",
    "home_index.tsx": "app/views/home/index.tsx",
    "vite.config.js": "vite.config.js",
}


# ---------------------------------------------------------------------------
# Generation result
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class ScaffoldResult:
    """
    Output of one ``ScaffoldGenerator.generate()`` call.

    ``files`` maps role → rendered text in the variant's role order;
    ``paths`` maps the same roles to a suggested relative output path.
    """

    names: Optional[NameSet] = None
    variant: Optional[TemplateVariant] = None
    files: Dict[str, str] = field(default_factory=dict)
    paths: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def roles(self) -> Tuple[str, ...]:
        return tuple(self.files)

    @property
    def total_lines(self) -> int:
        return sum(count_lines(text) for text in self.files.values())

    def files_by_path(self) -> Dict[str, str]:
        """Relative path → text, ready for ``write_files_batch``."""
        return {self.paths[role]: text for role, text in self.files.items()}

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        lines.append(f"{'='*60}")
        lines.append("  Scaffoldgen - Scaffold Report")
        lines.append(f"{'='*60}")
        if self.names is not None:
            lines.append(f"  Model:            {self.names.class_name}")
        if self.variant is not None:
            lines.append(f"  Variant:          {self.variant.value}")
        lines.append(f"  Files generated:  {len(self.files)}")
        lines.append(f"  Total lines:      {self.total_lines:,}")
        lines.append(f"  Total time:       {self.elapsed_seconds:.3f}s")
        lines.append(f"{'─'*60}")
        for role, path in self.paths.items():
            lines.append(f"    ✓ {role:<8s} {path}")
        if self.warnings:
            lines.append(f"{'─'*60}")
            lines.append(f"  Warnings ({len(self.warnings)}):")
            for warn in self.warnings:
                lines.append(f"    ⚠ {warn}")
        lines.append(f"{'='*60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Definition file helpers
# ---------------------------------------------------------------------------


def _load_json_file(path: Path) -> Dict[str, Any]:
    """Load and parse a JSON file. Raises ValueError on parse errors."""
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a JSON object at top level, got {type(data).__name__}."
        )
    return data


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML file. Raises ValueError on parse errors."""
    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a YAML mapping at top level, got {type(data).__name__}."
        )
    return data


def load_definition_file(path: Path) -> Dict[str, Any]:
    """
    Load a model definition file (JSON or YAML).

    Dispatches based on file extension; unknown extensions are tried as
    JSON first, then YAML.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file can't be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Definition file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Definition path is not a file: {path}")

    suffix: str = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _load_yaml_file(path)
    if suffix == ".json":
        return _load_json_file(path)

    logger.info("Unknown extension '%s'; trying JSON then YAML.", suffix)
    try:
        return _load_json_file(path)
    except ValueError:
        return _load_yaml_file(path)


def _coerce_fields(raw_fields: Any) -> List[Dict[str, str]]:
    """
    Accept ``fields`` as a list of ``name:type`` tokens, a list of
    ``{name, type}`` mappings, or a ``{name: type}`` mapping.
    """
    if raw_fields is None:
        return []
    if isinstance(raw_fields, dict):
        return [{"name": str(k), "type": str(v)} for k, v in raw_fields.items()]
    if not isinstance(raw_fields, list):
        raise ValueError(
            f"'fields' must be a list or mapping, got {type(raw_fields).__name__}."
        )
    result: List[Dict[str, str]] = []
    for item in raw_fields:
        if isinstance(item, str):
            spec = parse_field_tokens([item])[0]
            result.append({"name": spec.name, "type": spec.type})
        elif isinstance(item, dict):
            result.append(item)
        else:
            raise ValueError(f"Unsupported field entry: {item!r}")
    return result


def parse_raw_definition(raw: Dict[str, Any]) -> Tuple[ModelSpec, GenerationConfig]:
    """
    Parse a raw dictionary (from JSON/YAML) into validated models.

    Expected top-level keys:
        - "model": ``{name, fields}`` (``className`` / ``class_name`` also
          accepted for the name)
        - "config": optional generation settings

    Raises:
        ValueError: If required keys are missing or pydantic rejects them.
        ScaffoldError: If a ``name:type`` field token is invalid.
    """
    model_data: Any = raw.get("model")
    if not isinstance(model_data, dict):
        raise ValueError(
            "Cannot find model definition in input. Expected top-level key 'model'."
        )

    class_name: Any = (
        model_data.get("name")
        or model_data.get("className")
        or model_data.get("class_name")
    )
    if not class_name:
        raise ValueError("Model definition needs a 'name'.")

    config_data: Any = raw.get("config")
    if config_data is None:
        logger.info("No generation config found in input; using defaults.")
        config_data = {}

    fields: List[Dict[str, str]] = _coerce_fields(model_data.get("fields"))
    try:
        model: ModelSpec = ModelSpec.model_validate(
            {"className": class_name, "fields": fields}
        )
    except ValueError as exc:
        raise ValueError(f"Model definition failed: {exc}") from exc

    try:
        config: GenerationConfig = GenerationConfig.model_validate(config_data)
    except ValueError as exc:
        raise ValueError(f"Config validation failed: {exc}") from exc

    return model, config


# ---------------------------------------------------------------------------
# ScaffoldGenerator
# ---------------------------------------------------------------------------


class ScaffoldGenerator:
    """
    Renders the view files of one model for the configured stack.

    Usage::

        generator = ScaffoldGenerator(GenerationConfig())
        result = generator.generate_from_tokens(
            "Post", ["title:string", "content:text"]
        )
        print(result.files["form"])

    The generator keeps no per-call state and can be reused.
    """

    def __init__(self, config: Optional[GenerationConfig] = None) -> None:
        self._config: GenerationConfig = config or GenerationConfig()
        logger.debug(
            "ScaffoldGenerator initialised: stack=%s, template_dir=%s.",
            self._config.stack.key,
            self._config.template_dir,
        )

    @property
    def config(self) -> GenerationConfig:
        return self._config

    # -----------------------------------------------------------------
    # Public
    # -----------------------------------------------------------------

    def generate(
        self,
        model: ModelSpec,
        stack: Optional[StackConfig] = None,
    ) -> ScaffoldResult:
        """
        Render every role of the selected variant for *model*.

        Args:
            model: The model to scaffold.
            stack: Overrides the configured stack for this call.

        Raises:
            ScaffoldError: Any validation, selection, rendering or
                substitution failure. Nothing is returned in that case.
        """
        with Timer(f"scaffold {model.class_name}") as timer:
            variant: TemplateVariant = select_variant(
                stack if stack is not None else self._config.stack
            )
            validation: ValidationResult = ensure_valid_model(model, self._config)
            names: NameSet = derive_names(model.class_name)
            template_set: TemplateSet = get_template_set(variant)

            result = ScaffoldResult(names=names, variant=variant)
            result.warnings.extend(
                f"{issue.code}: {issue.message}" for issue in validation.warnings
            )
            for issue in validation.warnings:
                logger.warning("  ⚠ %s", issue)

            renderer = BlockRenderer(names, template_set, self._config)
            files: Dict[str, str] = {}
            for role in template_set.roles:
                assembled: AssembledTemplate = self._render_role(
                    model, names, template_set, renderer, role
                )
                files[role] = assembled.text
                result.warnings.extend(assembled.warnings)

            result.files = files
            result.paths = {
                role: self.suggested_path(names, template_set, role) for role in files
            }

        result.elapsed_seconds = timer.elapsed
        logger.info(
            "Scaffold for %s (%s): %d files, %d warning(s) in %.3fs.",
            model.class_name,
            variant.value,
            len(result.files),
            len(result.warnings),
            timer.elapsed,
        )
        return result

    def generate_from_tokens(
        self,
        class_name: str,
        tokens: Iterable[str],
        stack: Optional[StackConfig] = None,
    ) -> ScaffoldResult:
        """Parse ``name:type`` tokens, then ``generate()``."""
        model = ModelSpec(class_name=class_name, fields=tuple(parse_field_tokens(tokens)))
        return self.generate(model, stack)

    def generate_application(self, app_name: str) -> Dict[str, str]:
        """
        Render the application shell templates.

        Returns:
            Output path → text for ``main.tsx``, the home page and
            ``vite.config.js``.
        """
        if not app_name or not app_name.strip():
            raise ValueError("Application name must not be empty.")

        files: Dict[str, str] = {}
        for file_name, output_path in APPLICATION_FILES.items():
            text: str = load_template_file(
                APPLICATION_DIRECTORY, file_name, self._config.template_dir
            )
            assembled = render_template(
                text,
                None,
                {},
                extra={"app_name": app_name},
                template_name=f"{APPLICATION_DIRECTORY}/{file_name}",
            )
            files[output_path] = assembled.text

        logger.info("Rendered %d application files for %s.", len(files), app_name)
        return files

    @staticmethod
    def suggested_path(names: NameSet, template_set: TemplateSet, role: str) -> str:
        """``<route_path>/<template file name>``, e.g. ``blog-posts/form.tsx``."""
        return f"{names.route_path}/{template_set.file_name(role)}"

    # -----------------------------------------------------------------
    # Internal
    # -----------------------------------------------------------------

    def _render_role(
        self,
        model: ModelSpec,
        names: NameSet,
        template_set: TemplateSet,
        renderer: BlockRenderer,
        role: str,
    ) -> AssembledTemplate:
        template_text: str = load_template(
            template_set.variant, role, self._config.template_dir
        )
        blocks: Mapping[str, RenderedBlock] = renderer.render_all(
            template_set.blocks_for(role), model
        )
        return render_template(
            template_text,
            names,
            blocks,
            template_name=f"{template_set.directory}/{template_set.file_name(role)}",
        )


__all__: List[str] = [
    "APPLICATION_FILES",
    "ScaffoldResult",
    "ScaffoldGenerator",
    "load_definition_file",
    "parse_raw_definition",
]

logger.debug("scaffoldgen.generator loaded.")
