# File: scaffoldgen/renderers.py
"""
Scaffoldgen - Per-Field Block Renderers
========================================
Turns an ordered field list into the text of every per-field placeholder
(``{{table_headers}}``, ``{{form_fields}}``, ...).

Rules:
    - Fields are visited in declared order; each field yields exactly one
      entry per block, so entry *i* of every block describes field *i*.
    - Auto-managed fields (``id``, ``created_at``, ``updated_at``) never
      reach a block; every view template renders them as fixed markup
      (``id`` before the per-field rows, timestamps after them).
    - Block text comes back already indented to the nesting depth its
      template declares (``TemplateSet.block_depth``).
    - Type-dependent shapes come from registry kinds; dialect-dependent
      shapes (React vs Preact state vs Preact validated) come from the
      ``FormDialect`` strategy the variant selects.

Renderers are stateless apart from the immutable ``NameSet``, template set
and config they are built with.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from scaffoldgen.errors import EmptyFormFieldList
from scaffoldgen.models import (
    EmptyFormPolicy,
    FieldSpec,
    GenerationConfig,
    ModelSpec,
    NameSet,
    RenderedBlock,
    TemplateVariant,
)
from scaffoldgen.naming import field_label, reference_route
from scaffoldgen.registry import DisplayKind, FieldTypeRule, InputKind, SchemaKind, lookup
from scaffoldgen.utils import indent_lines
from scaffoldgen.variants import (
    DIALECT_PREACT_STATE,
    DIALECT_PREACT_VALIDATED,
    DIALECT_REACT,
    TemplateSet,
    get_template_set,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.renderers")

# ---------------------------------------------------------------------------
# Validation-schema predicates (zod), keyed by registry schema kind
# ---------------------------------------------------------------------------

# Payload schema, checked against the JSON the server returns / accepts.
_SCHEMA_PREDICATES: Dict[SchemaKind, str] = {
    SchemaKind.NON_EMPTY_STRING: "z.string().min(1)",
    SchemaKind.STRING: "z.string()",
    SchemaKind.INTEGER: "z.number().int()",
    SchemaKind.NUMBER: "z.number()",
    SchemaKind.BOOLEAN: "z.boolean()",
    SchemaKind.DATE: "z.string().date()",
    SchemaKind.DATETIME: "z.string().datetime({ local: true })",
    SchemaKind.REFERENCE: "z.number().int().positive()",
}

# Form-side schema: inputs arrive as strings, so numbers are coerced and
# every predicate carries a user-facing message.  ``{label}`` is filled in.
_FORM_SCHEMA_PREDICATES: Dict[SchemaKind, str] = {
    SchemaKind.NON_EMPTY_STRING: 'z.string().trim().min(1, "{label} can\'t be blank")',
    SchemaKind.STRING: "z.string()",
    SchemaKind.INTEGER: 'z.coerce.number().int("{label} must be a whole number")',
    SchemaKind.NUMBER: 'z.coerce.number({{ invalid_type_error: "{label} must be a number" }})',
    SchemaKind.BOOLEAN: "z.boolean()",
    SchemaKind.DATE: 'z.string().date("{label} must be a valid date")',
    SchemaKind.DATETIME: 'z.string().min(1, "{label} is required")',
    SchemaKind.REFERENCE: 'z.coerce.number().int().positive("Select a {label}")',
}


# ---------------------------------------------------------------------------
# Dialects
# ---------------------------------------------------------------------------


class FormDialect:
    """
    JSX flavour of one variant.

    Subclasses decide attribute names, string quoting, how an input is bound
    to form state, and where validation errors are read from.
    """

    name: str = ""
    class_attr: str = "className"
    link_attr: str = "to"
    quote: str = "'"

    def __init__(self, unit: str) -> None:
        self.unit: str = unit

    def q(self, text: str) -> str:
        return f"{self.quote}{text}{self.quote}"

    # -- Binding -----------------------------------------------------------

    def bind(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        """Attributes that connect the input to form state."""
        raise NotImplementedError

    def error_expr(self, field: FieldSpec) -> str:
        raise NotImplementedError

    def error_lines(self, field: FieldSpec) -> List[str]:
        return [
            f"{{{self.error_expr(field)} && (",
            f'{self.unit}<div {self.class_attr}="invalid-feedback">{self.error_text(field)}</div>',
            ")}",
        ]

    def error_text(self, field: FieldSpec) -> str:
        return f"{{{self.error_expr(field)}.join({self.q(', ')})}}"

    # -- Widgets -----------------------------------------------------------

    def _element(self, tag: str, attrs: Iterable[str]) -> List[str]:
        lines: List[str] = [f"<{tag}"]
        lines.extend(f"{self.unit}{attr}" for attr in attrs)
        lines.append("/>")
        return lines

    def widget(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        name: str = field.name
        kind: InputKind = rule.input_kind
        binding: List[str] = self.bind(field, rule)

        if kind == InputKind.TEXTAREA:
            attrs = [f'id="{name}"', "rows={5}", *binding, f'{self.class_attr}="form-control"']
            return self._element("textarea", attrs)

        if kind == InputKind.CHECKBOX:
            attrs = ['type="checkbox"', f'id="{name}"', *binding, f'{self.class_attr}="form-check-input"']
            return self._element("input", attrs)

        if kind == InputKind.SELECT_REFERENCE:
            label: str = field_label(name)
            options: str = f"(options.{name} ?? [])"
            u: str = self.unit
            lines: List[str] = [f'<select id="{name}"']
            lines.extend(f"{u}{attr}" for attr in binding)
            lines.append(f'{u}{self.class_attr}="form-control"')
            lines.append(">")
            lines.append(f'{u}<option value="">Select {label}</option>')
            lines.append(f"{u}{{{options}.map((option) => (")
            lines.append(
                f"{u}{u}<option key={{option.value}} value={{option.value}}>"
                "{option.label}</option>"
            )
            lines.append(f"{u}))}}")
            lines.append("</select>")
            return lines

        attrs = [f'type="{rule.html_input_type or "text"}"', f'id="{name}"']
        if rule.step is not None:
            attrs.append(f'step="{rule.step}"')
        attrs.extend(binding)
        attrs.append(f'{self.class_attr}="form-control"')
        return self._element("input", attrs)

    def form_group(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        u: str = self.unit
        label_line: str = f'<label htmlFor="{field.name}">{field_label(field.name)}</label>'
        widget_lines: List[str] = self.widget(field, rule)
        lines: List[str]
        if rule.input_kind == InputKind.CHECKBOX:
            lines = [f'<div {self.class_attr}="form-group form-check">']
            lines.extend(u + line for line in widget_lines)
            lines.append(u + label_line.replace("<label ", f'<label {self.class_attr}="form-check-label" ', 1))
        else:
            lines = [f'<div {self.class_attr}="form-group">', u + label_line]
            lines.extend(u + line for line in widget_lines)
        lines.extend(u + line for line in self.error_lines(field))
        lines.append("</div>")
        return lines


class ReactDialect(FormDialect):
    """React + react-router: ``formData`` state updated through ``handleChange``."""

    name = DIALECT_REACT
    text_event: str = "onChange"

    def _on_change(self, field: FieldSpec, value: str, event: str = "onChange") -> str:
        return f"{event}={{(e) => handleChange({self.q(field.name)}, {value})}}"

    def _target(self, element: str) -> str:
        return "e.target"

    def bind(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        name: str = field.name
        empty: str = self.q("")
        kind: InputKind = rule.input_kind
        target: str

        if kind == InputKind.CHECKBOX:
            target = self._target("HTMLInputElement")
            return [
                f"checked={{!!formData.{name}}}",
                self._on_change(field, f"{target}.checked"),
            ]
        if kind == InputKind.NUMBER:
            target = self._target("HTMLInputElement")
            return [
                f"value={{formData.{name} ?? {empty}}}",
                self._on_change(
                    field,
                    f"{target}.value === {empty} ? null : Number({target}.value)",
                    self.text_event,
                ),
            ]
        if kind == InputKind.SELECT_REFERENCE:
            target = self._target("HTMLSelectElement")
            return [
                f"value={{formData.{name} ?? {empty}}}",
                self._on_change(
                    field,
                    f"{target}.value === {empty} ? null : Number({target}.value)",
                ),
            ]

        element: str = "HTMLTextAreaElement" if kind == InputKind.TEXTAREA else "HTMLInputElement"
        target = self._target(element)
        value: str = f"formData.{name}"
        if rule.html_input_type == "datetime-local":
            value = f"formData.{name}?.slice(0, 16)"
        return [
            f"value={{{value} ?? {empty}}}",
            self._on_change(field, f"{target}.value", self.text_event),
        ]

    def error_expr(self, field: FieldSpec) -> str:
        return f"errors.{field.name}"


class PreactStateDialect(ReactDialect):
    """Preact + orbita: same state model, ``onInput`` events and ``class``."""

    name = DIALECT_PREACT_STATE
    class_attr = "class"
    link_attr = "href"
    quote = '"'
    text_event = "onInput"

    def _target(self, element: str) -> str:
        return f"(e.target as {element})"


class PreactValidatedDialect(FormDialect):
    """Preact + orbita ``useForm``: inputs are bound by spreading form helpers."""

    name = DIALECT_PREACT_VALIDATED
    class_attr = "class"
    link_attr = "href"
    quote = '"'

    def bind(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        helper: str = "checkbox" if rule.input_kind == InputKind.CHECKBOX else "field"
        return [f"{{...form.{helper}({self.q(field.name)})}}"]

    def error_expr(self, field: FieldSpec) -> str:
        return f"form.errors.{field.name}"

    def error_text(self, field: FieldSpec) -> str:
        return f"{{{self.error_expr(field)}}}"


DIALECTS: Dict[str, type] = {
    DIALECT_REACT: ReactDialect,
    DIALECT_PREACT_STATE: PreactStateDialect,
    DIALECT_PREACT_VALIDATED: PreactValidatedDialect,
}


# ---------------------------------------------------------------------------
# Block renderer
# ---------------------------------------------------------------------------


class BlockRenderer:
    """
    Renders the per-field blocks of one (variant, model) pair.

    Usage::

        renderer = BlockRenderer(names, get_template_set(variant), config)
        blocks = renderer.render_all(("table_headers", "table_cells"), model)
    """

    def __init__(
        self,
        names: NameSet,
        template_set: TemplateSet,
        config: Optional[GenerationConfig] = None,
    ) -> None:
        self._names: NameSet = names
        self._template_set: TemplateSet = template_set
        self._config: GenerationConfig = config or GenerationConfig()
        self._unit: str = " " * self._config.indent_size
        self._dialect: FormDialect = DIALECTS[template_set.dialect](self._unit)
        self._entries: Dict[str, Callable[[FieldSpec, FieldTypeRule], List[str]]] = {
            "interface_fields": self._interface_entry,
            "table_headers": self._header_entry,
            "table_cells": self._cell_entry,
            "detail_fields": self._detail_entry,
            "form_fields": self._dialect.form_group,
            "form_data_mapping": self._form_data_entry,
            "schema_fields": self._schema_entry,
            "form_schema_fields": self._form_schema_entry,
        }

    # -----------------------------------------------------------------
    # Public
    # -----------------------------------------------------------------

    def render(self, key: str, model: ModelSpec) -> RenderedBlock:
        """
        Render one block.

        Raises:
            KeyError: *key* is not a block placeholder.
            EmptyFormFieldList: ``form_fields`` for a model with no editable
                fields under a variant (or policy) that requires one.
        """
        if key not in self._entries:
            raise KeyError(f"Unknown block placeholder '{key}'.")
        entry = self._entries[key]
        fields: Tuple[FieldSpec, ...] = model.editable_fields

        if key == "form_fields" and not fields:
            self._check_empty_form(model)

        depth: int = self._template_set.block_depth.get(key, 0)
        lines: List[str] = []
        for spec in fields:
            lines.extend(entry(spec, lookup(spec.type)))

        text: str = "\n".join(indent_lines(lines, depth * self._config.indent_size))
        logger.debug(
            "Rendered block %s for %s (%s): %d entries.",
            key,
            model.class_name,
            self._template_set.variant.value,
            len(fields),
        )
        return RenderedBlock(key=key, text=text, entry_count=len(fields))

    def render_all(self, keys: Iterable[str], model: ModelSpec) -> Dict[str, RenderedBlock]:
        return {key: self.render(key, model) for key in keys}

    # -----------------------------------------------------------------
    # Empty form policy
    # -----------------------------------------------------------------

    def _requires_editable_fields(self) -> bool:
        policy: EmptyFormPolicy = self._config.empty_form_policy
        if policy == EmptyFormPolicy.AUTO:
            return self._template_set.requires_editable_fields
        return policy == EmptyFormPolicy.ERROR

    def _check_empty_form(self, model: ModelSpec) -> None:
        if self._requires_editable_fields():
            raise EmptyFormFieldList(
                f"Model '{model.class_name}' has no editable fields; the "
                f"'{self._template_set.variant.value}' form needs at least one.",
                model=model.class_name,
                variant=self._template_set.variant.value,
            )
        logger.info(
            "Model %s has no editable fields; rendering a submit-only form.",
            model.class_name,
        )

    # -----------------------------------------------------------------
    # Entries
    # -----------------------------------------------------------------

    def _interface_entry(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        return [f"{field.name}: {rule.value_type};"]

    def _header_entry(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        return [f"<th>{field_label(field.name)}</th>"]

    def _display_value(self, field: FieldSpec, rule: FieldTypeRule) -> str:
        """JSX expression (without braces) showing the field's value."""
        ref: str = f"{self._names.singular_name}.{field.name}"
        cls: str = self._dialect.class_attr
        kind: DisplayKind = rule.display_kind

        if kind == DisplayKind.BADGE:
            return (
                f'{ref} ? <span {cls}="badge badge-success">Yes</span>'
                f' : <span {cls}="badge badge-secondary">No</span>'
            )
        if kind == DisplayKind.DATE:
            return f"{ref} && new Date({ref}).toLocaleDateString()"
        if kind == DisplayKind.DATETIME:
            return f"{ref} && new Date({ref}).toLocaleString()"
        if kind == DisplayKind.LINK:
            route: str = reference_route(field.name)
            return (
                f"{ref} != null && <Link {self._dialect.link_attr}="
                f"{{`/{route}/${{{ref}}}`}}>#{{{ref}}}</Link>"
            )
        return ref

    def _cell_entry(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        value: str = self._display_value(field, rule)
        if rule.display_kind == DisplayKind.EXCERPT:
            return [f'<td {self._dialect.class_attr}="text-truncate">{{{value}}}</td>']
        return [f"<td>{{{value}}}</td>"]

    def _detail_entry(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        cls: str = self._dialect.class_attr
        u: str = self._unit
        value_tag: str = "p" if rule.display_kind == DisplayKind.EXCERPT else "span"
        return [
            f'<div {cls}="detail-row">',
            f"{u}<strong>{field_label(field.name)}:</strong>",
            f"{u}<{value_tag}>{{{self._display_value(field, rule)}}}</{value_tag}>",
            "</div>",
        ]

    def _form_data_entry(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        ref: str = f"{self._names.singular_name}.{field.name}"
        if rule.html_input_type == "datetime-local":
            ref = f"{ref}?.slice(0, 16)"
        return [f"{field.name}: {ref} ?? {rule.default_value},"]

    def _schema_entry(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        return [f"{field.name}: {_SCHEMA_PREDICATES[rule.schema_kind]},"]

    def _form_schema_entry(self, field: FieldSpec, rule: FieldTypeRule) -> List[str]:
        predicate: str = _FORM_SCHEMA_PREDICATES[rule.schema_kind].format(
            label=field_label(field.name)
        )
        return [f"{field.name}: {predicate},"]


# ---------------------------------------------------------------------------
# Single-fragment helper
# ---------------------------------------------------------------------------


def render_schema_fragment(field: FieldSpec, variant: TemplateVariant) -> str:
    """
    The validation fragment one field contributes under *variant*.

    Schema-validated variants give the zod predicate
    (``status: z.boolean()``); plain variants have no runtime schema, so the
    field's contract is its type declaration (``status: boolean``).
    """
    rule: FieldTypeRule = lookup(field.type)
    template_set: TemplateSet = get_template_set(variant)
    if template_set.dialect == DIALECT_PREACT_VALIDATED:
        return f"{field.name}: {_SCHEMA_PREDICATES[rule.schema_kind]}"
    return f"{field.name}: {rule.value_type}"


__all__: List[str] = [
    "FormDialect",
    "ReactDialect",
    "PreactStateDialect",
    "PreactValidatedDialect",
    "DIALECTS",
    "BlockRenderer",
    "render_schema_fragment",
]
