"""Single form control."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from formbuilder.exceptions import ConfigurationError
from formbuilder.markup import attribute, client_hints, error_label, flag, join_fragments, label, open_tag
from formbuilder.rules import build_rules, evaluate_rules
from formbuilder.typing.enums import OPTION_FIELD_TYPES, FieldType
from formbuilder.typing.models import (
    FieldSchema,
    FieldValue,
    OptionValue,
    Scalar,
    ScalarValue,
    SubmittedData,
    scalar_text,
)


def _coerce_schema(record: FieldSchema | Mapping[str, Any]) -> FieldSchema:
    """Validate a raw field record.

    Args:
        record (FieldSchema | Mapping[str, Any]): Parsed schema or raw mapping.

    Raises:
        ConfigurationError: If the record has no name or is malformed.

    Returns:
        FieldSchema: Validated record.
    """
    if isinstance(record, FieldSchema):
        return record
    if not isinstance(record, Mapping):
        raise ConfigurationError(message=f"Field record must be an object, got {type(record).__name__}")
    if record.get("name") is None:
        raise ConfigurationError(message="Field name is mandatory")
    try:
        return FieldSchema.model_validate(record)
    except ValidationError as exc:
        raise ConfigurationError(message=f"Invalid field '{record['name']}'", exc=exc) from exc


def _normalize_values(record: FieldSchema, field_type: str) -> list[FieldValue]:
    """Turn `value`/`values` into the value list matching the field type.

    Option fields get option records; every other field gets scalars and is
    never left empty.
    """
    raw: list[OptionValue | Scalar]
    if record.values is not None:
        raw = list(record.values)
    elif record.value is not None:
        raw = [record.value]
    else:
        raw = []

    if field_type in OPTION_FIELD_TYPES:
        return [
            item.model_copy() if isinstance(item, OptionValue) else OptionValue(name=item, value=item)
            for item in raw
        ]

    values: list[FieldValue] = [
        ScalarValue(value=item.value if isinstance(item, OptionValue) else item) for item in raw
    ]
    return values or [ScalarValue(value=None)]


class Field:
    """A single labeled input control.

    A field owns its values, rules and custom error messages. `validate`
    copies the submitted value into the field before checking the rules, so a
    later `render` shows what the user typed or picked.
    """

    def __init__(self, record: FieldSchema | Mapping[str, Any]) -> None:
        """Build a field from its schema record.

        Args:
            record (FieldSchema | Mapping[str, Any]): Field record.

        Raises:
            ConfigurationError: If `name` is missing or a rule parameter is invalid.
        """
        schema = _coerce_schema(record)
        self.name = schema.name
        self.type = schema.type or FieldType.TEXT.value
        self.label = schema.label
        self.placeholder = schema.placeholder
        self.track = schema.track
        self.css_class = schema.css_class
        self.autofocus = schema.autofocus
        self.disabled = schema.disabled
        self.data_map = schema.data_map
        self.errors = dict(schema.errors)
        try:
            self.rules = build_rules(schema.rules)
        except ValidationError as exc:
            raise ConfigurationError(message=f"Invalid rules for field '{self.name}'", exc=exc) from exc
        self.values = _normalize_values(schema, self.type)
        self.selected = False

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, type={self.type!r})"

    @property
    def has_options(self) -> bool:
        """Return whether the field holds option records."""
        return self.type in OPTION_FIELD_TYPES

    @property
    def options(self) -> list[OptionValue]:
        """Return the option records of a select/radio field."""
        return [value for value in self.values if isinstance(value, OptionValue)]

    def _first_text(self) -> str:
        return self.values[0].text if self.values else ""

    def _ensure_value(self) -> None:
        """Keep at least one entry in `values`, an empty scalar when cleared."""
        if not self.values:
            self.values = [ScalarValue(value=None)]

    def _assign(self, submitted: SubmittedData) -> None:
        """Copy the submitted value into the field."""
        if self.type == FieldType.SUBMIT:
            return
        if self.has_options:
            if submitted.is_filled(self.name):
                choice = scalar_text(submitted.get(self.name))
                for option in self.options:
                    option.selected = option.text == choice
            return
        if self.type == FieldType.CHECKBOX:
            self.selected = submitted.is_filled(self.name) and (
                scalar_text(submitted.get(self.name)) == self._first_text()
            )
            return
        if submitted.is_filled(self.name):
            self.values = [ScalarValue(value=submitted.get(self.name))]
        else:
            self.values = []

    def validate(self, submitted: SubmittedData | None = None) -> list[str]:
        """Assign the submitted value and check every rule.

        Args:
            submitted (SubmittedData | None): Request snapshot, empty when omitted.

        Returns:
            list[str]: Error messages in rule declaration order.
        """
        data = submitted if submitted is not None else SubmittedData()
        self._assign(data)
        # option fields are checked against their options only, never the empty placeholder
        errors = evaluate_rules(
            self.rules,
            self.options if self.has_options else self.values,
            submitted=data,
            label=self.label,
            custom_errors=self.errors,
        )
        self._ensure_value()
        return errors

    def render(self, should_validate: bool = False, submitted: SubmittedData | None = None) -> str:  # noqa: FBT001, FBT002
        """Render the field markup.

        Args:
            should_validate (bool): Validate first and show inline errors.
            submitted (SubmittedData | None): Request snapshot used for validation.

        Returns:
            str: Markup fragments joined by single spaces.
        """
        errors = self.validate(submitted) if should_validate else []
        css_class = join_fragments((self.css_class or "", "error" if errors else "")) or None
        self._ensure_value()

        buffer = [self._render_control(css_class)]
        buffer.extend(error_label(self.name, message) for message in errors)
        return join_fragments(buffer)

    def _hints(self, track: str | None = None) -> str:
        return client_hints(
            self.rules,
            track=track or self.track,
            disabled=self.disabled,
            autofocus=self.autofocus,
            placeholder=self.placeholder,
        )

    def _label(self) -> str:
        return label(self.name, self.label) if self.label is not None else ""

    def _identity(self, css_class: str | None) -> tuple[str, str, str]:
        return attribute("id", self.name), attribute("name", self.name), attribute("class", css_class)

    def _render_control(self, css_class: str | None) -> str:
        match self.type:
            case FieldType.COPY:
                return join_fragments((self._label(), self._first_text()))
            case FieldType.TEXTBOX:
                return join_fragments(
                    (
                        self._label(),
                        open_tag("textarea", self._hints(), *self._identity(css_class)),
                        self._first_text(),
                        "</textarea>",
                    ),
                )
            case FieldType.SELECT:
                return self._render_select(css_class)
            case FieldType.RADIO:
                return self._render_radio(css_class)
            case FieldType.CHECKBOX:
                return join_fragments(
                    (
                        open_tag(
                            "input",
                            self._hints(),
                            flag("checked", self.selected),
                            attribute("type", self.type),
                            *self._identity(css_class),
                            attribute("value", self._first_text()),
                        ),
                        self._label(),
                    ),
                )
            case _:
                return join_fragments(
                    (
                        self._label(),
                        open_tag(
                            "input",
                            self._hints(),
                            attribute("type", self.type),
                            *self._identity(css_class),
                            attribute("value", self._first_text()),
                        ),
                    ),
                )

    def _render_select(self, css_class: str | None) -> str:
        buffer = [self._label(), open_tag("select", self._hints(), *self._identity(css_class))]
        for option in self.options:
            tag = open_tag(
                "option",
                flag("disabled", option.disabled),
                flag("selected", option.selected),
                attribute("value", option.text),
            )
            buffer.append(f"{tag}{scalar_text(option.name)}</option>")
        buffer.append("</select>")
        return join_fragments(buffer)

    def _render_radio(self, css_class: str | None) -> str:
        buffer = [self._label(), open_tag("ul", attribute("class", join_fragments(("radios", css_class or ""))))]
        for option in self.options:
            buffer.append("<li>")
            buffer.append(
                open_tag(
                    "input",
                    self._hints(track=option.track),
                    flag("disabled", option.disabled and not self.disabled),
                    flag("checked", option.selected),
                    attribute("type", "radio"),
                    attribute("id", option.id),
                    attribute("name", self.name),
                    attribute("class", css_class),
                    attribute("value", option.text),
                ),
            )
            if option.label is not None:
                buffer.append(label(option.id or self.name, option.label))
            buffer.append("</li>")
        buffer.append("</ul>")
        return join_fragments(buffer)

    def get_data_map(self) -> dict[str, Scalar]:
        """Return this field's contribution to the persisted data.

        Returns:
            dict[str, Scalar]: `{dataMap: value}`, or {} without a `dataMap` or
            when no option of a select/radio field is selected.
        """
        self._ensure_value()
        if not self.data_map:
            return {}
        if self.has_options:
            for option in self.options:
                if option.selected:
                    return {self.data_map: option.value}
            return {}
        if self.type == FieldType.CHECKBOX:
            return {self.data_map: self.values[0].value if self.selected else None}
        return {self.data_map: self.values[0].value}
