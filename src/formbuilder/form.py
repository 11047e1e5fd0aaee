"""Schema-driven forms.

A form is built from a JSON document describing fieldsets and fields. The
markup follows the conventions of the jQuery validation plugin so one
stylesheet serves both client- and server-side errors.

Usage::

    form = Form(schema_json)
    request = SubmittedData(method="POST", values=request_body)

    if form.submitted(request):
        result = form.validate(request)
        if result.is_valid:
            record.update(form.get_data_map())

    # shows inline errors and the submitted values once the form was posted
    html = form.render(request)
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from formbuilder.exceptions import ConfigurationError
from formbuilder.fieldset import Fieldset
from formbuilder.logging import get_form_logger
from formbuilder.markup import attribute, flag, join_fragments, open_tag
from formbuilder.settings import get_settings
from formbuilder.typing.models import FormSchema, Invalid, Valid, scalar_text

if TYPE_CHECKING:
    from formbuilder.settings import Settings
    from formbuilder.typing.models import Scalar, SubmittedData, ValidationResult


def parse_form_schema(document: str | bytes | Mapping[str, Any] | FormSchema) -> FormSchema:
    """Parse a form schema document.

    Args:
        document (str | bytes | Mapping[str, Any] | FormSchema): JSON text, decoded
            JSON object, or an already parsed schema.

    Raises:
        ConfigurationError: If the document is not valid JSON, not a JSON object,
            or does not match the schema layout.

    Returns:
        FormSchema: Parsed schema.
    """
    if isinstance(document, FormSchema):
        return document

    payload: object = document
    if isinstance(document, str | bytes):
        try:
            payload = json.loads(document)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(message="There is an error in your JSON", exc=exc) from exc

    if not isinstance(payload, Mapping):
        raise ConfigurationError(message="Form schema must be a JSON object")

    try:
        return FormSchema.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(message="Invalid form schema", exc=exc) from exc


def _validate_schema_file_path(path: Path) -> None:
    """Validate a schema file path before loading.

    Args:
        path (Path): Schema file path.

    Raises:
        ConfigurationError: If the path is not a readable JSON file.
    """
    if not path.is_file():
        raise ConfigurationError(message=f"Schema path is not a file: {path}")
    if path.suffix.lower() != ".json":
        raise ConfigurationError(message=f"Schema path must end with '.json': {path}")


class Form:
    """Top-level form: fieldsets plus submission and validation orchestration."""

    def __init__(
        self,
        document: str | bytes | Mapping[str, Any] | FormSchema,
        *,
        settings: Settings | None = None,
    ) -> None:
        """Build a form from its schema.

        Args:
            document (str | bytes | Mapping[str, Any] | FormSchema): Form schema.
            settings (Settings | None): Runtime settings, loaded when omitted.

        Raises:
            ConfigurationError: If the schema is malformed.
        """
        config = settings or get_settings()
        schema = parse_form_schema(document)

        self.id = schema.id
        self.css_class = schema.css_class
        self.action = schema.action if schema.action is not None else config.default_action
        self.method = schema.method if schema.method is not None else config.default_method
        self.validate_on_render = schema.validate_on_render
        self.token_field = config.token_field
        self.fieldsets = [Fieldset(fieldset) for fieldset in schema.fieldsets]
        self._logger = get_form_logger(self.id)

        self._logger.debug("Form built", extra={"fieldsets": len(self.fieldsets), "method": self.method})

    @classmethod
    def from_path(cls, path: Path, *, settings: Settings | None = None) -> Form:
        """Build a form from a `.json` schema file.

        Args:
            path (Path): Schema file path.
            settings (Settings | None): Runtime settings.

        Raises:
            ConfigurationError: If the file cannot be read or parsed.

        Returns:
            Form: The form.
        """
        schema_path = Path(path)
        _validate_schema_file_path(schema_path)
        try:
            text = schema_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(message=f"Cannot read schema file: {schema_path}", exc=exc) from exc
        return cls(text, settings=settings)

    def __repr__(self) -> str:
        return f"Form(id={self.id!r}, method={self.method!r}, fieldsets={len(self.fieldsets)})"

    def submitted(self, submitted: SubmittedData | None) -> bool:
        """Return whether the request is a submission of this form.

        The request method must match the form method and the hidden token
        field must carry this form's id.

        Args:
            submitted (SubmittedData | None): Request snapshot.

        Returns:
            bool: True for a submission of this form.
        """
        if submitted is None or self.id is None:
            return False
        if submitted.method != self.method.strip().upper():
            return False
        token = submitted.get(self.token_field)
        matched = token is not None and scalar_text(token) == self.id
        self._logger.debug("Submission check", extra={"submitted": matched})
        return matched

    def validate(self, submitted: SubmittedData | None = None) -> ValidationResult:
        """Validate every fieldset against the request.

        Args:
            submitted (SubmittedData | None): Request snapshot.

        Returns:
            ValidationResult: `Valid()`, or `Invalid(errors)` with errors in
            fieldset then field declaration order.
        """
        errors: list[str] = []
        for fieldset in self.fieldsets:
            errors.extend(fieldset.validate(submitted))

        if errors:
            self._logger.info("Form validation failed", extra={"error_count": len(errors)})
            return Invalid(errors=errors)
        self._logger.info("Form validation passed")
        return Valid()

    def render(self, submitted: SubmittedData | None = None) -> str:
        """Render the form.

        Inline errors only show once the request is a submission of this form
        and validation is enabled for it.

        Args:
            submitted (SubmittedData | None): Request snapshot.

        Returns:
            str: Markup fragments joined by single spaces.
        """
        should_validate = self.validate_on_render and self.submitted(submitted)
        buffer = [
            open_tag(
                "form",
                attribute("id", self.id),
                attribute("class", self.css_class),
                attribute("action", self.action),
                attribute("method", self.method),
                flag("novalidate", not self.validate_on_render),
            ),
            open_tag(
                "input",
                attribute("type", "hidden"),
                attribute("name", self.token_field),
                attribute("id", self.token_field),
                attribute("value", self.id or ""),
            ),
        ]
        buffer.extend(fieldset.render(should_validate, submitted) for fieldset in self.fieldsets)
        buffer.append("</form>")
        return join_fragments(buffer)

    def get_data_map(self) -> dict[str, Scalar]:
        """Collect `dataMap` key/value pairs across all fieldsets.

        Meant to be called after `validate` returned `Valid()`.

        Returns:
            dict[str, Scalar]: Flat mapping; later fields win on key collisions.
        """
        data: dict[str, Scalar] = {}
        for fieldset in self.fieldsets:
            data.update(fieldset.get_data_map())
        self._logger.debug("Data map extracted", extra={"keys": sorted(data)})
        return data
