"""Group of fields sharing one visual container."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from formbuilder.exceptions import ConfigurationError
from formbuilder.field import Field
from formbuilder.markup import attribute, join_fragments, open_tag
from formbuilder.typing.models import FieldsetSchema

if TYPE_CHECKING:
    from formbuilder.typing.models import Scalar, SubmittedData


class Fieldset:
    """Ordered fields rendered inside one `<fieldset>`."""

    def __init__(self, record: FieldsetSchema | Mapping[str, Any]) -> None:
        """Build a fieldset and its fields.

        Args:
            record (FieldsetSchema | Mapping[str, Any]): Fieldset record.

        Raises:
            ConfigurationError: If the record or one of its fields is malformed.
        """
        if isinstance(record, Mapping):
            try:
                record = FieldsetSchema.model_validate(record)
            except ValidationError as exc:
                raise ConfigurationError(message="Invalid fieldset", exc=exc) from exc
        self.css_class = record.css_class
        self.legend = record.legend
        self.fields = [Field(field) for field in record.fields]

    def __repr__(self) -> str:
        return f"Fieldset(legend={self.legend!r}, fields={len(self.fields)})"

    def render(self, should_validate: bool = False, submitted: SubmittedData | None = None) -> str:  # noqa: FBT001, FBT002
        """Render the fieldset, one list item per field.

        Args:
            should_validate (bool): Validate each field and show inline errors.
            submitted (SubmittedData | None): Request snapshot used for validation.

        Returns:
            str: Markup fragments joined by single spaces.
        """
        buffer = [open_tag("fieldset", attribute("class", self.css_class))]
        if self.legend is not None:
            buffer.append(f"<legend>{self.legend}</legend>")
        buffer.append("<ul>")
        buffer.extend(f"<li>{field.render(should_validate, submitted)}</li>" for field in self.fields)
        buffer.append("</ul>")
        buffer.append("</fieldset>")
        return join_fragments(buffer)

    def validate(self, submitted: SubmittedData | None = None) -> list[str]:
        """Validate every field and merge their errors in field order."""
        errors: list[str] = []
        for field in self.fields:
            errors.extend(field.validate(submitted))
        return errors

    def get_data_map(self) -> dict[str, Scalar]:
        """Merge the data map of every field; later fields win on key collisions."""
        data: dict[str, Scalar] = {}
        for field in self.fields:
            data.update(field.get_data_map())
        return data
