"""Schema-centric domain models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from formbuilder.typing.models.values import OptionValue, Scalar


class FieldSchema(BaseModel):
    """Single field record of a form schema."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    type: str = "text"
    label: str | None = None
    placeholder: str | None = None
    track: str | None = None
    css_class: str | None = Field(default=None, alias="class")
    autofocus: bool = False
    disabled: bool = False
    data_map: str | None = Field(default=None, alias="dataMap")
    rules: dict[str, Any] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)
    value: Scalar = None
    values: list[OptionValue | Scalar] | None = None


class FieldsetSchema(BaseModel):
    """Fieldset record of a form schema."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    css_class: str | None = Field(default=None, alias="class")
    legend: str | None = None
    fields: list[FieldSchema]


class FormSchema(BaseModel):
    """Top-level form schema document."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = None
    css_class: str | None = Field(default=None, alias="class")
    action: str | None = None
    method: str | None = None
    validate_on_render: bool = Field(default=True, alias="validate")
    fieldsets: list[FieldsetSchema]
