"""Field value variants and rule entries."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from formbuilder.typing.enums import RuleKind

Scalar = str | int | float | bool | None

_LENGTH_RULES = frozenset({RuleKind.LENGTH_MAX, RuleKind.LENGTH_MIN})


def scalar_text(value: Scalar) -> str:
    """Return the markup/comparison text of a scalar.

    Args:
        value (Scalar): Raw scalar.

    Returns:
        str: Text form, empty for `None`.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ScalarValue(BaseModel):
    """Raw value held by a text-like field."""

    model_config = ConfigDict(extra="forbid")

    value: Scalar = None

    @property
    def text(self) -> str:
        """Return the value as text."""
        return scalar_text(self.value)


class OptionValue(BaseModel):
    """One option of a select or radio field."""

    model_config = ConfigDict(extra="ignore")

    name: Scalar = ""
    value: Scalar = ""
    disabled: bool = False
    selected: bool = False
    label: str | None = None
    id: str | None = None
    track: str | None = None

    @property
    def text(self) -> str:
        """Return the option value as text."""
        return scalar_text(self.value)


FieldValue = ScalarValue | OptionValue


class Rule(BaseModel):
    """One validation rule, kept in schema declaration order."""

    model_config = ConfigDict(extra="forbid")

    kind: RuleKind
    parameter: Any = Field(default=True)

    @model_validator(mode="after")
    def _coerce_length_parameter(self) -> Rule:
        """Turn numeric strings into integers for length rules.

        Raises:
            ValueError: If a length rule carries a non-numeric parameter.

        Returns:
            Rule: The rule with a numeric parameter.
        """
        if self.kind not in _LENGTH_RULES or isinstance(self.parameter, bool) or not self.parameter:
            return self
        if isinstance(self.parameter, int | float):
            return self
        try:
            self.parameter = int(str(self.parameter).strip())
        except ValueError as exc:
            message = f"Rule '{self.kind}' expects a numeric parameter, got {self.parameter!r}"
            raise ValueError(message) from exc
        return self

    @property
    def active(self) -> bool:
        """Return whether the rule is switched on."""
        return bool(self.parameter)
