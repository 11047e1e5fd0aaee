"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class FieldType(_EnumMixin):
    """Field types with a dedicated render or assignment branch.

    Any other HTML input type (password, hidden, email...) is rendered through
    the generic `<input>` branch and is kept as a plain string on the field.
    """

    TEXT = "text"
    TEXTBOX = "textbox"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    COPY = "copy"
    SUBMIT = "submit"


class RuleKind(_EnumMixin):
    """Validation rules understood by the form engine."""

    REQUIRED = "required"
    LENGTH_MAX = "lengthMax"
    LENGTH_MIN = "lengthMin"
    DIGITS = "digits"
    EMAIL = "email"
    DATE = "date"
    EQUAL = "equal"
    EQUAL_TO = "equalTo"


OPTION_FIELD_TYPES = frozenset({FieldType.SELECT, FieldType.RADIO})
