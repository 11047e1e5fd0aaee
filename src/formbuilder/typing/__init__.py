"""Typing-centric domain modules."""

from formbuilder.typing.enums import FieldType, RuleKind
from formbuilder.typing.models import (
    FieldSchema,
    FieldsetSchema,
    FieldValue,
    FormSchema,
    Invalid,
    OptionValue,
    Rule,
    ScalarValue,
    SubmittedData,
    Valid,
    ValidationResult,
)

__all__ = [
    "FieldSchema",
    "FieldType",
    "FieldValue",
    "FieldsetSchema",
    "FormSchema",
    "Invalid",
    "OptionValue",
    "Rule",
    "RuleKind",
    "ScalarValue",
    "SubmittedData",
    "Valid",
    "ValidationResult",
]
