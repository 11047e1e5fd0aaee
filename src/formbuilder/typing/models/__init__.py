"""Core domain model exports."""

from formbuilder.typing.models.request import SubmittedData
from formbuilder.typing.models.schema import FieldSchema, FieldsetSchema, FormSchema
from formbuilder.typing.models.validation import Invalid, Valid, ValidationResult
from formbuilder.typing.models.values import FieldValue, OptionValue, Rule, Scalar, ScalarValue, scalar_text

__all__ = [
    "FieldSchema",
    "FieldValue",
    "FieldsetSchema",
    "FormSchema",
    "Invalid",
    "OptionValue",
    "Rule",
    "Scalar",
    "ScalarValue",
    "SubmittedData",
    "Valid",
    "ValidationResult",
    "scalar_text",
]
