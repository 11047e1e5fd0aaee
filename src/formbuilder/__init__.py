"""FormBuilder package."""

from formbuilder.dependencies import ensure_package_dependencies
from formbuilder.exceptions import ConfigurationError, DependencyError, PackageError, SettingsError
from formbuilder.field import Field
from formbuilder.fieldset import Fieldset
from formbuilder.form import Form, parse_form_schema
from formbuilder.logging import configure_logging, get_logger
from formbuilder.settings import Settings, get_settings
from formbuilder.typing.models import Invalid, SubmittedData, Valid, ValidationResult

__version__ = "2.0.0"

ensure_package_dependencies()

# Initialize package logger at import time via `get_logger`.
logger = get_logger("formbuilder")

__all__ = [
    "ConfigurationError",
    "DependencyError",
    "Field",
    "Fieldset",
    "Form",
    "Invalid",
    "PackageError",
    "Settings",
    "SettingsError",
    "SubmittedData",
    "Valid",
    "ValidationResult",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
    "parse_form_schema",
]
