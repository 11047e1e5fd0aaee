from formbuilder.exceptions import (
    ConfigurationError,
    DependencyError,
    PackageError,
    SettingsError,
)


def test_root_exception_hierarchy() -> None:
    assert issubclass(SettingsError, PackageError)
    assert issubclass(ConfigurationError, PackageError)
    assert issubclass(DependencyError, PackageError)


def test_configuration_error_message() -> None:
    assert str(ConfigurationError(message="Field name is mandatory")) == "Field name is mandatory"
    assert str(ConfigurationError(message="Bad JSON", exc=ValueError("line 1"))) == "Bad JSON: line 1"
