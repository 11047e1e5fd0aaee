"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from formbuilder.exceptions import SettingsError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "formbuilder"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )

    token_field: str = Field(
        default="frmID",
        validation_alias="FORM_TOKEN_FIELD",
        description="Name of the hidden field carrying the form id back to the server.",
    )
    default_action: str = Field(
        default="#",
        validation_alias="FORM_DEFAULT_ACTION",
        description="Form action used when a schema does not declare one.",
    )
    default_method: str = Field(
        default="POST",
        validation_alias="FORM_DEFAULT_METHOD",
        description="Form method used when a schema does not declare one.",
    )

    @field_validator("token_field")
    @classmethod
    def _validate_token_field(cls, value: str) -> str:
        """Reject blank token field names.

        Args:
            value (str): Raw token field name.

        Raises:
            ValueError: If the name is blank.

        Returns:
            str: Stripped token field name.
        """
        stripped = value.strip()
        if not stripped:
            raise ValueError("FORM_TOKEN_FIELD must not be blank")  # noqa: TRY003
        return stripped

    @field_validator("default_method")
    @classmethod
    def _normalize_default_method(cls, value: str) -> str:
        """Upper-case the default HTTP method.

        Args:
            value (str): Raw method.

        Returns:
            str: Upper-cased method.
        """
        return value.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            ensure_env_file_exists()
            try:
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
