from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from formbuilder.exceptions import SettingsError
from formbuilder.settings import Settings, ensure_env_file_exists, get_settings

if TYPE_CHECKING:
    from pathlib import Path


def test_settings_load_from_env_file(tmp_path: Path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "APP_ENV=test\nLOG_LEVEL=DEBUG\nLOG_JSON=false\nFORM_TOKEN_FIELD=formToken\nFORM_DEFAULT_METHOD=get\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.app_env == "test"
    assert settings.log_level == "DEBUG"
    assert settings.log_json is False
    assert settings.token_field == "formToken"
    assert settings.default_method == "GET"


def test_settings_rejects_blank_token_field(monkeypatch) -> None:
    monkeypatch.setenv("FORM_TOKEN_FIELD", "  ")
    with pytest.raises(ValidationError, match="must not be blank"):
        Settings(_env_file=None)


def test_get_settings_uses_environment(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("APP_ENV", "ci")

    settings = get_settings()
    assert settings.app_env == "ci"

    get_settings.cache_clear()


def test_get_settings_wraps_errors(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("LOG_JSON", "not-a-bool")

    with pytest.raises(SettingsError, match="Failed to load settings"):
        get_settings()

    get_settings.cache_clear()


def test_ensure_env_file_exists_copies_template(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    template_path = tmp_path / ".env.template"
    template_path.write_text("APP_ENV=dev\n", encoding="utf-8")

    ensure_env_file_exists(env_path=env_path, template_path=template_path)

    assert env_path.read_text(encoding="utf-8") == "APP_ENV=dev\n"


def test_ensure_env_file_exists_keeps_existing_file(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("APP_ENV=prod\n", encoding="utf-8")
    template_path = tmp_path / ".env.template"
    template_path.write_text("APP_ENV=dev\n", encoding="utf-8")

    ensure_env_file_exists(env_path=env_path, template_path=template_path)

    assert env_path.read_text(encoding="utf-8") == "APP_ENV=prod\n"
