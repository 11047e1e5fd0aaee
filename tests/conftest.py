"""Pytest marker auto-assignment by folder and shared schemas."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from formbuilder import logger
from formbuilder.settings import Settings


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except Exception:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")


@pytest.fixture
def settings() -> Settings:
    """Settings with package defaults, ignoring any local `.env`."""
    return Settings(_env_file=None)


@pytest.fixture
def user_schema() -> dict[str, Any]:
    """User edit form used across tests."""
    return {
        "id": "user",
        "action": "#",
        "method": "POST",
        "fieldsets": [
            {
                "legend": "Update your user information:",
                "fields": [
                    {
                        "name": "txtName",
                        "label": "Name",
                        "dataMap": "name",
                        "type": "text",
                        "value": "Jaime Rodriguez",
                        "rules": {"required": True, "lengthMax": 20},
                    },
                    {
                        "name": "txtEmail",
                        "label": "Email",
                        "dataMap": "email",
                        "type": "text",
                        "value": "hi.i.am.jaime@gmail.com",
                        "rules": {"required": True, "email": True},
                    },
                    {
                        "name": "txtDate",
                        "label": "Date",
                        "dataMap": "date",
                        "type": "text",
                        "value": "04/11/1984",
                        "rules": {"required": True, "date": True},
                    },
                    {
                        "name": "ddlRole",
                        "label": "Role",
                        "dataMap": "role",
                        "type": "select",
                        "values": [
                            {"name": "Administrator", "value": "admin"},
                            {"name": "Subscriber", "value": "subscriber"},
                            {"name": "User", "value": "user", "selected": True},
                        ],
                    },
                ],
            },
            {
                "class": "submit",
                "fields": [
                    {"name": "btnSubmit", "label": "", "value": "Submit", "type": "submit"},
                ],
            },
        ],
    }


@pytest.fixture
def valid_user_post() -> dict[str, str]:
    """Request body that passes every rule of `user_schema`."""
    return {
        "frmID": "user",
        "txtName": "Ada Lovelace",
        "txtEmail": "ada@analytical.org",
        "txtDate": "12/10/1815",
        "ddlRole": "admin",
        "btnSubmit": "Submit",
    }
