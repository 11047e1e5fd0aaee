from __future__ import annotations

import json
from argparse import Namespace
from typing import TYPE_CHECKING, Any

import pytest

from formbuilder import cli
from formbuilder.form import Form
from formbuilder.settings import Settings
from formbuilder.typing.models import SubmittedData

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def schema_path(tmp_path: Path, user_schema: dict[str, Any]) -> Path:
    path = tmp_path / "user.json"
    path.write_text(json.dumps(user_schema), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _default_settings(mocker) -> None:
    mocker.patch("formbuilder.cli.get_settings", return_value=Settings(_env_file=None))


def test_build_parser_supports_version_flag(capsys) -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0

    captured = capsys.readouterr()
    assert "2.0.0" in captured.out


def test_build_submitted_data() -> None:
    args = Namespace(data="frmID=user&txtName=Ada", method="post")

    data = cli._build_submitted_data(args)

    assert data == SubmittedData(method="POST", values={"frmID": "user", "txtName": "Ada"})
    assert cli._build_submitted_data(Namespace(data=None, method="POST")) is None


def test_build_validation_report_for_invalid_data(user_schema: dict[str, Any]) -> None:
    form = Form(user_schema, settings=Settings(_env_file=None))

    report = cli.build_validation_report(form, SubmittedData(method="POST", values={"frmID": "user"}))

    assert report["submitted"] is True
    assert report["valid"] is False
    assert "'Name' is a required field." in report["errors"]
    assert report["data"] == {}


def test_main_without_command_prints_help(capsys) -> None:
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_main_renders_form(schema_path: Path, capsys) -> None:
    assert cli.main(["render", "--schema", str(schema_path)]) == 0

    out = capsys.readouterr().out
    assert out.startswith('<form id="user"')
    assert "error" not in out


def test_main_validate_writes_report(
    schema_path: Path,
    tmp_path: Path,
    valid_user_post: dict[str, str],
    capsys,
) -> None:
    output_path = tmp_path / "out" / "report.json"
    data = "&".join(f"{key}={value}" for key, value in valid_user_post.items())

    result = cli.main(["validate", "--schema", str(schema_path), "--data", data, "--output", str(output_path)])

    assert result == 0
    report = json.loads(output_path.read_text(encoding="utf-8"))
    assert report["valid"] is True
    assert report["data"]["role"] == "admin"
    assert json.loads(capsys.readouterr().out) == report


def test_main_validate_returns_one_for_invalid_data(schema_path: Path) -> None:
    assert cli.main(["validate", "--schema", str(schema_path), "--data", "frmID=user"]) == 1


def test_main_returns_one_on_configuration_error(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{oops", encoding="utf-8")

    assert cli.main(["render", "--schema", str(broken)]) == 1
