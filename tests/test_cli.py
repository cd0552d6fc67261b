"""Tests for the command-line interface."""

import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from uploadcare_sdk.cli import cli, cli_context
from uploadcare_sdk.exceptions import NotFoundError
from uploadcare_sdk.models import (
    BatchResult, Collaborator, FileInfo, ProjectInfo, ToStore,
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_context, "config_file", tmp_path / "config.json")
    monkeypatch.setattr(cli_context, "config", {})
    return tmp_path / "config.json"


def mock_client_factory(client):
    """A client factory whose context manager yields ``client``."""
    factory = MagicMock()
    factory.return_value.__enter__.return_value = client
    return factory


@pytest.fixture
def rest_api():
    client = MagicMock()
    with patch.object(cli_context, "get_rest_client", mock_client_factory(client)):
        yield client


@pytest.fixture
def upload_api():
    client = MagicMock()
    with patch.object(cli_context, "get_upload_client", mock_client_factory(client)):
        yield client


def test_project(runner, rest_api):
    rest_api.project.info.return_value = ProjectInfo(
        name="demo", pub_key="testpk", collaborators=[Collaborator(email="a@b.c", name="Ann")],
    )

    result = runner.invoke(cli, ["project", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "name": "demo",
        "pub_key": "testpk",
        "collaborators": [{"email": "a@b.c", "name": "Ann"}],
    }


def test_file_info_json(runner, rest_api, file_payload):
    rest_api.files.info.return_value = FileInfo.from_dict(file_payload)

    result = runner.invoke(cli, ["files", "info", file_payload["uuid"], "--json"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["uuid"] == file_payload["uuid"]
    assert data["image_info"]["color_mode"] == "RGB"
    assert data["datetime_stored"].startswith("2018-11-26T12:49:10")
    rest_api.files.info.assert_called_once_with(file_payload["uuid"])


def test_api_error_exits_with_failure(runner, rest_api):
    rest_api.files.info.side_effect = NotFoundError("Not found.", status_code=404)

    result = runner.invoke(cli, ["files", "info", "missing"])

    assert result.exit_code == 1
    assert "Not found." in result.output


def test_missing_credentials(runner, monkeypatch):
    monkeypatch.delenv("UCARE_PUBLIC_KEY", raising=False)
    monkeypatch.delenv("UCARE_SECRET_KEY", raising=False)

    result = runner.invoke(cli, ["project"])

    assert result.exit_code == 1
    assert "not configured" in result.output


def test_credentials_from_environment(monkeypatch):
    monkeypatch.setenv("UCARE_PUBLIC_KEY", "envpk")
    monkeypatch.setenv("UCARE_SECRET_KEY", "envsk")

    creds = cli_context.get_creds()

    assert (creds.pub_key, creds.secret_key) == ("envpk", "envsk")


def test_store_many_files_uses_batch(runner, rest_api):
    rest_api.files.batch_store.return_value = BatchResult(
        problems={"bad": "Invalid"}, result=[FileInfo(uuid="a")],
    )

    result = runner.invoke(cli, ["files", "store", "a", "bad"])

    assert result.exit_code == 0
    rest_api.files.batch_store.assert_called_once_with(("a", "bad"))
    assert "Stored: a" in result.output
    assert "bad: Invalid" in result.output


def test_delete_requires_confirmation(runner, rest_api):
    result = runner.invoke(cli, ["files", "delete", "a"], input="n\n")

    assert result.exit_code == 1
    rest_api.files.delete.assert_not_called()


def test_delete_single_file(runner, rest_api):
    rest_api.files.delete.return_value = FileInfo(uuid="a", original_filename="a.jpg")

    result = runner.invoke(cli, ["files", "delete", "a", "--yes"])

    assert result.exit_code == 0
    rest_api.files.delete.assert_called_once_with("a")
    assert "Deleted: a.jpg" in result.output


def test_config_saves_file(runner, isolated_config, rest_api):
    rest_api.project.info.return_value = ProjectInfo(name="demo", pub_key="pk")

    result = runner.invoke(cli, ["config", "--pub-key", "pk", "--secret-key", "sk", "--simple-auth"])

    assert result.exit_code == 0
    saved = json.loads(isolated_config.read_text())
    assert saved["pub_key"] == "pk"
    assert saved["secret_key"] == "sk"
    assert saved["sign_based_auth"] is False
    assert "Project: demo" in result.output


def test_upload(runner, upload_api, tmp_path):
    path = tmp_path / "a.txt"
    path.write_text("hello")
    upload_api.uploads.file.return_value = {"a.txt": "uuid-1"}

    result = runner.invoke(cli, ["upload", str(path), "--store", "1"])

    assert result.exit_code == 0
    params = upload_api.uploads.file.call_args[0][0]
    assert params.file == str(path)
    assert params.store is ToStore.TRUE
    assert "uuid-1" in result.output


def test_webhook_delete(runner, rest_api):
    result = runner.invoke(cli, ["webhooks", "delete", "https://example.com/hook"])

    assert result.exit_code == 0
    rest_api.webhooks.delete.assert_called_once_with("https://example.com/hook")


def test_unknown_api_version_in_config(runner, isolated_config):
    isolated_config.write_text(json.dumps({"pub_key": "pk", "secret_key": "sk", "api_version": "v9"}))

    result = runner.invoke(cli, ["project"])

    assert result.exit_code == 1
    assert "Unsupported API version" in result.output
    assert not isinstance(result.exception, ValueError)
