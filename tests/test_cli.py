"""Tests for the CLI module."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from patchx import _settings as settings_module
from patchx.cli import app

runner = CliRunner()


@pytest.fixture
def document(tmp_path: Path) -> Path:
    path = tmp_path / "document.json"
    path.write_text(json.dumps({"a": {"b": [1, 2]}, "name": "café"}))
    return path


def write_patch(tmp_path: Path, operations: list) -> Path:
    path = tmp_path / "patch.json"
    path.write_text(json.dumps(operations))
    return path


def test_apply_prints_patched_document(tmp_path: Path, document: Path):
    patch = write_patch(tmp_path, [{"op": "add", "path": "/a/b/-", "value": 3}])
    result = runner.invoke(app, ["apply", str(document), str(patch)])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"a": {"b": [1, 2, 3]}, "name": "café"}
    assert "café" in result.stdout


def test_apply_leaves_input_file_untouched(tmp_path: Path, document: Path):
    before = document.read_text()
    patch = write_patch(tmp_path, [{"op": "remove", "path": "/a"}])
    result = runner.invoke(app, ["apply", str(document), str(patch)])
    assert result.exit_code == 0
    assert document.read_text() == before


def test_apply_reads_document_from_stdin(tmp_path: Path):
    patch = write_patch(tmp_path, [{"op": "replace", "path": "/a", "value": 2}])
    result = runner.invoke(app, ["apply", "-", str(patch)], input='{"a": 1}')
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"a": 2}


def test_apply_writes_output_file(tmp_path: Path, document: Path):
    patch = write_patch(tmp_path, [{"op": "copy", "from": "/name", "path": "/alias"}])
    output = tmp_path / "out.json"
    result = runner.invoke(
        app, ["apply", str(document), str(patch), "--output", str(output)]
    )
    assert result.exit_code == 0
    assert json.loads(output.read_text())["alias"] == "café"


def test_apply_indent_option(tmp_path: Path):
    document = tmp_path / "doc.json"
    document.write_text("[]")
    patch = write_patch(tmp_path, [{"op": "add", "path": "/0", "value": {"k": 1}}])
    result = runner.invoke(app, ["apply", str(document), str(patch), "--indent", "4"])
    assert result.exit_code == 0
    assert result.stdout == json.dumps([{"k": 1}], indent=4) + "\n"


def test_apply_uses_configured_indent(
    tmp_path: Path, document: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setattr(settings_module.settings, "indent", None)
    patch = write_patch(tmp_path, [{"op": "remove", "path": "/name"}])
    result = runner.invoke(app, ["apply", str(document), str(patch)])
    assert result.stdout == '{"a": {"b": [1, 2]}}\n'


def test_apply_removing_root_prints_nothing(tmp_path: Path, document: Path):
    patch = write_patch(tmp_path, [{"op": "remove", "path": ""}])
    result = runner.invoke(app, ["apply", str(document), str(patch)])
    assert result.exit_code == 0
    assert result.stdout == "\n"


def test_apply_reports_patch_errors(tmp_path: Path, document: Path):
    patch = write_patch(tmp_path, [{"op": "remove", "path": "/missing"}])
    result = runner.invoke(app, ["apply", str(document), str(patch)])
    assert result.exit_code == 1
    assert "NotFound: remove failed: pointer does not lead anywhere" in result.output


def test_apply_reports_invalid_json(tmp_path: Path, document: Path):
    patch = tmp_path / "patch.json"
    patch.write_text("[{")
    result = runner.invoke(app, ["apply", str(document), str(patch)])
    assert result.exit_code == 1
    assert "invalid JSON" in result.output


def test_apply_reports_missing_document(tmp_path: Path):
    patch = write_patch(tmp_path, [])
    result = runner.invoke(app, ["apply", str(tmp_path / "nope.json"), str(patch)])
    assert result.exit_code == 1
    assert "nope.json" in result.output


def test_test_command(tmp_path: Path, document: Path):
    patch = write_patch(tmp_path, [{"op": "test", "path": "/a/b/0", "value": 1}])
    result = runner.invoke(app, ["test", str(document), str(patch)])
    assert result.exit_code == 0
    assert "ok" in result.stdout

    patch = write_patch(tmp_path, [{"op": "test", "path": "/a/b/0", "value": 2}])
    result = runner.invoke(app, ["test", str(document), str(patch)])
    assert result.exit_code == 1
    assert "TestMismatch: test failed" in result.output


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.startswith("patchx v")


def test_no_command_prints_help():
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "apply" in result.stdout
