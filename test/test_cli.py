import json
from pathlib import Path

import httpx
from pytest import MonkeyPatch, fixture
from typer.testing import CliRunner

from trilium_cache.cli.main import app
from trilium_cache.config import Config

from .conftest import HOST, TOKEN, FakeTrilium

runner = CliRunner()


@fixture(autouse=True)
def fake_server(trilium: FakeTrilium, monkeypatch: MonkeyPatch):
    """
    Route requests from CLI to fake server.
    """
    create_server = Config.create_server

    def create_fake_server(self: Config, *, logger=None, transport=None):
        return create_server(
            self, logger=logger, transport=httpx.MockTransport(trilium.handler)
        )

    monkeypatch.setattr(Config, "create_server", create_fake_server)
    monkeypatch.delenv("TRILIUM_HOST", raising=False)
    monkeypatch.delenv("TRILIUM_TOKEN", raising=False)


@fixture
def populated(trilium: FakeTrilium) -> FakeTrilium:
    trilium.add_note("parent", "Parent")
    trilium.add_label("parent", "inherited1", "value1", inheritable=True)
    trilium.add_note("note1", "Note 1", parent="parent", position=20)
    trilium.add_note("note2", "Note 2", parent="parent", position=10)
    trilium.add_label("note1", "owned1", "value2")
    trilium.add_relation("note1", "relation1", "note2")
    return trilium


def invoke(*args: str, host: str | None = HOST):
    options = ["--host", host] if host else []
    return runner.invoke(app, [*options, *args])


def test_attrs(populated: FakeTrilium):
    result = invoke("note", "attrs", "note1")
    assert result.exit_code == 0, result.output

    assert "owned1" in result.output
    assert "relation1" in result.output
    assert "inherited1" in result.output
    assert "parent" in result.output


def test_attrs_filter(populated: FakeTrilium):
    result = invoke("note", "attrs", "note1", "--type", "label", "--owned")
    assert result.exit_code == 0, result.output

    assert "owned1" in result.output
    assert "relation1" not in result.output
    assert "inherited1" not in result.output

    result = invoke("note", "attrs", "note1", "--name", "inherited1")
    assert result.exit_code == 0, result.output

    assert "inherited1" in result.output
    assert "owned1" not in result.output

    result = invoke("note", "attrs", "note1", "--type", "tag")
    assert result.exit_code == 2


def test_children(populated: FakeTrilium):
    result = invoke("note", "children", "parent")
    assert result.exit_code == 0, result.output

    lines = result.output.splitlines()
    assert lines == [
        "    10 Note 2 (note2)",
        "    20 Note 1 (note1)",
    ]


def test_content(populated: FakeTrilium):
    populated.contents["note1"] = "<p>Hello</p>"

    result = invoke("note", "content", "note1")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "<p>Hello</p>"


def test_content_json(trilium: FakeTrilium):
    trilium.add_note(
        "data", content='{"a": 1}', note_type="code", mime="application/json"
    )
    trilium.add_note("text", content="<p>Hello</p>")

    result = invoke("note", "content", "data", "--json")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"a": 1}

    result = invoke("note", "content", "text", "--json")
    assert result.exit_code == 1
    assert "Content of note 'text' is not JSON" in result.output


def test_not_found(trilium: FakeTrilium):
    for command in ["attrs", "children", "content"]:
        result = invoke("note", command, "missing")
        assert result.exit_code == 1
        assert "Note 'missing' not found" in result.output


def test_missing_host():
    result = invoke("note", "attrs", "root", host=None)
    assert result.exit_code == 2


def test_config_file(trilium: FakeTrilium, tmp_path: Path):
    path = tmp_path / "config.yaml"
    Config(host=HOST, token=TOKEN).dump_yaml(path)

    result = runner.invoke(
        app, ["--config", str(path), "note", "children", "root"]
    )
    assert result.exit_code == 0, result.output
    assert trilium.headers[0]["Authorization"] == TOKEN


def test_server_error(trilium: FakeTrilium):
    trilium.fail_status = 500

    result = invoke("note", "attrs", "root")
    assert result.exit_code == 1
