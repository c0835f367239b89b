"""Tests for the vsysc CLI."""

import json

import pytest
from typer.testing import CliRunner

from vsysc._version import __version__
from vsysc.cli.main import parse_defines, typer_app

runner = CliRunner()

DEMO = "0: NM: demo\n1: WL: hello\n2: AR: list\n2: AD: a\n2: AD: b\n"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    # keep find_config_file from picking up a vsysc.yaml outside the test
    (tmp_path / "vsysc.yaml").write_text("{}\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_version():
    result = runner.invoke(typer_app, ["--version"])
    assert result.exit_code == 0
    assert f"vsysc {__version__}" in result.output


def test_run_prints_results(workdir):
    (workdir / "demo.vsc").write_text(DEMO)
    result = runner.invoke(typer_app, ["run", "demo.vsc"])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["hello", "[list, a, b]"]


def test_run_json(workdir):
    (workdir / "demo.vsc").write_text(DEMO)
    result = runner.invoke(typer_app, ["run", "demo.vsc", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == ["hello", ["list", "a", "b"]]


def test_run_with_defines(workdir):
    (workdir / "greet.vsc").write_text("1: WL: hello $name")
    result = runner.invoke(typer_app, ["run", "greet.vsc", "-D", "name=world"])

    assert result.exit_code == 0, result.output
    assert "hello world" in result.output


def test_run_files_share_exports(workdir):
    (workdir / "lib.vsc").write_text("0: NM: lib\n1: WL: hi $0001\n2: EX: default\n")
    (workdir / "main.vsc").write_text("1: IM: lib, there\n")
    result = runner.invoke(typer_app, ["run", "lib.vsc", "main.vsc", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == ["hi there"]


def test_run_with_config_variables(workdir):
    (workdir / "vsysc.yaml").write_text("variables:\n  who: config\n")
    (workdir / "who.vsc").write_text("1: WL: $who")
    result = runner.invoke(typer_app, ["run", "who.vsc"])

    assert result.exit_code == 0, result.output
    assert "config" in result.output


def test_run_error_exits_nonzero(workdir):
    (workdir / "bad.vsc").write_text("1: WL: a\nnotatriple\n")
    result = runner.invoke(typer_app, ["run", "bad.vsc"])

    assert result.exit_code == 1
    assert "Invalid syntax (line:2)" in result.output


def test_run_missing_file(workdir):
    result = runner.invoke(typer_app, ["run", "nope.vsc"])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_build_json(workdir):
    (workdir / "demo.vsc").write_text(DEMO + "7: AD: x\n")
    result = runner.invoke(typer_app, ["build", "demo.vsc", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["name"] == "demo"
    assert data["content"]["2"]["value"] == ["list", "a", "b"]
    assert data["content"]["7"]["type"] == "error"


def test_build_table(workdir):
    (workdir / "demo.vsc").write_text(DEMO)
    result = runner.invoke(typer_app, ["build", "demo.vsc"])

    assert result.exit_code == 0, result.output
    assert "demo" in result.output
    assert "hello" in result.output


def test_wrap_uses_file_stem(workdir):
    (workdir / "notes.txt").write_text("first\nsecond")
    result = runner.invoke(typer_app, ["wrap", "notes.txt", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["name"] == "notes"
    assert [r["value"] for r in data["content"].values()] == ["first", "second"]


def test_parse_defines():
    assert parse_defines(["a=1", "b=x=y"]) == {"a": "1", "b": "x=y"}
    assert parse_defines(None) == {}
