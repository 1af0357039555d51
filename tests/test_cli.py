from __future__ import annotations

import json
import textwrap
from pathlib import Path

from gendoc import __version__
from gendoc.cli import INCOMPLETE_NOTICE, cli
from gendoc.filesystem import MAX_FILE_SIZE_ENV_VAR


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_writes_html_document(cli_runner, tmp_path):
    source = _write(
        tmp_path,
        "manual.xml",
        """
        <doc><title>Manual</title></doc>
        <h1>Introduction</h1>
        <p>See <a>Setup</a>.</p>
        <h2>Setup</h2>
        <code python>
        def hello():
            print("hi")
        </code>
        """,
    )
    output = tmp_path / "manual.html"

    result = cli_runner.invoke(cli, [str(output), str(source)])

    assert result.exit_code == 0, result.output
    document = output.read_text(encoding="utf-8")
    assert document.startswith("<!DOCTYPE html>")
    assert "<title>Manual</title>" in document
    assert 'href="#setup"' in document
    assert "gendoc error" not in result.output


def test_cli_parses_inputs_in_order(cli_runner, tmp_path):
    first = _write(tmp_path, "a.xml", "<h1>First</h1>\n")
    second = _write(tmp_path, "b.xml", "<h1>Second</h1>\n")
    output = tmp_path / "out.html"

    result = cli_runner.invoke(cli, [str(output), str(first), str(second)])

    assert result.exit_code == 0, result.output
    document = output.read_text(encoding="utf-8")
    assert document.index('id="first"') < document.index('id="second"')


def test_cli_reports_errors_but_still_writes(cli_runner, tmp_path):
    source = _write(tmp_path, "doc.xml", "<h1>Intro</h1>\n</b>\n")
    output = tmp_path / "doc.html"

    result = cli_runner.invoke(cli, [str(output), str(source)])

    assert result.exit_code == 0
    assert f"gendoc error: {source}:2: cannot close, bold is not open" in result.output
    assert INCOMPLETE_NOTICE in result.output
    assert output.exists()


def test_cli_strict_mode_fails_on_errors(cli_runner, tmp_path):
    source = _write(tmp_path, "doc.xml", "<h1>Intro</h1>\n<a>Nowhere</a>\n")
    output = tmp_path / "doc.html"

    result = cli_runner.invoke(cli, ["--strict", str(output), str(source)])

    assert result.exit_code == 1
    assert "unresolved link: Nowhere" in result.output
    assert output.exists()


def test_cli_strict_from_config(cli_runner, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.gendoc]
        strict = true
        """,
    )
    source = _write(tmp_path, "doc.xml", "<h1>Intro</h1><b>\n")

    result = cli_runner.invoke(cli, [str(tmp_path / "doc.html"), str(source)])
    assert result.exit_code == 1

    result = cli_runner.invoke(cli, ["--no-strict", str(tmp_path / "doc.html"), str(source)])
    assert result.exit_code == 0


def test_cli_warnings_do_not_fail_strict_mode(cli_runner, tmp_path):
    source = _write(tmp_path, "doc.xml", "<h1>Intro</h1><span>x</span>\n")

    result = cli_runner.invoke(cli, ["--strict", str(tmp_path / "doc.html"), str(source)])

    assert result.exit_code == 0
    assert "gendoc warning" in result.output
    assert INCOMPLETE_NOTICE not in result.output


def test_cli_without_table_of_contents(cli_runner, tmp_path):
    source = _write(tmp_path, "doc.xml", "<p>no headings at all</p>\n")
    output = tmp_path / "doc.html"

    result = cli_runner.invoke(cli, [str(output), str(source)])

    assert result.exit_code == 3
    assert "no table of contents detected" in result.output
    assert not output.exists()


def test_cli_unwritable_output(cli_runner, tmp_path):
    source = _write(tmp_path, "doc.xml", "<h1>Intro</h1>\n")

    result = cli_runner.invoke(cli, [str(tmp_path / "missing" / "doc.html"), str(source)])

    assert result.exit_code == 2
    assert "unable to write file" in result.output


def test_cli_json_output(cli_runner, tmp_path):
    source = _write(tmp_path, "doc.xml", "<h1>Intro</h1><h2>Usage</h2>\n")
    output = tmp_path / "doc.json"

    result = cli_runner.invoke(cli, [str(output), str(source)])

    assert result.exit_code == 0, result.output
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert [entry["id"] for entry in payload["toc"]] == ["intro", "usage"]
    assert payload["errors"] == 0


def test_cli_loads_extra_rules(cli_runner, tmp_path):
    rules = tmp_path / "rules"
    rules.mkdir()
    (rules / "lua.toml").write_text("keywords = ['local']\n", encoding="utf-8")
    source = _write(tmp_path, "doc.xml", "<h1>Intro</h1><code lua>local x</code>\n")
    output = tmp_path / "doc.html"

    result = cli_runner.invoke(cli, ["--rules-dir", str(rules), str(output), str(source)])

    assert result.exit_code == 0, result.output
    assert "no highlight rules" not in result.output
    assert '<span class="hl_k">local</span>' in output.read_text(encoding="utf-8")


def test_cli_rejects_invalid_rules(cli_runner, tmp_path):
    rules = tmp_path / "rules"
    rules.mkdir()
    (rules / "bad.toml").write_text("comments = 'x'\n", encoding="utf-8")
    source = _write(tmp_path, "doc.xml", "<h1>Intro</h1>\n")

    result = cli_runner.invoke(cli, ["--rules-dir", str(rules), str(tmp_path / "doc.html"), str(source)])

    assert result.exit_code == 2
    assert "Invalid highlight rules" in result.output


def test_cli_rejects_invalid_config(cli_runner, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.gendoc]
        max_file_size = 0
        """,
    )
    source = _write(tmp_path, "doc.xml", "<h1>Intro</h1>\n")

    result = cli_runner.invoke(cli, [str(tmp_path / "doc.html"), str(source)])

    assert result.exit_code == 2
    assert "`max_file_size` must be a positive integer" in result.output


def test_cli_size_limit_from_environment(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "8")
    source = _write(tmp_path, "doc.xml", "<h1>Intro</h1>\n")

    result = cli_runner.invoke(cli, [str(tmp_path / "doc.html"), str(source)])

    assert result.exit_code == 3
    assert "exceeds the maximum allowed size of 8 bytes" in result.output


def test_cli_invalid_size_limit_from_environment(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "lots")
    source = _write(tmp_path, "doc.xml", "<h1>Intro</h1>\n")

    result = cli_runner.invoke(cli, [str(tmp_path / "doc.html"), str(source)])

    assert result.exit_code == 1
    assert f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}" in result.output


def test_cli_requires_inputs(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, [str(tmp_path / "doc.html")])
    assert result.exit_code == 2


def test_cli_version(cli_runner):
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_include_cycle_still_writes(cli_runner, tmp_path):
    first = _write(tmp_path, "a.xml", "<h1>A</h1>\n<include b.xml>\n")
    second = _write(tmp_path, "b.xml", "<h2>B</h2>\n<include a.xml>\n")
    output = tmp_path / "doc.html"

    result = cli_runner.invoke(cli, [str(output), str(first)])

    assert result.exit_code == 0
    assert f"gendoc error: {second}:0: include cycle ({first})" in result.output
    assert 'id="b"' in output.read_text(encoding="utf-8")
