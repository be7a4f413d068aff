"""Tests for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tokensmith.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def no_cache_manifest(tmp_path: Path, preset_file: Path) -> Path:
    path = tmp_path / "nocache.toml"
    path.write_text('[source]\npath = "config/tokens.json"\n\n[cache]\nbackend = "none"\n')
    return path


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "tokensmith " in result.stdout
    assert "Python" in result.stdout


def test_missing_manifest_exits(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(app, ["presets", "list", "--manifest", str(tmp_path / "nope.toml")])
    assert result.exit_code == 1
    assert "Manifest not found" in result.output


def test_invalid_manifest_exits(cli_runner: CliRunner, tmp_path: Path):
    bad = tmp_path / "tokensmith.toml"
    bad.write_text('[cache]\nbackend = "memcached"\n')
    result = cli_runner.invoke(app, ["css", "build", "--manifest", str(bad)])
    assert result.exit_code == 1
    assert "Invalid manifest" in result.output


def test_scalar_section_reports_invalid_manifest(cli_runner: CliRunner, tmp_path: Path):
    bad = tmp_path / "tokensmith.toml"
    bad.write_text('source = "config/tokens.json"\n')
    result = cli_runner.invoke(app, ["css", "build", "--manifest", str(bad)])
    assert result.exit_code == 1
    assert "Invalid manifest" in result.output
    assert "must be a table" in result.output


class TestPresetsCommand:
    def test_list(self, cli_runner: CliRunner, manifest_file: Path):
        result = cli_runner.invoke(app, ["presets", "list", "--manifest", str(manifest_file)])
        assert result.exit_code == 0
        assert "termina-16-400" in result.stdout
        assert "Headings" in result.stdout
        assert "2 preset(s) shown" in result.stdout

    def test_list_json(self, cli_runner: CliRunner, manifest_file: Path):
        result = cli_runner.invoke(
            app, ["presets", "list", "--manifest", str(manifest_file), "--json"]
        )
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["status"] == "ok"
        assert [preset["id"] for preset in payload["presets"]] == ["termina-16-400", "h1"]

    def test_list_without_manifest(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(app, ["presets", "list"])
        assert result.exit_code == 0
        assert "No presets found." in result.stdout

    def test_list_missing_source(
        self, cli_runner: CliRunner, manifest_file: Path, preset_file: Path
    ):
        preset_file.unlink()
        result = cli_runner.invoke(app, ["presets", "list", "--manifest", str(manifest_file)])
        assert result.exit_code == 0
        assert "Preset source unavailable (missing)" in result.stdout


class TestCssCommand:
    def test_build(self, cli_runner: CliRunner, manifest_file: Path, tmp_path: Path):
        result = cli_runner.invoke(app, ["css", "build", "--manifest", str(manifest_file)])
        assert result.exit_code == 0
        assert ".has-type-preset-termina-16-400 {" in result.stdout
        assert "    letter-spacing: 0.05em;" in result.stdout
        assert list((tmp_path / ".tokensmith" / "cache").glob("*.json"))

    def test_build_style_tag_to_file(
        self, cli_runner: CliRunner, manifest_file: Path, tmp_path: Path
    ):
        out = tmp_path / "dist" / "presets.html"
        result = cli_runner.invoke(
            app,
            ["css", "build", "--manifest", str(manifest_file), "--style-tag", "-o", str(out), "--no-cache"],
        )
        assert result.exit_code == 0
        assert "Wrote" in result.output
        content = out.read_text(encoding="utf-8")
        assert content.startswith('<style id="tokensmith-type-presets">\n')
        assert content.endswith("</style>\n")

    def test_build_missing_source_warns(
        self, cli_runner: CliRunner, manifest_file: Path, preset_file: Path
    ):
        preset_file.unlink()
        result = cli_runner.invoke(app, ["css", "build", "--manifest", str(manifest_file)])
        assert result.exit_code == 0
        assert "generating an empty stylesheet" in result.output
        assert ".has-type-preset" not in result.output

    def test_utilities(self, cli_runner: CliRunner, manifest_file: Path):
        result = cli_runner.invoke(app, ["css", "utilities", "--manifest", str(manifest_file)])
        assert result.exit_code == 0
        assert ".p-2 { padding: var(--spacing--2, 0.5rem); }" in result.stdout
        assert "@media (min-width: 768px) {" in result.stdout

    def test_utilities_without_scale(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(app, ["css", "utilities"])
        assert result.exit_code == 0
        assert "No spacing scale configured" in result.output


class TestClassesCommand:
    def test_padding(self, cli_runner: CliRunner, manifest_file: Path):
        value = json.dumps({"base": {"type": "sides", "top": "2", "left": "1"}})
        result = cli_runner.invoke(
            app, ["classes", "compile", "padding", value, "--manifest", str(manifest_file)]
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == "pt-2 pl-1"

    def test_gap_uses_breakpoint_order(self, cli_runner: CliRunner, manifest_file: Path):
        value = json.dumps({"md": "4", "base": "2"})
        result = cli_runner.invoke(
            app, ["classes", "compile", "gap", value, "--manifest", str(manifest_file)]
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == "has-gap gap-2 md:gap-4"

    def test_spacing(self, cli_runner: CliRunner, manifest_file: Path):
        value = json.dumps({"padding": {"base": "2"}, "margin": {"base": {"type": "split", "x": "auto"}}})
        result = cli_runner.invoke(
            app, ["classes", "compile", "spacing", value, "--manifest", str(manifest_file)]
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == "has-spacing p-2 mx-auto"

    def test_unknown_category(self, cli_runner: CliRunner, manifest_file: Path):
        result = cli_runner.invoke(
            app, ["classes", "compile", "border", "{}", "--manifest", str(manifest_file)]
        )
        assert result.exit_code == 1
        assert "Unknown category" in result.output

    def test_invalid_json(self, cli_runner: CliRunner, manifest_file: Path):
        result = cli_runner.invoke(
            app, ["classes", "compile", "gap", "{base", "--manifest", str(manifest_file)]
        )
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_malformed_entry_reported(self, cli_runner: CliRunner, manifest_file: Path):
        value = json.dumps({"base": "1", "md": {"type": "bogus"}})
        args = ["classes", "compile", "margin", value, "--manifest", str(manifest_file)]

        lenient = cli_runner.invoke(app, args)
        assert lenient.exit_code == 0
        assert "Skipped malformed entry" in lenient.output
        assert "m-1" in lenient.output

        strict = cli_runner.invoke(app, [*args, "--strict"])
        assert strict.exit_code == 1


class TestCacheCommand:
    def test_clear(self, cli_runner: CliRunner, manifest_file: Path):
        cli_runner.invoke(app, ["css", "build", "--manifest", str(manifest_file)])
        result = cli_runner.invoke(app, ["cache", "clear", "--manifest", str(manifest_file)])
        assert result.exit_code == 0
        assert "Cleared 1 cached stylesheet(s) from the file cache" in result.stdout

    def test_clear_disabled(self, cli_runner: CliRunner, no_cache_manifest: Path):
        result = cli_runner.invoke(app, ["cache", "clear", "--manifest", str(no_cache_manifest)])
        assert result.exit_code == 0
        assert "Caching is disabled" in result.stdout

    def test_check_detects_source_edit(
        self, cli_runner: CliRunner, manifest_file: Path, preset_file: Path
    ):
        args = ["cache", "check", "--manifest", str(manifest_file)]

        first = cli_runner.invoke(app, args)
        assert "cached stylesheets invalidated" in first.stdout

        second = cli_runner.invoke(app, args)
        assert second.exit_code == 0
        assert "cache is current" in second.stdout

        preset_file.write_text(preset_file.read_text() + " ", encoding="utf-8")
        third = cli_runner.invoke(app, args)
        assert "cached stylesheets invalidated" in third.stdout


class TestConformanceCommand:
    def test_python_only(self, cli_runner: CliRunner):
        result = cli_runner.invoke(app, ["conformance", "run", "--no-js"])
        assert result.exit_code == 0
        assert "python:" in result.stdout
        assert "All conformance cases passed" in result.stdout

    def test_failing_corpus(self, cli_runner: CliRunner, tmp_path: Path):
        corpus = tmp_path / "corpus.json"
        corpus.write_text(
            json.dumps(
                {
                    "cases": [
                        {"id": "wrong", "kind": "derive_label", "input": {"id": "body"}, "expected": "Nope"}
                    ]
                }
            )
        )
        result = cli_runner.invoke(app, ["conformance", "run", "--no-js", "--corpus", str(corpus)])
        assert result.exit_code == 1
        assert "python: 0/1 cases passed" in result.stdout

    def test_unreadable_corpus(self, cli_runner: CliRunner, tmp_path: Path):
        result = cli_runner.invoke(
            app, ["conformance", "run", "--no-js", "--corpus", str(tmp_path / "nope.json")]
        )
        assert result.exit_code == 1
        assert "Cannot read corpus" in result.output
