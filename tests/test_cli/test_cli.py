"""Tests for the gcsst command line."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from gcsst import __version__
from gcsst.cli.main import cli


# ---------------------------------------------------------------------------
# Help and usage
# ---------------------------------------------------------------------------


class TestHelp:
    def test_long_help(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Grimoire CSS Transmute" in result.output
        assert "--paths" in result.output
        assert "--with-oneliner" in result.output

    def test_short_help(self) -> None:
        result = CliRunner().invoke(cli, ["-h"])
        assert result.exit_code == 0
        assert "--content" in result.output

    def test_no_arguments_prints_help(self) -> None:
        result = CliRunner().invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_both_modes_rejected(self) -> None:
        result = CliRunner().invoke(cli, ["-p", "a.css", "-c", ".a { color: red; }"])
        assert result.exit_code == 2
        assert "not both" in result.output


# ---------------------------------------------------------------------------
# --content
# ---------------------------------------------------------------------------


class TestContentMode:
    def test_prints_json(self) -> None:
        result = CliRunner().invoke(cli, ["-c", ".button { color: red; }"])
        assert result.exit_code == 0
        assert '"name": "button"' in result.output
        assert '"color=red"' in result.output
        assert "Transmutation complete in" in result.output

    def test_writes_output_file(self, tmp_path: Path) -> None:
        target = tmp_path / "out" / "spells.json"
        result = CliRunner().invoke(
            cli, ["-c", ".button:focus { border-size: 4px; }", "-o", str(target)]
        )
        assert result.exit_code == 0
        assert json.loads(target.read_text(encoding="utf-8")) == {
            "classes": [{"name": "button", "spells": ["{:focus}border-size=4px"]}]
        }
        assert str(target) in result.output

    def test_with_oneliner(self, tmp_path: Path) -> None:
        target = tmp_path / "spells.json"
        result = CliRunner().invoke(
            cli, ["-c", ".button { color: red; }", "-l", "-o", str(target)]
        )
        assert result.exit_code == 0
        entry = json.loads(target.read_text(encoding="utf-8"))["classes"][0]
        assert entry["oneliner"] == ".button { color: red; }"

    def test_parse_error(self, tmp_path: Path) -> None:
        target = tmp_path / "spells.json"
        result = CliRunner().invoke(cli, ["-c", ".a { color: red;", "-o", str(target)])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not target.exists()


# ---------------------------------------------------------------------------
# --paths
# ---------------------------------------------------------------------------


class TestPathsMode:
    def test_default_output_location(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("styles.css").write_text(".a { color: red; }", encoding="utf-8")
            Path("more.css").write_text(".b { margin: 0; }", encoding="utf-8")
            result = runner.invoke(cli, ["-p", "styles.css, more.css"])
            assert result.exit_code == 0
            data = json.loads(Path("grimoire/transmuted.json").read_text(encoding="utf-8"))
            assert [c["name"] for c in data["classes"]] == ["a", "b"]
            assert "Output written to" in result.output

    def test_glob_and_explicit_output(self, tmp_path: Path) -> None:
        (tmp_path / "a.css").write_text(".a { color: red; }", encoding="utf-8")
        (tmp_path / "b.css").write_text(".a:hover { color: blue; }", encoding="utf-8")
        target = tmp_path / "custom.json"
        result = CliRunner().invoke(
            cli, ["-p", str(tmp_path / "*.css"), "-o", str(target), "--with-oneliner"]
        )
        assert result.exit_code == 0
        entry = json.loads(target.read_text(encoding="utf-8"))["classes"][0]
        assert entry["spells"] == ["color=red", "{:hover}color=blue"]
        assert entry["oneliner"] == ".a { color: red; color: blue; }"

    def test_missing_file(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["-p", "missing.css"])
            assert result.exit_code == 1
            assert "missing.css" in result.output
            assert not Path("grimoire").exists()

    def test_parse_error_names_file(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("broken.css").write_text(".a {\n  color: red;\n", encoding="utf-8")
            result = runner.invoke(cli, ["-p", "broken.css"])
            assert result.exit_code == 1
            assert "broken.css:1:" in result.output
            assert not Path("grimoire/transmuted.json").exists()

    def test_stdout_target(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("a.css").write_text(".a { color: red; }", encoding="utf-8")
            result = runner.invoke(cli, ["-p", "a.css", "-o", "-"])
            assert result.exit_code == 0
            assert '"color=red"' in result.output
            assert not Path("grimoire").exists()
