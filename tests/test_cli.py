"""CLI surface tests using typer.testing.CliRunner."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from click.exceptions import Exit as ClickExit
from typer.testing import CliRunner

from rdbloader import __version__
from rdbloader._constants import DEFAULT_CONFIG
from rdbloader.cli import app, build_summary_table, resolve_config_path
from rdbloader.config import decode_config

runner = CliRunner()


class TestResolveConfigPath:
    """Tests for config file auto-discovery."""

    def test_explicit_path_returned(self, tmp_path):
        p = tmp_path / "custom.yml"
        assert resolve_config_path(p) == p

    def test_file_option_takes_precedence(self, tmp_path):
        positional = tmp_path / "a.yml"
        option = tmp_path / "b.yml"
        assert resolve_config_path(positional, option) == option

    def test_none_finds_default(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / DEFAULT_CONFIG).write_text("aws: {}\n")
        assert resolve_config_path(None) == Path(DEFAULT_CONFIG)

    def test_none_exits_when_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ClickExit):
            resolve_config_path(None)


class TestVersionCommand:
    """Tests for 'rdbloader version'."""

    def test_version_output(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestInitCommand:
    """Tests for 'rdbloader init'."""

    def test_init_creates_file(self, tmp_path):
        output = tmp_path / "config.yml"
        result = runner.invoke(app, ["init", "--output", str(output)])
        assert result.exit_code == 0
        assert "collectors:" in output.read_text()

    def test_init_refuses_overwrite(self, tmp_path):
        output = tmp_path / "existing.yml"
        output.write_text("existing config")
        result = runner.invoke(app, ["init", "--output", str(output)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert output.read_text() == "existing config"

    def test_init_force_overwrites(self, tmp_path):
        output = tmp_path / "existing.yml"
        output.write_text("old content")
        result = runner.invoke(app, ["init", "--output", str(output), "--force"])
        assert result.exit_code == 0
        assert "old content" not in output.read_text()


class TestValidateCommand:
    """Tests for 'rdbloader validate'."""

    def test_valid_config(self, document, write_config):
        path = write_config(document)
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 0
        assert "Config valid" in result.output

    def test_file_option(self, document, write_config):
        path = write_config(document)
        result = runner.invoke(app, ["validate", "--file", str(path)])
        assert result.exit_code == 0

    def test_verbose(self, document, write_config):
        path = write_config(document)
        result = runner.invoke(app, ["validate", str(path), "--verbose"])
        assert result.exit_code == 0
        assert "cloudfront" in result.output

    def test_reports_every_failure(self, document, write_config):
        del document["aws"]["access_key_id"]
        document["collectors"]["format"] = "xml"
        document["aws"]["emr"]["bootstrap_failure_tries"] = "three"
        path = write_config(document)
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "3 problem(s)" in result.output
        assert "aws.access_key_id" in result.output
        assert "aws.emr.bootstrap_failure_tries" in result.output
        assert "Unknown CollectorFormat [xml]" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.yml")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_yaml(self, write_config):
        path = write_config("aws: [broken")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_directory_path(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path)])
        assert result.exit_code == 1
        assert "not a file" in result.output

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_bytes(b"\xff\xfe")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Config error" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_path_with_brackets_printed_verbatim(self, document, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Path("cfg[red].yml").write_text(yaml.safe_dump(document))
        result = runner.invoke(app, ["validate", "cfg[red].yml"])
        assert result.exit_code == 0
        assert "cfg[red].yml" in result.output


class TestShowCommand:
    """Tests for 'rdbloader show'."""

    def test_show_redacts_secret(self, document, write_config):
        path = write_config(document)
        result = runner.invoke(app, ["show", str(path)])
        assert result.exit_code == 0
        assert "s3cr3t" not in result.output
        assert "AKIAEXAMPLE" in result.output

    def test_show_invalid_config(self, document, write_config):
        document["enrich"]["output_compression"] = "LZO"
        path = write_config(document)
        result = runner.invoke(app, ["show", str(path)])
        assert result.exit_code == 1

    def test_summary_table_rows(self, document):
        table = build_summary_table(decode_config(document))
        settings = list(table.columns[0].cells)
        assert "collectors.format" in settings
        assert "aws.secret_access_key" in settings
        assert len(settings) == len(list(table.columns[1].cells))
