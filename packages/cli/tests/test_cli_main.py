"""
Tests for jsonscrub_cli.main.

Covers: masking from stdin to stdout, exit statuses, pattern and rules
selection, mask/style options and environment settings, and the
statistics table.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from jsonscrub_cli.main import app

DOCUMENT = '{"foo":"foo", "bar":"bar"}'


class TestMasking:
    def test_masks_listed_fields(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["foo"], input=DOCUMENT)
        assert result.exit_code == 0
        assert result.stdout == '{"foo":"REDACTED","bar":"bar"}'

    def test_several_fields(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["foo", "bar"], input=DOCUMENT)
        assert result.exit_code == 0
        assert result.stdout == '{"foo":"REDACTED","bar":"REDACTED"}'

    def test_names_are_case_sensitive(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["FOO"], input=DOCUMENT)
        assert result.stdout == '{"foo":"foo","bar":"bar"}'

    def test_pattern(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--pattern", "(?i)^B"], input=DOCUMENT)
        assert result.exit_code == 0
        assert result.stdout == '{"foo":"foo","bar":"REDACTED"}'

    def test_mask_option(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["foo", "--mask", "***"], input=DOCUMENT)
        assert result.stdout == '{"foo":"***","bar":"bar"}'

    def test_mask_from_environment(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONSCRUB_MASK", "<hidden>")
        result = runner.invoke(app, ["foo"], input=DOCUMENT)
        assert result.stdout == '{"foo":"<hidden>","bar":"bar"}'

    def test_spaced_style(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["foo", "--style", "spaced"], input=DOCUMENT)
        assert result.stdout == '{"foo": "REDACTED", "bar": "bar"}'

    def test_style_from_environment(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONSCRUB_STYLE", "spaced")
        result = runner.invoke(app, ["foo"], input=DOCUMENT)
        assert result.stdout == '{"foo": "REDACTED", "bar": "bar"}'

    def test_non_string_values_kept(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["foo"], input='{"foo": 1, "bar": [{"foo": "x"}]}')
        assert result.stdout == '{"foo":1,"bar":[{"foo":"REDACTED"}]}'

    def test_output_is_valid_json(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["Secret"], input='{"ID": 42, "Secret": "Trillian", "n": null}')
        assert json.loads(result.stdout) == {"ID": 42, "Secret": "REDACTED", "n": None}


class TestRulesFile:
    def test_rules_file(self, runner: CliRunner, tmp_path: Path) -> None:
        rules = tmp_path / "rules.json"
        rules.write_text('{"keys": ["bar"], "style": "spaced"}', encoding="utf-8")
        result = runner.invoke(app, ["--rules", str(rules)], input=DOCUMENT)
        assert result.exit_code == 0
        assert result.stdout == '{"foo": "foo", "bar": "REDACTED"}'

    def test_rules_combine_with_arguments(self, runner: CliRunner, tmp_path: Path) -> None:
        rules = tmp_path / "rules.json"
        rules.write_text('{"pattern": "^b"}', encoding="utf-8")
        result = runner.invoke(app, ["foo", "-r", str(rules)], input=DOCUMENT)
        assert result.stdout == '{"foo":"REDACTED","bar":"REDACTED"}'

    def test_style_option_overrides_rules(self, runner: CliRunner, tmp_path: Path) -> None:
        rules = tmp_path / "rules.json"
        rules.write_text('{"keys": ["bar"], "style": "spaced"}', encoding="utf-8")
        result = runner.invoke(app, ["-r", str(rules), "--style", "compact"], input=DOCUMENT)
        assert result.stdout == '{"foo":"foo","bar":"REDACTED"}'

    def test_invalid_rules_file(self, runner: CliRunner, tmp_path: Path) -> None:
        rules = tmp_path / "rules.json"
        rules.write_text('{"keys": []}', encoding="utf-8")
        result = runner.invoke(app, ["--rules", str(rules)], input=DOCUMENT)
        assert result.exit_code == 2
        assert "either keys or pattern" in result.output

    def test_missing_rules_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--rules", str(tmp_path / "absent.json")], input=DOCUMENT)
        assert result.exit_code == 2


class TestExitStatus:
    def test_no_arguments_prints_usage(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [], input=DOCUMENT)
        assert result.exit_code == 2
        assert "Usage: jsonscrub" in result.output

    def test_invalid_pattern(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--pattern", "(unclosed"], input=DOCUMENT)
        assert result.exit_code == 2
        assert "invalid field pattern" in result.output

    def test_malformed_input(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["foo"], input='{"foo": "unterminated')
        assert result.exit_code == 1
        assert "malformed json" in result.output

    def test_partial_output_before_error(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["foo"], input='{"foo":"x",]')
        assert result.exit_code == 1
        assert result.output.startswith('{"foo":"REDACTED"')

    def test_zero_buffer_size_setting(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONSCRUB_BUFFER_SIZE", "0")
        result = runner.invoke(app, ["foo"], input=DOCUMENT)
        assert result.exit_code == 2
        assert "JSONSCRUB_BUFFER_SIZE" in result.output
        assert "Traceback" not in result.output

    def test_unknown_style_setting(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONSCRUB_STYLE", "pretty")
        result = runner.invoke(app, ["foo"], input=DOCUMENT)
        assert result.exit_code == 2
        assert "JSONSCRUB_STYLE" in result.output
        assert len(result.output.strip().splitlines()) == 1

    def test_empty_input(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["foo"], input="")
        assert result.exit_code == 0
        assert result.stdout == ""


class TestStats:
    def test_stats_table(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["foo", "--stats"], input='[{"foo":"a"},{"foo":"b"},{"bar":"c"}]'
        )
        assert result.exit_code == 0
        assert "Masked values (2 total)" in result.output
        assert "foo" in result.output

    def test_stats_nothing_masked(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["nope", "--stats"], input=DOCUMENT)
        assert result.exit_code == 0
        assert "No values masked." in result.output
