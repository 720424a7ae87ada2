"""Tests for CLI commands."""

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from linehist.cli import main


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logging.getLogger("linehist").handlers.clear()


def _invoke(*args: str):
    runner = CliRunner()
    return runner.invoke(main, list(args))


class TestCLI:
    def test_help(self):
        result = _invoke("--help")
        assert result.exit_code == 0
        assert "linehist" in result.output
        for command in ("show", "add", "stats", "compact"):
            assert command in result.output

    def test_version(self):
        result = _invoke("--version")
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_add_then_show(self, history_path: Path):
        result = _invoke("--file", str(history_path), "add", "ls", "echo 'a\nb'")
        assert result.exit_code == 0
        assert history_path.read_text() == "ls\necho 'a\\nb'\n"

        result = _invoke("--file", str(history_path), "show")
        assert result.exit_code == 0
        assert result.output == "ls\necho 'a\nb'\n"

    def test_show_raw_and_limit(self, history_path: Path):
        history_path.write_text("one\ntwo\nthree\\nlines\n")
        result = _invoke("--file", str(history_path), "show", "--raw", "-n", "2")
        assert result.exit_code == 0
        assert result.output == "two\nthree\\nlines\n"

    def test_show_missing_file(self, history_path: Path):
        result = _invoke("--file", str(history_path), "show")
        assert result.exit_code == 0
        assert result.output == ""

    def test_add_merges_with_existing(self, history_path: Path):
        history_path.write_text("a\nb\n")
        _invoke("--file", str(history_path), "add", "c")
        _invoke("--file", str(history_path), "add", "d")
        assert history_path.read_text() == "a\nb\nc\nd\n"

    def test_add_respects_config_limits(self, sample_config_yaml: Path, tmp_path: Path):
        result = _invoke("--config", str(sample_config_yaml), "add", "1", "2", "3", "4")
        assert result.exit_code == 0
        assert (tmp_path / "configured_history").read_text() == "2\n3\n4\n"

    def test_log_level_from_config(self, sample_config_yaml: Path):
        result = _invoke("--config", str(sample_config_yaml), "show")
        assert result.exit_code == 0
        assert logging.getLogger("linehist").level == logging.DEBUG

    def test_log_level_option_overrides_config(self, sample_config_yaml: Path):
        result = _invoke("--config", str(sample_config_yaml), "--log-level", "ERROR", "show")
        assert result.exit_code == 0
        assert logging.getLogger("linehist").level == logging.ERROR

    def test_stats(self, history_path: Path):
        history_path.write_text("ab\ncd\n")
        result = _invoke("--file", str(history_path), "stats")
        assert result.exit_code == 0
        assert "Entries:     2" in result.output
        assert "Size:        6 bytes" in result.output
        assert "unbounded" in result.output

    def test_compact(self, history_path: Path, tmp_path: Path):
        history_path.write_text("a\na\nb\nc\nd\n")
        config = tmp_path / "c.yaml"
        config.write_text("max_entries: 2\n")
        result = _invoke("--config", str(config), "--file", str(history_path), "compact")
        assert result.exit_code == 0
        assert history_path.read_text() == "c\nd\n"
        assert "2 entries" in result.output

    def test_save_failure_is_a_warning(self, tmp_path: Path):
        result = _invoke("--file", str(tmp_path / "missing" / "history"), "add", "ls")
        assert result.exit_code == 1
        assert "could not be saved" in result.output
