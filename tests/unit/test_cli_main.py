"""Tests for inode_util.cli.main — CLI commands via Click test runner."""
from __future__ import annotations

import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from inode_util.cli.main import cli

pytestmark = pytest.mark.skipif(os.name != "posix", reason="inode numbers require POSIX")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.log"
    path.write_text("first\nsecond [bracketed]\nthird\n", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Root CLI
# ---------------------------------------------------------------------------


class TestRootCLI:
    def test_help_exits_zero(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "inode" in result.output
        assert "tail" in result.output

    def test_version_command(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "inode-util" in result.output.lower()

    def test_log_level_option(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--log-level", "debug", "version"])
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# inode
# ---------------------------------------------------------------------------


class TestInodeCommand:
    def test_prints_inode(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(cli, ["inode", str(sample_file)])
        assert result.exit_code == 0
        assert result.output.strip() == str(os.stat(sample_file).st_ino)

    def test_missing_path_exits_one(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["inode", str(tmp_path / "does-not-exist-xyz")])
        assert result.exit_code == 1
        assert "not_found" in result.output

    def test_verbose_shows_table(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(cli, ["inode", "--verbose", str(sample_file)])
        assert result.exit_code == 0
        assert str(os.stat(sample_file).st_ino) in result.output
        assert "Inode lookup" in result.output

    def test_verbose_failure_shows_message(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["inode", "-v", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "not_found" in result.output

    def test_no_follow_reports_link(self, runner: CliRunner, sample_file: Path) -> None:
        link = sample_file.with_name("link.log")
        link.symlink_to(sample_file)

        followed = runner.invoke(cli, ["inode", str(link)])
        not_followed = runner.invoke(cli, ["inode", "--no-follow", str(link)])

        assert followed.output.strip() == str(os.stat(sample_file).st_ino)
        assert not_followed.output.strip() == str(os.lstat(link).st_ino)


# ---------------------------------------------------------------------------
# tail
# ---------------------------------------------------------------------------


class TestTailCommand:
    def test_prints_lines_until_max(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(
            cli, ["tail", str(sample_file), "--delay", "0.01", "--max-lines", "3"]
        )
        assert result.exit_code == 0
        assert result.output.splitlines() == ["first", "second [bracketed]", "third"]

    def test_max_lines_limits_output(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(
            cli, ["tail", str(sample_file), "--delay", "0.01", "--max-lines", "1"]
        )
        assert result.exit_code == 0
        assert result.output.splitlines() == ["first"]

    def test_position_skips_bytes(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(
            cli,
            ["tail", str(sample_file), "--delay", "0.01", "--position", "6", "--max-lines", "1"],
        )
        assert result.exit_code == 0
        assert result.output.splitlines() == ["second [bracketed]"]

    def test_zero_max_lines_exits_immediately(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(cli, ["tail", str(sample_file), "--max-lines", "0"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_invalid_delay_exits_two(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(cli, ["tail", str(sample_file), "--delay", "0"])
        assert result.exit_code == 2
        assert "delay" in result.output
