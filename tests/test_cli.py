"""
Tests for the command line interface.
"""

import pytest
import yaml
from click.testing import CliRunner

from main import cli, parse_reason_command


@pytest.fixture
def config_file(tmp_path):
    config = {
        "logging": {"level": "INFO", "file": str(tmp_path / "logs" / "memreason.log")},
        "reasoning": {"builtin_rules": False},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config))
    return str(path)


class TestParseReasonCommand:
    """Test the interactive reason syntax."""

    def test_premises_and_goal(self):
        """Test premises and goal."""
        assert parse_reason_command("A; A → B => B") == {
            "premises": ["A", "A → B"],
            "goal": "B",
            "method": "forward",
        }

    def test_method_suffix(self):
        """Test method suffix."""
        assert parse_reason_command("wet => rained | abductive")["method"] == "abductive"

    def test_missing_goal(self):
        """Test missing goal."""
        with pytest.raises(ValueError):
            parse_reason_command("A; B")


class TestCli:
    """Test CLI commands."""

    def test_reason(self, config_file):
        """Test reason."""
        result = CliRunner().invoke(cli, ["--config", config_file, "reason", "Q", "-p", "P"])
        assert result.exit_code == 0
        assert "not found" in result.output

    def test_unknown_method(self, config_file):
        """Test unknown method."""
        result = CliRunner().invoke(cli, ["--config", config_file, "reason", "Q", "-m", "sideways"])
        assert result.exit_code == 1
        assert "Unknown reasoning method: sideways" in result.output

    def test_stats(self, config_file):
        """Test stats."""
        result = CliRunner().invoke(cli, ["--config", config_file, "stats"])
        assert result.exit_code == 0
        assert "Reasoning Engine Statistics" in result.output

    def test_missing_config(self, tmp_path):
        """Test missing config."""
        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "absent.yaml"), "stats"])
        assert result.exit_code == 1
