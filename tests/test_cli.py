"""Tests for the piimask command line interface."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from piimask.cli.main import cli, main


@pytest.mark.usefixtures("restore_logging")
class TestCliMain:
    """Test the CLI commands."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_cli_help(self):
        result = self.runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "format-preserving masking" in result.output
        for command in ("mask", "fields", "check", "version"):
            assert command in result.output

    def test_version_command(self):
        with patch("piimask.__version__", "1.2.3"):
            result = self.runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "piimask v1.2.3" in result.output

    @pytest.mark.parametrize(
        "kind, value, expected",
        [
            ("email", "john.doe@example.com", "jo******@ex*****.com"),
            ("phone", "555-123-4567", "******4567"),
            ("ip", "2001:db8::1", "2001:db8::0"),
            ("user_agent", "curl/8.4.0", "Unknown Browser on Unknown OS"),
        ],
    )
    def test_mask_command(self, kind, value, expected):
        result = self.runner.invoke(cli, ["mask", kind, value])
        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_mask_command_failure(self):
        result = self.runner.invoke(cli, ["mask", "date", "not a date"])
        assert result.exit_code == 1
        assert "could not mask value as date" in result.output

    @pytest.mark.parametrize("kind", ["email", "email_placeholder", "email_display", "phone"])
    def test_mask_command_empty_result_is_failure(self, kind):
        result = self.runner.invoke(cli, ["mask", kind, "bad"])
        assert result.exit_code == 1
        assert f"could not mask value as {kind}" in result.output

    def test_mask_command_unknown_kind(self):
        result = self.runner.invoke(cli, ["mask", "ssn", "123"])
        assert result.exit_code == 2

    def test_fields_from_stdin(self):
        payload = json.dumps({"name": "John Smith", "zip": "90210", "birthday": "someday"})
        result = self.runner.invoke(cli, ["fields", "personal"], input=payload)

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "name": "J**n S***h",
            "zip": "**210",
            "birthday": None,
        }

    def test_fields_with_json_numbers(self):
        payload = json.dumps({"zip": 90210, "age": 42, "active": True})
        result = self.runner.invoke(cli, ["fields", "personal", "-"], input=payload)

        assert result.exit_code == 0
        assert json.loads(result.output) == {"zip": "**210", "age": "**", "active": "****"}

    def test_fields_with_numeric_card(self):
        result = self.runner.invoke(
            cli, ["fields", "financial"], input=json.dumps({"card_number": 4532123456789012})
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == {"card_number": "************9012"}

    def test_fields_with_explicit_types(self, tmp_path: Path):
        input_file = tmp_path / "payment.json"
        input_file.write_text(json.dumps({"payout": "123-45-6789"}))

        result = self.runner.invoke(
            cli, ["fields", "financial", str(input_file), "-t", "payout=tax_id"]
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == {"payout": "*****6789"}

    def test_fields_bad_type_option(self):
        result = self.runner.invoke(cli, ["fields", "financial", "-t", "payout"], input="{}")
        assert result.exit_code == 2
        assert "FIELD=KIND" in result.output

    def test_fields_invalid_json(self):
        result = self.runner.invoke(cli, ["fields", "web"], input="{not json")
        assert result.exit_code == 1
        assert "Invalid JSON input" in result.output

    def test_fields_requires_object(self):
        result = self.runner.invoke(cli, ["fields", "web"], input="[1, 2]")
        assert result.exit_code == 1
        assert "must be an object" in result.output

    def test_check_command(self):
        masked = self.runner.invoke(cli, ["check", "192.168.1.0"])
        clear = self.runner.invoke(cli, ["check", "john@example.com"])

        assert masked.exit_code == 0
        assert masked.output.strip() == "masked"
        assert clear.exit_code == 1
        assert clear.output.strip() == "clear"

    def test_config_file(self, tmp_path: Path):
        config_file = tmp_path / "piimask.yaml"
        config_file.write_text("piimask:\n  phone_keep_last: 2\n")

        result = self.runner.invoke(
            cli, ["--config", str(config_file), "mask", "phone", "555-123-4567"]
        )

        assert result.exit_code == 0
        assert result.output.strip() == "********67"

    def test_invalid_config_file(self, tmp_path: Path):
        config_file = tmp_path / "piimask.yaml"
        config_file.write_text("piimask:\n  phone_keep_last: -2\n")

        result = self.runner.invoke(cli, ["-c", str(config_file), "version"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_environment_configuration(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PIIMASK_ZIPCODE_KEEP_LAST", "1")
        result = self.runner.invoke(cli, ["mask", "zipcode", "90210"])
        assert result.output.strip() == "****0"

    def test_main_success(self):
        with patch("piimask.cli.main.cli") as mock_cli:
            assert main() == 0
        mock_cli.assert_called_once()

    def test_main_unhandled_error(self, capsys):
        with patch("piimask.cli.main.cli", side_effect=RuntimeError("boom")):
            assert main() == 1
        assert "Error: boom" in capsys.readouterr().err
