"""Tests for cli.py: global flags, argument parsing, dispatch and exit codes."""

import json
from unittest.mock import patch

import pytest

from trello_cli import config
from trello_cli.cli import _extract_global_flags, _needs_token, build_parser, main
from trello_cli.exceptions import CliError, SetupError

CARD = "5abbe4b7ddc1b351ef961414"
BOARD = "5abbe4b7ddc1b351ef961400"


def _run(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestExtractGlobalFlags:
    def test_defaults(self):
        assert _extract_global_flags(["boards"]) == ("json", False, False, False, False, ["boards"])

    def test_flags_anywhere(self):
        fmt, strict, dry_run, quiet, verbose, rest = _extract_global_flags(
            ["update", CARD, "--format", "table", "--dry-run", "--strict", "-q"]
        )
        assert (fmt, strict, dry_run, quiet, verbose) == ("table", True, True, True, False)
        assert rest == ["update", CARD]

    def test_invalid_format(self):
        with pytest.raises(CliError) as exc_info:
            _extract_global_flags(["--format", "csv", "boards"])
        assert "Invalid format 'csv'" in str(exc_info.value)

    def test_quiet_verbose_conflict(self):
        with pytest.raises(CliError):
            _extract_global_flags(["-q", "-v", "boards"])

    def test_version_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _extract_global_flags(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == f"trello-cli {config.VERSION}"


class TestParser:
    def test_update_flags(self):
        ns = build_parser().parse_args(
            [
                "update",
                CARD,
                "--name",
                "X",
                "--no-closed",
                "--due-complete",
                "--location-name",
                "Home",
                "--attachment-cover",
                "a1",
            ]
        )
        assert ns.card_id == CARD
        assert ns.name == "X"
        assert ns.closed is False
        assert ns.due_complete is True
        assert ns.subscribed is None
        assert ns.location_name == "Home"
        assert ns.attachment_cover == "a1"

    def test_description_alias(self):
        ns = build_parser().parse_args(["update", CARD, "--description", "Body"])
        assert ns.desc == "Body"

    def test_lookup_requires_board(self):
        with pytest.raises(CliError):
            build_parser().parse_args(["lists"])

    def test_lookup_short_flag(self):
        ns = build_parser().parse_args(["labels", "-b", BOARD])
        assert ns.board == BOARD

    def test_unknown_command(self):
        with pytest.raises(CliError):
            build_parser().parse_args(["delete", CARD])

    def test_update_help_uses_field_descriptions(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["update", "--help"])
        assert exc_info.value.code == 0
        out = " ".join(capsys.readouterr().out.split())
        assert "The position of the card. Valid values: `top`, `bottom`" in out
        assert "Member IDs to add to the card." in out
        assert "Should take the form latitude, longitude." in out


class TestNeedsToken:
    def test_version(self):
        assert _needs_token("version") is False

    def test_update(self):
        assert _needs_token("update") is True

    def test_dry_run_update(self, monkeypatch):
        monkeypatch.setattr(config, "RUNTIME_DRY_RUN", True)
        assert _needs_token("update") is False
        assert _needs_token("boards") is True


class TestMain:
    def test_no_args_prints_help(self, capsys):
        assert _run([]) == 0
        assert "Usage: trello-cli" in capsys.readouterr().out

    def test_version_command(self, capsys):
        assert _run(["version"]) == 0
        assert config.VERSION in capsys.readouterr().out

    @patch("trello_cli.client.update_card")
    @patch("trello_cli.cli._check_token")
    def test_update_success(self, mock_check, mock_update, capsys):
        mock_update.return_value = {"id": CARD}
        main(["update", CARD, "--name", "X", "--board", BOARD])
        mock_check.assert_called_once()
        mock_update.assert_called_once_with(CARD, {"name": "X", "idBoard": BOARD})
        assert f"Successfully updated card {CARD}" in capsys.readouterr().out

    @patch("trello_cli.client.update_card")
    @patch("trello_cli.cli._check_token")
    def test_validation_error_envelope(self, mock_check, mock_update, capsys):
        assert _run(["update", "abc", "--pos", "left", "--coordinates", "nowhere"]) == 1
        mock_update.assert_not_called()
        err = json.loads(capsys.readouterr().err)
        assert err["ok"] is False
        assert err["error"]["type"] == "validation"
        assert [v["field"] for v in err["error"]["violations"]] == [
            "idCard",
            "pos",
            "coordinates",
        ]

    @patch("trello_cli.client.update_card")
    @patch("trello_cli.cli._check_token")
    def test_dry_run_skips_token_check(self, mock_check, mock_update, capsys):
        main(["--dry-run", "update", CARD, "--name", "X"])
        mock_check.assert_not_called()
        mock_update.assert_not_called()
        assert "Dry run: would update card" in capsys.readouterr().out

    @patch("trello_cli.cli._check_token")
    def test_setup_error_exit_code(self, mock_check, capsys):
        mock_check.side_effect = SetupError("[SETUP_NEEDED] missing credentials")
        assert _run(["boards"]) == 2
        err = json.loads(capsys.readouterr().err)
        assert err["error"]["type"] == "setup_needed"
        assert err["error"]["exit_code"] == 2

    @patch("trello_cli.cli._check_token")
    def test_table_format_plain_error(self, mock_check, capsys):
        mock_check.side_effect = SetupError("[TOKEN_EXPIRED] rejected")
        assert _run(["--format", "table", "boards"]) == 2
        assert capsys.readouterr().err.strip() == "[TOKEN_EXPIRED] rejected"

    def test_bad_cover_json(self, capsys):
        assert _run(["--dry-run", "update", CARD, "--cover", "{nope"]) == 1
        assert "Invalid JSON in --cover" in capsys.readouterr().err

    @patch("trello_cli.client.list_boards")
    @patch("trello_cli.cli._check_token")
    def test_verbose_enables_http_log(self, mock_check, mock_boards, capsys):
        mock_boards.return_value = []
        main(["-v", "boards"])
        assert config.HTTP_LOG_ENABLED is True
