"""
trello-cli — CLI tool for updating Trello cards
"""

import argparse
import json
import sys

from trello_cli import config
from trello_cli.api import _check_token
from trello_cli.commands import cmd_boards, cmd_cards, cmd_labels, cmd_lists, cmd_update
from trello_cli.exceptions import CliError, ValidationError
from trello_cli.fields import get_field

HELP_TEXT = """\
Usage: trello-cli <command> [args...]

Global flags:
  --format table          Output as readable text instead of JSON (default: json)
  --strict                Fail fast on ambiguous API responses
  --dry-run               Validate and show the payload without sending it
  --quiet, -q             Suppress confirmations
  --verbose, -v           Enable HTTP request logging
  --version               Show version number

Commands:
  update <card_id>        - Update a card (only the flags you pass are sent)
    --name <text>           New card name
    --desc <text>           New card description
    --closed / --no-closed  Archive (or unarchive) the card
    --members <ids>         Comma-separated member ids
    --attachment-cover <id> Image attachment id to use as cover
    --list <id>             Move the card to this list
    --labels <ids>          Comma-separated label ids
    --board <id>            Move the card to this board
    --pos <pos>             top, bottom, or a positive float
    --due <date>            Due date (YYYY-MM-DD or ISO-8601 timestamp)
    --due-complete          Mark the due date complete
    --subscribed            Subscribe to the card
    --address <text>        Map Power-Up address
    --location-name <text>  Map Power-Up location name
    --coordinates <lat,lon> Map Power-Up coordinates, e.g. "40.7128, -74.0060"
    --cover <json>          Cover object as JSON
  boards                  - List your open boards
  cards --board <id>      - List cards on a board
  lists --board <id>      - List lists on a board
  labels --board <id>     - List labels on a board
  version                 - Show version number

Configuration (.env or environment):
  TRELLO_API_KEY, TRELLO_TOKEN    Credentials from https://trello.com/app-key
  TRELLO_PAYLOAD_PRESENCE         truthy (default) or explicit
  TRELLO_HTTP_LOG=1               Log HTTP requests to stderr
"""

# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so --format works after subcommand)
# ---------------------------------------------------------------------------


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (format_str, strict, dry_run, quiet, verbose, remaining_argv).
    Handles --version directly.
    """
    fmt = "json"
    strict = False
    dry_run = False
    quiet = False
    verbose = False
    remaining = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--version":
            print(f"trello-cli {config.VERSION}")
            sys.exit(0)
        elif arg == "--strict":
            strict = True
        elif arg == "--dry-run":
            dry_run = True
        elif arg in ("--quiet", "-q"):
            quiet = True
        elif arg in ("--verbose", "-v"):
            verbose = True
        elif arg == "--format" and i + 1 < len(argv):
            fmt = argv[i + 1]
            if fmt not in ("json", "table"):
                raise CliError(f"[ERROR] Invalid format '{fmt}'. Use: json, table")
            i += 2
            continue
        else:
            remaining.append(arg)
        i += 1
    if quiet and verbose:
        raise CliError("[ERROR] --quiet and --verbose are mutually exclusive.")
    return fmt, strict, dry_run, quiet, verbose, remaining


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Subparser that raises CliError instead of printing full help text."""

    def error(self, message):
        raise CliError(f"[ERROR] {message}")


def _field_help(attr, extra=None):
    text = get_field(attr).description
    return f"{text} {extra}" if extra else text


def build_parser():
    parser = _SubcommandParser(
        prog="trello-cli",
        description="CLI tool for updating Trello cards",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)

    sub.add_parser("version").set_defaults(func=None)

    # --- update ---
    p = sub.add_parser("update", description="Update a card. Only the flags you pass are sent.")
    p.add_argument("card_id", help=_field_help("id_card"))
    p.add_argument("--name", help=_field_help("name"))
    p.add_argument("--desc", "--description", dest="desc", help=_field_help("desc"))
    p.add_argument(
        "--closed",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=_field_help("closed"),
    )
    p.add_argument("--members", help=_field_help("id_members", "Comma-separated."))
    p.add_argument(
        "--attachment-cover",
        dest="attachment_cover",
        help=_field_help("id_attachment_cover"),
    )
    p.add_argument("--list", help=_field_help("id_list"))
    p.add_argument("--labels", help=_field_help("id_labels", "Comma-separated."))
    p.add_argument("--board", help=_field_help("board"))
    p.add_argument("--pos", help=_field_help("pos"))
    p.add_argument("--due", help=_field_help("due", "YYYY-MM-DD or ISO-8601."))
    p.add_argument(
        "--due-complete",
        dest="due_complete",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=_field_help("due_complete"),
    )
    p.add_argument(
        "--subscribed",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=_field_help("subscribed"),
    )
    p.add_argument("--address", help=_field_help("address"))
    p.add_argument("--location-name", dest="location_name", help=_field_help("location_name"))
    p.add_argument("--coordinates", help=_field_help("coordinates"))
    p.add_argument("--cover", help=_field_help("cover", "JSON object."))
    p.set_defaults(func=cmd_update)

    # --- lookups ---
    sub.add_parser("boards").set_defaults(func=cmd_boards)
    for name, handler in (("cards", cmd_cards), ("lists", cmd_lists), ("labels", cmd_labels)):
        p = sub.add_parser(name)
        p.add_argument("--board", "-b", required=True)
        p.set_defaults(func=handler)

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

NO_TOKEN_COMMANDS = {"version"}


def _error_type_from_message(message):
    if message.startswith("[TOKEN_EXPIRED]"):
        return "token_expired"
    if message.startswith("[SETUP_NEEDED]"):
        return "setup_needed"
    if message.startswith("[ERROR]"):
        return "error"
    return "cli_error"


def _emit_cli_error(err, fmt):
    msg = str(err)
    if fmt == "json":
        error = {
            "type": _error_type_from_message(msg),
            "message": msg,
            "exit_code": getattr(err, "exit_code", 1),
        }
        if isinstance(err, ValidationError):
            error["type"] = "validation"
            error["violations"] = [v.to_dict() for v in err.violations]
        payload = {
            "ok": False,
            "schema_version": config.CONTRACT_SCHEMA_VERSION,
            "error": error,
        }
        print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)
        return
    print(msg, file=sys.stderr)


def _needs_token(cmd):
    if cmd in NO_TOKEN_COMMANDS:
        return False
    # A dry-run update never reaches the network.
    return not (cmd == "update" and config.RUNTIME_DRY_RUN)


def main(argv=None):
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(HELP_TEXT)
        sys.exit(0)

    fmt = "json"
    try:
        fmt, strict, dry_run, quiet, verbose, remaining_argv = _extract_global_flags(argv)
        config.RUNTIME_STRICT = strict
        config.RUNTIME_DRY_RUN = dry_run
        config.RUNTIME_QUIET = quiet
        config.RUNTIME_VERBOSE = verbose
        if verbose:
            config.HTTP_LOG_ENABLED = True

        if not remaining_argv:
            print(HELP_TEXT)
            sys.exit(0)

        parser = build_parser()
        ns = parser.parse_args(remaining_argv)
        ns.format = fmt

        if ns.show_help or not ns.command:
            print(HELP_TEXT)
            sys.exit(0)

        if ns.command == "version":
            print(f"trello-cli {config.VERSION}")
            sys.exit(0)

        if _needs_token(ns.command):
            _check_token()

        ns.func(ns)

    except CliError as e:
        _emit_cli_error(e, fmt)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
