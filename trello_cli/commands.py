"""
Command implementations for trello-cli.
Each cmd_*() receives an argparse.Namespace and handles output formatting.
"""

from trello_cli.client import TrelloClient
from trello_cli.formatters import (
    format_boards_table,
    format_cards_table,
    format_labels_table,
    format_lists_table,
    format_update_result,
    mutation_response,
    output,
)
from trello_cli.models import UpdateCardRequest


def _get_client():
    """Credentials are checked once by cli.main() before dispatch."""
    return TrelloClient(validate_token=False)


def cmd_update(ns):
    request = UpdateCardRequest.from_namespace(ns)
    result = _get_client().submit_update(request)
    if ns.format == "table":
        output(result, format_update_result, ns.format)
    else:
        mutation_response(result, ns.format)


def cmd_boards(ns):
    output(_get_client().list_boards(), format_boards_table, ns.format)


def cmd_cards(ns):
    output(_get_client().list_cards(ns.board), format_cards_table, ns.format)


def cmd_lists(ns):
    output(_get_client().list_lists(ns.board), format_lists_table, ns.format)


def cmd_labels(ns):
    output(_get_client().list_labels(ns.board), format_labels_table, ns.format)
