"""
Trello resource calls: the card update plus the board-scoped lookups
used to populate selection choices.
"""

import urllib.parse

from trello_cli import config
from trello_cli.api import _expect_list_response, _expect_object_response, trello_request
from trello_cli.exceptions import CliError

_BOARD_FIELDS = "id,name,closed,url"
_CARD_FIELDS = "id,name,idList,idBoard,closed,due,pos,shortUrl"
_LIST_FIELDS = "id,name,closed,pos,idBoard"
_LABEL_FIELDS = "id,name,color,idBoard"


def _quote_id(value):
    return urllib.parse.quote(str(value), safe="")


def update_card(card_id, options):
    """PUT /cards/{id} with a sparse payload. Returns the updated card."""
    result = _expect_object_response(
        trello_request(f"/cards/{_quote_id(card_id)}", data=options, method="PUT"),
        "update card",
    )
    if config.RUNTIME_STRICT and not result.get("id"):
        raise CliError(
            "[ERROR] Strict mode: update response missing card id. "
            "Treating as ambiguous response."
        )
    return result


def list_boards():
    """Boards the authorized member belongs to."""
    return _expect_list_response(
        trello_request("/members/me/boards", {"fields": _BOARD_FIELDS, "filter": "open"}),
        "boards",
    )


def list_cards(board_id):
    """Open cards on a board."""
    return _expect_list_response(
        trello_request(f"/boards/{_quote_id(board_id)}/cards", {"fields": _CARD_FIELDS}),
        "cards",
    )


def list_lists(board_id):
    """Open lists on a board."""
    return _expect_list_response(
        trello_request(
            f"/boards/{_quote_id(board_id)}/lists",
            {"fields": _LIST_FIELDS, "filter": "open"},
        ),
        "lists",
    )


def list_labels(board_id):
    """Labels defined on a board."""
    return _expect_list_response(
        trello_request(f"/boards/{_quote_id(board_id)}/labels", {"fields": _LABEL_FIELDS}),
        "labels",
    )
