"""
TrelloClient — public programmatic API for updating Trello cards.

Single source of truth for the update flow and the board lookups.
Methods return flat dicts suitable for JSON serialization and never print.
"""

from __future__ import annotations

from typing import Any

from trello_cli import config
from trello_cli.api import _check_token
from trello_cli.cards import list_boards, list_cards, list_labels, list_lists, update_card
from trello_cli.models import UpdateCardRequest
from trello_cli.payload import build_payload
from trello_cli.types import BoardRow, CardRow, LabelRow, ListRow, UpdateCardResult
from trello_cli.validation import check_validation_result, validate

# ---------------------------------------------------------------------------
# Row helpers
# ---------------------------------------------------------------------------


def _board_row(board) -> BoardRow:
    return {
        "id": board.get("id", ""),
        "name": board.get("name", ""),
        "closed": bool(board.get("closed")),
        "url": board.get("url"),
    }


def _card_row(card) -> CardRow:
    return {
        "id": card.get("id", ""),
        "name": card.get("name", ""),
        "list_id": card.get("idList"),
        "board_id": card.get("idBoard"),
        "closed": bool(card.get("closed")),
        "due": card.get("due"),
        "short_url": card.get("shortUrl"),
    }


def _list_row(lst) -> ListRow:
    return {
        "id": lst.get("id", ""),
        "name": lst.get("name", ""),
        "closed": bool(lst.get("closed")),
        "board_id": lst.get("idBoard"),
    }


def _label_row(label) -> LabelRow:
    return {
        "id": label.get("id", ""),
        "name": label.get("name") or "",
        "color": label.get("color"),
        "board_id": label.get("idBoard"),
    }


def _result_card_id(result, fallback):
    """Id reported in the summary: idCard if the result carries one, else id."""
    return result.get("idCard") or result.get("id") or fallback


# ---------------------------------------------------------------------------
# TrelloClient
# ---------------------------------------------------------------------------


class TrelloClient:
    """Programmatic entry point for card updates and board lookups.

    Construct with ``validate_token=False`` to skip the credential check
    (tests, dry runs).
    """

    def __init__(self, *, validate_token=True):
        if validate_token:
            _check_token()

    # -------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------

    def update_card(self, card_id: str, **fields: Any) -> UpdateCardResult:
        """Update one card with the supplied fields.

        Args:
            card_id: 24-char hex id of the card.
            **fields: Attribute-named fields (name, desc, closed, id_members,
                id_attachment_cover, id_list, id_labels, board, pos, due,
                due_complete, subscribed, address, location_name,
                coordinates, cover).

        Returns:
            dict with ok, card_id, card (raw Trello result), fields (the
            payload sent) and a one-line summary.

        Raises:
            ValidationError: before any request, listing every bad field.
        """
        request = UpdateCardRequest.from_kwargs(card_id, **fields)
        return self.submit_update(request)

    def update_card_from_api(self, fields: dict[str, Any]) -> UpdateCardResult:
        """Update from a mapping keyed by Trello API names (idCard, idList, board, ...)."""
        return self.submit_update(UpdateCardRequest.from_api(fields))

    def submit_update(self, request: UpdateCardRequest) -> UpdateCardResult:
        """Validate, assemble, and send an already-built request."""
        presence = config.PAYLOAD_PRESENCE
        check_validation_result(validate(request, presence))
        payload = build_payload(request, presence)

        if config.RUNTIME_DRY_RUN:
            return {
                "ok": True,
                "dry_run": True,
                "card_id": request.id_card,
                "fields": payload,
                "summary": f"Dry run: would update card {request.id_card}",
            }

        result = update_card(request.id_card, payload)
        result_id = _result_card_id(result, request.id_card)
        return {
            "ok": True,
            "card_id": result_id,
            "card": result,
            "fields": payload,
            "summary": f"Successfully updated card {result_id}",
        }

    # -------------------------------------------------------------------
    # Lookups (selection choices)
    # -------------------------------------------------------------------

    def list_boards(self) -> list[BoardRow]:
        """Boards the authorized member can see."""
        return [_board_row(b) for b in list_boards()]

    def list_cards(self, board: str) -> list[CardRow]:
        """Cards on a board."""
        return [_card_row(c) for c in list_cards(board)]

    def list_lists(self, board: str) -> list[ListRow]:
        """Lists on a board."""
        return [_list_row(lst) for lst in list_lists(board)]

    def list_labels(self, board: str) -> list[LabelRow]:
        """Labels on a board."""
        return [_label_row(lbl) for lbl in list_labels(board)]
