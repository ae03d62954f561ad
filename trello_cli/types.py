"""Typed response definitions for TrelloClient methods.

These TypedDicts document the shape of dicts returned by public API methods.
They are optional — runtime behavior is unchanged (plain dicts).
"""

from __future__ import annotations

from typing import Any, TypedDict


class CardResult(TypedDict, total=False):
    """Raw card object returned by PUT /cards/{id} (subset)."""

    id: str
    name: str
    desc: str
    closed: bool
    idBoard: str
    idList: str
    idLabels: list[str]
    idMembers: list[str]
    pos: float
    due: str | None
    dueComplete: bool
    shortUrl: str
    url: str


class UpdateCardResult(TypedDict, total=False):
    """Return type of TrelloClient.update_card()."""

    ok: bool
    card_id: str
    card: CardResult
    fields: dict[str, Any]
    summary: str
    dry_run: bool


class BoardRow(TypedDict, total=False):
    id: str
    name: str
    closed: bool
    url: str | None


class CardRow(TypedDict, total=False):
    id: str
    name: str
    list_id: str | None
    board_id: str | None
    closed: bool
    due: str | None
    short_url: str | None


class ListRow(TypedDict, total=False):
    id: str
    name: str
    closed: bool
    board_id: str | None


class LabelRow(TypedDict, total=False):
    id: str
    name: str
    color: str | None
    board_id: str | None
