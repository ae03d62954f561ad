"""
Typed models for the card update request and the position union.
"""

import math
from dataclasses import dataclass, fields
from typing import Any

from trello_cli._utils import _parse_id_list
from trello_cli.api import _safe_json_parse
from trello_cli.exceptions import CliError
from trello_cli.fields import CARD_FIELDS, get_field


def is_supplied(value, presence="truthy"):
    """Decide whether a field counts as set by the caller.

    ``truthy`` treats empty strings, 0, False, and None as absent (the shape the
    remote endpoint has always received). ``explicit`` only treats None as absent.
    """
    if presence == "explicit":
        return value is not None
    return bool(value)


# ---------------------------------------------------------------------------
# Position: tagged union decided once per value
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PositionKeyword:
    value: str


@dataclass(frozen=True)
class PositionNumber:
    value: float


@dataclass(frozen=True)
class PositionInvalid:
    raw: Any


Position = PositionKeyword | PositionNumber | PositionInvalid


def parse_position(raw) -> Position:
    """Classify a raw ``pos`` value by its runtime shape.

    Numbers and numeric-looking strings take the numeric branch, other strings
    take the keyword branch, and anything else (bools, lists, NaN) is invalid.
    """
    if isinstance(raw, bool):
        return PositionInvalid(raw)
    if isinstance(raw, (int, float)):
        try:
            number = float(raw)
        except OverflowError:
            return PositionInvalid(raw)
        return PositionNumber(number) if math.isfinite(number) else PositionInvalid(raw)
    if isinstance(raw, str):
        try:
            number = float(raw.strip())
        except ValueError:
            return PositionKeyword(raw)
        except OverflowError:
            return PositionInvalid(raw)
        return PositionNumber(number) if math.isfinite(number) else PositionInvalid(raw)
    return PositionInvalid(raw)


# ---------------------------------------------------------------------------
# Update request
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UpdateCardRequest:
    """Caller-supplied field set for a card update. None means not provided."""

    id_card: Any
    name: str | None = None
    desc: str | None = None
    closed: bool | None = None
    id_members: Any = None
    id_attachment_cover: str | None = None
    id_list: str | None = None
    id_labels: Any = None
    board: str | None = None
    pos: Any = None
    due: Any = None
    due_complete: bool | None = None
    subscribed: bool | None = None
    address: str | None = None
    location_name: str | None = None
    coordinates: str | None = None
    cover: Any = None

    def value(self, field_def):
        return getattr(self, field_def.attr)

    def supplied(self, presence="truthy"):
        """Attribute names of fields the caller set, in registry order."""
        return [
            f.attr
            for f in CARD_FIELDS
            if f.payload_key is not None and is_supplied(self.value(f), presence)
        ]

    @classmethod
    def from_kwargs(cls, id_card, **kwargs):
        """Build from attribute-named keyword args (programmatic API)."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise CliError(f"[ERROR] Unknown card field(s): {', '.join(unknown)}")
        return cls(id_card=id_card, **kwargs)

    @classmethod
    def from_api(cls, data):
        """Build from a mapping keyed by Trello API names (idCard, idList, ...)."""
        if not isinstance(data, dict):
            raise CliError(
                f"[ERROR] Invalid card fields: expected object, got {type(data).__name__}."
            )
        kwargs = {}
        unknown = []
        for key, value in data.items():
            field_def = get_field(key)
            if field_def is None:
                unknown.append(key)
                continue
            kwargs[field_def.attr] = value
        if unknown:
            raise CliError(f"[ERROR] Unknown card field(s): {', '.join(sorted(unknown))}")
        id_card = kwargs.pop("id_card", None)
        return cls(id_card=id_card, **kwargs)

    @classmethod
    def from_namespace(cls, ns):
        """Build from the parsed `update` subcommand namespace."""
        cover = None
        if ns.cover is not None:
            cover = _safe_json_parse(ns.cover, "--cover")
        return cls(
            id_card=ns.card_id,
            name=ns.name,
            desc=ns.desc,
            closed=ns.closed,
            id_members=_parse_id_list(ns.members),
            id_attachment_cover=ns.attachment_cover,
            id_list=ns.list,
            id_labels=_parse_id_list(ns.labels),
            board=ns.board,
            pos=ns.pos,
            due=ns.due,
            due_complete=ns.due_complete,
            subscribed=ns.subscribed,
            address=ns.address,
            location_name=ns.location_name,
            coordinates=ns.coordinates,
            cover=cover,
        )
