"""Write tools: card update by keyword or by API-named mapping (2 tools)."""

from __future__ import annotations

from typing import Any

from trello_cli import CliError
from trello_cli.mcp_server._core import _call, _contract_error, _finalize_tool_result
from trello_cli.mcp_server._security import _sanitize_card, _validate_input

# Free-text fields checked before sending: attribute name -> API name.
_TEXT_FIELDS = {
    "name": "name",
    "desc": "desc",
    "address": "address",
    "location_name": "locationName",
}


def _clean_texts(values: dict[str, Any], keys) -> dict[str, Any]:
    """Run _validate_input over the text keys present in ``values``."""
    out = dict(values)
    for key in keys:
        if out.get(key) is not None:
            out[key] = _validate_input(out[key], key)
    return out


def _finish_update(result):
    if isinstance(result, dict) and isinstance(result.get("card"), dict):
        result = dict(result)
        result["card"] = _sanitize_card(result["card"])
    return _finalize_tool_result(result)


def update_card(
    card_id: str,
    name: str | None = None,
    desc: str | None = None,
    closed: bool | None = None,
    id_members: list[str] | None = None,
    id_attachment_cover: str | None = None,
    id_list: str | None = None,
    id_labels: list[str] | None = None,
    board: str | None = None,
    pos: str | float | None = None,
    due: str | None = None,
    due_complete: bool | None = None,
    subscribed: bool | None = None,
    address: str | None = None,
    location_name: str | None = None,
    coordinates: str | None = None,
    cover: dict[str, Any] | None = None,
) -> dict:
    """Update a Trello card. Only the fields you pass are sent.

    Args:
        card_id: 24-char hex card id.
        id_members/id_labels: Lists of 24-char hex ids.
        id_list/board/id_attachment_cover: 24-char hex ids.
        pos: 'top', 'bottom', or a non-negative number.
        due: Date (YYYY-MM-DD) or ISO-8601 timestamp.
        coordinates: 'latitude, longitude', e.g. '40.7128, -74.0060'.
        cover: Trello cover object (color, brightness, size, ...).

    Returns:
        Dict with ok, card_id, card, fields (payload sent), summary.
        On bad input: ok=False with error_detail.violations listing every field.
    """
    texts = {"name": name, "desc": desc, "address": address, "location_name": location_name}
    try:
        texts = _clean_texts(texts, _TEXT_FIELDS)
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    result = _call(
        "update_card",
        card_id=card_id,
        closed=closed,
        id_members=id_members,
        id_attachment_cover=id_attachment_cover,
        id_list=id_list,
        id_labels=id_labels,
        board=board,
        pos=pos,
        due=due,
        due_complete=due_complete,
        subscribed=subscribed,
        coordinates=coordinates,
        cover=cover,
        **texts,
    )
    return _finish_update(result)


def update_card_fields(fields: dict[str, Any]) -> dict:
    """Update a Trello card from a mapping keyed by Trello API names.

    Args:
        fields: Must include idCard. Other keys: name, desc, closed, idMembers,
            idAttachmentCover, idList, idLabels, board, pos, due, dueComplete,
            subscribed, address, locationName, coordinates, cover.

    Returns:
        Same shape as update_card.
    """
    if not isinstance(fields, dict):
        return _finalize_tool_result(
            _contract_error("[ERROR] fields must be an object keyed by Trello API names.")
        )
    try:
        fields = _clean_texts(fields, _TEXT_FIELDS.values())
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finish_update(_call("update_card_from_api", fields=fields))


def register(mcp):
    """Register all write tools with the FastMCP instance."""
    mcp.tool()(update_card)
    mcp.tool()(update_card_fields)
