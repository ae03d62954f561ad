"""Read tools: board-scoped lookups used to pick ids (4 tools)."""

from __future__ import annotations

from trello_cli import CliError
from trello_cli.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _validate_hex_id,
)
from trello_cli.mcp_server._security import _sanitize_rows


def _board_lookup(method_name: str, board: str):
    try:
        _validate_hex_id(board, "board")
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    result = _call(method_name, board=board)
    if isinstance(result, list):
        result = _sanitize_rows(result)
    return _finalize_tool_result(result)


def list_boards() -> list | dict:
    """List open boards for the authorized member.

    Returns:
        List of dicts with id, name, closed, url.
    """
    result = _call("list_boards")
    if isinstance(result, list):
        result = _sanitize_rows(result)
    return _finalize_tool_result(result)


def list_cards(board: str) -> list | dict:
    """List cards on a board (24-char hex board id).

    Returns:
        List of dicts with id, name, list_id, board_id, closed, due, short_url.
    """
    return _board_lookup("list_cards", board)


def list_lists(board: str) -> list | dict:
    """List open lists on a board (24-char hex board id).

    Returns:
        List of dicts with id, name, closed, board_id.
    """
    return _board_lookup("list_lists", board)


def list_labels(board: str) -> list | dict:
    """List labels on a board (24-char hex board id).

    Returns:
        List of dicts with id, name, color, board_id.
    """
    return _board_lookup("list_labels", board)


def register(mcp):
    """Register all read tools with the FastMCP instance."""
    mcp.tool()(list_boards)
    mcp.tool()(list_cards)
    mcp.tool()(list_lists)
    mcp.tool()(list_labels)
