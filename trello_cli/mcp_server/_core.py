"""Core helpers: client caching, _call dispatcher, response contract, id validation."""

from __future__ import annotations

import re

from trello_cli import CliError, SetupError, TrelloClient, ValidationError, config
from trello_cli.config import CONTRACT_SCHEMA_VERSION

_client: TrelloClient | None = None


def _get_client() -> TrelloClient:
    """Return a cached TrelloClient, creating one on first use."""
    global _client
    if _client is None:
        _client = TrelloClient()
    return _client


def _contract_error(message: str, error_type: str = "error", **extra) -> dict:
    """Return a stable MCP error envelope."""
    detail = {"type": error_type, "message": message}
    detail.update(extra)
    return {
        "ok": False,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "error": message,
        "error_detail": detail,
    }


def _finalize_tool_result(result):
    """Finalize tool response based on configured MCP response mode.

    Modes:
        - legacy (default): dicts gain ok/schema_version, lists pass through.
        - envelope: always return {"ok", "schema_version", "data"} for success.
    """
    if isinstance(result, dict) and result.get("ok") is False:
        return result
    if config.MCP_RESPONSE_MODE == "envelope":
        data = result
        if isinstance(result, dict):
            data = {k: v for k, v in result.items() if k not in ("ok", "schema_version")}
        return {"ok": True, "schema_version": CONTRACT_SCHEMA_VERSION, "data": data}
    if isinstance(result, dict):
        out = dict(result)
        out.setdefault("ok", True)
        out.setdefault("schema_version", CONTRACT_SCHEMA_VERSION)
        return out
    return result


_ALLOWED_METHODS = {
    "update_card",
    "update_card_from_api",
    "list_boards",
    "list_cards",
    "list_lists",
    "list_labels",
}


def _validate_hex_id(value: str, field: str = "card_id") -> str:
    """Validate a 24-char hex Trello id. Raises CliError if not."""
    if not isinstance(value, str) or not re.fullmatch(config.HEX_ID_PATTERN, value):
        raise CliError(f"[ERROR] {field} must be a 24-char hex Trello id, got: {value!r}")
    return value


def _call(method_name: str, **kwargs):
    """Call a TrelloClient method, converting exceptions to error dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        client = _get_client()
        return getattr(client, method_name)(**kwargs)
    except ValidationError as e:
        return _contract_error(
            str(e), "validation", violations=[v.to_dict() for v in e.violations]
        )
    except SetupError as e:
        return _contract_error(str(e), "setup")
    except CliError as e:
        return _contract_error(str(e), "error")
