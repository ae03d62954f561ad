"""Core output dispatchers."""

import json

from trello_cli import config


def pretty_print(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def output(data, formatter=None, fmt="json"):
    """Output data in requested format."""
    if fmt == "table" and formatter:
        print(formatter(data))
    else:
        print(json.dumps(data, indent=2, ensure_ascii=False))


def mutation_response(result, fmt="json"):
    """Print the outcome of a card update.

    Strict JSON mode emits one machine-readable line; otherwise an OK line
    with the summary, followed by the full result for JSON output.
    """
    if fmt == "json" and config.RUNTIME_STRICT:
        print(json.dumps({"ok": True, "mutation": result}, ensure_ascii=False))
        return
    if not config.RUNTIME_QUIET:
        print(f"OK: {result.get('summary', 'updated')}")
    if fmt == "json":
        pretty_print(result)
