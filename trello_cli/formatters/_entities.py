"""Formatters for boards, lists, and labels."""

from trello_cli.formatters._table import _table, _trunc


def format_boards_table(boards):
    """Format boards as a readable table.

    Accepts list of flat dicts from TrelloClient.list_boards().
    """
    if not boards:
        return "No boards found."
    cols = [("Name", 40), ("ID", 26), ("URL", 0)]
    rows = [
        (_trunc(b.get("name", ""), 40), b.get("id", ""), b.get("url") or "-") for b in boards
    ]
    return _table(cols, rows, f"Total: {len(boards)} boards")


def format_lists_table(lists):
    """Format board lists as a readable table."""
    if not lists:
        return "No lists found."
    cols = [("Name", 40), ("ID", 0)]
    rows = [(_trunc(lst.get("name", ""), 40), lst.get("id", "")) for lst in lists]
    return _table(cols, rows, f"Total: {len(lists)} lists")


def format_labels_table(labels):
    """Format board labels as a readable table. Unnamed labels show their color."""
    if not labels:
        return "No labels found."
    cols = [("Name", 30), ("Color", 10), ("ID", 0)]
    rows = []
    for label in labels:
        color = label.get("color") or "-"
        name = label.get("name") or f"({color})"
        rows.append((_trunc(name, 30), color, label.get("id", "")))
    return _table(cols, rows, f"Total: {len(labels)} labels")
