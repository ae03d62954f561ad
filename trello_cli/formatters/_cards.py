"""Card formatters: update result and board card listing."""

import json

from trello_cli.fields import optional_fields
from trello_cli.formatters._table import _sanitize_str, _table, _trunc

_PAYLOAD_LABELS = {f.payload_key: f.label for f in optional_fields()}


def format_update_result(result):
    """Format the dict returned by TrelloClient.update_card()."""
    lines = []
    if result.get("dry_run"):
        lines.append("DRY RUN (nothing sent)")
    lines.append(f"Card:      {result.get('card_id', '')}")
    card = result.get("card") or {}
    if card.get("name"):
        lines.append(f"Name:      {_sanitize_str(card['name'])}")
    if card.get("shortUrl"):
        lines.append(f"URL:       {card['shortUrl']}")
    fields = result.get("fields") or {}
    if fields:
        lines.append("")
        lines.append(f"Fields ({len(fields)}):")
        for key, value in fields.items():
            label = _PAYLOAD_LABELS.get(key, key)
            shown = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
            lines.append(f"  {label:<20} {_trunc(_sanitize_str(shown), 60)}")
    else:
        lines.append("No fields changed.")
    lines.append("")
    lines.append(result.get("summary", ""))
    return "\n".join(lines)


def format_cards_table(cards):
    """Format cards as a readable table.

    Accepts list of flat dicts from TrelloClient.list_cards().
    """
    if not cards:
        return "No cards found."
    cols = [("Name", 40), ("List", 26), ("Due", 12), ("ID", 0)]
    rows = []
    for card in cards:
        due = (card.get("due") or "")[:10] or "-"
        rows.append(
            (
                _trunc(card.get("name", ""), 40),
                card.get("list_id") or "-",
                due,
                card.get("id", ""),
            )
        )
    return _table(cols, rows, f"Total: {len(cards)} cards")
