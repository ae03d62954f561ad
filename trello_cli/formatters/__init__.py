"""Output formatting package for trello-cli.

Re-exports all public names so consumers can do:
    from trello_cli.formatters import format_boards_table
"""

from trello_cli.formatters._cards import format_cards_table, format_update_result
from trello_cli.formatters._core import mutation_response, output, pretty_print
from trello_cli.formatters._entities import (
    format_boards_table,
    format_labels_table,
    format_lists_table,
)
from trello_cli.formatters._table import _CONTROL_RE, _sanitize_str, _table, _trunc

__all__ = [
    "_CONTROL_RE",
    "_sanitize_str",
    "_table",
    "_trunc",
    "format_boards_table",
    "format_cards_table",
    "format_labels_table",
    "format_lists_table",
    "format_update_result",
    "mutation_response",
    "output",
    "pretty_print",
]
