"""Low-level table rendering helpers."""

import re

_CONTROL_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_MIN_RULE_WIDTH = 72


def _trunc(s, maxlen):
    """Truncate string with ellipsis indicator."""
    if not s:
        return ""
    return s[: maxlen - 1] + "…" if len(s) > maxlen else s


def _sanitize_str(s):
    """Strip ANSI escapes and control chars (card names are user content).
    Newlines and tabs survive."""
    if not s:
        return s
    return _CONTROL_RE.sub("", str(s))


def _cell(value, width=None):
    text = _sanitize_str(value) if isinstance(value, str) else ("" if value is None else str(value))
    return text if width is None else f"{text:<{width}}"


def _table(columns, rows, footer=None):
    """Render rows under a header and a rule line.

    columns: list of (name, width); the last column is unpadded.
    rows: tuples matching columns.
    """
    last = len(columns) - 1
    header = " ".join(
        name if i == last else f"{name:<{width}}" for i, (name, width) in enumerate(columns)
    )
    lines = [header, "-" * max(len(header), _MIN_RULE_WIDTH)]
    for row in rows:
        lines.append(
            " ".join(
                _cell(val) if i == last else _cell(val, columns[i][1]) for i, val in enumerate(row)
            )
        )
    if footer:
        lines.append(f"\n{footer}")
    return "\n".join(lines)
