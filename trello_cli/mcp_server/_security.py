"""Security: injection detection, output tagging, input validation."""

from __future__ import annotations

import re

from trello_cli import CliError

_INJECTION_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(r"^(system|assistant|user)\s*:", re.IGNORECASE | re.MULTILINE),
        "role label",
    ),
    (
        re.compile(
            r"<\s*/?\s*(system|instruction|admin|prompt|tool_call|function_call)",
            re.IGNORECASE,
        ),
        "XML-like directive tag",
    ),
    (
        re.compile(
            r"ignore\s+(all\s+)?(previous|prior|above)\s+(instructions|prompts|rules)",
            re.IGNORECASE,
        ),
        "override directive",
    ),
    (
        re.compile(
            r"(execute|call|invoke|run)\s+the\s+(tool|function|command)",
            re.IGNORECASE,
        ),
        "tool invocation directive",
    ),
]


def _check_injection(text: str) -> list[str]:
    """Check text for common prompt injection patterns.

    Returns list of matched pattern descriptions (empty if clean).
    Short strings (< 10 chars) are skipped.
    """
    if len(text) < 10:
        return []
    return [desc for pattern, desc in _INJECTION_PATTERNS if pattern.search(text)]


def _tag_user_text(text: str | None) -> str | None:
    """Wrap user-authored text in [USER_DATA] boundary markers."""
    if text is None:
        return None
    return f"[USER_DATA]{text}[/USER_DATA]"


_USER_TEXT_FIELDS = {"name", "desc"}


def _sanitize_card(card: dict) -> dict:
    """Tag user-editable fields and add _safety_warnings if injection detected."""
    out = dict(card)
    warnings: list[str] = []
    for field in _USER_TEXT_FIELDS:
        if field in out and isinstance(out[field], str):
            for desc in _check_injection(out[field]):
                warnings.append(f"{field}: {desc}")
            out[field] = _tag_user_text(out[field])
    if warnings:
        out["_safety_warnings"] = warnings
    return out


def _sanitize_rows(rows: list) -> list:
    """Tag names in lookup rows (boards, cards, lists, labels)."""
    return [_sanitize_card(r) if isinstance(r, dict) else r for r in rows]


_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
# Trello's own limits for card name and description.
_INPUT_LIMITS = {
    "name": 16_384,
    "desc": 16_384,
    "address": 1_000,
    "location_name": 1_000,
    "locationName": 1_000,
}


def _validate_input(text: str, field: str) -> str:
    """Reject control characters and enforce length limits.

    Tabs and newlines are allowed. Raises CliError if text is not a string,
    contains any other control character, or exceeds the field limit. The
    text is returned unchanged.
    """
    if not isinstance(text, str):
        raise CliError(f"[ERROR] {field} must be a string")
    if _CONTROL_RE.search(text):
        raise CliError(f"[ERROR] {field} contains control characters")
    limit = _INPUT_LIMITS.get(field, 16_384)
    if len(text) > limit:
        raise CliError(f"[ERROR] {field} exceeds maximum length of {limit} characters")
    return text
