"""
Field constraint builder for card updates.

``build_constraints`` turns a request into an immutable tuple of
(field, rule) checks. ``validate`` runs every check in one pass and
collects all violations. Nothing here touches the network.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from trello_cli import config
from trello_cli._utils import _parse_due_date
from trello_cli.exceptions import ValidationError
from trello_cli.fields import optional_fields
from trello_cli.models import (
    PositionKeyword,
    PositionNumber,
    UpdateCardRequest,
    parse_position,
)

POS_MESSAGE = (
    "contains invalid values. Valid values are: `top`, `bottom`, or a positive float."
)
COORDINATES_PATTERN = r"^(-?\d+(\.\d+)?),\s*(-?\d+(\.\d+)?)$"


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Required:
    def check(self, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return "can't be blank"
        return None


@dataclass(frozen=True)
class Pattern:
    """Value must fully match ``pattern`` with ASCII-only classes.

    ``message`` is formatted with {value}.
    """

    pattern: str
    message: str

    def check(self, value):
        if isinstance(value, str) and re.fullmatch(self.pattern, value, re.ASCII):
            return None
        return self.message.format(value=value)


@dataclass(frozen=True)
class IsArray:
    def check(self, value):
        if isinstance(value, (list, tuple)):
            return None
        return "must be of type array"


@dataclass(frozen=True)
class IsDate:
    def check(self, value):
        if _parse_due_date(value) is not None:
            return None
        return f"{value} is not a valid date"


@dataclass(frozen=True)
class PositionRule:
    """Numeric branch: >= 0. Keyword branch: top or bottom. Anything else fails."""

    def check(self, value):
        position = parse_position(value)
        if isinstance(position, PositionNumber):
            return None if position.value >= 0 else POS_MESSAGE
        if isinstance(position, PositionKeyword):
            return None if position.value in config.VALID_POSITIONS else POS_MESSAGE
        return POS_MESSAGE


Rule = Required | Pattern | IsArray | IsDate | PositionRule


def _hex_id(label):
    return Pattern(config.HEX_ID_PATTERN, "{value} is not a valid " + label + " id")


_COORDINATES = Pattern(
    COORDINATES_PATTERN,
    "{value} doesn't use a valid `latitude, longitude` format.",
)

# Rules per field kind. Text, bool and object fields carry none.
_KIND_RULES = {
    "id": lambda f: (_hex_id(f.label),),
    "id_list": lambda f: (IsArray(),),
    "position": lambda f: (PositionRule(),),
    "date": lambda f: (IsDate(),),
    "coordinates": lambda f: (_COORDINATES,),
}


def _rules_for(field_def) -> tuple[Rule, ...]:
    make = _KIND_RULES.get(field_def.kind)
    return make(field_def) if make else ()


_ID_CARD_RULES: tuple[Rule, ...] = (Required(), _hex_id("Card"))


# ---------------------------------------------------------------------------
# Constraint set and result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldCheck:
    attr: str
    field: str
    rule: Rule


@dataclass(frozen=True)
class Violation:
    field: str
    message: str

    def to_dict(self):
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    violations: tuple[Violation, ...] = ()

    @property
    def ok(self):
        return not self.violations

    def fields(self):
        return [v.field for v in self.violations]

    def to_dict(self):
        return {"ok": self.ok, "violations": [v.to_dict() for v in self.violations]}


def build_constraints(request: UpdateCardRequest, presence=None) -> tuple[FieldCheck, ...]:
    """Assemble the checks that apply to ``request``.

    The idCard checks are unconditional; every other rule is added only when
    its field was supplied under ``presence``.
    """
    presence = presence or config.PAYLOAD_PRESENCE
    checks = [FieldCheck("id_card", "idCard", rule) for rule in _ID_CARD_RULES]
    supplied = set(request.supplied(presence))
    for field_def in optional_fields():
        if field_def.attr not in supplied:
            continue
        checks.extend(
            FieldCheck(field_def.attr, field_def.api_name, rule) for rule in _rules_for(field_def)
        )
    return tuple(checks)


def validate(request: UpdateCardRequest, presence=None) -> ValidationResult:
    """Run every applicable check and collect all violations.

    A blank required field reports only "can't be blank"; its format rule
    is skipped.
    """
    violations = []
    blank = set()
    for check in build_constraints(request, presence):
        if check.attr in blank:
            continue
        message = check.rule.check(getattr(request, check.attr))
        if message is None:
            continue
        violations.append(Violation(check.field, message))
        if isinstance(check.rule, Required):
            blank.add(check.attr)
    return ValidationResult(tuple(violations))


def check_validation_result(result: ValidationResult):
    """Raise ValidationError when ``result`` holds any violation."""
    if not result.ok:
        raise ValidationError(result.violations)
    return result
