"""trello-cli — CLI tool for updating Trello cards."""

from trello_cli.client import TrelloClient
from trello_cli.config import VERSION
from trello_cli.exceptions import CliError, RemoteError, SetupError, ValidationError
from trello_cli.models import UpdateCardRequest
from trello_cli.payload import build_payload
from trello_cli.types import (
    BoardRow,
    CardResult,
    CardRow,
    LabelRow,
    ListRow,
    UpdateCardResult,
)
from trello_cli.validation import ValidationResult, Violation, build_constraints, validate

__all__ = [
    "VERSION",
    "TrelloClient",
    "CliError",
    "RemoteError",
    "SetupError",
    "ValidationError",
    "UpdateCardRequest",
    "ValidationResult",
    "Violation",
    "build_constraints",
    "build_payload",
    "validate",
    "BoardRow",
    "CardResult",
    "CardRow",
    "LabelRow",
    "ListRow",
    "UpdateCardResult",
]
