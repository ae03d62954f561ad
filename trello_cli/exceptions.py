"""
trello-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class CliError(Exception):
    """Exit code 1 — validation, not-found, network, parse errors."""

    exit_code = 1


class SetupError(CliError):
    """Exit code 2 — missing or rejected API key/token."""

    exit_code = 2


class ValidationError(CliError):
    """One or more supplied card fields failed their constraint.

    Raised before any request is sent. ``violations`` holds every failure
    found in the pass, not just the first.
    """

    def __init__(self, violations):
        self.violations = tuple(violations)
        lines = [f"  {v.field}: {v.message}" for v in self.violations]
        super().__init__("[ERROR] Invalid card fields:\n" + "\n".join(lines))


class RemoteError(CliError):
    """Trello rejected the request or could not be reached."""

    def __init__(self, message, status=None, request_id=None, detail=None):
        super().__init__(message)
        self.status = status
        self.request_id = request_id
        self.detail = detail


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
