"""
HTTP request layer, security helpers, and credential checks for trello-cli.
"""

import hashlib
import json
import re
import sys
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid

from trello_cli import config
from trello_cli.exceptions import CliError, HTTPError, RemoteError, SetupError

# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------

_SECRET_PARAMS = {"key", "token"}


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _safe_json_parse(text, context="input"):
    """Parse JSON with friendly error message on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise CliError(f"[ERROR] Invalid JSON in {context}: {e.msg} at position {e.pos}") from None


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _sanitize_url_for_log(url):
    """Mask key/token query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = []
    for key, value in pairs:
        if key.lower() in _SECRET_PARAMS:
            masked.append((key, "***"))
        else:
            masked.append((key, value))
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _is_sampled_request(request_id):
    """Decide if a request should be logged based on sample rate."""
    rate = config.HTTP_LOG_SAMPLE_RATE
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


def _error_envelope(message, status=None, request_id=None, detail=None):
    """Build a consistent CLI-safe HTTP error message."""
    meta = []
    if status is not None:
        meta.append(f"status={status}")
    if request_id:
        meta.append(f"request_id={request_id}")
    suffix = f" ({', '.join(meta)})" if meta else ""
    body = f"[ERROR] {message}{suffix}"
    if detail:
        body += f"\n{detail}"
    return body


def _http_request(url, data=None, headers=None, method="GET"):
    """Make a single HTTP request with standard error handling.
    Returns parsed JSON on success.
    Raises HTTPError for HTTP errors (caller handles specific codes).
    Raises CliError on network/timeout/parse errors."""
    body = json.dumps(data).encode("utf-8") if data is not None else None
    request_id = (headers or {}).get("X-Request-Id")
    safe_url = _sanitize_url_for_log(url)
    sampled = _is_sampled_request(request_id)
    timeout = max(1, config.HTTP_TIMEOUT_SECONDS)

    start = time.perf_counter()
    req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
    if sampled:
        _log_http_event(
            phase="request",
            method=method,
            url=safe_url,
            request_id=request_id,
            timeout_seconds=timeout,
        )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            content_type = resp.headers.get("Content-Type", "")
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
                raise CliError(
                    "[ERROR] Response too large from Trello API "
                    f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
                )
            if sampled:
                _log_http_event(
                    phase="response",
                    method=method,
                    url=safe_url,
                    status=getattr(resp, "status", 200),
                    content_type=content_type,
                    bytes=len(raw),
                    latency_ms=round((time.perf_counter() - start) * 1000, 2),
                    request_id=request_id,
                )
            try:
                return json.loads(raw.decode("utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError):
                if content_type and "json" not in content_type.lower():
                    raise CliError(
                        f"[ERROR] Unexpected Content-Type from server "
                        f"({content_type}). This may be a proxy or "
                        "network issue."
                    ) from None
                raise CliError(
                    "[ERROR] Unexpected response from Trello API (not valid JSON)."
                ) from None
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        if sampled:
            _log_http_event(
                phase="response",
                method=method,
                url=safe_url,
                status=e.code,
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error="timeout",
                request_id=request_id,
            )
        raise RemoteError(
            _error_envelope(
                f"Request timed out after {timeout} seconds. Is the Trello API reachable?",
                request_id=request_id,
            ),
            request_id=request_id,
        ) from e
    except urllib.error.URLError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error=f"url_error: {e.reason}",
                request_id=request_id,
            )
        raise RemoteError(
            _error_envelope(f"Connection failed: {e.reason}", request_id=request_id),
            request_id=request_id,
        ) from e


def _build_url(path, params=None):
    """Join BASE_URL, path, and query params (auth params appended last)."""
    query = dict(params or {})
    query["key"] = config.API_KEY
    query["token"] = config.TOKEN
    return f"{config.BASE_URL}{path}?{urllib.parse.urlencode(query, doseq=True)}"


def trello_request(path, params=None, data=None, method="GET"):
    """Make an authenticated request against the Trello REST API.

    Auth travels as ``key``/``token`` query params. HTTP failures are
    translated into SetupError (401) or RemoteError (everything else).
    """
    if not config.API_KEY or not config.TOKEN:
        raise SetupError(
            "[SETUP_NEEDED] TRELLO_API_KEY and TRELLO_TOKEN must be set in .env "
            "or the environment."
        )
    url = _build_url(path, params)
    headers = {
        "Accept": "application/json",
        "X-Request-Id": str(uuid.uuid4()),
    }
    if data is not None:
        headers["Content-Type"] = "application/json"
    try:
        return _http_request(url, data, headers, method)
    except HTTPError as e:
        if e.code == 401:
            raise SetupError(
                "[TOKEN_EXPIRED] Trello rejected the API key/token "
                f"(token {_mask_token(config.TOKEN)}). Generate a new token at "
                "https://trello.com/app-key."
            ) from e
        server_req_id = e.headers.get("X-Request-Id") if e.headers else None
        detail = _sanitize_error(e.body)
        if e.code == 429:
            message = "Rate limit reached. Wait a few seconds and retry."
        elif e.code == 404:
            message = f"Not found: {path}"
        else:
            message = f"HTTP {e.code}: {e.reason}"
        raise RemoteError(
            _error_envelope(message, status=e.code, request_id=server_req_id, detail=detail),
            status=e.code,
            request_id=server_req_id,
            detail=detail,
        ) from e


def _expect_object_response(result, operation):
    """Ensure API helpers only return JSON objects (dict)."""
    if isinstance(result, dict):
        return result
    raise CliError(
        f"[ERROR] Unexpected {operation} response shape: "
        f"expected JSON object, got {type(result).__name__}."
    )


def _expect_list_response(result, operation):
    """Ensure list endpoints return JSON arrays."""
    if isinstance(result, list):
        return result
    raise CliError(
        f"[ERROR] Unexpected {operation} response shape: "
        f"expected JSON array, got {type(result).__name__}."
    )


# ---------------------------------------------------------------------------
# Credential validation
# ---------------------------------------------------------------------------


def _check_token():
    """Validate key/token before running a command. Raises SetupError if rejected."""
    result = _expect_object_response(
        trello_request("/members/me", {"fields": "id,username"}), "member"
    )
    if not result.get("id"):
        raise SetupError(
            "[TOKEN_EXPIRED] Trello did not return the authorized member.\n"
            "  Update TRELLO_TOKEN in .env."
        )
    return result
