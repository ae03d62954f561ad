"""
trello-cli shared configuration, constants, and module-level state.
Standalone module: no imports from other project files.
"""

import os

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")


def load_env():
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    # Process environment wins over the file (CI, containers).
    for key, val in os.environ.items():
        if key.startswith("TRELLO_"):
            env[key] = val
    return env


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(key, default):
    """Parse float env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_choice(key, choices, default):
    """Parse an enumerated env value, falling back on anything unknown."""
    raw = (env.get(key) or "").strip().lower()
    return raw if raw in choices else default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.1.0"
CONTRACT_SCHEMA_VERSION = "1.0"

BASE_URL = "https://api.trello.com/1"

HEX_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
VALID_POSITIONS = ("top", "bottom")
VALID_PRESENCE_POLICIES = {"truthy", "explicit"}
VALID_MCP_RESPONSE_MODES = {"legacy", "envelope"}

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env)
# ---------------------------------------------------------------------------

env = load_env()

API_KEY = env.get("TRELLO_API_KEY", "")
TOKEN = env.get("TRELLO_TOKEN", "")
HTTP_TIMEOUT_SECONDS = _env_int("TRELLO_HTTP_TIMEOUT_SECONDS", 30)
HTTP_MAX_RESPONSE_BYTES = _env_int("TRELLO_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("TRELLO_HTTP_LOG", False)
HTTP_LOG_SAMPLE_RATE = min(1.0, max(0.0, _env_float("TRELLO_HTTP_LOG_SAMPLE_RATE", 1.0)))
PAYLOAD_PRESENCE = _env_choice("TRELLO_PAYLOAD_PRESENCE", VALID_PRESENCE_POLICIES, "truthy")
MCP_RESPONSE_MODE = _env_choice("TRELLO_MCP_RESPONSE_MODE", VALID_MCP_RESPONSE_MODES, "legacy")

# ---------------------------------------------------------------------------
# Runtime flags (set once by the CLI entry point)
# ---------------------------------------------------------------------------

RUNTIME_STRICT = False
RUNTIME_DRY_RUN = False
RUNTIME_QUIET = False
RUNTIME_VERBOSE = False
