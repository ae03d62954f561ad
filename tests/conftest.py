"""
Shared test fixtures for trello-cli tests.
Patches config module to avoid loading real .env and making API calls.
"""

import os
import sys

import pytest

# Add project root to path so imports work without installing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state.
    Prevents tests from reading the real .env or leaking runtime flags."""
    from trello_cli import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "API_KEY", "fake-key")
    monkeypatch.setattr(config, "TOKEN", "fake-token-1234567890")
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "HTTP_LOG_SAMPLE_RATE", 1.0)
    monkeypatch.setattr(config, "PAYLOAD_PRESENCE", "truthy")
    monkeypatch.setattr(config, "MCP_RESPONSE_MODE", "legacy")
    monkeypatch.setattr(config, "RUNTIME_STRICT", False)
    monkeypatch.setattr(config, "RUNTIME_DRY_RUN", False)
    monkeypatch.setattr(config, "RUNTIME_QUIET", False)
    monkeypatch.setattr(config, "RUNTIME_VERBOSE", False)
