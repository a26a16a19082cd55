"""Test configuration for cloudant-auth tests."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import pytest

from cloudant_auth import CredentialResolver
from cloudant_auth.auth.constants import ENV_VARS


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Keep the developer's own CLOUDANT_* settings out of every test."""
    for env_name in ENV_VARS.values():
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setenv("CLOUDANT_CONFIG", str(tmp_path / ".cloudant" / "credentials.json"))


@pytest.fixture
def resolver():
    """Shared CredentialResolver fixture for sync tests."""
    resolver = CredentialResolver()
    yield resolver
    resolver.close()


def make_response(status_code=200, body=None, set_cookies=(), text=""):
    """Build a MagicMock httpx.Response with the given status, JSON body and Set-Cookie headers."""
    mock_response = MagicMock(spec=httpx.Response)
    mock_response.status_code = status_code
    mock_response.content = json.dumps(body).encode() if body is not None else b""
    mock_response.json.return_value = body
    mock_response.text = text
    mock_response.headers = httpx.Headers([("set-cookie", cookie) for cookie in set_cookies])
    return mock_response
