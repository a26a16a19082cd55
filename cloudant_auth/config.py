"""Configuration helpers for the Cloudant auth client."""

from __future__ import annotations

import os

IAM_TOKEN_URL = os.environ.get("CLOUDANT_IAM_URL", "https://iam.cloud.ibm.com/identity/token")
IAM_GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"

SESSION_PATH = "/_session"
SESSION_COOKIE_NAME = "AuthSession"

DEFAULT_TIMEOUT_SECONDS = 30.0
# IAM tokens are valid for one hour unless the response says otherwise
DEFAULT_TOKEN_TTL_SECONDS = 3600


def sanitize_base_url(url: str) -> str:
    """Ensure the base URL never ends with a trailing slash."""

    return url.strip().rstrip("/")


def build_base_url(host: str | None) -> str:
    """Build the account URL from a bare Cloudant hostname.

    Hosts that already carry an http(s) scheme are kept as they are.
    Returns an empty string for a blank host.
    """
    if not host or not host.strip():
        return ""
    host = host.strip()
    if host.startswith(("http://", "https://")):
        return sanitize_base_url(host)
    return sanitize_base_url(f"https://{host}")
