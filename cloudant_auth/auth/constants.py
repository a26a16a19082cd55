"""Constants for Cloudant account configuration storage."""

from __future__ import annotations

# Credential storage
CONFIG_DIR = ".cloudant"
CONFIG_FILE = "credentials.json"
CONFIG_PATH_ENV = "CLOUDANT_CONFIG"

# Environment overrides, keyed by AccountConfig field
ENV_VARS = {
    "api_key": "CLOUDANT_APIKEY",
    "host": "CLOUDANT_HOST",
    "username": "CLOUDANT_USERNAME",
    "password": "CLOUDANT_PASSWORD",
}

PLACEHOLDER_VALUES = frozenset({"YOUR_API_KEY", "YOUR_HOST", "YOUR_USERNAME", "YOUR_PASSWORD"})
