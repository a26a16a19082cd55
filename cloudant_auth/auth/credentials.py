"""Account configuration storage for the Cloudant auth client.

Stores the IBM Cloud service credentials in ~/.cloudant/credentials.json with
restrictive permissions, the same JSON shape the IBM Cloud console exports.
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import replace
from pathlib import Path
from typing import Any

from .constants import CONFIG_DIR, CONFIG_FILE, CONFIG_PATH_ENV, ENV_VARS, PLACEHOLDER_VALUES
from .types import AccountConfig


def get_config_path() -> Path:
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / CONFIG_DIR / CONFIG_FILE


def load_account_config(path: str | Path | None = None) -> dict[str, Any] | None:
    """Load a service-credentials record from `path` (default: get_config_path()).

    Returns None if file doesn't exist, is corrupt, or is not a dict.
    """
    config_path = Path(path).expanduser() if path else get_config_path()
    if not config_path.exists():
        return None
    try:
        data = json.loads(config_path.read_text())
        if not isinstance(data, dict):
            return None
        return data
    except (json.JSONDecodeError, OSError):
        return None


def save_account_config(config: AccountConfig, path: str | Path | None = None) -> Path:
    """Write the config atomically with restrictive permissions.

    - Directory: 0700 (owner read/write/execute only)
    - File: 0600 (owner read/write only)
    - Atomic: writes to temp file in same dir, then os.replace()
    """
    config_path = Path(path).expanduser() if path else get_config_path()
    config_dir = config_path.parent
    config_dir.mkdir(parents=True, exist_ok=True)
    os.chmod(config_dir, 0o700)

    content = json.dumps(config.to_dict(), indent=2)

    fd, tmp_path = tempfile.mkstemp(dir=config_dir, prefix=".credentials_", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(content)
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, config_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    return config_path


def _is_real_value(value: str | None) -> bool:
    return bool(value and value.strip() and value.strip() not in PLACEHOLDER_VALUES)


def resolve_account_config(path: str | Path | None = None, **overrides: str | None) -> AccountConfig:
    """Resolve an AccountConfig using the standard precedence chain.

    Order, per field: explicit keyword > CLOUDANT_* env var > config file.
    Placeholder values like ``"YOUR_API_KEY"`` are treated as missing.
    Fields that cannot be resolved are left empty; the caller decides
    whether that is an error.
    """
    unknown = set(overrides) - set(ENV_VARS)
    if unknown:
        raise TypeError(f"Unexpected config field(s): {', '.join(sorted(unknown))}")

    stored = load_account_config(path)
    config = AccountConfig.from_dict(stored) if stored else AccountConfig()

    resolved: dict[str, str] = {}
    for field, env_name in ENV_VARS.items():
        explicit = overrides.get(field)
        if _is_real_value(explicit):
            resolved[field] = explicit  # type: ignore[assignment]
            continue
        env_value = os.environ.get(env_name)
        if _is_real_value(env_value):
            resolved[field] = env_value  # type: ignore[assignment]
            continue
        file_value = getattr(config, field)
        resolved[field] = file_value if _is_real_value(file_value) else ""

    return replace(config, **resolved)
