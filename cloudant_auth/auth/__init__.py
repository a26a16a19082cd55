"""Authentication primitives for the Cloudant auth client."""

from .basic import build_basic_auth, derive_basic_auth
from .credentials import load_account_config, resolve_account_config, save_account_config
from .types import AccountConfig, BearerToken, Credentials

__all__ = [
    "build_basic_auth",
    "derive_basic_auth",
    "load_account_config",
    "resolve_account_config",
    "save_account_config",
    "AccountConfig",
    "BearerToken",
    "Credentials",
]
