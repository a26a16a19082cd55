"""Cloudant auth - derive Basic, IAM bearer and session-cookie credentials for Cloudant."""

from importlib.metadata import PackageNotFoundError, version

from .async_resolver import AsyncCredentialResolver
from .auth import AccountConfig, BearerToken, Credentials, derive_basic_auth, resolve_account_config
from .config import build_base_url
from .exceptions import (
    AuthenticationError,
    CloudantAuthError,
    MalformedResponseError,
    MissingInputError,
    TransportError,
    UpstreamRejectedError,
)
from .resolver import CredentialResolver

__all__ = [
    "CredentialResolver",
    "AsyncCredentialResolver",
    "AccountConfig",
    "BearerToken",
    "Credentials",
    "build_base_url",
    "derive_basic_auth",
    "resolve_account_config",
    "CloudantAuthError",
    "MissingInputError",
    "UpstreamRejectedError",
    "AuthenticationError",
    "MalformedResponseError",
    "TransportError",
]

try:
    __version__ = version("cloudant-auth")
except PackageNotFoundError:
    __version__ = "0.1.0"
