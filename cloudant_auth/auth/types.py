"""Typed values for Cloudant account configuration and derived credentials."""

from __future__ import annotations

import time
from dataclasses import dataclass, fields
from typing import Any

from ..config import DEFAULT_TOKEN_TTL_SECONDS


@dataclass(frozen=True)
class AccountConfig:
    """Static Cloudant account settings, as found in IBM Cloud service credentials."""

    api_key: str = ""
    host: str = ""
    username: str = ""
    password: str = ""
    # Descriptive metadata, carried but never used for authentication
    port: int | None = None
    url: str = ""
    iam_apikey_description: str = ""
    iam_apikey_name: str = ""
    iam_role_crn: str = ""
    iam_serviceid_crn: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AccountConfig:
        """Build a config from a service-credentials record.

        Accepts both the IBM Cloud ``apikey`` key and ``api_key``. Unknown
        keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {k: v for k, v in data.items() if k in known and v is not None}
        if data.get("apikey") is not None and not values.get("api_key"):
            values["api_key"] = data["apikey"]
        for key, value in values.items():
            if key != "port" and not isinstance(value, str):
                values[key] = str(value)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the IBM Cloud service-credentials key names."""
        data: dict[str, Any] = {
            "apikey": self.api_key,
            "host": self.host,
            "username": self.username,
            "password": self.password,
            "url": self.url,
            "iam_apikey_description": self.iam_apikey_description,
            "iam_apikey_name": self.iam_apikey_name,
            "iam_role_crn": self.iam_role_crn,
            "iam_serviceid_crn": self.iam_serviceid_crn,
        }
        if self.port is not None:
            data["port"] = self.port
        return data


@dataclass(frozen=True)
class BearerToken:
    """IAM access token together with its expiry (epoch seconds)."""

    access_token: str
    expires_at: float

    @classmethod
    def from_iam_response(cls, data: dict[str, Any], now: float | None = None) -> BearerToken:
        now = time.time() if now is None else now
        expiration = data.get("expiration")
        if isinstance(expiration, (int, float)) and not isinstance(expiration, bool):
            expires_at = float(expiration)
        else:
            expires_in = data.get("expires_in")
            if not isinstance(expires_in, (int, float)) or isinstance(expires_in, bool):
                expires_in = DEFAULT_TOKEN_TTL_SECONDS
            expires_at = now + float(expires_in)
        return cls(access_token=data["access_token"], expires_at=expires_at)

    def is_expired(self, leeway: float = 0.0, now: float | None = None) -> bool:
        """Return True once the token is within `leeway` seconds of expiring."""
        now = time.time() if now is None else now
        return now + leeway >= self.expires_at

    def __str__(self) -> str:
        return self.access_token


@dataclass(frozen=True)
class Credentials:
    """Alternative ways to authenticate the same account.

    Every field is independently optional: an empty string means the input it
    depends on was missing or the remote call failed.
    """

    basic_auth_header: str = ""
    session_cookie: str = ""
    bearer_token: str = ""
    base_url: str = ""
    bearer: BearerToken | None = None

    def basic_auth_headers(self) -> dict[str, str]:
        return {"Authorization": self.basic_auth_header} if self.basic_auth_header else {}

    def bearer_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.bearer_token}"} if self.bearer_token else {}

    def cookie_headers(self) -> dict[str, str]:
        return {"Cookie": self.session_cookie} if self.session_cookie else {}

    @property
    def is_empty(self) -> bool:
        return not (self.basic_auth_header or self.session_cookie or self.bearer_token)
