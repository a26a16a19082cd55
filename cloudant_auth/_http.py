"""Shared HTTP request utilities for the sync and async resolvers."""

from __future__ import annotations

from http.cookies import CookieError, SimpleCookie
from typing import Any

import httpx

from .auth.types import BearerToken
from .config import IAM_GRANT_TYPE, SESSION_COOKIE_NAME
from .exceptions import AuthenticationError, MalformedResponseError, UpstreamRejectedError


def build_form_headers() -> dict[str, str]:
    """Headers for the form-encoded POSTs sent to IAM and ``/_session``."""
    return {
        "Accept": "application/json",
        "Content-Type": "application/x-www-form-urlencoded",
    }


def build_cookie_headers(cookie: str) -> dict[str, str]:
    return {"Accept": "application/json", "Cookie": cookie}


def check_status(response: httpx.Response, service: str = "Cloudant") -> None:
    """Raise the matching error for anything but a 200, without reading the body as JSON."""
    if response.status_code in (401, 403):
        raise AuthenticationError(
            message=response.text or f"{service} rejected the supplied credentials",
            status_code=response.status_code,
            response=response,
        )

    if response.status_code != 200:
        raise UpstreamRejectedError(
            message=response.text or f"{service} call failed",
            status_code=response.status_code,
            response=response,
        )


def handle_response(response: httpx.Response, service: str = "Cloudant") -> dict[str, Any]:
    """Process HTTP response, raising appropriate errors for failures."""
    check_status(response, service)

    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError as e:
        raise MalformedResponseError(f"{service} returned a body that is not JSON") from e
    if not isinstance(data, dict):
        raise MalformedResponseError(f"{service} returned {type(data).__name__}, expected an object")
    return data


def extract_cookie(response: httpx.Response, name: str) -> str | None:
    """Return the value of cookie `name` from the response's Set-Cookie headers.

    Every Set-Cookie header is inspected; the last match wins. Attributes such
    as Path or HttpOnly are dropped and surrounding quotes are removed.
    """
    value = None
    for header in response.headers.get_list("set-cookie"):
        found = _parse_set_cookie(header, name)
        if found:
            value = found
    return value


def _parse_set_cookie(header: str, name: str) -> str | None:
    jar: SimpleCookie = SimpleCookie()
    try:
        jar.load(header)
    except CookieError:
        pass
    morsel = jar.get(name)
    if morsel is not None:
        return morsel.value.strip('"')

    # SimpleCookie discards the whole header on attributes it does not know (e.g. Partitioned)
    key, sep, raw = header.split(";", 1)[0].partition("=")
    if sep and key.strip() == name:
        return raw.strip().strip('"')
    return None


def mask_secret(secret: str | None) -> str:
    """Mask a secret for logs and terminal output."""
    if not secret:
        return ""
    if len(secret) >= 16:
        return secret[:4] + "..." + secret[-4:]
    if len(secret) >= 8:
        return secret[:4] + "..."
    return "***"


def token_form(api_key: str) -> dict[str, str]:
    """Form body for exchanging an API key at the IAM token endpoint."""
    return {"grant_type": IAM_GRANT_TYPE, "apikey": api_key}


def session_form(username: str, password: str) -> dict[str, str]:
    """Form body for opening a Cloudant cookie session."""
    return {"name": username, "password": password}


def parse_bearer_token(response: httpx.Response) -> BearerToken:
    """Turn an IAM token response into a BearerToken, or raise."""
    data = handle_response(response, service="IAM")
    access_token = data.get("access_token")
    if not isinstance(access_token, str) or not access_token.strip():
        raise MalformedResponseError("IAM response does not contain an access_token")
    return BearerToken.from_iam_response(data)


def parse_session_cookie(response: httpx.Response) -> str:
    """Return ``AuthSession=<value>`` from a successful ``/_session`` POST, or raise."""
    check_status(response)
    value = extract_cookie(response, SESSION_COOKIE_NAME)
    if not value:
        raise MalformedResponseError(f"Cloudant response does not set the {SESSION_COOKIE_NAME} cookie")
    return f"{SESSION_COOKIE_NAME}={value}"
