"""HTTP Basic authentication header derivation."""

from __future__ import annotations

import base64
import logging

from ..exceptions import MissingInputError

logger = logging.getLogger(__name__)


def is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def build_basic_auth(username: str, password: str) -> str:
    """Return ``"Basic " + base64(username:password)``.

    Raises:
        MissingInputError: If the username or password is blank.
    """
    if is_blank(username):
        raise MissingInputError("username")
    if is_blank(password):
        raise MissingInputError("password")
    raw = f"{username}:{password}".encode()
    return "Basic " + base64.b64encode(raw).decode("ascii")


def derive_basic_auth(username: str, password: str, *, log: logging.Logger | None = None) -> str:
    """Like build_basic_auth(), but returns an empty string instead of raising."""
    try:
        return build_basic_auth(username, password)
    except MissingInputError as e:
        (log or logger).error("Unable to build basic auth header: %s", e)
        return ""
