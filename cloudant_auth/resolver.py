"""Synchronous credential resolver for Cloudant accounts."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ._http import (
    build_cookie_headers,
    build_form_headers,
    handle_response,
    mask_secret,
    parse_bearer_token,
    parse_session_cookie,
    session_form,
    token_form,
)
from .auth.basic import derive_basic_auth, is_blank
from .auth.types import AccountConfig, BearerToken, Credentials
from .config import DEFAULT_TIMEOUT_SECONDS, IAM_TOKEN_URL, SESSION_PATH, build_base_url, sanitize_base_url
from .exceptions import CloudantAuthError, MissingInputError, TransportError


class CredentialResolver:
    """Derive Basic, IAM bearer and session-cookie credentials for a Cloudant account.

    Example:
        >>> from cloudant_auth import AccountConfig, CredentialResolver
        >>> config = AccountConfig(api_key="...", host="acct.cloudantnosqldb.appdomain.cloud",
        ...                        username="acct", password="...")
        >>> with CredentialResolver() as resolver:
        ...     creds = resolver.resolve_all(config)
        >>> creds.bearer_headers()

    Each derivation is independent: a failure in one never blocks the others.
    The ``fetch_*`` methods log failures and return an empty string; the
    ``request_*`` methods raise a CloudantAuthError subclass instead.
    """

    def __init__(
        self,
        *,
        iam_url: str = IAM_TOKEN_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            iam_url: IAM token endpoint (default: https://iam.cloud.ibm.com/identity/token).
            timeout: Request timeout in seconds (default: 30).
            logger: Logger used for progress and failure messages. Defaults to
                this module's logger.
        """
        self._iam_url = iam_url
        self._logger = logger or logging.getLogger(__name__)
        self._client = httpx.Client(timeout=timeout)

    def derive_basic_auth(self, username: str, password: str) -> str:
        """Return the Basic ``Authorization`` header value, or an empty string."""
        return derive_basic_auth(username, password, log=self._logger)

    def request_bearer_token(self, api_key: str) -> BearerToken:
        """Exchange an IBM Cloud API key for an IAM access token.

        The token is valid for roughly an hour; nothing here refreshes it.

        Raises:
            MissingInputError: If the API key is blank (no request is sent).
            AuthenticationError: If IAM rejects the key.
            UpstreamRejectedError: On any other non-200 answer.
            MalformedResponseError: If the response has no access_token.
            TransportError: If the request could not be sent.
        """
        if is_blank(api_key):
            raise MissingInputError("api_key")

        self._logger.debug("Requesting IAM token for API key %s", mask_secret(api_key))
        response = self._post(self._iam_url, token_form(api_key))
        self._logger.debug("IAM token endpoint answered %s", response.status_code)
        return parse_bearer_token(response)

    def fetch_bearer_token(self, api_key: str) -> str:
        """Return an IAM access token, or an empty string on any failure."""
        token = self._lenient("IAM token", self.request_bearer_token, api_key)
        return token.access_token if token else ""

    def request_session_cookie(self, base_url: str, username: str, password: str) -> str:
        """Open a cookie session and return ``AuthSession=<value>``.

        The returned string is ready to be sent as a ``Cookie`` header.

        Raises:
            MissingInputError: If the base URL, username or password is blank.
            AuthenticationError: If Cloudant rejects the username/password.
            UpstreamRejectedError: On any other non-200 answer.
            MalformedResponseError: If no AuthSession cookie is set.
            TransportError: If the request could not be sent.
        """
        for field, value in (("base_url", base_url), ("username", username), ("password", password)):
            if is_blank(value):
                raise MissingInputError(field)

        url = sanitize_base_url(base_url) + SESSION_PATH
        self._logger.debug("Opening session for user %s at %s", username, url)
        response = self._post(url, session_form(username, password))
        self._logger.debug("Session endpoint answered %s", response.status_code)
        return parse_session_cookie(response)

    def fetch_session_cookie(self, base_url: str, username: str, password: str) -> str:
        """Return ``AuthSession=<value>``, or an empty string on any failure."""
        cookie = self._lenient("session cookie", self.request_session_cookie, base_url, username, password)
        return cookie or ""

    def get_session_info(self, base_url: str, cookie: str) -> dict[str, Any]:
        """Return the ``/_session`` document for an existing cookie session.

        Raises:
            MissingInputError: If the base URL or cookie is blank.
            UpstreamRejectedError: On a non-200 answer.
        """
        if is_blank(base_url):
            raise MissingInputError("base_url")
        if is_blank(cookie):
            raise MissingInputError("cookie")

        try:
            response = self._client.get(
                sanitize_base_url(base_url) + SESSION_PATH,
                headers=build_cookie_headers(cookie),
            )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"GET {SESSION_PATH} failed: {e}") from e
        return handle_response(response)

    def resolve_all(self, config: AccountConfig) -> Credentials:
        """Derive every credential the config allows.

        Never raises for missing fields or remote failures: whichever
        credentials could be derived are returned, the rest stay empty.
        """
        base_url = build_base_url(config.host)
        if not base_url:
            self._logger.error("Host not provided, session cookie cannot be requested")
        for field in ("api_key", "username", "password"):
            if is_blank(getattr(config, field)):
                self._logger.error("Account config is missing '%s'", field)

        basic = self.derive_basic_auth(config.username, config.password)
        bearer = self._lenient("IAM token", self.request_bearer_token, config.api_key)
        cookie = self.fetch_session_cookie(base_url, config.username, config.password)

        credentials = Credentials(
            basic_auth_header=basic,
            session_cookie=cookie,
            bearer_token=bearer.access_token if bearer else "",
            base_url=base_url,
            bearer=bearer,
        )
        self._logger.debug(
            "Resolved credentials: basic=%s cookie=%s bearer=%s",
            bool(credentials.basic_auth_header),
            bool(credentials.session_cookie),
            bool(credentials.bearer_token),
        )
        return credentials

    def _post(self, url: str, form: dict[str, str]) -> httpx.Response:
        try:
            return self._client.post(url, headers=build_form_headers(), data=form)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"POST {url} failed: {e}") from e

    def _lenient(self, what: str, func: Any, *args: Any) -> Any:
        try:
            return func(*args)
        except CloudantAuthError as e:
            self._logger.error("Unable to obtain %s: %s", what, e)
            return None

    def close(self) -> None:
        """Release the underlying HTTP client and flush the logger."""
        self._client.close()
        for handler in self._logger.handlers:
            handler.flush()

    def __enter__(self) -> CredentialResolver:
        return self

    def __exit__(self, exc_type: type | None, exc: BaseException | None, traceback: Any) -> None:
        self.close()
