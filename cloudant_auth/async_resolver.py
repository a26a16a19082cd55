"""Asynchronous credential resolver for Cloudant accounts."""

from __future__ import annotations

import asyncio
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


class AsyncCredentialResolver:
    """Asynchronous counterpart of CredentialResolver.

    Example:
        >>> import asyncio
        >>> from cloudant_auth import AccountConfig, AsyncCredentialResolver
        >>>
        >>> async def main():
        ...     async with AsyncCredentialResolver() as resolver:
        ...         return await resolver.resolve_all(AccountConfig(api_key="..."))
        >>>
        >>> asyncio.run(main())

    resolve_all() requests the IAM token and the session cookie concurrently.
    """

    def __init__(
        self,
        *,
        iam_url: str = IAM_TOKEN_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        logger: logging.Logger | None = None,
    ) -> None:
        self._iam_url = iam_url
        self._logger = logger or logging.getLogger(__name__)
        self._client = httpx.AsyncClient(timeout=timeout)

    def derive_basic_auth(self, username: str, password: str) -> str:
        """Return the Basic ``Authorization`` header value, or an empty string."""
        return derive_basic_auth(username, password, log=self._logger)

    async def request_bearer_token(self, api_key: str) -> BearerToken:
        """Exchange an IBM Cloud API key for an IAM access token, raising on failure."""
        if is_blank(api_key):
            raise MissingInputError("api_key")

        self._logger.debug("Requesting IAM token for API key %s", mask_secret(api_key))
        response = await self._post(self._iam_url, token_form(api_key))
        self._logger.debug("IAM token endpoint answered %s", response.status_code)
        return parse_bearer_token(response)

    async def fetch_bearer_token(self, api_key: str) -> str:
        token = await self._lenient("IAM token", self.request_bearer_token(api_key))
        return token.access_token if token else ""

    async def request_session_cookie(self, base_url: str, username: str, password: str) -> str:
        """Open a cookie session and return ``AuthSession=<value>``, raising on failure."""
        for field, value in (("base_url", base_url), ("username", username), ("password", password)):
            if is_blank(value):
                raise MissingInputError(field)

        url = sanitize_base_url(base_url) + SESSION_PATH
        self._logger.debug("Opening session for user %s at %s", username, url)
        response = await self._post(url, session_form(username, password))
        self._logger.debug("Session endpoint answered %s", response.status_code)
        return parse_session_cookie(response)

    async def fetch_session_cookie(self, base_url: str, username: str, password: str) -> str:
        cookie = await self._lenient("session cookie", self.request_session_cookie(base_url, username, password))
        return cookie or ""

    async def get_session_info(self, base_url: str, cookie: str) -> dict[str, Any]:
        """Return the ``/_session`` document for an existing cookie session."""
        if is_blank(base_url):
            raise MissingInputError("base_url")
        if is_blank(cookie):
            raise MissingInputError("cookie")

        try:
            response = await self._client.get(
                sanitize_base_url(base_url) + SESSION_PATH,
                headers=build_cookie_headers(cookie),
            )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"GET {SESSION_PATH} failed: {e}") from e
        return handle_response(response)

    async def resolve_all(self, config: AccountConfig) -> Credentials:
        """Derive every credential the config allows, never raising."""
        base_url = build_base_url(config.host)
        if not base_url:
            self._logger.error("Host not provided, session cookie cannot be requested")
        for field in ("api_key", "username", "password"):
            if is_blank(getattr(config, field)):
                self._logger.error("Account config is missing '%s'", field)

        basic = self.derive_basic_auth(config.username, config.password)
        bearer, cookie = await asyncio.gather(
            self._lenient("IAM token", self.request_bearer_token(config.api_key)),
            self.fetch_session_cookie(base_url, config.username, config.password),
        )

        return Credentials(
            basic_auth_header=basic,
            session_cookie=cookie,
            bearer_token=bearer.access_token if bearer else "",
            base_url=base_url,
            bearer=bearer,
        )

    async def _post(self, url: str, form: dict[str, str]) -> httpx.Response:
        try:
            return await self._client.post(url, headers=build_form_headers(), data=form)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"POST {url} failed: {e}") from e

    async def _lenient(self, what: str, awaitable: Any) -> Any:
        try:
            return await awaitable
        except CloudantAuthError as e:
            self._logger.error("Unable to obtain %s: %s", what, e)
            return None

    async def close(self) -> None:
        """Release the underlying HTTP client and flush the logger."""
        await self._client.aclose()
        for handler in self._logger.handlers:
            handler.flush()

    async def __aenter__(self) -> AsyncCredentialResolver:
        return self

    async def __aexit__(self, exc_type: type | None, exc: BaseException | None, traceback: Any) -> None:
        await self.close()
