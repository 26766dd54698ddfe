"""
OAuth2-authenticated transports for HTTPX.

Wraps an underlying httpx transport so that every request carries the
current access token. When the server answers 401 the token is refreshed
once and the request is retried once.

    t = Transport(config)
    t.exchange(code)
    # t now holds a valid Token
    r = t.client().get("http://example.org/url/requiring/auth")

Refreshes update the supplied Token in place.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from oauth_transport.config import Config
from oauth_transport.exceptions import ConfigurationError, CredentialError, TokenDecodeError, TokenServerError
from oauth_transport.token import Token, TokenResponse

logger = logging.getLogger(__name__)


def _authorize(request: httpx.Request, access_token: str) -> None:
    request.headers["Authorization"] = f"OAuth {access_token}"


def _decode_token_response(response: httpx.Response) -> TokenResponse:
    if response.status_code != 200:
        raise TokenServerError(response.status_code, response.reason_phrase)
    try:
        return TokenResponse.model_validate_json(response.content)
    except ValidationError as e:
        raise TokenDecodeError(f"Invalid token response: {e}") from e


class _TransportBase:
    """State and request building shared by the sync and async transports."""

    def __init__(self, config: Config | None, token: Token | None = None):
        self.config = config
        self.token = token

    def _require_config(self) -> Config:
        if self.config is None:
            raise ConfigurationError("no Config supplied")
        return self.config

    def _require_token(self) -> Token:
        if self.token is None:
            raise CredentialError("no Token supplied")
        return self.token

    def _exchange_request(self, code: str) -> httpx.Request:
        config = self._require_config()
        return self._token_request(
            config,
            {
                "grant_type": "authorization_code",
                "client_id": config.client_id,
                "client_secret": config.client_secret,
                "redirect_uri": config.redirect_uri,
                "scope": config.scope,
                "code": code,
            },
        )

    def _refresh_request(self) -> httpx.Request:
        config = self._require_config()
        token = self._require_token()
        return self._token_request(
            config,
            {
                "grant_type": "refresh_token",
                "client_id": config.client_id,
                "client_secret": config.client_secret,
                "refresh_token": token.refresh_token,
            },
        )

    @staticmethod
    def _token_request(config: Config, form: dict[str, str]) -> httpx.Request:
        return httpx.Request(
            "POST", config.token_url, data=form, headers={"Content-Type": "application/x-www-form-urlencoded"}
        )


class Transport(_TransportBase, httpx.BaseTransport):
    """
    An httpx transport making authenticated requests with a Config and a Token.

    Token endpoint calls go straight through the wrapped transport, which
    defaults to ``httpx.HTTPTransport`` and should never be another
    ``Transport``.
    """

    def __init__(
        self,
        config: Config | None,
        token: Token | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        super().__init__(config, token)
        self.transport = transport if transport is not None else httpx.HTTPTransport()

    def client(self, **kwargs: Any) -> httpx.Client:
        """Return an httpx.Client that makes requests through this transport."""
        return httpx.Client(transport=self, **kwargs)

    def exchange(self, code: str) -> Token:
        """Exchange an authorization code for a Token and install it on the transport."""
        token = Token()
        self._update_token(token, self._exchange_request(code))
        logger.debug("Token exchange successful")
        self.token = token
        return token

    def refresh(self) -> None:
        """Refresh the current Token in place."""
        token = self._require_token()
        with token.lock:
            self._refresh(token)

    def _refresh(self, token: Token) -> None:
        logger.debug("Refreshing access token")
        self._update_token(token, self._refresh_request())
        logger.debug("Token refresh successful")

    def _update_token(self, token: Token, request: httpx.Request) -> None:
        response = self.transport.handle_request(request)
        try:
            response.read()
            token.update(_decode_token_response(response))
        finally:
            response.close()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self._require_config()
        token = self._require_token()

        # The body may have to be sent twice.
        request.read()
        sent_token = token.access_token
        _authorize(request, sent_token)
        response = self.transport.handle_request(request)
        if response.status_code != 401:
            return response

        response.close()
        logger.debug(f"Received 401 for {request.method} {request.url}")
        with token.lock:
            if token.access_token == sent_token:
                self._refresh(token)
            else:
                logger.debug("Token was refreshed concurrently, retrying without refresh")
            _authorize(request, token.access_token)
            return self.transport.handle_request(request)

    def close(self) -> None:
        self.transport.close()


class AsyncTransport(_TransportBase, httpx.AsyncBaseTransport):
    """Async counterpart of :class:`Transport`, wrapping an ``httpx.AsyncBaseTransport``."""

    def __init__(
        self,
        config: Config | None,
        token: Token | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(config, token)
        self.transport = transport if transport is not None else httpx.AsyncHTTPTransport()

    def client(self, **kwargs: Any) -> httpx.AsyncClient:
        """Return an httpx.AsyncClient that makes requests through this transport."""
        return httpx.AsyncClient(transport=self, **kwargs)

    async def exchange(self, code: str) -> Token:
        """Exchange an authorization code for a Token and install it on the transport."""
        token = Token()
        await self._update_token(token, self._exchange_request(code))
        logger.debug("Token exchange successful")
        self.token = token
        return token

    async def refresh(self) -> None:
        """Refresh the current Token in place."""
        token = self._require_token()
        async with token.async_lock:
            await self._refresh(token)

    async def _refresh(self, token: Token) -> None:
        logger.debug("Refreshing access token")
        await self._update_token(token, self._refresh_request())
        logger.debug("Token refresh successful")

    async def _update_token(self, token: Token, request: httpx.Request) -> None:
        response = await self.transport.handle_async_request(request)
        try:
            await response.aread()
            token.update(_decode_token_response(response))
        finally:
            await response.aclose()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self._require_config()
        token = self._require_token()

        # The body may have to be sent twice.
        await request.aread()
        sent_token = token.access_token
        _authorize(request, sent_token)
        response = await self.transport.handle_async_request(request)
        if response.status_code != 401:
            return response

        await response.aclose()
        logger.debug(f"Received 401 for {request.method} {request.url}")
        async with token.async_lock:
            if token.access_token == sent_token:
                await self._refresh(token)
            else:
                logger.debug("Token was refreshed concurrently, retrying without refresh")
            _authorize(request, token.access_token)
            return await self.transport.handle_async_request(request)

    async def aclose(self) -> None:
        await self.transport.aclose()
