"""Static client registration data and the authorization URL builder."""

from urllib.parse import urlencode, urlsplit, urlunsplit

import httpx
from pydantic import BaseModel, ConfigDict, field_validator

from oauth_transport.exceptions import ConfigurationError

OUT_OF_BAND = "oob"


def _check_absolute_url(url: str) -> None:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"malformed URL {url!r}: {e}") from e
    if not parsed.scheme or not parsed.host:
        raise ConfigurationError(f"URL must be absolute: {url!r}")


class Config(BaseModel):
    """Configuration of an OAuth consumer.

    ``auth_url`` and ``token_url`` are checked when the Config is built, so a
    malformed static configuration fails early instead of producing a broken
    authorization URL later on.
    """

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str
    scope: str = ""
    auth_url: str
    token_url: str
    redirect_url: str = ""  # Out-of-band mode if empty.

    @field_validator("auth_url", "token_url")
    @classmethod
    def _validate_endpoint(cls, value: str) -> str:
        _check_absolute_url(value)
        return value

    @property
    def redirect_uri(self) -> str:
        return self.redirect_url or OUT_OF_BAND

    def auth_code_url(self, state: str) -> str:
        """Return the URL the end user should visit to obtain an authorization code."""
        _check_absolute_url(self.auth_url)
        scheme, netloc, path, query, fragment = urlsplit(self.auth_url)
        params = urlencode(
            {
                "response_type": "code",
                "client_id": self.client_id,
                "redirect_uri": self.redirect_uri,
                "scope": self.scope,
                "state": state,
            }
        )
        query = f"{query}&{params}" if query else params
        return urlunsplit((scheme, netloc, path, query, fragment))
