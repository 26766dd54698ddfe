"""
OAuth2 authentication for HTTPX.

Builds authorization URLs, exchanges authorization codes for tokens and
makes authenticated requests that refresh the token automatically.
"""

from oauth_transport.config import OUT_OF_BAND, Config
from oauth_transport.exceptions import (
    ConfigurationError,
    CredentialError,
    OAuthError,
    TokenDecodeError,
    TokenServerError,
)
from oauth_transport.settings import OAuthSettings
from oauth_transport.token import Token, TokenResponse
from oauth_transport.transport import AsyncTransport, Transport

__all__ = [
    "OUT_OF_BAND",
    "AsyncTransport",
    "Config",
    "ConfigurationError",
    "CredentialError",
    "OAuthError",
    "OAuthSettings",
    "Token",
    "TokenDecodeError",
    "TokenResponse",
    "TokenServerError",
    "Transport",
]
