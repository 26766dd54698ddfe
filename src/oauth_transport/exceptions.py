"""Exceptions raised by the OAuth transport."""


class OAuthError(Exception):
    """Base exception for OAuth errors."""


class ConfigurationError(OAuthError):
    """Raised when the client configuration is missing or malformed."""


class CredentialError(OAuthError):
    """Raised when no token is available for an operation that needs one."""


class TokenServerError(OAuthError):
    """Raised when the token endpoint answers with a status other than 200."""

    def __init__(self, status_code: int, reason_phrase: str):
        super().__init__(f"invalid response: {status_code} {reason_phrase}")
        self.status_code = status_code
        self.reason_phrase = reason_phrase


class TokenDecodeError(OAuthError):
    """Raised when a token response body cannot be decoded."""
