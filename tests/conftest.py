import pytest

from oauth_transport import Config, Token

API_URL = "https://api.example.com/v1/resource"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config():
    return Config(
        client_id="test_client",
        client_secret="test_secret",
        scope="read write",
        auth_url="https://auth.example.com/authorize",
        token_url="https://auth.example.com/token",
    )


@pytest.fixture
def token():
    return Token(access_token="test_access_token", refresh_token="test_refresh_token")
