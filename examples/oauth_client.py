"""
Authorize once in the browser, then make authenticated requests.

Set OAUTH_CLIENT_ID, OAUTH_CLIENT_SECRET, OAUTH_SCOPE, OAUTH_AUTH_URL and
OAUTH_TOKEN_URL (or put them in a .env file), then run:
    python examples/oauth_client.py https://api.example.com/me
"""

import logging
import secrets
import sys

from oauth_transport import OAuthSettings, Transport


def main(url: str) -> None:
    logging.basicConfig(level=logging.DEBUG)
    config = OAuthSettings().to_config()  # type: ignore[call-arg]

    state = secrets.token_urlsafe(32)
    print(f"Visit: {config.auth_code_url(state)}")
    code = input("Paste the authorization code: ").strip()

    with Transport(config) as transport:
        token = transport.exchange(code)
        print(f"Token expires at: {token.expiry}")

        with transport.client() as client:
            response = client.get(url)
            print(response.status_code, response.text)


if __name__ == "__main__":
    main(sys.argv[1])
