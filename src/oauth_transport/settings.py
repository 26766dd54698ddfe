"""Environment-driven client configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from oauth_transport.config import Config


class OAuthSettings(BaseSettings):
    """Client registration loaded from ``OAUTH_*`` environment variables or a .env file."""

    model_config = SettingsConfigDict(env_prefix="OAUTH_", env_file=".env", extra="ignore")

    client_id: str
    client_secret: str
    scope: str = ""
    auth_url: str
    token_url: str
    redirect_url: str = ""

    def to_config(self) -> Config:
        return Config(**self.model_dump())
