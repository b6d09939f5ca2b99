from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version as pkg_version
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _package_version(default: str = "0.1.0") -> str:
    try:
        return pkg_version("social-authorize")
    except PackageNotFoundError:
        return default


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    reload: bool = False
    log_level: Literal["critical", "error", "warning", "info", "debug", "trace"] = "info"


class SessionSettings(BaseModel):
    secret_key: str = "dev-secret-change-me"
    cookie_name: str = "social_authorize_session"
    https_only: bool = False


class GoogleSettings(BaseModel):
    # Strategy settings
    application_name: Optional[str] = None
    redirect_url: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    developer_key: Optional[str] = None

    # Provider endpoints
    authorize_url: str = "https://accounts.google.com/o/oauth2/auth"
    token_url: str = "https://oauth2.googleapis.com/token"
    jwks_url: str = "https://www.googleapis.com/oauth2/v3/certs"
    profile_url: str = "https://people.googleapis.com/v1/people/{subject}"
    profile_fields: str = "names,emailAddresses"
    contacts_url: str = "https://www.google.com/m8/feeds/contacts/default/full?alt=json&max-results=700&v=3.0"
    issuers: str = "accounts.google.com,https://accounts.google.com"

    scopes: str = (
        "openid email https://www.googleapis.com/auth/userinfo.profile "
        "https://www.googleapis.com/auth/userinfo.email https://www.google.com/m8/feeds/"
    )
    max_pages: int = 1000
    timeout: float = 10.0

    def scope_list(self) -> List[str]:
        return [part for part in self.scopes.split() if part]

    def issuer_list(self) -> List[str]:
        return [part.strip() for part in self.issuers.split(",") if part.strip()]

    def strategy_settings(self, state: str | None = None) -> Dict[str, Any]:
        """Settings mapping in the shape the strategy constructor accepts."""
        return {
            "application_name": self.application_name,
            "redirect_url": self.redirect_url,
            "id": self.client_id,
            "secret": self.client_secret,
            "developer_key": self.developer_key,
            "state": state,
        }


class LoggingSettings(BaseModel):
    as_json: bool = False


class Settings(BaseSettings):
    """Application settings loaded from environment (and .env)."""

    # App metadata
    app_name: str = "Social Authorize"
    app_version: str = Field(default_factory=_package_version)

    # Groups
    server: ServerSettings = ServerSettings()
    session: SessionSettings = SessionSettings()
    google: GoogleSettings = GoogleSettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_prefix="SOCIAL_AUTHORIZE_",
        env_nested_delimiter="__",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
