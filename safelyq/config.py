from functools import lru_cache
from typing import Annotated, List

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_TOOLS = ["get_business_info", "check_user_appointments"]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = Field(default="SafelyQ Function Calling")
    cors_origins: Annotated[List[AnyHttpUrl], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:5500",
            "http://127.0.0.1:5500",
        ]
    )
    graphql_url: AnyHttpUrl = Field(
        default="https://api.chatclb.dev/query"
    )
    token_url: AnyHttpUrl = Field(
        default="https://id.chatclb.dev/connect/token"
    )
    client_id: str | None = Field(
        default=None
    )
    client_secret: str | None = Field(
        default=None
    )
    user_phone_number: str | None = Field(
        default=None
    )
    request_timeout: float = Field(
        default=10.0
    )
    google_api_key: str | None = Field(
        default=None
    )
    agent_google_model: str = Field(
        default="gemini-2.0-flash"
    )
    agent_temperature: float = Field(
        default=0.0
    )
    enabled_tools: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_TOOLS)
    )
    api_key: str | None = Field(
        default=None
    )

    model_config = SettingsConfigDict(env_prefix="SAFELYQ_", case_sensitive=False)

    @field_validator("cors_origins", "enabled_tools", mode="before")
    def _split_csv(cls, value):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
