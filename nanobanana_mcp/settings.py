from __future__ import annotations

from functools import lru_cache
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .shard import constants as C


class Settings(BaseSettings):
    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    gemini_api_key: str | None = Field(default=None, description="API key for the Gemini Developer API")
    gemini_base_url: str = Field(default=C.DEFAULT_BASE_URL, description="Base URL for Gemini model endpoints")
    gemini_timeout: float | None = Field(default=None, description="HTTP client timeout in seconds; None keeps the HTTP client's default")

    transport: str = Field(default="stdio", description="MCP transport: stdio | http | sse | streamable-http")
    host: str = Field(default="127.0.0.1", description="Host to bind for HTTP transports")
    port: int = Field(default=3000, description="Port to listen on for HTTP transports")
    mcp_auth_token: str | None = Field(default=None, description="Bearer token required on HTTP transports when set")

    log_level: str = Field(default="INFO", description="Log level for the server's stderr logger")

    @property
    def has_gemini_key(self) -> bool:
        """Determine if Gemini calls can be made with the configured credentials."""
        return bool(self.gemini_api_key)

    @property
    def requires_auth(self) -> bool:
        return bool(self.mcp_auth_token)


@lru_cache
def get_settings() -> Settings:
    return Settings()
