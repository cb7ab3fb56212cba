from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Environment-driven configuration for the MCP server."""

    # Ujeebu credentials
    UJEEBU_API_KEY: str | None = None
    UJEEBU_BASE_URL: str = "https://api.ujeebu.com"

    # Batch behaviour when a tool call does not say otherwise
    UJEEBU_CONTINUE_ON_FAIL: bool = False

    # Local httpx deadline in seconds. None leaves the request open until the API answers;
    # the per-request `timeout` option is forwarded to the API instead.
    UJEEBU_HTTP_TIMEOUT: float | None = None

    # Expose /debug/* routes when served over streamable HTTP
    UJEEBU_DEBUG_ROUTES: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


# Convenience instance for modules that import `settings` directly.
settings: Settings = get_settings()
