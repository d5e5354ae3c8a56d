"""ELiTE application configuration via environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Global application settings loaded from environment / .env file."""

    # General
    elite_env: str = "development"  # "development" or "production"
    elite_debug: bool = False

    # OpenAI
    openai_api_url: str = "https://api.openai.com/v1/chat/completions"
    openai_model: str = "gpt-3.5-turbo"
    # Inline key takes precedence over the key file when both are set.
    openai_api_key: str = ""
    openai_api_key_path: str = "assets/openai.key"

    # Retry policy for rate-limited (HTTP 429) calls
    openai_max_retries: int = 3
    openai_retry_delay_ms: int = 2000

    # HTTP
    http_timeout_seconds: float = 60.0

    @property
    def is_production(self) -> bool:
        return self.elite_env.lower() in ("prod", "production")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
