from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # AI provider for story enhancement: "openai" or "anthropic"
    enhance_provider: str = "openai"

    @field_validator("enhance_provider", mode="before")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        """Accept provider names in any case."""
        return v.strip().lower() if isinstance(v, str) else v

    # API Keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # AI Models
    openai_model: str = "gpt-4o-mini"
    claude_model: str = "claude-haiku-4-5-20251001"  # Cheap model, rewriting is a simple task
    enhance_temperature: float = 0.7
    enhance_max_tokens: int = 2000
    enhance_timeout_seconds: float = 60.0
    enhance_max_attempts: int = 3
    enhance_retry_backoff_seconds: float = 1.0

    # Content rules
    min_content_length: int = 50  # Characters of plain text required before enhancing
    caption_prefix: str = "Photo:"  # Image attribution captions inserted by the editor

    # PostHog LLM Analytics
    posthog_api_key: str = ""
    posthog_host: str = "https://us.i.posthog.com"
    posthog_enabled: bool = True

    # Frontend
    frontend_url: str = "http://localhost:3000"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"
    rate_limit_enhance_per_minute: int = 10
    rate_limit_general_per_minute: int = 100

    # Request size limits
    max_request_size_bytes: int = 1024 * 1024  # 1MB
    max_title_length: int = 255

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
