from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # Core app settings
    app_name: str = Field(default="ChatStream Gemini Service")
    environment: str = Field(default="local", alias="CHATSTREAM_ENVIRONMENT")  # local, dev, prod

    # Gemini credential: process env first, local key store second
    api_key: Optional[str] = Field(default=None, alias="API_KEY")
    local_storage_path: str = Field(
        default="~/.chatstream/local_storage.json",
        alias="CHATSTREAM_LOCAL_STORAGE_PATH",
    )
    local_storage_key: str = Field(
        default="GEMINI_API_KEY",
        alias="CHATSTREAM_LOCAL_STORAGE_KEY",
    )

    # Gemini models
    chat_model_name: str = Field(
        default="gemini-2.5-flash",
        alias="CHATSTREAM_CHAT_MODEL",
    )
    deep_dive_model_name: str = Field(
        default="gemini-2.5-pro",
        alias="CHATSTREAM_DEEP_DIVE_MODEL",
    )
    thinking_budget: int = Field(default=32768, alias="CHATSTREAM_THINKING_BUDGET")

    # Telemetry base switches
    tracing_enabled: bool = Field(default=False, alias="CHATSTREAM_TRACING_ENABLED")
    llmobs_enabled: bool = Field(default=False, alias="CHATSTREAM_LLMOBS_ENABLED")
    log_level: str = Field(default="INFO", alias="CHATSTREAM_LOG_LEVEL")

    class Config:
        # # Use env variables only, no .env by default
        env_file = None
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    # # Cached settings instance for reuse
    return Settings()  # type: ignore[arg-type]
