"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

ModelAPIType = Literal["ollama", "openai"]


@dataclass(slots=True)
class ModelConfig:
    """Configuration for the chat-completion target."""

    name: str
    endpoint: str
    api_type: ModelAPIType
    temperature: float
    api_key: str | None = None


class Settings(BaseSettings):
    """Pydantic settings wrapper, read from the environment at startup."""

    environment: str = Field(default="development", alias="ENVIRONMENT")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=5000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_content_enabled: bool = Field(default=False, alias="LOG_CONTENT_ENABLED")
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["https://tonepicker.vercel.app"],
        alias="CORS_ORIGINS",
    )

    mistral_api_key: str | None = Field(default=None, alias="MISTRAL_API_KEY")
    model_name: str = Field(default="mistral-small-latest", alias="MODEL_NAME")
    model_endpoint: str = Field(
        default="https://api.mistral.ai/v1/chat/completions",
        alias="MODEL_ENDPOINT",
    )
    model_api_type: ModelAPIType = Field(default="openai", alias="MODEL_API_TYPE")
    model_temperature: float = Field(default=0.4, alias="MODEL_TEMPERATURE")
    request_timeout_seconds: float = Field(default=60.0, alias="REQUEST_TIMEOUT_SECONDS")
    cache_ttl_ms: int = Field(default=60_000, ge=0, alias="CACHE_TTL_MS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        protected_namespaces=(),
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: Any) -> Any:
        """Accept ``CORS_ORIGINS`` as a comma-separated list of origins."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    def get_model_config(self) -> ModelConfig:
        """Build the model target from the current settings."""
        return ModelConfig(
            name=self.model_name,
            endpoint=self.model_endpoint,
            api_type=self.model_api_type,
            temperature=self.model_temperature,
            api_key=self.mistral_api_key or None,
        )


settings = Settings()
