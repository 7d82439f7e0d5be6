from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from quote_relay.errors import ConfigError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    gemini_api_key: str = Field(default="", alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-1.5-flash-latest", alias="GEMINI_MODEL")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com",
        alias="GEMINI_BASE_URL",
    )
    gemini_temperature: float = Field(default=0.85, alias="GEMINI_TEMPERATURE")
    gemini_max_output_tokens: int = Field(default=80, alias="GEMINI_MAX_OUTPUT_TOKENS")
    gemini_timeout_seconds: float = Field(default=30.0, alias="GEMINI_TIMEOUT_SECONDS")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    static_dir: str = Field(default="public", alias="STATIC_DIR")
    cors_allow_origins: str = Field(default="*", alias="CORS_ALLOW_ORIGINS")

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]

    def require_api_key(self) -> str:
        key = self.gemini_api_key.strip()
        if not key:
            raise ConfigError("GEMINI_API_KEY is not set; add it to the environment or .env file.")
        return key


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
