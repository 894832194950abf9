# infinitune/core/config.py
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime settings with safe local defaults.

    Nothing here is required: every value has a default so the generator
    imports cleanly in tests, the CLI and the API alike.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    env: str = Field(default="dev", alias="ENV")

    # Catalog defaults (used when a request leaves a parameter out)
    default_seed: str = Field(default="default", alias="DEFAULT_SEED")
    default_locale: str = Field(default="en_US", alias="DEFAULT_LOCALE")
    default_limit: int = Field(default=20, ge=1, alias="DEFAULT_LIMIT")
    max_limit: int = Field(default=100, ge=1, alias="MAX_LIMIT")

    # Composer: clips are sized to fit the client's export window
    target_duration_sec: float = Field(default=15.0, gt=0, alias="TARGET_DURATION_SEC")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # CORS
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")  # comma-separated or "*"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
