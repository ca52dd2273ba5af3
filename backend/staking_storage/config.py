"""
Storage configuration from environment variables.
"""

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Storage settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Local mirror
    data_dir: Optional[str] = Field(default=None, validation_alias="DATA_DIR")
    vercel: bool = Field(default=False, validation_alias="VERCEL")

    # Native Redis
    redis_url: Optional[str] = Field(default=None, validation_alias="REDIS_URL")

    # Upstash REST
    upstash_rest_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("UPSTASH_REDIS_REST_URL", "UPSTASH_REDIS_URL"),
    )
    upstash_rest_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("UPSTASH_REDIS_REST_TOKEN", "UPSTASH_REST_TOKEN"),
    )

    key_prefix: str = Field(default="staking:", validation_alias="STORAGE_KEY_PREFIX")
    remote_timeout: float = Field(default=10.0, validation_alias="STORAGE_REMOTE_TIMEOUT")

    @field_validator("vercel", mode="before")
    @classmethod
    def _any_value_is_true(cls, value):
        # VERCEL=1 on the platform; any non-empty value counts
        if isinstance(value, str):
            return bool(value.strip())
        return bool(value)

    @field_validator("data_dir", "redis_url", "upstash_rest_url", "upstash_rest_token", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def resolved_data_dir(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir)
        if self.vercel:
            # Deploy bundle is read-only; /tmp is the only writable path
            return Path("/tmp") / "data"
        return PACKAGE_DIR / "data"


settings = Settings()
