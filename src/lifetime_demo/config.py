from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lifetime_demo.domain.models import SHORT_ID_LENGTH


class DemoSettings(BaseSettings):
    """Runtime settings read from ``LIFETIME_DEMO_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="LIFETIME_DEMO_", env_file=".env", case_sensitive=False, extra="ignore")

    title: str = Field(default="DI Lifetime Demo API")
    description: str = Field(default="Demonstrates per-request, per-scope and per-process lifetimes")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=5000, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    docs_enabled: bool = Field(default=True)
    short_id_length: int = Field(default=SHORT_ID_LENGTH, ge=1, le=32)


@lru_cache(maxsize=1)
def get_settings() -> DemoSettings:
    return DemoSettings()
