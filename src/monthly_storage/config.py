from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Monthly Cloud Storage settings, read from MONTHLY_CLOUD_STORAGE_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="MONTHLY_CLOUD_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(default="")
    timeout: float = Field(default=30.0)
    log_level: str = Field(default="WARNING")
