"""Configuration management using pydantic-settings."""

from typing import Literal, get_args

from pydantic import Field, BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from snowgen.generator import DEFAULT_EPOCH, MAX_DATACENTER_ID, MAX_SERVER_ID


class NodeSettings(BaseModel):
    """Identity of this generator node.

    Every process sharing an ID space needs a distinct
    (datacenter_id, server_id) pair; assigning them is up to the deployment.
    """
    datacenter_id: int = Field(default=1, ge=0, le=MAX_DATACENTER_ID)
    server_id: int = Field(default=1, ge=0, le=MAX_SERVER_ID)
    epoch_ms: int = Field(default=DEFAULT_EPOCH, ge=0, description="Custom epoch in Unix ms")
    wait_interval: float = Field(
        default=0.0,
        ge=0,
        description="Seconds to sleep between clock reads when a millisecond is exhausted",
    )


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


class LoggingSettings(BaseModel):
    """Logging settings."""
    level: LogLevel = "INFO"
    file: str | None = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SNOWGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    node: NodeSettings = Field(default_factory=NodeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings() -> Settings:
    """Load settings from environment and .env file."""
    return Settings()
