from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Bootstrap values read from the process environment and ``.env``.

    These decide which configuration file is loaded and which
    ``<ENV>_``-prefixed overrides apply; everything else lives in config.yaml.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    app_environment: Literal["development", "production", "test"] = Field(
        default="development", validation_alias="APP_ENVIRONMENT"
    )
    app_config_file: Path = Field(
        default=Path("config.yaml"), validation_alias="APP_CONFIG_FILE"
    )
