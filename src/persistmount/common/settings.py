"""Runtime settings shared by persistmount entrypoints."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def env_field(default, env_name: str):
    return Field(default, validation_alias=env_name)


class PersistMountSettings(BaseSettings):
    """Environment-driven defaults for the manifest CLI."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    log_level: str = env_field("INFO", "PERSISTMOUNT_LOG_LEVEL")
    log_format: Literal["json", "console"] = env_field("json", "PERSISTMOUNT_LOG_FORMAT")
    persist_root: str = env_field("/persist", "PERSISTMOUNT_PERSIST_ROOT")
    output_format: Literal["json", "nix"] = env_field("json", "PERSISTMOUNT_OUTPUT_FORMAT")

    @field_validator("output_format", "log_format", mode="before")
    def _normalize_choice(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value
