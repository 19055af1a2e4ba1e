from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Runtime options, read from ``ERRCHAIN_*`` variables or ``.env``."""

    log_level: LogLevel = Field(default="INFO")
    log_stack: bool = Field(default=True)
    log_json: bool = Field(default=False)

    @field_validator("log_stack", "log_json", mode="before")
    @classmethod
    def _parse_flag(cls, v: bool | str) -> bool | str:
        if v == "":
            return False
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    model_config = SettingsConfigDict(
        env_prefix="ERRCHAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
