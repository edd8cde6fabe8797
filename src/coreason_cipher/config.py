# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_cipher

"""Runtime settings, read from CIPHER_* environment variables or a .env file."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings for CoReason Cipher.
    Uses environment variables with CIPHER_ prefix.
    """

    model_config = SettingsConfigDict(env_prefix="CIPHER_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    key_cache_size: int = 100
    context_prefix: str = "stork-chat"
    method_tag: str = "aes-gcm-browser"
    log_level: str = "INFO"

    @field_validator("key_cache_size")
    @classmethod
    def check_key_cache_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("key_cache_size must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        return v.upper()


settings = Settings()
