# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Configuration management for keystretch.

This module reads settings from environment variables (prefix KEYSTRETCH_)
and .env files, and turns them into immutable snapshots that are passed
explicitly to PasswordAlgorithm and PasswordGenerator.

Assumptions:
- Environment variables override defaults
- Library objects never read settings on their own
- Missing settings leave the built-in defaults in place
"""
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from keystretch.crypto.hash_function import HashFunction, parse_hash_function

INT16_MAX = 2**15 - 1
INT32_MAX = 2**31 - 1

SALT_LENGTH_DEFAULT = 16
HASH_FUNCTION_DEFAULT = HashFunction.SHA256
HASH_ITERATIONS_DEFAULT = 1000
COMPARE_IN_CONSTANT_TIME_DEFAULT = True

GENERATOR_LENGTH_DEFAULT = 10
GENERATOR_SYMBOLS_DEFAULT = (
    "0123456789"
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


class PasswordAlgorithmConfig(BaseModel):
    """Read-only parameters for a PasswordAlgorithm."""

    model_config = ConfigDict(frozen=True)

    salt_length: int = Field(default=SALT_LENGTH_DEFAULT, ge=0, le=INT16_MAX)
    hash_function: HashFunction = HASH_FUNCTION_DEFAULT
    hash_iterations: int = Field(default=HASH_ITERATIONS_DEFAULT, ge=0, le=INT32_MAX)
    compare_in_constant_time: bool = COMPARE_IN_CONSTANT_TIME_DEFAULT

    @field_validator("hash_function", mode="before")
    @classmethod
    def coerce_hash_function(cls, v):
        return parse_hash_function(v)


class PasswordGeneratorConfig(BaseModel):
    """Read-only parameters for a PasswordGenerator."""

    model_config = ConfigDict(frozen=True)

    length: int = Field(default=GENERATOR_LENGTH_DEFAULT, ge=0)
    symbols: str = Field(default=GENERATOR_SYMBOLS_DEFAULT, min_length=1)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Usage:
        settings = get_settings()
        algorithm = PasswordAlgorithm.from_settings(settings)
    """

    # Password algorithm
    salt_length: int = Field(default=SALT_LENGTH_DEFAULT, ge=0, le=INT16_MAX)
    hash_function: HashFunction = HASH_FUNCTION_DEFAULT
    hash_iterations: int = Field(default=HASH_ITERATIONS_DEFAULT, ge=0, le=INT32_MAX)
    compare_in_constant_time: bool = COMPARE_IN_CONSTANT_TIME_DEFAULT

    # Password generator
    generator_length: int = Field(default=GENERATOR_LENGTH_DEFAULT, ge=0)
    generator_symbols: str = Field(default=GENERATOR_SYMBOLS_DEFAULT, min_length=1)

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_prefix="KEYSTRETCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("hash_function", mode="before")
    @classmethod
    def coerce_hash_function(cls, v):
        """Accept ordinals as well as names such as SHA384 or sha-512."""
        return parse_hash_function(v)

    def password_algorithm_config(self) -> PasswordAlgorithmConfig:
        """Snapshot of the password algorithm settings."""
        return PasswordAlgorithmConfig(
            salt_length=self.salt_length,
            hash_function=self.hash_function,
            hash_iterations=self.hash_iterations,
            compare_in_constant_time=self.compare_in_constant_time,
        )

    def password_generator_config(self) -> PasswordGeneratorConfig:
        """Snapshot of the password generator settings."""
        return PasswordGeneratorConfig(
            length=self.generator_length,
            symbols=self.generator_symbols,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once and cached for the process lifetime.
    For testing, clear the cache with: get_settings.cache_clear()

    Returns:
        Settings instance loaded from environment
    """
    return Settings()
