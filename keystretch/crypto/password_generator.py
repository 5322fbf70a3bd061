# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Random password generation.

Assumptions:
- Each character is picked independently and uniformly from symbols
- Symbols default to digits and ASCII letters, length defaults to 10
"""
from typing import Optional

from keystretch.config import PasswordGeneratorConfig, Settings
from keystretch.crypto.random_source import SYSTEM_RANDOM, RandomSource
from keystretch.errors import InvalidArgumentError, OutOfRangeError


class PasswordGenerator:
    """Generates random passwords of a fixed length."""

    def __init__(
        self,
        config: Optional[PasswordGeneratorConfig] = None,
        *,
        random_source: RandomSource = SYSTEM_RANDOM,
    ):
        config = config or PasswordGeneratorConfig()
        self.random_source = random_source
        self.length = config.length
        self.symbols = config.symbols

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "PasswordGenerator":
        """Create a generator configured from application settings."""
        return cls(settings.password_generator_config(), **kwargs)

    @property
    def length(self) -> int:
        """Number of characters in generated passwords."""
        return self._length

    @length.setter
    def length(self, value: int) -> None:
        if value < 0:
            raise OutOfRangeError("length", value, "The length cannot be less than 0.")
        self._length = value

    @property
    def symbols(self) -> str:
        """Characters generated passwords are drawn from."""
        return self._symbols

    @symbols.setter
    def symbols(self, value: str) -> None:
        if value is None:
            raise InvalidArgumentError("symbols")
        if value == "":
            raise InvalidArgumentError("symbols", "symbols cannot be empty.")
        self._symbols = value

    def generate(self) -> str:
        """Return a new random password."""
        return "".join(self.random_source.choice(self.symbols) for _ in range(self.length))
