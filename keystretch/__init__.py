# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
keystretch - salted, key-stretched password hashing and password generation.
"""
from keystretch.config import PasswordAlgorithmConfig, PasswordGeneratorConfig, Settings, get_settings
from keystretch.crypto.comparer import ConstantTimeComparer, OrdinalComparer
from keystretch.crypto.hash_function import HashEngine, HashFunction
from keystretch.crypto.password_algorithm import PasswordAlgorithm
from keystretch.crypto.password_generator import PasswordGenerator
from keystretch.errors import (
    FormatError,
    InvalidArgumentError,
    KeystretchError,
    NotSupportedError,
    OutOfRangeError,
)

__version__ = "1.0.0"

__all__ = [
    "ConstantTimeComparer",
    "FormatError",
    "HashEngine",
    "HashFunction",
    "InvalidArgumentError",
    "KeystretchError",
    "NotSupportedError",
    "OrdinalComparer",
    "OutOfRangeError",
    "PasswordAlgorithm",
    "PasswordAlgorithmConfig",
    "PasswordGenerator",
    "PasswordGeneratorConfig",
    "Settings",
    "get_settings",
]
