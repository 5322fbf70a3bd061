# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Pytest configuration and shared fixtures.

This module provides test fixtures that are shared across the test suite.

Assumptions:
- Tests never depend on KEYSTRETCH_* variables from the developer's shell
- Settings are re-read for every test (cache cleared)
- Test doubles record calls instead of patching library internals
"""
import itertools
import os

import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast, isolated unit tests")
    config.addinivalue_line("markers", "hypothesis: property-based tests")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Remove KEYSTRETCH_* variables and clear the settings cache."""
    from keystretch.config import get_settings

    for name in list(os.environ):
        if name.upper().startswith("KEYSTRETCH_"):
            monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class RecordingComparer:
    """Comparer double that records its arguments and returns a preset verdict."""

    def __init__(self, result: bool = False):
        self.result = result
        self.calls = []

    def equals(self, x, y):
        self.calls.append((x, y))
        return self.result


class FixedRandomSource:
    """Random source that fills buffers with one byte value and cycles choices."""

    def __init__(self, byte: int = 0):
        self.byte = byte
        self.fills = 0
        self._counter = itertools.count()

    def fill(self, buffer):
        self.fills += 1
        for i in range(len(buffer)):
            buffer[i] = self.byte

    def choice(self, seq):
        return seq[next(self._counter) % len(seq)]


@pytest.fixture
def recording_comparer():
    """Provide a RecordingComparer answering False."""
    return RecordingComparer()


@pytest.fixture
def fixed_random():
    """Provide a FixedRandomSource producing all-zero salts."""
    return FixedRandomSource()


@pytest.fixture
def algorithm():
    """Provide a PasswordAlgorithm with built-in defaults."""
    from keystretch.crypto.password_algorithm import PasswordAlgorithm

    return PasswordAlgorithm()


@pytest.fixture
def fast_algorithm():
    """Provide a PasswordAlgorithm with few iterations for bulk tests."""
    from keystretch.config import PasswordAlgorithmConfig
    from keystretch.crypto.password_algorithm import PasswordAlgorithm

    return PasswordAlgorithm(PasswordAlgorithmConfig(hash_iterations=3))
