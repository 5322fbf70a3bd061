# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Cryptographically secure random source.

Assumptions:
- Backed by the operating system CSPRNG through the secrets module
- Safe for concurrent use from multiple threads
- Injected into the password algorithm and generator so tests can replace it
"""
import secrets
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Supplies random bytes and random picks from a sequence."""

    def fill(self, buffer: bytearray) -> None:
        ...

    def choice(self, seq: Sequence[T]) -> T:
        ...


class SystemRandomSource:
    """Random source reading from the OS CSPRNG."""

    def fill(self, buffer: bytearray) -> None:
        """Overwrite every byte of buffer with random data."""
        buffer[:] = secrets.token_bytes(len(buffer))

    def choice(self, seq: Sequence[T]) -> T:
        return secrets.choice(seq)


SYSTEM_RANDOM = SystemRandomSource()
