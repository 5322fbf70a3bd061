# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
String equality comparers used when verifying passwords.

Assumptions:
- The constant-time comparer always scans max(len(x), len(y)) positions
- None is distinct from the empty string in the final verdict
- Comparers are stateless and safe to share between threads
- Comparers are never hashed; they are not meant to key a mapping
"""
from typing import Optional, Protocol

from keystretch.errors import NotSupportedError

# Pads the shorter operand; never produced by base64 encoding.
FILLER = "_"


class Comparer(Protocol):
    """Anything that can decide whether two strings are equal."""

    def equals(self, x: Optional[str], y: Optional[str]) -> bool:
        ...


class ConstantTimeComparer:
    """Compares strings in time independent of where they first differ."""

    @classmethod
    def default(cls) -> "ConstantTimeComparer":
        """Return the shared process-wide instance."""
        return DEFAULT_CONSTANT_TIME_COMPARER

    @staticmethod
    def _extend(s: str, count: int) -> str:
        return s + FILLER * count

    @staticmethod
    def _difference(c1: str, c2: str) -> int:
        return ord(c1) ^ ord(c2)

    def equals(self, x: Optional[str], y: Optional[str]) -> bool:
        """Determine whether x equals y.

        Args:
            x: Left string, may be None
            y: Right string, may be None

        Returns:
            bool: True if both are None, or both have the same length and
            the same characters. False otherwise.
        """
        s1 = x if x is not None else ""
        s2 = y if y is not None else ""

        s1len = len(s1)
        s2len = len(s2)
        if s1len < s2len:
            s1 = self._extend(s1, s2len - s1len)
        if s2len < s1len:
            s2 = self._extend(s2, s1len - s2len)

        diff = 0
        for c1, c2 in zip(s1, s2):
            diff |= self._difference(c1, c2)

        if x is None or y is None:
            return x is None and y is None
        return (s1len == s2len) & (diff == 0)

    def hash(self, obj: Optional[str]) -> int:
        """Always raises NotSupportedError; comparers cannot hash strings."""
        raise NotSupportedError(f"{type(self).__name__} does not support hashing.")

    def __hash__(self) -> int:
        raise NotSupportedError(f"{type(self).__name__} does not support hashing.")


class OrdinalComparer:
    """Plain code-point string equality."""

    def equals(self, x: Optional[str], y: Optional[str]) -> bool:
        return x == y


DEFAULT_CONSTANT_TIME_COMPARER = ConstantTimeComparer()
ORDINAL_COMPARER = OrdinalComparer()
