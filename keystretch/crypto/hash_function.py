# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Hash function identifiers and the hash engine.

Assumptions:
- Identifiers are persisted inside encoded results as signed 16-bit ordinals
- New members may only be appended; reordering breaks stored results
- Dispatch is a closed table, unknown identifiers raise NotSupportedError
"""
import hashlib
from enum import IntEnum
from typing import Any, Callable, Dict, Union

from keystretch.errors import InvalidArgumentError, NotSupportedError
from keystretch.logging_utils import log_security_event


class HashFunction(IntEnum):
    """Hash functions available to the password algorithm."""

    SHA256 = 0
    SHA384 = 1
    SHA512 = 2


HashFunctionLike = Union[HashFunction, int]


_DIGESTS: Dict[HashFunction, Callable[..., Any]] = {
    HashFunction.SHA256: hashlib.sha256,
    HashFunction.SHA384: hashlib.sha384,
    HashFunction.SHA512: hashlib.sha512,
}


def normalize_hash_function(value: Union[HashFunctionLike, str]) -> HashFunctionLike:
    """Return the HashFunction member for value, or value unchanged.

    Integers outside the enumeration are kept as plain ints so they can be
    rejected later, when a digest is actually requested. Strings are parsed
    as an ordinal or a name.

    Raises:
        InvalidArgumentError: If value is neither an integer nor the name
            of a known hash function
    """
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            value = int(text)
        else:
            try:
                return parse_hash_function(text)
            except ValueError:
                raise InvalidArgumentError(
                    "hash_function", f"Unknown hash function: {value!r}."
                ) from None

    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgumentError(
            "hash_function", f"Hash function must be an integer, got {type(value).__name__}."
        )
    try:
        return HashFunction(value)
    except ValueError:
        return int(value)



def parse_hash_function(value: Union[str, int, HashFunction]) -> HashFunction:
    """Parse a hash function from an ordinal or a name.

    Args:
        value: HashFunction, ordinal (0, "1") or name ("SHA384", "sha-384")

    Returns:
        HashFunction: Matching member

    Raises:
        ValueError: If value names no known hash function
    """
    if isinstance(value, HashFunction):
        return value
    if isinstance(value, int):
        return HashFunction(value)

    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return HashFunction(int(text))

    name = text.upper().replace("-", "").replace("_", "")
    try:
        return HashFunction[name]
    except KeyError:
        raise ValueError(f"Unknown hash function: {value!r}") from None


class HashEngine:
    """Computes digests for a hash function identifier.

    The engine is stateless; every call creates a fresh hashlib object.
    """

    def digest_size(self, hash_function: HashFunctionLike) -> int:
        """Return the digest length in bytes for hash_function."""
        return self._constructor(hash_function)().digest_size

    def digest(self, hash_function: HashFunctionLike, data: bytes) -> bytes:
        """Hash data with the selected function.

        Args:
            hash_function: Identifier of the hash function
            data: Bytes to hash

        Returns:
            bytes: Digest of data

        Raises:
            NotSupportedError: If hash_function is not a known identifier
        """
        return self._constructor(hash_function)(data).digest()

    def _constructor(self, hash_function: HashFunctionLike):
        try:
            return _DIGESTS[HashFunction(hash_function)]
        except (ValueError, KeyError):
            log_security_event("unsupported_hash_function", hash_function=hash_function)
            raise NotSupportedError(
                f"The {HashFunction.__name__} value {hash_function!r} has not been implemented."
            ) from None


DEFAULT_HASH_ENGINE = HashEngine()
