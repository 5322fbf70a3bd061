# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Salted, iterated password hashing.

A computed result is the base64 encoding of:

    [int16 salt length][salt][int16 hash function][int32 iterations][digest]

with every integer packed little-endian.

Assumptions:
- A fresh salt is drawn for every compute() call
- compare() uses the parameters stored in the computed result, never the
  instance's current ones, so parameters may change without invalidating
  stored results
- Instances are not synchronized; callers sharing one instance across
  threads must not change its parameters while compute/compare run
"""
import base64
import binascii
import struct
from typing import Optional, Tuple

from keystretch.config import (
    INT16_MAX,
    INT32_MAX,
    PasswordAlgorithmConfig,
    Settings,
)
from keystretch.crypto.comparer import (
    DEFAULT_CONSTANT_TIME_COMPARER,
    ORDINAL_COMPARER,
    Comparer,
)
from keystretch.crypto.hash_function import (
    DEFAULT_HASH_ENGINE,
    HashEngine,
    HashFunctionLike,
    normalize_hash_function,
)
from keystretch.crypto.random_source import SYSTEM_RANDOM, RandomSource
from keystretch.errors import FormatError, InvalidArgumentError, OutOfRangeError
from keystretch.logging_utils import log_application_event, log_security_event

PASSWORD_ENCODING = "utf-8"

_INT16 = struct.Struct("<h")
_INT32 = struct.Struct("<i")


def encode_password(password: str) -> bytes:
    r"""Encode password as UTF-8, replacing unpaired surrogates with U+FFFD.

    Surrogate pairs are joined into the code point they spell first, so
    "\ud83d\ude00" and "\U0001f600" encode to the same bytes.
    """
    text = password.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
    return text.encode(PASSWORD_ENCODING)


def stretch(
    password: str,
    hash_function: HashFunctionLike,
    hash_iterations: int,
    salt: bytes,
    hash_engine: HashEngine = DEFAULT_HASH_ENGINE,
) -> bytes:
    """Hash password and salt, then rehash hash_iterations more times.

    Each round digests the previous digest followed by the original
    password and salt bytes.

    Args:
        password: Plain-text password
        hash_function: Identifier of the hash function
        hash_iterations: Number of key-stretching rounds after the first digest
        salt: Salt bytes
        hash_engine: Engine computing the digests

    Returns:
        bytes: Final digest
    """
    base = encode_password(password) + salt
    digest = hash_engine.digest(hash_function, base)
    for _ in range(hash_iterations):
        digest = hash_engine.digest(hash_function, digest + base)
    return digest


def encode_result(
    salt: bytes, hash_function: HashFunctionLike, hash_iterations: int, digest: bytes
) -> str:
    """Pack the parameters and digest and return them base64 encoded."""
    data = b"".join((
        _INT16.pack(len(salt)),
        salt,
        _INT16.pack(int(hash_function)),
        _INT32.pack(hash_iterations),
        digest,
    ))
    return base64.b64encode(data).decode("ascii")


def decode_result(computed_result: str) -> Tuple[bytes, int, int, bytes]:
    """Unpack a computed result.

    Args:
        computed_result: Base64 string produced by encode_result

    Returns:
        Tuple of (salt, hash function id, hash iterations, digest)

    Raises:
        FormatError: If the string is not base64 or its layout is truncated
    """
    try:
        data = base64.b64decode(computed_result, validate=True)
    except (binascii.Error, ValueError):
        raise FormatError("The computed result is not valid base64.") from None

    offset = 0
    if len(data) < _INT16.size:
        raise FormatError("The computed result is too short to contain a salt length.")
    (salt_length,) = _INT16.unpack_from(data, offset)
    offset += _INT16.size
    if salt_length < 0:
        raise FormatError(f"The computed result declares a negative salt length ({salt_length}).")

    if len(data) < offset + salt_length + _INT16.size + _INT32.size:
        raise FormatError("The computed result is shorter than its declared salt and parameters.")
    salt = data[offset:offset + salt_length]
    offset += salt_length

    (hash_function,) = _INT16.unpack_from(data, offset)
    offset += _INT16.size
    (hash_iterations,) = _INT32.unpack_from(data, offset)
    offset += _INT32.size
    if hash_iterations < 0:
        raise FormatError(f"The computed result declares negative hash iterations ({hash_iterations}).")

    digest = data[offset:]
    if not digest:
        raise FormatError("The computed result does not contain a hash.")

    return salt, hash_function, hash_iterations, digest


class PasswordAlgorithm:
    """Computes and verifies salted, key-stretched password hashes.

    Usage:
        algorithm = PasswordAlgorithm()
        computed = algorithm.compute("my password")
        algorithm.compare("my password", computed)   # True

        algorithm.salt_length = 64
        algorithm.hash_function = HashFunction.SHA512
        algorithm.hash_iterations = 10000
        algorithm.compare("my password", computed)   # still True
    """

    def __init__(
        self,
        config: Optional[PasswordAlgorithmConfig] = None,
        *,
        random_source: RandomSource = SYSTEM_RANDOM,
        hash_engine: HashEngine = DEFAULT_HASH_ENGINE,
        constant_time_comparer: Comparer = DEFAULT_CONSTANT_TIME_COMPARER,
        variable_time_comparer: Comparer = ORDINAL_COMPARER,
    ):
        self.random_source = random_source
        self.hash_engine = hash_engine
        self.constant_time_comparer = constant_time_comparer
        self.variable_time_comparer = variable_time_comparer
        self.configure(config or PasswordAlgorithmConfig())

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "PasswordAlgorithm":
        """Create an algorithm configured from application settings."""
        return cls(settings.password_algorithm_config(), **kwargs)

    def configure(self, config: PasswordAlgorithmConfig) -> None:
        """Apply a configuration snapshot to this instance."""
        self.salt_length = config.salt_length
        self.hash_function = config.hash_function
        self.hash_iterations = config.hash_iterations
        self.compare_in_constant_time = config.compare_in_constant_time

    @property
    def salt_length(self) -> int:
        """Length, in bytes, of salts created for new passwords."""
        return self._salt_length

    @salt_length.setter
    def salt_length(self, value: int) -> None:
        if value < 0:
            raise OutOfRangeError("salt_length", value, "The salt length cannot be less than 0.")
        if value > INT16_MAX:
            raise OutOfRangeError(
                "salt_length", value, f"The salt length cannot be greater than {INT16_MAX}."
            )
        self._salt_length = value

    @property
    def hash_iterations(self) -> int:
        """Number of key-stretching iterations used for new passwords."""
        return self._hash_iterations

    @hash_iterations.setter
    def hash_iterations(self, value: int) -> None:
        if value < 0:
            raise OutOfRangeError(
                "hash_iterations", value, "The number of hash iterations cannot be less than 0."
            )
        if value > INT32_MAX:
            raise OutOfRangeError(
                "hash_iterations",
                value,
                f"The number of hash iterations cannot be greater than {INT32_MAX}.",
            )
        self._hash_iterations = value

    @property
    def hash_function(self) -> HashFunctionLike:
        """Hash function used for new passwords.

        Unknown identifiers are accepted here and rejected by compute().
        """
        return self._hash_function

    @hash_function.setter
    def hash_function(self, value: HashFunctionLike) -> None:
        self._hash_function = normalize_hash_function(value)

    @property
    def compare_in_constant_time(self) -> bool:
        """Whether compare() uses the constant-time comparer."""
        return self._compare_in_constant_time

    @compare_in_constant_time.setter
    def compare_in_constant_time(self, value: bool) -> None:
        self._compare_in_constant_time = bool(value)

    def _compute(
        self, password: str, hash_function: HashFunctionLike, hash_iterations: int, salt: bytes
    ) -> str:
        digest = stretch(password, hash_function, hash_iterations, salt, self.hash_engine)
        return encode_result(salt, hash_function, hash_iterations, digest)

    def compute(self, password: str) -> str:
        """Create a computed result for password.

        Args:
            password: Plain-text password; may be empty

        Returns:
            str: Base64 computed result to store and later pass to compare()

        Raises:
            InvalidArgumentError: If password is None
            NotSupportedError: If hash_function is not a known identifier
        """
        if password is None:
            raise InvalidArgumentError("password")

        salt = bytearray(self.salt_length)
        self.random_source.fill(salt)

        result = self._compute(password, self.hash_function, self.hash_iterations, bytes(salt))
        log_application_event(
            "password_computed",
            hash_function=int(self.hash_function),
            hash_iterations=self.hash_iterations,
            salt_length=self.salt_length,
        )
        return result

    def compare(self, password: Optional[str], computed_result: Optional[str]) -> bool:
        """Check password against a result returned by compute().

        Args:
            password: Plain-text password; None never matches
            computed_result: Stored computed result; None never matches

        Returns:
            bool: True if password is the one computed_result was created from

        Raises:
            FormatError: If computed_result cannot be decoded
            NotSupportedError: If computed_result names an unknown hash function
        """
        if computed_result is None:
            return False

        try:
            salt, hash_function, hash_iterations, _ = decode_result(computed_result)
        except FormatError as exc:
            log_security_event("computed_result_malformed", reason=exc.message)
            raise

        if password is None:
            return False

        expected = self._compute(password, hash_function, hash_iterations, salt)
        comparer = (
            self.constant_time_comparer
            if self.compare_in_constant_time
            else self.variable_time_comparer
        )
        matched = comparer.equals(expected, computed_result)

        log_application_event(
            "password_compared",
            hash_function=hash_function,
            hash_iterations=hash_iterations,
            constant_time=self.compare_in_constant_time,
            matched=matched,
        )
        return matched
