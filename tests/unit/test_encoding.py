# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Unit tests for the computed result byte layout.

Assumptions:
- Layout: int16 salt length, salt, int16 hash function, int32 iterations, digest
- All integers little-endian regardless of host byte order
- Decoding rejects truncated or inconsistent input with FormatError
"""
import base64
import hashlib
import struct

import pytest

from keystretch.crypto.hash_function import HashFunction
from keystretch.crypto.password_algorithm import (
    PasswordAlgorithm,
    decode_result,
    encode_password,
    encode_result,
    stretch,
)
from keystretch.errors import FormatError, NotSupportedError


def reference_stretch(password: str, salt: bytes, iterations: int, name: str = "sha256") -> bytes:
    base = password.encode("utf-8") + salt
    digest = hashlib.new(name, base).digest()
    for _ in range(iterations):
        digest = hashlib.new(name, digest + base).digest()
    return digest


@pytest.mark.unit
def test_layout_of_known_result(fixed_random):
    """Test the exact bytes of a result computed with an all-zero salt."""
    algorithm = PasswordAlgorithm(random_source=fixed_random)

    data = base64.b64decode(algorithm.compute("my password"))

    assert data[:2] == b"\x10\x00"
    assert data[2:18] == bytes(16)
    assert data[18:20] == b"\x00\x00"
    assert data[20:24] == b"\xe8\x03\x00\x00"
    assert data[24:] == reference_stretch("my password", bytes(16), 1000)
    assert len(data) == 2 + 16 + 2 + 4 + 32


@pytest.mark.unit
def test_stretch_zero_iterations_is_single_digest():
    salt = b"\x01\x02\x03"
    expected = hashlib.sha384(b"pw" + salt).digest()

    assert stretch("pw", HashFunction.SHA384, 0, salt) == expected


@pytest.mark.unit
def test_stretch_matches_reference_for_sha512():
    salt = bytes(range(8))
    assert stretch("pw", HashFunction.SHA512, 5, salt) == reference_stretch("pw", salt, 5, "sha512")


@pytest.mark.unit
@pytest.mark.parametrize(
    "password, expected",
    [
        ("pw", b"pw"),
        ("pass\ud800word", "pass\ufffdword".encode("utf-8")),
        ("\udfff", "\ufffd".encode("utf-8")),
        ("\ud83d\ude00", "\U0001f600".encode("utf-8")),
    ],
)
def test_encode_password(password, expected):
    assert encode_password(password) == expected


@pytest.mark.unit
def test_stretch_hashes_lone_surrogate_as_replacement_character():
    salt = b"\x00\x01"
    assert stretch("a\udc00", HashFunction.SHA256, 2, salt) == stretch(
        "a\ufffd", HashFunction.SHA256, 2, salt
    )


@pytest.mark.unit
def test_decode_result_returns_parameters():
    salt = b"saltsalt"
    digest = bytes(48)
    encoded = encode_result(salt, HashFunction.SHA384, 77, digest)

    assert decode_result(encoded) == (salt, 1, 77, digest)


@pytest.mark.unit
def test_compare_uses_embedded_parameters():
    """Test verification of a result built by hand.

    Assumptions:
    - Only the layout matters, not which instance produced it
    """
    salt = b"\xff" * 4
    digest = reference_stretch("hand made", salt, 2, "sha512")
    data = struct.pack("<h", 4) + salt + struct.pack("<h", 2) + struct.pack("<i", 2) + digest
    computed = base64.b64encode(data).decode("ascii")

    algorithm = PasswordAlgorithm()
    assert algorithm.compare("hand made", computed)
    assert not algorithm.compare("hand-made", computed)


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@pytest.mark.unit
@pytest.mark.parametrize(
    "computed_result",
    [
        "not base64!",
        "QUJD=",
        "",
        _encode(b"\x01"),
        _encode(struct.pack("<h", -1) + bytes(40)),
        _encode(struct.pack("<h", 16) + bytes(10)),
        _encode(struct.pack("<h", 4) + bytes(4) + b"\x00\x00" + b"\x01\x00"),
        _encode(struct.pack("<h", 0) + b"\x00\x00" + struct.pack("<i", -5) + bytes(32)),
        _encode(struct.pack("<h", 0) + b"\x00\x00" + struct.pack("<i", 1)),
    ],
    ids=[
        "not-base64",
        "bad-padding",
        "empty",
        "too-short-for-salt-length",
        "negative-salt-length",
        "salt-exceeds-buffer",
        "truncated-iterations",
        "negative-iterations",
        "missing-digest",
    ],
)
def test_decode_rejects_malformed(computed_result):
    with pytest.raises(FormatError):
        decode_result(computed_result)


@pytest.mark.unit
def test_compare_unknown_hash_function_raises():
    data = struct.pack("<h", 0) + struct.pack("<h", 9) + struct.pack("<i", 1) + bytes(32)

    with pytest.raises(NotSupportedError):
        PasswordAlgorithm().compare("password", _encode(data))


@pytest.mark.unit
def test_compare_tampered_digest_is_false(algorithm):
    data = bytearray(base64.b64decode(algorithm.compute("password")))
    data[-1] ^= 0x01

    assert algorithm.compare("password", _encode(bytes(data))) is False


@pytest.mark.unit
def test_compare_tampered_iterations_is_false(algorithm):
    data = bytearray(base64.b64decode(algorithm.compute("password")))
    data[20:24] = struct.pack("<i", 999)

    assert algorithm.compare("password", _encode(bytes(data))) is False
