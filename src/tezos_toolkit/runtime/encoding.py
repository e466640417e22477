"""
Base58check and hashing helpers.

Tezos identifiers (keys, hashes, signatures) are base58check strings whose
payload starts with a fixed binary prefix selecting the human readable
leading characters (``tz1``, ``edpk``, ``edsk``...).
"""

from __future__ import annotations
import hashlib

import base58

from .errors import InvalidKeyError


class Prefix:
    """Binary prefixes of the base58check encodings used by the toolkit."""

    TZ1 = bytes([6, 161, 159])
    EDPK = bytes([13, 15, 37, 217])
    EDSK = bytes([43, 246, 78, 7])
    EDSK2 = bytes([13, 15, 58, 7])
    EDESK = bytes([7, 90, 60, 179, 41])
    EDSIG = bytes([9, 245, 205, 134, 18])
    SIG = bytes([4, 130, 43])


def blake2b_digest(data: bytes, size: int = 32) -> bytes:
    """Blake2b hash with the given digest size in bytes."""
    return hashlib.blake2b(data, digest_size=size).digest()


def b58_encode(payload: bytes, prefix: bytes) -> str:
    """Encode ``payload`` as base58check with ``prefix`` prepended."""
    return base58.b58encode_check(prefix + payload).decode("ascii")


def b58_decode(value: str, prefix: bytes) -> bytes:
    """
    Decode a base58check string and strip its prefix.

    Raises:
        InvalidKeyError: If the checksum is wrong or the prefix does not match
    """
    try:
        data = base58.b58decode_check(value)
    except ValueError as e:
        raise InvalidKeyError(f"Invalid base58check value: {value[:8]}...", cause=e)
    if not data.startswith(prefix):
        raise InvalidKeyError(f"Unexpected prefix for value {value[:8]}...")
    return data[len(prefix):]

