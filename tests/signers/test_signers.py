"""
Tests for the in-memory and no-op signers.
"""

import hashlib
import sys
from pathlib import Path

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import (
    ALICE_PKH,
    ALICE_PUBLIC_KEY,
    ALICE_SECRET_KEY,
    FUNDRAISER_EMAIL,
    FUNDRAISER_MNEMONIC,
    FUNDRAISER_PASSWORD,
)

from tezos_toolkit import InMemorySigner, InvalidKeyError, NoopSigner, UnconfiguredSignerError
from tezos_toolkit.operations.emitter import OPERATION_WATERMARK
from tezos_toolkit.runtime.encoding import Prefix, b58_decode


class TestInMemorySigner:

    def test_seed_key(self):
        signer = InMemorySigner(ALICE_SECRET_KEY)

        assert signer.public_key() == ALICE_PUBLIC_KEY
        assert signer.public_key_hash() == ALICE_PKH

    def test_expanded_key_roundtrip(self):
        """The 64 byte secret key loads to the same account."""
        expanded = InMemorySigner(ALICE_SECRET_KEY).secret_key()

        signer = InMemorySigner(expanded)

        assert expanded.startswith("edsk")
        assert len(expanded) == 98
        assert signer.public_key_hash() == ALICE_PKH

    def test_sign(self):
        signer = InMemorySigner(ALICE_SECRET_KEY)
        forged = "ce69c5713dac3537254e7be59759cf59c15abd530d10501ccf9028a5786314cf08"

        result = signer.sign(forged, OPERATION_WATERMARK)

        assert result["bytes"] == forged
        assert result["sbytes"] == forged + result["sig"]
        assert result["prefixSig"].startswith("edsig")
        assert len(bytes.fromhex(result["sig"])) == 64

        public_key = Ed25519PublicKey.from_public_bytes(b58_decode(ALICE_PUBLIC_KEY, Prefix.EDPK))
        digest = hashlib.blake2b(OPERATION_WATERMARK + bytes.fromhex(forged), digest_size=32).digest()
        public_key.verify(bytes.fromhex(result["sig"]), digest)

    def test_sign_is_deterministic(self):
        signer = InMemorySigner(ALICE_SECRET_KEY)

        assert signer.sign("00ff")["sig"] == signer.sign("00ff")["sig"]
        assert signer.sign("00ff")["sig"] != signer.sign("00ff", OPERATION_WATERMARK)["sig"]

    def test_fundraiser_derivation(self):
        first = InMemorySigner.from_fundraiser(FUNDRAISER_EMAIL, FUNDRAISER_PASSWORD, FUNDRAISER_MNEMONIC)
        second = InMemorySigner.from_fundraiser(FUNDRAISER_EMAIL, FUNDRAISER_PASSWORD, FUNDRAISER_MNEMONIC)
        other = InMemorySigner.from_fundraiser(FUNDRAISER_EMAIL, "other", FUNDRAISER_MNEMONIC)

        assert first.public_key_hash() == second.public_key_hash()
        assert first.public_key_hash().startswith("tz1")
        assert other.public_key_hash() != first.public_key_hash()

    @pytest.mark.parametrize("key", [
        "",
        "spsk2rBDDeUqakQ42nBHDGQTtP3GErb6AahHPwF9bhca3Q5KA5HESE",
        "edsk3QoqBuvdamxouPhin7swCvkQNgq4jP5KZPbwWNnwdZpSpJiEbr",
    ])
    def test_invalid_keys(self, key):
        with pytest.raises(InvalidKeyError):
            InMemorySigner(key)

    def test_encrypted_key_requires_passphrase(self):
        with pytest.raises(InvalidKeyError):
            InMemorySigner("edesk1zxaPJkhNwPPXMZNQ2TZq1tbPSxF4X5q5yAnBPk6wVgkaZU3kkcSAW1V9kNhN6hMVKjmBjvEbeUBuGwKDYz")

    def test_repr(self):
        assert ALICE_PKH in repr(InMemorySigner(ALICE_SECRET_KEY))


class TestNoopSigner:

    @pytest.mark.parametrize("call", [
        lambda s: s.public_key(),
        lambda s: s.public_key_hash(),
        lambda s: s.secret_key(),
        lambda s: s.sign("00"),
    ])
    def test_every_operation_fails(self, call):
        with pytest.raises(UnconfiguredSignerError):
            call(NoopSigner())
