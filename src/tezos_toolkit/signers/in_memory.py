"""
In-memory ed25519 signer.

Loads an ``edsk`` secret key (32-byte seed or 64-byte expanded form) or an
``edesk`` key encrypted with a passphrase, and signs forged operations.

Example:
    ```python
    signer = InMemorySigner("edsk3QoqBuvdamxouPhin7swCvkQNgq4jP5KZPbwWNnwdZpSpJiEbq")
    signer.public_key_hash()  # 'tz1VSUr8wwNhLAzempoch5d6hLRiTh8Cjcjb'
    ```
"""

from __future__ import annotations
import hashlib
import unicodedata
from typing import Dict, Optional

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives import serialization
import nacl.exceptions
import nacl.secret

from ..runtime.encoding import Prefix, b58_decode, b58_encode, blake2b_digest
from ..runtime.errors import InvalidKeyError
from .signer import Signer

# PBKDF2 parameters used by tezos-client for encrypted keys
ENCRYPTED_KEY_ITERATIONS = 32768
ENCRYPTED_KEY_SALT_SIZE = 8

# BIP39 seed derivation used for fundraiser accounts
FUNDRAISER_ITERATIONS = 2048


def _nfkd(value: str) -> bytes:
    return unicodedata.normalize("NFKD", value).encode("utf-8")


def _decrypt_seed(key: str, passphrase: Optional[str]) -> bytes:
    if not passphrase:
        raise InvalidKeyError("Encrypted key provided without a passphrase")
    payload = b58_decode(key, Prefix.EDESK)
    salt, ciphertext = payload[:ENCRYPTED_KEY_SALT_SIZE], payload[ENCRYPTED_KEY_SALT_SIZE:]
    secret = hashlib.pbkdf2_hmac("sha512", passphrase.encode("utf-8"), salt,
                                 ENCRYPTED_KEY_ITERATIONS, dklen=32)
    try:
        return nacl.secret.SecretBox(secret).decrypt(ciphertext, bytes(nacl.secret.SecretBox.NONCE_SIZE))
    except nacl.exceptions.CryptoError as e:
        raise InvalidKeyError("Unable to decrypt key, wrong passphrase?", cause=e)


class InMemorySigner(Signer):
    """
    Ed25519 signer holding its key in process memory.

    Args:
        key: ``edsk`` or ``edesk`` encoded secret key
        passphrase: Passphrase for ``edesk`` keys

    Raises:
        InvalidKeyError: If the key cannot be decoded or decrypted
    """

    def __init__(self, key: str, passphrase: Optional[str] = None):
        if not key:
            raise InvalidKeyError("Empty secret key")

        if key.startswith("edesk"):
            seed = _decrypt_seed(key, passphrase)
        elif key.startswith("edsk") and len(key) == 54:
            seed = b58_decode(key, Prefix.EDSK2)
        elif key.startswith("edsk"):
            seed = b58_decode(key, Prefix.EDSK)[:32]
        else:
            raise InvalidKeyError(f"Unsupported key type: {key[:4]}")

        if len(seed) != 32:
            raise InvalidKeyError(f"Ed25519 seed must be 32 bytes, got {len(seed)}")

        self._private_key = Ed25519PrivateKey.from_private_bytes(seed)
        self._seed = seed
        self._public_bytes = self._private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    @classmethod
    def from_fundraiser(cls, email: str, password: str, mnemonic: str) -> InMemorySigner:
        """
        Derive the signer of a fundraiser (faucet) account.

        The seed is the first half of the BIP39 seed of ``mnemonic`` salted
        with ``email + password``.
        """
        salt = _nfkd("mnemonic" + email + password)
        seed = hashlib.pbkdf2_hmac("sha512", _nfkd(mnemonic), salt, FUNDRAISER_ITERATIONS)
        return cls(b58_encode(seed[:32], Prefix.EDSK2))

    def public_key(self) -> str:
        return b58_encode(self._public_bytes, Prefix.EDPK)

    def public_key_hash(self) -> str:
        return b58_encode(blake2b_digest(self._public_bytes, 20), Prefix.TZ1)

    def secret_key(self) -> Optional[str]:
        return b58_encode(self._seed + self._public_bytes, Prefix.EDSK)

    def sign(self, op: str, watermark: Optional[bytes] = None) -> Dict[str, str]:
        """
        Sign forged operation bytes.

        The blake2b-256 digest of ``watermark + bytes`` is signed.
        """
        payload = bytes.fromhex(op)
        if watermark:
            payload = watermark + payload
        signature = self._private_key.sign(blake2b_digest(payload))
        return {
            "bytes": op,
            "sig": signature.hex(),
            "prefixSig": b58_encode(signature, Prefix.EDSIG),
            "sbytes": op + signature.hex(),
        }

    def __repr__(self) -> str:
        return f"InMemorySigner('{self.public_key_hash()}')"
