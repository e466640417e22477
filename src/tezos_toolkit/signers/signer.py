"""
Base signer interface.

Defines the signing capability every signer plugged into the toolkit must
provide.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Optional


class Signer(ABC):
    """
    Base signer interface.

    Keys and signatures are exchanged in their base58check text forms
    (``edpk...``, ``tz1...``, ``edsig...``).
    """

    @abstractmethod
    def public_key(self) -> str:
        """
        Get the public key.

        Returns:
            Base58check encoded public key
        """
        pass

    @abstractmethod
    def public_key_hash(self) -> str:
        """
        Get the public key hash (the implicit account address).

        Returns:
            ``tz...`` address
        """
        pass

    @abstractmethod
    def secret_key(self) -> Optional[str]:
        """
        Get the secret key, if the signer is allowed to expose it.

        Returns:
            Base58check encoded secret key or None
        """
        pass

    @abstractmethod
    def sign(self, op: str, watermark: Optional[bytes] = None) -> Dict[str, str]:
        """
        Sign forged operation bytes.

        Args:
            op: Hex encoded bytes to sign
            watermark: Optional magic bytes prepended before hashing

        Returns:
            Dictionary with ``bytes``, ``sig``, ``prefixSig`` and ``sbytes``

        Raises:
            SignerError: If signing fails
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


__all__ = [
    "Signer",
]
