"""
Signer installed when no signing capability has been configured.
"""

from typing import Dict, Optional

from ..runtime.errors import UnconfiguredSignerError
from .signer import Signer


class NoopSigner(Signer):
    """Signer whose every operation fails with UnconfiguredSignerError."""

    def public_key(self) -> str:
        raise UnconfiguredSignerError()

    def public_key_hash(self) -> str:
        raise UnconfiguredSignerError()

    def secret_key(self) -> Optional[str]:
        raise UnconfiguredSignerError()

    def sign(self, op: str, watermark: Optional[bytes] = None) -> Dict[str, str]:
        raise UnconfiguredSignerError()
