"""
Signers for the Tezos toolkit.
"""

from .signer import Signer
from .noop import NoopSigner
from .in_memory import InMemorySigner

__all__ = [
    "Signer",
    "NoopSigner",
    "InMemorySigner",
]
