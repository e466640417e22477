"""Wallet providers"""

from .interface import WalletProvider
from .legacy import LegacyWallet
from .operation_factory import OperationFactory

__all__ = [
    "WalletProvider",
    "LegacyWallet",
    "OperationFactory",
]
