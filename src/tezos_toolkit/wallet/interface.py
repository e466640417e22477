"""
Wallet provider interface.

A wallet owns the account operations are sent from. The default
LegacyWallet routes everything through the context's signer; other
implementations can hand operations to an external wallet.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..operations.operation import Operation


class WalletProvider(ABC):

    @abstractmethod
    def pkh(self) -> str:
        """Address operations are sent from."""
        pass

    @abstractmethod
    async def transfer(self, to: str, amount, mutez: bool = False) -> Operation:
        pass

    @abstractmethod
    async def set_delegate(self, delegate: Optional[str]) -> Operation:
        pass
