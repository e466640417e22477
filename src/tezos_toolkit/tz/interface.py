"""
Account (tz) provider interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..operations.operation import Operation


class TzProvider(ABC):
    """Implicit account queries and activation."""

    @abstractmethod
    def get_balance(self, address: str) -> int:
        """Balance of ``address`` in mutez."""
        pass

    @abstractmethod
    def get_delegate(self, address: str) -> Optional[str]:
        pass

    @abstractmethod
    async def activate(self, pkh: str, secret: str) -> Operation:
        """
        Activate a fundraiser account.

        Args:
            pkh: Address of the account to activate
            secret: Activation code
        """
        pass
