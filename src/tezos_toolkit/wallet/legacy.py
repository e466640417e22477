"""
Wallet backed by the context's signer and contract provider.
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING

from ..operations.operation import Operation
from .interface import WalletProvider

if TYPE_CHECKING:
    from ..context import Context


class LegacyWallet(WalletProvider):

    def __init__(self, context: Context):
        self.context = context

    def pkh(self) -> str:
        return self.context.signer.public_key_hash()

    async def transfer(self, to: str, amount, mutez: bool = False) -> Operation:
        return await self.context.contract.transfer(to, amount, mutez=mutez)

    async def set_delegate(self, delegate: Optional[str]) -> Operation:
        return await self.context.contract.set_delegate(delegate)
