"""
RPC backed account provider.
"""

import logging
from typing import Optional

from ..operations.emitter import OperationEmitter
from ..operations.operation import Operation
from ..operations.types import activation
from .interface import TzProvider

logger = logging.getLogger(__name__)


class RpcTzProvider(OperationEmitter, TzProvider):
    """Account provider reading through the context's RPC client."""

    def get_balance(self, address: str) -> int:
        return self.rpc.get_balance(address)

    def get_delegate(self, address: str) -> Optional[str]:
        return self.rpc.get_delegate(address)

    async def activate(self, pkh: str, secret: str) -> Operation:
        logger.debug("Activating %s", pkh)
        return await self.send([activation(pkh, secret)])
