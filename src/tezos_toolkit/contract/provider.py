"""
Contract provider: transfers, delegation and contract inspection.

Michelson values are exchanged in their raw Micheline JSON form.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from ..format import format
from ..operations.emitter import OperationEmitter
from ..operations.operation import Operation
from ..operations.types import delegation, transaction
from .estimate import RpcEstimateProvider

if TYPE_CHECKING:
    from ..context import Context

logger = logging.getLogger(__name__)


def to_mutez(amount, mutez: bool = False) -> int:
    """Amount in mutez, ``amount`` being tez unless ``mutez`` is set."""
    return int(amount) if mutez else int(format("tz", "mutez", amount))


class ContractAbstraction:
    """Read access to a deployed contract."""

    def __init__(self, address: str, script: Dict[str, Any], provider: RpcContractProvider):
        self.address = address
        self.script = script
        self._provider = provider

    @property
    def code(self) -> Any:
        return self.script.get("code")

    def storage(self) -> Any:
        """Current storage, as Micheline."""
        return self._provider.get_storage(self.address)

    async def call(self, entrypoint: str, value: Any, amount=0, mutez: bool = False) -> Operation:
        """Call ``entrypoint`` with a Micheline ``value``."""
        return await self._provider.transfer(
            self.address, amount, mutez=mutez,
            parameters={"entrypoint": entrypoint, "value": value},
        )

    def __repr__(self) -> str:
        return f"ContractAbstraction('{self.address}')"


class RpcContractProvider(OperationEmitter):
    """
    Contract operations built, signed and injected through the context.

    Limits that are not given are filled from an estimation.
    """

    def __init__(self, context: Context, estimator: RpcEstimateProvider):
        super().__init__(context)
        self.estimator = estimator

    def get_storage(self, address: str) -> Any:
        return self.rpc.get_storage(address)

    def at(self, address: str) -> ContractAbstraction:
        """Load the script of ``address``."""
        return ContractAbstraction(address, self.rpc.get_script(address), self)

    async def transfer(self, to: str, amount, source: Optional[str] = None, mutez: bool = False,
                       fee: Optional[int] = None, gas_limit: Optional[int] = None,
                       storage_limit: Optional[int] = None,
                       parameters: Optional[Dict[str, Any]] = None) -> Operation:
        """
        Transfer ``amount`` tez (mutez when ``mutez`` is set) to ``to``.

        Returns:
            The injected Operation
        """
        content = transaction(to, to_mutez(amount, mutez), fee, gas_limit, storage_limit, parameters)
        if fee is None or gas_limit is None or storage_limit is None:
            estimate = await self.estimator.transfer(to, amount, source, mutez, parameters)
            content = estimate.apply_to(content)
        logger.debug("Transfer of %s to %s", content["amount"], to)
        return await self.send([content], source)

    async def set_delegate(self, delegate: Optional[str], source: Optional[str] = None,
                           fee: Optional[int] = None, gas_limit: Optional[int] = None,
                           storage_limit: Optional[int] = None) -> Operation:
        """Delegate ``source`` to ``delegate``; None withdraws the delegation."""
        content = delegation(delegate, fee, gas_limit, storage_limit)
        if fee is None or gas_limit is None or storage_limit is None:
            estimate = await self.estimator.set_delegate(delegate, source)
            content = estimate.apply_to(content)
        return await self.send([content], source)

    async def register_delegate(self) -> Operation:
        """Register the signer's account as a delegate (self delegation)."""
        return await self.set_delegate(self.signer.public_key_hash())


__all__ = [
    "ContractAbstraction",
    "RpcContractProvider",
    "to_mutez",
]
