"""
Fee, gas and storage estimation through ``run_operation``.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..format import format
from ..operations.emitter import OperationEmitter, collect_errors
from ..operations.types import MANAGER_KINDS, OpKind, delegation, transaction
from ..runtime.encoding import Prefix, b58_encode
from ..runtime.errors import TezosOperationError

logger = logging.getLogger(__name__)

MINIMAL_FEE_MUTEZ = 100
MINIMAL_FEE_PER_GAS_MUTEZ = 0.1
MINIMAL_FEE_PER_BYTE_MUTEZ = 1
SIGNATURE_SIZE = 64
ALLOCATION_STORAGE = 257

# run_operation does not check signatures, any well formed one will do
_PLACEHOLDER_SIGNATURE = b58_encode(bytes(SIGNATURE_SIZE), Prefix.SIG)


@dataclass
class Estimate:
    """
    Resources consumed by one operation content.

    Attributes:
        gas_limit: Gas consumed, rounded up
        storage_limit: Storage burned in bytes
        op_size: Size in bytes of the whole operation the content was simulated in
    """
    gas_limit: int
    storage_limit: int
    op_size: int

    @property
    def suggested_fee_mutez(self) -> int:
        return (MINIMAL_FEE_MUTEZ
                + math.ceil(self.gas_limit * MINIMAL_FEE_PER_GAS_MUTEZ)
                + self.op_size * MINIMAL_FEE_PER_BYTE_MUTEZ)

    def apply_to(self, content: Dict[str, Any]) -> Dict[str, Any]:
        """Fill the limits ``content`` does not set explicitly."""
        filled = dict(content)
        filled.setdefault("fee", str(self.suggested_fee_mutez))
        filled.setdefault("gas_limit", str(self.gas_limit))
        filled.setdefault("storage_limit", str(self.storage_limit))
        return filled


def _consumed_gas(result: Dict[str, Any]) -> int:
    if "consumed_milligas" in result:
        return math.ceil(int(result["consumed_milligas"]) / 1000)
    return int(result.get("consumed_gas", 0))


def _burned_storage(result: Dict[str, Any]) -> int:
    storage = int(result.get("paid_storage_size_diff", 0))
    if result.get("allocated_destination_contract"):
        storage += ALLOCATION_STORAGE
    storage += ALLOCATION_STORAGE * len(result.get("originated_contracts", []))
    return storage


class RpcEstimateProvider(OperationEmitter):
    """Simulates operations to size their fee, gas and storage limits."""

    async def batch(self, contents: List[Dict[str, Any]], source: Optional[str] = None) -> List[Estimate]:
        """
        Estimate every content of a batch.

        Returns:
            One Estimate per entry of ``contents``, in the same order

        Raises:
            TezosOperationError: If the simulation reports errors
        """
        constants = await self._run(self.rpc.get_constants)
        hard_gas = str(constants.get("hard_gas_limit_per_operation", 1040000))
        hard_storage = str(constants.get("hard_storage_limit_per_operation", 60000))

        unbounded = []
        for content in contents:
            content = dict(content)
            if content["kind"] in MANAGER_KINDS:
                content["fee"] = "0"
                content["gas_limit"] = hard_gas
                content["storage_limit"] = hard_storage
            unbounded.append(content)

        prepared = await self.prepare_operation(unbounded, source)
        forged = await self._run(self.context.forger.forge,
                                 {"branch": prepared["branch"], "contents": prepared["contents"]})
        chain_id = await self._run(self.rpc.get_chain_id)
        response = await self._run(self.rpc.run_operation, {
            "operation": {
                "branch": prepared["branch"],
                "contents": prepared["contents"],
                "signature": _PLACEHOLDER_SIGNATURE,
            },
            "chain_id": chain_id,
        })
        errors = collect_errors([response])
        if errors:
            raise TezosOperationError(errors)

        op_size = len(forged) // 2 + SIGNATURE_SIZE
        simulated = []
        for content in response.get("contents", []):
            result = content.get("metadata", {}).get("operation_result", {})
            estimate = Estimate(_consumed_gas(result), _burned_storage(result), op_size)
            simulated.append((content["kind"], estimate))

        logger.debug("Simulated %d contents, operation size %d bytes", len(simulated), op_size)

        return self._align(contents, simulated)

    @staticmethod
    def _align(contents: List[Dict[str, Any]], simulated: List[tuple]) -> List[Estimate]:
        # prepare_operation puts non-manager contents first and may insert a reveal
        requested_reveal = any(c["kind"] == OpKind.REVEAL.value for c in contents)
        estimates = [est for kind, est in simulated
                     if kind != OpKind.REVEAL.value or requested_reveal]
        plain = [i for i, c in enumerate(contents) if c["kind"] not in MANAGER_KINDS]
        managed = [i for i, c in enumerate(contents) if c["kind"] in MANAGER_KINDS]
        aligned: List[Optional[Estimate]] = [None] * len(contents)
        for index, estimate in zip(plain + managed, estimates):
            aligned[index] = estimate
        return aligned

    async def transfer(self, to: str, amount, source: Optional[str] = None, mutez: bool = False,
                       parameters: Optional[Dict[str, Any]] = None) -> Estimate:
        """
        Estimate a transfer of ``amount`` tez (mutez when ``mutez`` is set).
        """
        value = int(amount) if mutez else int(format("tz", "mutez", amount))
        estimates = await self.batch([transaction(to, value, parameters=parameters)], source)
        return estimates[0]

    async def set_delegate(self, delegate: Optional[str], source: Optional[str] = None) -> Estimate:
        estimates = await self.batch([delegation(delegate)], source)
        return estimates[0]


__all__ = [
    "Estimate",
    "RpcEstimateProvider",
]
