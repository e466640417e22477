"""
Forger delegating serialization to the node.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .interface import Forger, ForgeParams

if TYPE_CHECKING:
    from ..context import Context


class RpcForger(Forger):
    """Forges through the ``helpers/forge/operations`` RPC of the context's client."""

    def __init__(self, context: Context):
        self.context = context

    def forge(self, params: ForgeParams) -> str:
        return self.context.rpc.forge_operations(dict(params))
