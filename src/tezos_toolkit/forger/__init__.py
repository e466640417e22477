"""Operation forgers"""

from .interface import Forger, ForgeParams
from .rpc_forger import RpcForger
from .composite_forger import CompositeForger

__all__ = [
    "Forger",
    "ForgeParams",
    "RpcForger",
    "CompositeForger",
]
