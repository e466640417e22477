"""Implicit account utilities"""

from .interface import TzProvider
from .provider import RpcTzProvider

__all__ = [
    "TzProvider",
    "RpcTzProvider",
]
