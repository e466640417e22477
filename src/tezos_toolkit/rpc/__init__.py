"""Tezos node RPC access"""

from .client import RpcClient, default_rpc_url

__all__ = [
    "RpcClient",
    "default_rpc_url",
]
