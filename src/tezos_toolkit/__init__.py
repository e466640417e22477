"""
Tezos Toolkit - Python client for the Tezos blockchain

Assembles an operating context from pluggable providers (RPC client,
signer, forger, wallet, event subscriber) and exposes it through the
TezosToolkit facade.
"""

from .constants import DEFAULT_RPC_URL, Protocols
from .context import Config, Context, DEFAULT_CONFIG
from .format import format
from .registry import UNSET, ProviderRegistry, ProviderSlot, SlotKind, SlotPolicy
from .toolkit import TezosToolkit

from .rpc import RpcClient
from .signers import Signer, NoopSigner, InMemorySigner
from .forger import Forger, RpcForger, CompositeForger
from .operations import OpKind, Operation
from .tz import TzProvider, RpcTzProvider
from .contract import (
    Estimate, RpcEstimateProvider,
    ContractAbstraction, RpcContractProvider,
    OperationBatch, RpcBatchProvider,
)
from .wallet import WalletProvider, LegacyWallet, OperationFactory
from .subscribe import SubscribeProvider, Subscription, PollingSubscribeProvider
from .runtime.errors import (
    ErrorCode,
    ToolkitError,
    ConfigurationError,
    NetworkError,
    HttpResponseError,
    SignerError,
    UnconfiguredSignerError,
    InvalidKeyError,
    ForgingMismatchError,
    TezosOperationError,
    ConfirmationTimeoutError,
    UnsupportedUnitError,
)

__version__ = "0.1.0"
__all__ = [
    # Facade
    "TezosToolkit",
    "Context",
    "Config",
    "DEFAULT_CONFIG",
    "format",

    # Provider registry
    "UNSET",
    "ProviderRegistry",
    "ProviderSlot",
    "SlotKind",
    "SlotPolicy",

    # Providers
    "RpcClient",
    "Signer",
    "NoopSigner",
    "InMemorySigner",
    "Forger",
    "RpcForger",
    "CompositeForger",
    "TzProvider",
    "RpcTzProvider",
    "Estimate",
    "RpcEstimateProvider",
    "ContractAbstraction",
    "RpcContractProvider",
    "OperationBatch",
    "RpcBatchProvider",
    "WalletProvider",
    "LegacyWallet",
    "OperationFactory",
    "SubscribeProvider",
    "Subscription",
    "PollingSubscribeProvider",

    # Operations
    "OpKind",
    "Operation",

    # Constants
    "DEFAULT_RPC_URL",
    "Protocols",

    # Errors
    "ErrorCode",
    "ToolkitError",
    "ConfigurationError",
    "NetworkError",
    "HttpResponseError",
    "SignerError",
    "UnconfiguredSignerError",
    "InvalidKeyError",
    "ForgingMismatchError",
    "TezosOperationError",
    "ConfirmationTimeoutError",
    "UnsupportedUnitError",
]
