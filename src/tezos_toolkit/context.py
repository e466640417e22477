"""
Shared toolkit context.

The Context bundles the active providers (RPC client, signer, forger,
wallet), the protocol and the operation config. A single Context lives for
the lifetime of a toolkit; provider fields are replaced in place so every
component built from it observes the current providers.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field

from .constants import Protocols
from .rpc.client import RpcClient
from .signers.noop import NoopSigner
from .signers.signer import Signer
from .contract.estimate import RpcEstimateProvider
from .forger.interface import Forger
from .forger.rpc_forger import RpcForger
from .contract.provider import RpcContractProvider
from .contract.batch import RpcBatchProvider
from .tz.provider import RpcTzProvider
from .wallet.interface import WalletProvider
from .wallet.legacy import LegacyWallet
from .wallet.operation_factory import OperationFactory

logger = logging.getLogger(__name__)


class Config(BaseModel):
    """
    Operation tunables.

    Every field is optional; unset fields fall back to DEFAULT_CONFIG when
    read through ``Context.config``.
    """
    confirmation_polling_interval_second: Optional[float] = Field(
        default=None, gt=0, alias="confirmationPollingIntervalSecond",
        description="Delay between confirmation polls (default: a third of the block time)"
    )
    confirmation_polling_timeout_second: Optional[float] = Field(
        default=None, gt=0, alias="confirmationPollingTimeoutSecond",
        description="Give up waiting for confirmation after this many seconds"
    )
    default_confirmation_count: Optional[int] = Field(
        default=None, ge=1, alias="defaultConfirmationCount",
        description="Confirmations awaited when none is requested explicitly"
    )
    stream_polling_interval_ms: Optional[int] = Field(
        default=None, gt=0, alias="streamerPollingIntervalMilliseconds",
        description="Head polling period of the polling subscriber"
    )

    model_config = {"populate_by_name": True}

    def overlay(self, other: Config) -> Config:
        """Return a copy with the fields explicitly set on ``other`` applied."""
        return self.model_copy(update=other.model_dump(exclude_unset=True))


DEFAULT_CONFIG: Dict[str, Any] = {
    "confirmation_polling_timeout_second": 180,
    "default_confirmation_count": 1,
    "stream_polling_interval_ms": 20000,
}


ConfigLike = Union[Config, Dict[str, Any]]


def to_config(value: Optional[ConfigLike]) -> Config:
    """Coerce a mapping (snake_case or camelCase keys) into a Config."""
    if value is None:
        return Config()
    if isinstance(value, Config):
        return value
    return Config.model_validate(value)


class Context:
    """
    Aggregate of the active providers.

    Provider properties have setters for the toolkit's provider registry;
    nothing else should assign them. Derived providers (``tz``,
    ``estimate``, ``contract``, ``batch``, ``operation_factory``) are built
    once and keep a reference to this Context.

    Args:
        rpc: RPC client (default: a client on the default endpoint)
        signer: Signer (default: NoopSigner)
        protocol: Protocol hash the operations target
        config: Operation tunables
        forger: Forger (default: RpcForger bound to this context)
        wallet: Wallet provider (default: LegacyWallet bound to this context)
    """

    def __init__(
        self,
        rpc: Optional[RpcClient] = None,
        signer: Optional[Signer] = None,
        protocol: Optional[Union[Protocols, str]] = None,
        config: Optional[ConfigLike] = None,
        forger: Optional[Forger] = None,
        wallet: Optional[WalletProvider] = None,
    ):
        self._rpc = rpc if rpc is not None else RpcClient()
        self._signer = signer if signer is not None else NoopSigner()
        self._proto = protocol
        self._config = to_config(config)
        self._forger = forger if forger is not None else RpcForger(self)
        self._wallet = wallet if wallet is not None else LegacyWallet(self)

        self._tz = RpcTzProvider(self)
        self._estimate = RpcEstimateProvider(self)
        self._contract = RpcContractProvider(self, self._estimate)
        self._batch = RpcBatchProvider(self, self._estimate)
        self._operation_factory = OperationFactory(self)

    # =========================================================================
    # Providers
    # =========================================================================

    @property
    def rpc(self) -> RpcClient:
        return self._rpc

    @rpc.setter
    def rpc(self, value: RpcClient) -> None:
        self._rpc = value

    @property
    def signer(self) -> Signer:
        return self._signer

    @signer.setter
    def signer(self, value: Signer) -> None:
        self._signer = value

    @property
    def forger(self) -> Forger:
        return self._forger

    @forger.setter
    def forger(self, value: Forger) -> None:
        self._forger = value

    @property
    def wallet(self) -> WalletProvider:
        return self._wallet

    @wallet.setter
    def wallet(self, value: WalletProvider) -> None:
        self._wallet = value

    # =========================================================================
    # Protocol and config
    # =========================================================================

    @property
    def proto(self) -> Optional[Union[Protocols, str]]:
        return self._proto

    @proto.setter
    def proto(self, value: Optional[Union[Protocols, str]]) -> None:
        self._proto = value

    @property
    def config(self) -> Config:
        """Stored config with DEFAULT_CONFIG filling the unset fields."""
        resolved = Config(**DEFAULT_CONFIG)
        return resolved.model_copy(update=self._config.model_dump(exclude_none=True))

    @property
    def raw_config(self) -> Config:
        """Config exactly as stored, without defaults."""
        return self._config

    def update_config(self, config: Optional[ConfigLike]) -> None:
        """
        Overlay ``config`` onto the stored config.

        Only fields set explicitly on ``config`` change; ``None`` clears the
        stored config so every field falls back to its default.
        """
        if config is None:
            self._config = Config()
        else:
            self._config = self._config.overlay(to_config(config))
        logger.debug("Config updated: %s", self._config.model_dump(exclude_none=True))

    # =========================================================================
    # Derived providers
    # =========================================================================

    @property
    def tz(self) -> RpcTzProvider:
        return self._tz

    @property
    def estimate(self) -> RpcEstimateProvider:
        return self._estimate

    @property
    def contract(self) -> RpcContractProvider:
        return self._contract

    @property
    def batch(self) -> RpcBatchProvider:
        return self._batch

    @property
    def operation_factory(self) -> OperationFactory:
        return self._operation_factory


__all__ = [
    "Config",
    "ConfigLike",
    "Context",
    "DEFAULT_CONFIG",
    "to_config",
]
