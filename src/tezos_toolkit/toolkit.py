"""
Tezos Toolkit Facade.

The TezosToolkit is the primary entry point: it owns the Context and the
provider registry, exposes every capability through read accessors and
lets callers swap providers with ``configure``.

Example:
    ```python
    from tezos_toolkit import TezosToolkit, InMemorySigner

    tezos = TezosToolkit("https://ghostnet.ecadinfra.com")
    tezos.configure(signer=InMemorySigner("edsk..."))

    op = await tezos.contract.transfer("tz1...", 1.5)
    await op.confirmation()
    ```
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Optional, Type, TypeVar, Union

from .context import Config, Context
from .contract.batch import OperationBatch
from .contract.estimate import RpcEstimateProvider
from .contract.provider import RpcContractProvider
from .format import format as format_units
from .registry import UNSET, ProviderRegistry, SlotKind
from .rpc.client import RpcClient
from .runtime.errors import is_invalid_activation
from .signers.in_memory import InMemorySigner
from .signers.signer import Signer
from .subscribe.interface import SubscribeProvider
from .tz.provider import RpcTzProvider
from .wallet.interface import WalletProvider
from .wallet.operation_factory import OperationFactory

logger = logging.getLogger(__name__)

P = TypeVar("P")


class TezosToolkit:
    """
    Facade surfacing the toolkit's capabilities and their configuration.

    Args:
        rpc: Node url or RpcClient (default: a client on the default endpoint)

    Attributes:
        format: Unit conversion helper, see ``tezos_toolkit.format``
    """

    format = staticmethod(format_units)

    def __init__(self, rpc: Optional[Union[str, RpcClient]] = None):
        client = RpcClient(rpc) if isinstance(rpc, str) or rpc is None else rpc
        self._context = Context(rpc=client)
        self._registry = ProviderRegistry(self._context)
        self.configure(rpc=client)

    def configure(
        self,
        *,
        rpc: Any = UNSET,
        stream: Any = UNSET,
        signer: Any = UNSET,
        protocol: Any = UNSET,
        config: Any = UNSET,
        forger: Any = UNSET,
        wallet: Any = UNSET,
    ) -> None:
        """
        Choose the providers and options used by the toolkit.

        Providers are resolved in a fixed order (rpc, stream, signer, forger,
        wallet). The rpc, stream and signer choices stick until overridden
        again; forger and wallet are rebuilt on every call unless given.
        ``config`` is overlaid onto the current config (None resets it) and
        ``protocol`` replaces the current protocol; both are left untouched
        when omitted.

        Args:
            rpc: Node url or RpcClient
            stream: Node url (polled by a dedicated client) or SubscribeProvider
            signer: Signer used for every operation
            protocol: Protocol hash operations are built for
            config: Config or mapping of tunables
            forger: Forger
            wallet: WalletProvider

        Raises:
            ConfigurationError: If a provider cannot be built; slots after the
                failing one are left as they were

        Example:
            ```python
            tezos.configure(signer=InMemorySigner("edsk..."))
            tezos.configure(config={"confirmation_polling_timeout_second": 300})
            ```
        """
        self._registry.resolve_rpc(rpc)
        self._registry.resolve_stream(stream)
        self._registry.resolve_signer(signer)
        self._registry.resolve_forger(forger)
        self._registry.resolve_wallet(wallet)

        if protocol is not UNSET:
            self._context.proto = protocol
        if config is not UNSET:
            self._context.update_config(config)

    set_provider = configure

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def context(self) -> Context:
        return self._context

    @property
    def tz(self) -> RpcTzProvider:
        """Account utilities."""
        return self._context.tz

    @property
    def contract(self) -> RpcContractProvider:
        """Contract utilities."""
        return self._context.contract

    @property
    def wallet(self) -> WalletProvider:
        return self._context.wallet

    @property
    def operation(self) -> OperationFactory:
        return self._context.operation_factory

    @property
    def estimate(self) -> RpcEstimateProvider:
        """Fee, gas and storage estimation utilities."""
        return self._context.estimate

    @property
    def stream(self) -> SubscribeProvider:
        """Subscription provider (not part of the Context)."""
        return self._registry.current(SlotKind.STREAM)

    @property
    def rpc(self) -> RpcClient:
        """Currently used RPC client."""
        return self._context.rpc

    @property
    def signer(self) -> Signer:
        """Currently used signer."""
        return self._context.signer

    @property
    def config(self) -> Config:
        """Active config, defaults filled in."""
        return self._context.config

    def batch(self, operations=None) -> OperationBatch:
        """
        Start a batch of operations.

        The batch provider is looked up on every call, so batches always use
        the providers active at that time.
        """
        return self._context.batch.batch(operations)

    def get_factory(self, provider: Type[P]) -> Callable[..., P]:
        """
        Return a constructor of ``provider`` bound to the toolkit's Context.

        Example:
            ```python
            make_stream = tezos.get_factory(PollingSubscribeProvider)
            stream = make_stream(1.0)
            ```
        """
        def factory(*args: Any) -> P:
            return provider(self._context, *args)
        return factory

    # =========================================================================
    # Key import
    # =========================================================================

    def _set_signer(self, signer: Signer) -> None:
        self._registry.resolve_signer(signer)

    async def import_key(
        self,
        private_key_or_email: str,
        passphrase: Optional[str] = None,
        mnemonic: Optional[str] = None,
        secret: Optional[str] = None,
    ) -> None:
        """
        Import a key to sign operations.

        With all four arguments set, they are read as the email, password,
        mnemonic and activation secret of a fundraiser account (see
        ``import_fundraiser``). Otherwise the first two are read as a secret
        key and its optional passphrase (see ``import_private_key``).

        Args:
            private_key_or_email: Secret key, or fundraiser email
            passphrase: Key passphrase, or fundraiser password
            mnemonic: Fundraiser mnemonic
            secret: Fundraiser activation secret
        """
        if private_key_or_email and passphrase and mnemonic and secret:
            await self.import_fundraiser(private_key_or_email, passphrase, mnemonic, secret)
            return

        if mnemonic or secret:
            logger.warning("Incomplete fundraiser parameters, importing the first argument as a secret key")
        await self.import_private_key(private_key_or_email, passphrase)

    async def import_private_key(self, key: str, passphrase: Optional[str] = None) -> None:
        """
        Install an InMemorySigner for ``key``.

        Raises:
            InvalidKeyError: If the key cannot be decoded or decrypted
        """
        self._set_signer(InMemorySigner(key, passphrase))

    async def import_fundraiser(self, email: str, password: str, mnemonic: str, secret: str) -> None:
        """
        Install the signer of a fundraiser account and activate the account.

        The derived signer is installed before activation. If the account is
        already active the activation failure is ignored. Any other failure
        of the activation or of its confirmation reinstalls the signer that
        was active before the call and re-raises the error.
        """
        signer = InMemorySigner.from_fundraiser(email, password, mnemonic)
        previous_signer = self.signer
        pkh = signer.public_key_hash()
        self._set_signer(signer)

        try:
            op = None
            try:
                op = await self.tz.activate(pkh, secret)
            except Exception as e:
                if not is_invalid_activation(e):
                    raise
                logger.info("Account %s is already activated", pkh)
            if op is not None:
                await op.confirmation()
        except BaseException:
            logger.warning("Activation of %s failed, restoring the previous signer", pkh)
            self._set_signer(previous_signer)
            raise

    def __repr__(self) -> str:
        return f"TezosToolkit(rpc={self.rpc!r})"


__all__ = [
    "TezosToolkit",
]
