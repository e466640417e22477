"""
Tezos node RPC client.

Thin synchronous wrapper around the node's HTTP/JSON interface. Every
method maps to one RPC path; responses are returned as decoded JSON.

Example:
    ```python
    client = RpcClient("https://ghostnet.ecadinfra.com")
    header = client.get_block_header()
    balance = client.get_balance("tz1VSUr8wwNhLAzempoch5d6hLRiTh8Cjcjb")
    ```
"""

from __future__ import annotations
import json
import logging
import os
from typing import Optional, Dict, Any, List
from urllib.parse import urlparse

import requests

from ..constants import DEFAULT_RPC_URL, RPC_URL_ENV
from ..runtime.errors import ConfigurationError, HttpResponseError, NetworkError

logger = logging.getLogger(__name__)


def default_rpc_url() -> str:
    """Endpoint used when no URL is given: ``$TEZOS_RPC_URL`` or the public default."""
    return os.environ.get(RPC_URL_ENV) or DEFAULT_RPC_URL


class RpcClient:
    """
    Client for the Tezos node RPC.

    Args:
        url: Node base URL (defaults to ``default_rpc_url()``)
        chain: Chain identifier used in ``/chains/<chain>/...`` paths
        timeout: Request timeout in seconds
        session: Optional requests.Session for connection pooling

    Raises:
        ConfigurationError: If ``url`` is not an http(s) URL
    """

    def __init__(
        self,
        url: Optional[str] = None,
        chain: str = "main",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        url = (url or default_rpc_url()).rstrip('/')
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"Invalid RPC url: {url!r}", {"url": url})

        self._url = url
        self._chain = chain
        self._timeout = timeout
        self._session = session or requests.Session()
        self._owns_session = session is None

    @property
    def url(self) -> str:
        """Get the node base URL."""
        return self._url

    @property
    def chain(self) -> str:
        return self._chain

    def close(self) -> None:
        """Close the HTTP session if owned by this client."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> RpcClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RpcClient(url='{self._url}', chain='{self._chain}')"

    # =========================================================================
    # Low-level HTTP
    # =========================================================================

    def _request(self, method: str, path: str, body: Any = None) -> Any:
        """
        Perform one RPC request.

        Raises:
            HttpResponseError: Non-success status, with the raw body attached
            NetworkError: Transport failure or undecodable response
        """
        url = f"{self._url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"HTTP request failed: {e}", {"url": url}, e)

        if response.status_code < 200 or response.status_code >= 300:
            raise HttpResponseError(
                f"Http error response: ({response.status_code}) {response.text}",
                status=response.status_code,
                url=url,
                body=response.text,
            )

        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise NetworkError(f"Invalid JSON response: {e}", {"url": url}, e)

    def _block_path(self, block: str) -> str:
        return f"/chains/{self._chain}/blocks/{block}"

    # =========================================================================
    # Block queries
    # =========================================================================

    def get_block(self, block: str = "head") -> Dict[str, Any]:
        """Full block, including its operations."""
        return self._request("GET", self._block_path(block))

    def get_block_header(self, block: str = "head") -> Dict[str, Any]:
        """Block header (``hash``, ``level``, ``protocol``, ...)."""
        return self._request("GET", f"{self._block_path(block)}/header")

    def get_block_hash(self, block: str = "head") -> str:
        return self._request("GET", f"{self._block_path(block)}/hash")

    def get_constants(self, block: str = "head") -> Dict[str, Any]:
        """Protocol constants in effect at ``block``."""
        return self._request("GET", f"{self._block_path(block)}/context/constants")

    def get_chain_id(self) -> str:
        return self._request("GET", f"/chains/{self._chain}/chain_id")

    # =========================================================================
    # Contract queries
    # =========================================================================

    def get_balance(self, address: str, block: str = "head") -> int:
        """Balance of ``address`` in mutez."""
        return int(self._request("GET", f"{self._block_path(block)}/context/contracts/{address}/balance"))

    def get_delegate(self, address: str, block: str = "head") -> Optional[str]:
        """
        Delegate of ``address``, or None when the account is not delegated.
        """
        try:
            return self._request("GET", f"{self._block_path(block)}/context/contracts/{address}/delegate")
        except HttpResponseError as e:
            if e.status == 404:
                return None
            raise

    def get_contract(self, address: str, block: str = "head") -> Dict[str, Any]:
        """Contract record (balance, counter, script...)."""
        return self._request("GET", f"{self._block_path(block)}/context/contracts/{address}")

    def get_manager_key(self, address: str, block: str = "head") -> Optional[str]:
        """Revealed public key of ``address``, None when not revealed."""
        result = self._request("GET", f"{self._block_path(block)}/context/contracts/{address}/manager_key")
        if isinstance(result, dict):
            return result.get("key")
        return result

    def get_script(self, address: str, block: str = "head") -> Dict[str, Any]:
        return self._request("GET", f"{self._block_path(block)}/context/contracts/{address}/script")

    def get_storage(self, address: str, block: str = "head") -> Any:
        return self._request("GET", f"{self._block_path(block)}/context/contracts/{address}/storage")

    # =========================================================================
    # Operation helpers
    # =========================================================================

    def forge_operations(self, operation: Dict[str, Any], block: str = "head") -> str:
        """Serialize ``{"branch": ..., "contents": [...]}`` to hex through the node."""
        return self._request("POST", f"{self._block_path(block)}/helpers/forge/operations", operation)

    def run_operation(self, operation: Dict[str, Any], block: str = "head") -> Dict[str, Any]:
        """Simulate a signed operation without checking its signature."""
        return self._request("POST", f"{self._block_path(block)}/helpers/scripts/run_operation", operation)

    def preapply_operations(self, operations: List[Dict[str, Any]], block: str = "head") -> List[Dict[str, Any]]:
        """Apply signed operations on top of ``block`` without injecting them."""
        return self._request("POST", f"{self._block_path(block)}/helpers/preapply/operations", operations)

    def inject_operation(self, signed_bytes: str) -> str:
        """Inject signed operation bytes and return the operation hash."""
        return self._request("POST", "/injection/operation", signed_bytes)


__all__ = [
    "RpcClient",
    "default_rpc_url",
]
