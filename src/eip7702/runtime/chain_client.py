"""
Chain client capability consumed by the engine.

The engine never talks to a node directly. It depends on the narrow
ChainClient protocol (nonce lookup, fee-tip suggestion, chain id, broadcast),
which keeps the signer, validator and builder testable against a scripted
fake. Web3ChainClient is the production adapter over web3.py.

Example:
    >>> client = Web3ChainClient.from_rpc_url("https://ethereum-holesky-rpc.publicnode.com")
    >>> client.chain_id()
    17000
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from eth_utils import to_checksum_address
from web3 import Web3

from eip7702.constants import PROVIDER_TIMEOUT_SECONDS
from eip7702.errors import BroadcastError, RpcError
from eip7702.utils.logging import get_logger, short_address

if TYPE_CHECKING:
    from eip7702.types.transaction import SponsoredTransaction

_logger = get_logger(__name__)


@runtime_checkable
class ChainClient(Protocol):
    """
    Chain access required by the engine. All calls are blocking.

    Implementations raise ChainError subclasses (RpcError, BroadcastError)
    on failure.
    """

    def nonce_at(self, address: str) -> int:
        """Current account nonce (latest block)."""
        ...

    def suggest_fee_tip(self) -> int:
        """Suggested max priority fee per gas, in wei."""
        ...

    def chain_id(self) -> int:
        """Active chain id."""
        ...

    def broadcast(self, transaction: "SponsoredTransaction") -> str:
        """Submit a signed transaction, returning its hash."""
        ...


def _error_reason(exc: Exception) -> str:
    """Extract a node-supplied message from a provider exception."""
    if exc.args and isinstance(exc.args[0], dict):
        reason = exc.args[0].get("message") or exc.args[0].get("reason")
        if reason:
            return str(reason)
    return str(exc) or exc.__class__.__name__


class Web3ChainClient:
    """ChainClient backed by a web3.py Web3 instance."""

    def __init__(self, w3: Web3):
        self.w3 = w3

    @classmethod
    def from_rpc_url(
        cls,
        rpc_url: str,
        timeout: int = PROVIDER_TIMEOUT_SECONDS,
    ) -> "Web3ChainClient":
        """Create a client over an HTTP provider with a request timeout."""
        return cls(Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout})))

    def nonce_at(self, address: str) -> int:
        try:
            nonce = self.w3.eth.get_transaction_count(to_checksum_address(address), "latest")
        except Exception as exc:
            raise RpcError("eth_getTransactionCount", _error_reason(exc)) from exc
        _logger.debug("Nonce for %s is %s", short_address(address), nonce)
        return int(nonce)

    def suggest_fee_tip(self) -> int:
        try:
            return int(self.w3.eth.max_priority_fee)
        except Exception as exc:
            raise RpcError("eth_maxPriorityFeePerGas", _error_reason(exc)) from exc

    def chain_id(self) -> int:
        try:
            return int(self.w3.eth.chain_id)
        except Exception as exc:
            raise RpcError("eth_chainId", _error_reason(exc)) from exc

    def broadcast(self, transaction: "SponsoredTransaction") -> str:
        try:
            tx_hash = self.w3.eth.send_raw_transaction(transaction.raw_transaction)
        except Exception as exc:
            raise BroadcastError(_error_reason(exc), tx_hash=transaction.tx_hash) from exc

        sent_hash = Web3.to_hex(tx_hash)
        _logger.info("Broadcast sponsored transaction %s", sent_hash)
        return sent_hash
