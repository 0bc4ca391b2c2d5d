"""Delegation service for EIP-7702 sponsored transactions.

This module provides the DelegationService class, the single entry point
tying the authorization signer, validator and sponsored-transaction builder
to a chain client.

The service supports:
- Signing delegations to trusted delegate contracts
- Building and broadcasting sponsor-paid set-code transactions
- Ready-made flows for sendETH, mint, transfer and arbitrary signatures
- Sponsoring caller-supplied authorizations and call lists
- Building call data without touching the chain

Example:
    >>> from eip7702 import DelegationService, Web3ChainClient
    >>> client = Web3ChainClient.from_rpc_url("https://ethereum-holesky-rpc.publicnode.com")
    >>> service = DelegationService.connect(client)
    >>> result = service.sponsor_eth(
    ...     signer_key="0x...",
    ...     sponsor_key="0x...",
    ...     recipient="0x...",
    ...     amount_ether="0.01",
    ... )
    >>> result.tx_hash
    '0x...'
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from eth_account.signers.local import LocalAccount
from pydantic import ValidationError as PydanticValidationError

from .builders.sponsored_transaction import SponsoredTransactionBuilder
from .config import EngineConfig, Network, get_network_config
from .constants import DEFAULT_TOKEN_DECIMALS
from .encoding.calldata import (
    encode_generic,
    encode_mint,
    encode_send_eth,
    encode_transfer,
    from_hex,
    to_hex,
)
from .encoding.units import AmountLike, ether_to_wei, token_amount_to_base_units
from .errors import InputError, ServiceNotInitializedError
from .protocol.authorization import AuthorizationSigner
from .protocol.validator import AuthorizationValidator
from .runtime.chain_client import ChainClient
from .types.authorization import Authorization
from .types.call import Call, CallSpec
from .types.transaction import SponsoredTransaction
from .utils.logging import get_logger, short_address
from .utils.validation import PrivateKeyLike, load_account, validate_address

_logger = get_logger(__name__)

CallSpecLike = Union[CallSpec, Mapping[str, Any]]


# ------------------------------------------------------------------
# Results
# ------------------------------------------------------------------

@dataclass(frozen=True)
class SponsorResult:
    """Outcome of a broadcast sponsored flow."""

    tx_hash: str
    authorization: Authorization
    call_data: str
    transaction: SponsoredTransaction
    operation: str = "sponsor"
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tx_hash": self.tx_hash,
            "operation": self.operation,
            "authorization": self.authorization.to_dict(),
            "call_data": self.call_data,
            **self.details,
        }


@dataclass(frozen=True)
class CallDataResult:
    """Call data built without signing or broadcasting."""

    call_data: str
    operation: str
    amount_base_units: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"call_data": self.call_data, "operation": self.operation}
        if self.amount_base_units is not None:
            result["amount_base_units"] = str(self.amount_base_units)
        result.update(self.details)
        return result


def _default_config() -> EngineConfig:
    return EngineConfig.for_network(get_network_config(Network.HOLESKY))


def _parse_call_spec(index: int, spec: CallSpecLike) -> Call:
    if isinstance(spec, CallSpec):
        return spec.to_call()
    if not isinstance(spec, Mapping):
        raise InputError(f"call {index} must be an object", field=f"calls[{index}]")
    try:
        return CallSpec.model_validate(dict(spec)).to_call()
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise InputError(
            f"call {index}: '{location}' {first['msg']}",
            field=f"calls[{index}]",
        ) from None


class DelegationService:
    """
    EIP-7702 delegation and sponsorship engine.

    Stateless between calls: every operation reads nonces and fees from the
    chain client at call time. Nothing is queued or retried.

    Args:
        chain_client: Chain access (see eip7702.runtime.ChainClient)
        chain_id: Chain the service signs for
        config: Sponsorship policy (defaults to the holesky preset)
        clock: Source of unix time, injectable for tests
    """

    def __init__(
        self,
        chain_client: Optional[ChainClient],
        chain_id: Optional[int] = None,
        config: Optional[EngineConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.chain_client = chain_client
        self.chain_id = chain_id
        self.config = config or _default_config()

        self.signer = AuthorizationSigner(chain_client, chain_id, self.config, clock=clock)
        self.validator = AuthorizationValidator(chain_client, chain_id, self.config, clock=clock)
        self.builder = SponsoredTransactionBuilder(
            chain_client,
            chain_id,
            self.config,
            validator=self.validator,
        )

    @classmethod
    def connect(
        cls,
        chain_client: ChainClient,
        config: Optional[EngineConfig] = None,
        clock: Callable[[], float] = time.time,
    ) -> "DelegationService":
        """Create a service whose chain id is read from the client."""
        chain_id = chain_client.chain_id()
        _logger.info("Connected to chain %s", chain_id)
        return cls(chain_client, chain_id, config, clock=clock)

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    def sign_delegation(
        self,
        delegate_address: str,
        signer_key: Optional[PrivateKeyLike],
    ) -> Authorization:
        """Sign an authorization for a trusted delegate contract."""
        return self.signer.sign_delegation(delegate_address, signer_key)

    def validate_authorization(self, authorization: Optional[Authorization]) -> None:
        """Check freshness, chain id and nonce of an authorization."""
        self.validator.validate(authorization)

    def execute_sponsored(
        self,
        authorization: Optional[Authorization],
        calls: Sequence[Call],
        sponsor_key: Optional[PrivateKeyLike],
    ) -> SponsoredTransaction:
        """Build and sign (without broadcasting) a sponsored transaction."""
        return self.builder.build(authorization, calls, sponsor_key)

    def broadcast(self, transaction: SponsoredTransaction) -> str:
        """Submit a signed transaction through the chain client."""
        self._require_client()
        return self.chain_client.broadcast(transaction)

    # ------------------------------------------------------------------
    # Sponsored flows
    # ------------------------------------------------------------------

    def sponsor_eth(
        self,
        signer_key: Optional[PrivateKeyLike],
        sponsor_key: Optional[PrivateKeyLike],
        recipient: str,
        amount_ether: AmountLike,
    ) -> SponsorResult:
        """
        Send ETH from the signer to a recipient, gas paid by the sponsor.

        Args:
            signer_key: Signer (authority) private key
            sponsor_key: Sponsor private key
            recipient: ETH recipient
            amount_ether: Decimal ETH amount, e.g. "0.01"

        Returns:
            SponsorResult with the broadcast hash
        """
        built = self.build_send_eth_call(recipient, amount_ether)
        return self._sponsor_single(
            signer_key,
            sponsor_key,
            self._delegate_contract(),
            built,
            value=built.amount_base_units,
        )

    def sponsor_mint(
        self,
        signer_key: Optional[PrivateKeyLike],
        sponsor_key: Optional[PrivateKeyLike],
        recipient: str,
        amount: AmountLike,
        token_decimals: int = DEFAULT_TOKEN_DECIMALS,
    ) -> SponsorResult:
        """Mint the configured token to a recipient through the delegate."""
        built = self.build_mint_call(recipient, amount, token_decimals)
        return self._sponsor_single(signer_key, sponsor_key, self._delegate_contract(), built)

    def sponsor_transfer(
        self,
        signer_key: Optional[PrivateKeyLike],
        sponsor_key: Optional[PrivateKeyLike],
        recipient: str,
        amount: AmountLike,
        token_decimals: int = DEFAULT_TOKEN_DECIMALS,
    ) -> SponsorResult:
        """Transfer the configured token from the signer through the delegate."""
        built = self.build_transfer_call(recipient, amount, token_decimals)
        return self._sponsor_single(signer_key, sponsor_key, self._delegate_contract(), built)

    def sponsor_generic(
        self,
        signer_key: Optional[PrivateKeyLike],
        sponsor_key: Optional[PrivateKeyLike],
        delegate_address: str,
        function_signature: str,
        params: Optional[Sequence[Any]] = None,
    ) -> SponsorResult:
        """
        Call an arbitrary function of a trusted delegate on the signer's account.

        The delegate must still be on the allow-list; the signature and
        params go through encode_generic().
        """
        built = self.build_generic_call(function_signature, params)
        return self._sponsor_single(signer_key, sponsor_key, delegate_address, built)

    def sponsor_calls(
        self,
        authorization: Union[Authorization, Mapping[str, Any], None],
        call_specs: Sequence[CallSpecLike],
        sponsor_key: Optional[PrivateKeyLike],
    ) -> SponsorResult:
        """
        Sponsor a caller-supplied authorization and call list.

        Args:
            authorization: Authorization or its to_dict() form
            call_specs: CallSpec models or {"to", "data", "value"} dicts
            sponsor_key: Sponsor private key

        Returns:
            SponsorResult; call_data is the submitted transaction payload

        Raises:
            InputError: If the authorization or a call spec is malformed
        """
        if isinstance(authorization, Mapping):
            authorization = Authorization.from_dict(dict(authorization))

        calls = [_parse_call_spec(index, spec) for index, spec in enumerate(call_specs or [])]
        transaction = self.execute_sponsored(authorization, calls, sponsor_key)
        tx_hash = self.broadcast(transaction)

        return SponsorResult(
            tx_hash=tx_hash,
            authorization=authorization,
            call_data=to_hex(transaction.data),
            transaction=transaction,
            operation="sponsor",
            details={"calls": len(calls)},
        )

    # ------------------------------------------------------------------
    # Call-data builders (no chain access)
    # ------------------------------------------------------------------

    def build_send_eth_call(self, recipient: str, amount_ether: AmountLike) -> CallDataResult:
        """Build sendETH(address,uint256) call data for a decimal ETH amount."""
        amount_wei = ether_to_wei(amount_ether)
        data = encode_send_eth(recipient, amount_wei)
        return CallDataResult(
            call_data=to_hex(data),
            operation="sendETH",
            amount_base_units=amount_wei,
            details={"recipient": validate_address(recipient, "recipient"), "amount": str(amount_ether)},
        )

    def build_mint_call(
        self,
        recipient: str,
        amount: AmountLike,
        token_decimals: int = DEFAULT_TOKEN_DECIMALS,
    ) -> CallDataResult:
        """Build mint(address,address,uint256) call data for the configured token."""
        base_units = token_amount_to_base_units(amount, token_decimals)
        data = encode_mint(self._token_contract(), recipient, base_units)
        return CallDataResult(
            call_data=to_hex(data),
            operation="mint",
            amount_base_units=base_units,
            details={"token": self._token_contract(), "recipient": validate_address(recipient, "recipient")},
        )

    def build_transfer_call(
        self,
        recipient: str,
        amount: AmountLike,
        token_decimals: int = DEFAULT_TOKEN_DECIMALS,
    ) -> CallDataResult:
        """Build transfer(address,address,uint256) call data for the configured token."""
        base_units = token_amount_to_base_units(amount, token_decimals)
        data = encode_transfer(self._token_contract(), recipient, base_units)
        return CallDataResult(
            call_data=to_hex(data),
            operation="transfer",
            amount_base_units=base_units,
            details={"token": self._token_contract(), "recipient": validate_address(recipient, "recipient")},
        )

    def build_generic_call(
        self,
        function_signature: str,
        params: Optional[Sequence[Any]] = None,
    ) -> CallDataResult:
        """Build call data for an arbitrary signature via encode_generic()."""
        data = encode_generic(function_signature, list(params or []))
        return CallDataResult(
            call_data=to_hex(data),
            operation="generic",
            details={"function_signature": function_signature},
        )

    def contracts_info(self) -> Dict[str, Any]:
        """Contracts and network this service is configured for."""
        return {
            "token_contract": self.config.token_contract,
            "delegate_contract": self.config.delegate_contract,
            "network": self.config.network_name,
            "chain_id": self.chain_id,
        }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _sponsor_single(
        self,
        signer_key: Optional[PrivateKeyLike],
        sponsor_key: Optional[PrivateKeyLike],
        delegate_address: str,
        built: CallDataResult,
        value: Optional[int] = None,
    ) -> SponsorResult:
        # Both keys are checked before any chain access
        signer: LocalAccount = load_account(signer_key, "signer")
        sponsor: LocalAccount = load_account(sponsor_key, "sponsor")
        self._require_client()

        authorization = self.sign_delegation(delegate_address, signer)

        # The authority runs the delegate's code, so the call targets itself
        call = Call(
            to=authorization.signer_address,
            data=from_hex(built.call_data),
            value=value or 0,
        )
        transaction = self.execute_sponsored(authorization, [call], sponsor)
        tx_hash = self.broadcast(transaction)

        _logger.info(
            "Sponsored %s for %s by %s: %s",
            built.operation,
            short_address(signer.address),
            short_address(sponsor.address),
            tx_hash,
        )

        details: Dict[str, Any] = dict(built.details)
        if built.amount_base_units is not None:
            details["amount_base_units"] = str(built.amount_base_units)
        return SponsorResult(
            tx_hash=tx_hash,
            authorization=authorization,
            call_data=built.call_data,
            transaction=transaction,
            operation=built.operation,
            details=details,
        )

    def _require_client(self) -> None:
        if self.chain_client is None:
            raise ServiceNotInitializedError("chain client")
        if self.chain_id is None:
            raise ServiceNotInitializedError("chain id")

    def _delegate_contract(self) -> str:
        if not self.config.delegate_contract:
            raise ServiceNotInitializedError("delegate contract")
        return self.config.delegate_contract

    def _token_contract(self) -> str:
        if not self.config.token_contract:
            raise ServiceNotInitializedError("token contract")
        return self.config.token_contract


__all__: List[str] = [
    "DelegationService",
    "SponsorResult",
    "CallDataResult",
]
