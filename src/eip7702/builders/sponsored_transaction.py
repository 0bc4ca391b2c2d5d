"""
Sponsored Transaction Builder.

Combines a validated authorization, the calls to run under the signer's
delegated code, and a sponsor key into a signed set-code (type 0x04)
transaction. The sponsor only pays gas:

- ``to`` is always the signer, whose account runs the delegate's code
- ``value`` is always 0; value moves through the delegate's own logic
- ``authorizationList`` carries exactly the one authorization

Gas policy is a static heuristic, not a simulation:

- one call: its explicit gas_limit, else default_gas_limit (1,000,000)
- n calls: multicall_base_gas + multicall_per_call_gas * n
- fee cap = fee tip * fee_cap_multiplier, the tip falling back to
  default_fee_tip_wei (2 gwei) when the suggestion fails

Example:
    >>> builder = SponsoredTransactionBuilder(chain_client, chain_id=17000, config=config)
    >>> tx = builder.build(authorization, [Call(to=signer, data=call_data)], sponsor_key)
    >>> chain_client.broadcast(tx)
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

from eth_utils import encode_hex

from eip7702.config import EngineConfig
from eip7702.constants import SET_CODE_TX_TYPE, ZERO_ADDRESS
from eip7702.encoding.calldata import encode_multicall
from eip7702.errors import (
    ChainError,
    EmptyCallListError,
    InvalidAmountError,
    ServiceNotInitializedError,
    ValueCapExceededError,
    ZeroAddressError,
)
from eip7702.protocol.validator import AuthorizationValidator
from eip7702.runtime.chain_client import ChainClient
from eip7702.types.authorization import Authorization
from eip7702.types.call import Call
from eip7702.types.transaction import SponsoredTransaction
from eip7702.utils.logging import get_logger, short_address
from eip7702.utils.validation import PrivateKeyLike, load_account, validate_address

_logger = get_logger(__name__)


class SponsoredTransactionBuilder:
    """Builds and signs sponsor-paid EIP-7702 transactions. Never broadcasts."""

    def __init__(
        self,
        chain_client: Optional[ChainClient],
        chain_id: Optional[int],
        config: Optional[EngineConfig] = None,
        validator: Optional[AuthorizationValidator] = None,
    ):
        self.chain_client = chain_client
        self.chain_id = chain_id
        self.config = config or EngineConfig()
        self.validator = validator or AuthorizationValidator(chain_client, chain_id, self.config)

    # ------------------------------------------------------------------
    # Policy
    # ------------------------------------------------------------------

    def validate_calls(self, calls: Sequence[Call]) -> None:
        """
        Check the call set before anything is signed.

        Raises:
            EmptyCallListError: If no calls are given
            ZeroAddressError: If a call targets the zero address (index named)
            InvalidAmountError: If a call value is negative
            ValueCapExceededError: If the summed value exceeds max_total_value_wei
        """
        if not calls:
            raise EmptyCallListError()

        total_value = 0
        for index, call in enumerate(calls):
            if validate_address(call.to, f"calls[{index}].to") == ZERO_ADDRESS:
                raise ZeroAddressError("to", index=index)
            value = call.value or 0
            if value < 0:
                raise InvalidAmountError(str(value), field=f"calls[{index}].value", reason="cannot be negative")
            total_value += value

        # Protection against a sponsor inflating value transfers
        if total_value > self.config.max_total_value_wei:
            raise ValueCapExceededError(total_value, self.config.max_total_value_wei)

    def gas_limit_for(self, calls: Sequence[Call]) -> int:
        """Static gas limit for a call set."""
        if len(calls) == 1:
            return calls[0].gas_limit or self.config.default_gas_limit
        return self.config.multicall_base_gas + self.config.multicall_per_call_gas * len(calls)

    def payload_for(self, calls: Sequence[Call]) -> bytes:
        """Raw data for one call, the execute() multicall for several."""
        if len(calls) == 1:
            return calls[0].data
        return encode_multicall(calls)

    def fee_params(self) -> Tuple[int, int]:
        """
        Return (max_priority_fee_per_gas, max_fee_per_gas).

        A failed tip suggestion is the one chain error recovered from here.
        """
        try:
            tip = self.chain_client.suggest_fee_tip()
        except ChainError as exc:
            tip = self.config.default_fee_tip_wei
            _logger.warning("Fee tip suggestion failed (%s), using fallback %s wei", exc.message, tip)
        return tip, tip * self.config.fee_cap_multiplier

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(
        self,
        authorization: Optional[Authorization],
        calls: Sequence[Call],
        sponsor_key: Optional[PrivateKeyLike],
    ) -> SponsoredTransaction:
        """
        Assemble and sign the sponsored set-code transaction.

        Args:
            authorization: Signer's authorization (validated here)
            calls: Ordered, non-empty calls
            sponsor_key: Sponsor's private key (hex/bytes) or LocalAccount

        Returns:
            Signed SponsoredTransaction ready for ChainClient.broadcast()

        Raises:
            InputError: Malformed sponsor key or call set
            TrustError: Authorization or value-cap rejection
            ChainError: Nonce read failure
        """
        if self.chain_client is None:
            raise ServiceNotInitializedError("chain client")
        if self.chain_id is None:
            raise ServiceNotInitializedError("chain id")

        sponsor = load_account(sponsor_key, "sponsor")
        calls = list(calls or [])

        self.validator.validate(authorization)
        self.validate_calls(calls)

        sponsor_nonce = self.chain_client.nonce_at(sponsor.address)
        tip, fee_cap = self.fee_params()
        gas_limit = self.gas_limit_for(calls)
        data = self.payload_for(calls)

        _logger.debug(
            "Gas for %s call(s): limit %s, tip %s, cap %s",
            len(calls),
            gas_limit,
            tip,
            fee_cap,
        )

        tx: Dict[str, Any] = {
            "type": SET_CODE_TX_TYPE,
            "chainId": self.chain_id,
            "nonce": sponsor_nonce,
            "maxPriorityFeePerGas": tip,
            "maxFeePerGas": fee_cap,
            "gas": gas_limit,
            # Always the signer: its account now runs the delegate's code
            "to": authorization.signer_address,
            "value": 0,
            "data": data,
            "accessList": [],
            "authorizationList": [authorization.to_authorization_list_entry()],
        }

        signed = sponsor.sign_transaction(tx)
        sponsored = SponsoredTransaction(
            chain_id=self.chain_id,
            nonce=sponsor_nonce,
            max_priority_fee_per_gas=tip,
            max_fee_per_gas=fee_cap,
            gas=gas_limit,
            to=authorization.signer_address,
            value=0,
            data=data,
            authorization_list=(authorization,),
            sponsor_address=sponsor.address,
            raw_transaction=bytes(signed.raw_transaction),
            tx_hash=encode_hex(signed.hash),
        )

        _logger.info(
            "Built sponsored transaction %s: sponsor %s, authority %s, %s call(s)",
            sponsored.tx_hash,
            short_address(sponsor.address),
            short_address(authorization.signer_address),
            len(calls),
        )
        return sponsored
