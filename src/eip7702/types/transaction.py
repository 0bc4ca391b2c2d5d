"""Signed set-code transaction produced by the sponsored-transaction builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from eip7702.constants import SET_CODE_TX_TYPE
from eip7702.types.authorization import Authorization


@dataclass(frozen=True)
class SponsoredTransaction:
    """
    A sponsor-signed EIP-7702 (type 0x04) transaction, ready for broadcast.

    Attributes:
        chain_id: Chain the transaction is signed for
        nonce: Sponsor's account nonce
        max_priority_fee_per_gas: Fee tip cap
        max_fee_per_gas: Fee cap (tip * multiplier)
        gas: Gas limit
        to: Always the signer (authority) address
        value: Always 0; value moves through the delegate's own logic
        data: Encoded call payload
        authorization_list: Exactly one authorization
        sponsor_address: Account paying for gas
        raw_transaction: Signed 0x04-prefixed envelope
        tx_hash: Keccak-256 of raw_transaction (0x-hex)
    """

    chain_id: int
    nonce: int
    max_priority_fee_per_gas: int
    max_fee_per_gas: int
    gas: int
    to: str
    value: int
    data: bytes
    authorization_list: Tuple[Authorization, ...]
    sponsor_address: str
    raw_transaction: bytes
    tx_hash: str

    @property
    def type(self) -> int:
        return SET_CODE_TX_TYPE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "type": hex(self.type),
            "chainId": self.chain_id,
            "nonce": self.nonce,
            "maxPriorityFeePerGas": self.max_priority_fee_per_gas,
            "maxFeePerGas": self.max_fee_per_gas,
            "gas": self.gas,
            "to": self.to,
            "value": self.value,
            "data": "0x" + self.data.hex(),
            "authorizationList": [auth.to_dict() for auth in self.authorization_list],
            "sponsor": self.sponsor_address,
            "hash": self.tx_hash,
            "raw": "0x" + self.raw_transaction.hex(),
        }
