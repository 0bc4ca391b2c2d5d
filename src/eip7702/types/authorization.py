"""
EIP-7702 authorization record.

An Authorization binds one signer (EOA) to one delegate contract for one
transaction. It is produced once by the AuthorizationSigner and only read
afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from eth_utils import to_checksum_address

from eip7702.constants import MAX_UINT64, ZERO_ADDRESS
from eip7702.errors import InputError
from eip7702.utils.validation import parse_hex_bytes, validate_address


@dataclass(frozen=True)
class Authorization:
    """
    Signed EIP-7702 authorization.

    Attributes:
        chain_id: Chain the delegation is valid on
        delegate_address: Contract the signer's code will point to
        nonce: Signer's account nonce at signing time
        v: Recovery id, normalized to 0/1 (yParity)
        r: Signature r (32 bytes)
        s: Signature s (32 bytes)
        signer_address: EOA granting the delegation
        created_at: Unix time of signing, used only for local freshness checks
    """

    chain_id: int
    delegate_address: str
    nonce: int
    v: int
    r: bytes
    s: bytes
    signer_address: str
    created_at: int

    @property
    def is_initialized(self) -> bool:
        """False for a zero-valued record (no signer or empty signature)."""
        if not self.signer_address or to_checksum_address(self.signer_address) == ZERO_ADDRESS:
            return False
        return any(self.r) and any(self.s)

    def to_authorization_list_entry(self) -> Dict[str, Any]:
        """Set-code authorization tuple (chainId, address, nonce, yParity, r, s)."""
        return {
            "chainId": self.chain_id,
            "address": self.delegate_address,
            "nonce": self.nonce,
            "yParity": self.v,
            "r": int.from_bytes(self.r, "big"),
            "s": int.from_bytes(self.s, "big"),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON form returned to callers."""
        return {
            "chain_id": self.chain_id,
            "address": self.delegate_address,
            "nonce": self.nonce,
            "v": self.v,
            "r": "0x" + self.r.hex(),
            "s": "0x" + self.s.hex(),
            "signer": self.signer_address,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Authorization":
        """
        Rebuild an authorization submitted by a caller.

        Args:
            data: Dict in the to_dict() shape

        Returns:
            Authorization

        Raises:
            InputError: If a field is missing or malformed
        """
        required = ("chain_id", "address", "nonce", "v", "r", "s", "signer", "created_at")
        missing = [name for name in required if name not in data]
        if missing:
            raise InputError(
                f"authorization is missing fields: {', '.join(missing)}",
                field="authorization",
                details={"missing": missing},
            )

        r = parse_hex_bytes(data["r"], "authorization.r")
        s = parse_hex_bytes(data["s"], "authorization.s")
        if len(r) != 32 or len(s) != 32:
            raise InputError("authorization r and s must be 32 bytes", field="authorization")

        try:
            chain_id = int(data["chain_id"])
            nonce = int(data["nonce"])
            v = int(data["v"])
            created_at = int(data["created_at"])
        except (TypeError, ValueError):
            raise InputError(
                "authorization chain_id, nonce, v and created_at must be integers",
                field="authorization",
            ) from None

        if v not in (0, 1):
            raise InputError(
                f"authorization v must be 0 or 1 (yParity), got {v}",
                field="authorization",
            )
        for name, number in (("chain_id", chain_id), ("nonce", nonce)):
            if not 0 <= number <= MAX_UINT64:
                raise InputError(
                    f"authorization {name} must be between 0 and 2**64 - 1, got {number}",
                    field="authorization",
                    details={name: number},
                )

        return cls(
            chain_id=chain_id,
            delegate_address=validate_address(data["address"], "authorization.address"),
            nonce=nonce,
            v=v,
            r=r,
            s=s,
            signer_address=validate_address(data["signer"], "authorization.signer"),
            created_at=created_at,
        )
