"""
Delegation-specific exceptions.

Three families, matching how callers should react:

- InputError: the caller sent something malformed. Fix the request.
- TrustError: the request is well-formed but must not be executed
  (untrusted delegate, stale or replayed authorization, value cap).
  Re-authorize rather than retry.
- ChainError: the chain client failed. The whole flow must be re-driven,
  since a stale nonce read makes partial state unsafe to reuse.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from eip7702.errors.base import DelegationError


# =============================================================================
# Input errors
# =============================================================================


class InputError(DelegationError):
    """Base exception for malformed caller input."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "INPUT_ERROR",
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, code=code, details=details)
        self.field = field


class InvalidAddressError(InputError):
    """
    Raised when an Ethereum address is malformed.

    Example:
        >>> raise InvalidAddressError("0xinvalid", field="recipient")
    """

    def __init__(
        self,
        address: str,
        *,
        field: str = "address",
        reason: Optional[str] = None,
    ) -> None:
        message = f"Invalid {field}: {address}"
        if reason:
            message += f" ({reason})"
        super().__init__(
            message,
            code="INVALID_ADDRESS",
            field=field,
            details={"address": address},
        )
        self.address = address
        self.reason = reason


class ZeroAddressError(InputError):
    """Raised when the zero address is used where a real target is required."""

    def __init__(self, field: str = "address", *, index: Optional[int] = None) -> None:
        message = f"{field} is the zero address"
        details: Dict[str, Any] = {}
        if index is not None:
            message = f"call {index} has zero address"
            details["index"] = index
        super().__init__(message, code="ZERO_ADDRESS", field=field, details=details)
        self.index = index


class InvalidAmountError(InputError):
    """Raised when an amount cannot be parsed or is out of range."""

    def __init__(
        self,
        amount: str,
        *,
        field: str = "amount",
        reason: Optional[str] = None,
    ) -> None:
        message = f"Invalid {field}: {amount}"
        if reason:
            message += f" ({reason})"
        super().__init__(
            message,
            code="INVALID_AMOUNT",
            field=field,
            details={"amount": amount},
        )
        self.amount = amount
        self.reason = reason


class MissingKeyError(InputError):
    """Raised when a signer or sponsor key was not supplied."""

    def __init__(self, role: str) -> None:
        super().__init__(
            f"{role} private key is missing",
            code="MISSING_KEY",
            field=f"{role}_key",
        )
        self.role = role


class InvalidKeyError(InputError):
    """Raised when a private key cannot be parsed. The key is never echoed."""

    def __init__(self, role: str) -> None:
        super().__init__(
            f"Invalid {role} private key format (key not shown for security)",
            code="INVALID_KEY",
            field=f"{role}_key",
        )
        self.role = role


class EmptyCallListError(InputError):
    """Raised when a sponsored execution is requested with no calls."""

    def __init__(self) -> None:
        super().__init__("no calls provided", code="EMPTY_CALL_LIST", field="calls")


class EncodingError(InputError):
    """
    Raised when call data cannot be ABI-encoded.

    Attributes:
        index: Position of the offending parameter or call, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if index is not None:
            details["index"] = index
        super().__init__(message, code="ENCODING_ERROR", details=details)
        self.index = index


# =============================================================================
# Trust errors
# =============================================================================


class TrustError(DelegationError):
    """Base exception for security-relevant rejections. Never retried."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "TRUST_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)


class UntrustedDelegateError(TrustError):
    """Raised when the delegate contract is not on the allow-list."""

    def __init__(self, delegate_address: str) -> None:
        super().__init__(
            f"unknown/untrusted contract: {delegate_address}",
            code="UNTRUSTED_DELEGATE",
            details={"delegate_address": delegate_address},
        )
        self.delegate_address = delegate_address


class MissingAuthorizationError(TrustError):
    """Raised when no (or an uninitialized) authorization is supplied."""

    def __init__(self) -> None:
        super().__init__("authorization is missing", code="AUTHORIZATION_MISSING")


class AuthorizationExpiredError(TrustError):
    """Raised when an authorization is older than the freshness window."""

    def __init__(self, age_seconds: int, max_age_seconds: int) -> None:
        super().__init__(
            f"authorization too old: {age_seconds}s (max {max_age_seconds}s)",
            code="AUTHORIZATION_EXPIRED",
            details={"age_seconds": age_seconds, "max_age_seconds": max_age_seconds},
        )
        self.age_seconds = age_seconds
        self.max_age_seconds = max_age_seconds


class ChainIdMismatchError(TrustError):
    """Raised when an authorization targets a different chain."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"chain ID mismatch: expected {expected}, got {actual}",
            code="CHAIN_ID_MISMATCH",
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class NonceMismatchError(TrustError):
    """Raised when an authorization nonce no longer matches the signer's on-chain nonce."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"nonce mismatch: expected {expected}, got {actual}",
            code="NONCE_MISMATCH",
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class ValueCapExceededError(TrustError):
    """Raised when the summed call value exceeds the per-transaction cap."""

    def __init__(self, total_value: int, max_value: int) -> None:
        super().__init__(
            f"total value too high: {total_value} (max {max_value})",
            code="VALUE_CAP_EXCEEDED",
            details={"total_value": str(total_value), "max_value": str(max_value)},
        )
        self.total_value = total_value
        self.max_value = max_value


# =============================================================================
# Chain errors
# =============================================================================


class ChainError(DelegationError):
    """Base exception for chain client failures."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "CHAIN_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)


class RpcError(ChainError):
    """Raised when an RPC read (nonce, fee tip, chain id) fails."""

    def __init__(self, method: str, reason: str) -> None:
        super().__init__(
            f"RPC call {method} failed: {reason}",
            code="RPC_ERROR",
            details={"method": method},
        )
        self.method = method
        self.reason = reason


class BroadcastError(ChainError):
    """Raised when a signed transaction is rejected by the node."""

    def __init__(self, reason: str, *, tx_hash: Optional[str] = None) -> None:
        details: Dict[str, Any] = {}
        if tx_hash:
            details["tx_hash"] = tx_hash
        super().__init__(
            f"Failed to send transaction: {reason}",
            code="BROADCAST_FAILED",
            details=details,
        )
        self.reason = reason
        self.tx_hash = tx_hash
