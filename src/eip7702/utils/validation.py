"""
Validation utilities for the EIP-7702 sponsorship engine.

Provides input validation functions for:
- Ethereum addresses (format, zero address)
- Wei amounts
- Hex byte strings
- Private keys (signer / sponsor)

All validation functions raise InputError subclasses on failure.
"""

from __future__ import annotations

from typing import Optional, Union

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import is_hex_address, to_checksum_address

from eip7702.constants import MAX_UINT256, ZERO_ADDRESS
from eip7702.errors import (
    InputError,
    InvalidAddressError,
    InvalidAmountError,
    InvalidKeyError,
    MissingKeyError,
    ZeroAddressError,
)

PrivateKeyLike = Union[str, bytes, LocalAccount]


def is_valid_address(address: object) -> bool:
    """
    Check whether a value is a 20-byte hex address (with or without 0x).

    Args:
        address: Value to check

    Returns:
        True if the value is a hex address string
    """
    return isinstance(address, str) and is_hex_address(address)


def is_zero_address(address: str) -> bool:
    """Check whether an address is the zero address."""
    return int(address, 16) == 0


def validate_address(
    address: str,
    field_name: str = "address",
    allow_zero: bool = True,
) -> str:
    """
    Validate Ethereum address format.

    Args:
        address: Address to validate
        field_name: Field name for error messages
        allow_zero: Whether the zero address is acceptable

    Returns:
        Checksummed address

    Raises:
        InvalidAddressError: If address is invalid
        ZeroAddressError: If address is zero and allow_zero is False
    """
    if not address:
        raise InvalidAddressError("", field=field_name, reason=f"{field_name} is required")

    if not isinstance(address, str):
        raise InvalidAddressError(
            str(address),
            field=field_name,
            reason=f"{field_name} must be a string",
        )

    if not is_hex_address(address):
        raise InvalidAddressError(
            address,
            field=field_name,
            reason="must be 40 hex characters, optionally 0x-prefixed",
        )

    checksummed = to_checksum_address(address)
    if not allow_zero and checksummed == ZERO_ADDRESS:
        raise ZeroAddressError(field_name)

    return checksummed


def validate_amount(
    amount: Union[int, str],
    field_name: str = "amount",
    max_amount: int = MAX_UINT256,
) -> int:
    """
    Validate a base-unit (wei) amount.

    Args:
        amount: Amount as integer or base-10 string
        field_name: Field name for error messages
        max_amount: Maximum allowed amount (default: uint256 max)

    Returns:
        Validated amount as integer

    Raises:
        InvalidAmountError: If amount is invalid
    """
    if isinstance(amount, bool):
        raise InvalidAmountError(str(amount), field=field_name, reason="must be a number")

    try:
        amount_int = int(amount, 10) if isinstance(amount, str) else int(amount)
    except (ValueError, TypeError):
        raise InvalidAmountError(
            str(amount),
            field=field_name,
            reason="must be a valid base-10 integer",
        ) from None

    if amount_int < 0:
        raise InvalidAmountError(str(amount_int), field=field_name, reason="cannot be negative")

    if amount_int > max_amount:
        raise InvalidAmountError(
            str(amount_int),
            field=field_name,
            reason=f"exceeds maximum allowed ({max_amount})",
        )

    return amount_int


def parse_hex_bytes(value: str, field_name: str = "data") -> bytes:
    """
    Decode a hex byte string. "0x" and "" decode to empty bytes.

    Args:
        value: Hex string, optionally 0x-prefixed
        field_name: Field name for error messages

    Returns:
        Decoded bytes

    Raises:
        InputError: If value is not valid hex
    """
    if not isinstance(value, str):
        raise InputError(f"{field_name} must be a hex string", field=field_name)

    stripped = value[2:] if value[:2] in ("0x", "0X") else value
    try:
        return bytes.fromhex(stripped)
    except ValueError:
        raise InputError(f"{field_name} is not valid hex: {value}", field=field_name) from None


def load_account(key: Optional[PrivateKeyLike], role: str) -> LocalAccount:
    """
    Resolve a private key into a local account.

    Args:
        key: Hex private key (with or without 0x), raw 32 bytes, or an account
        role: "signer" or "sponsor", used in error messages

    Returns:
        LocalAccount for signing

    Raises:
        MissingKeyError: If no key was supplied
        InvalidKeyError: If the key cannot be parsed (key is not echoed)
    """
    if key is None or (isinstance(key, (str, bytes)) and not key):
        raise MissingKeyError(role)

    if isinstance(key, LocalAccount):
        return key

    # Sanitize private key errors to prevent key leakage in stack traces
    try:
        return Account.from_key(key)
    except Exception:
        raise InvalidKeyError(role) from None
