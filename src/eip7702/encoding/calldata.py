"""
Call-data encoding for the delegate contract.

The delegate contract exposes four entry points:

    mint(address token, address to, uint256 amount)
    transfer(address token, address to, uint256 amount)
    sendETH(address to, uint256 amount)
    execute((bytes data, address to, uint256 value)[] calls)

The first three are fixed-layout (selector + static words). execute() is the
multicall and uses the standard dynamic array / tuple layout. encode_generic()
covers arbitrary single-word signatures and routes the execute() signature to
its dedicated path.

Example:
    >>> data = encode_mint(token, recipient, 10**18)
    >>> len(data)
    100
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Sequence

from eth_abi import encode
from eth_utils import keccak
from pydantic import ValidationError as PydanticValidationError

from eip7702.constants import (
    ABI_SELECTOR_LENGTH,
    EXECUTE_CALLS_TYPE,
    EXECUTE_SIGNATURE,
    MINT_SIGNATURE,
    SEND_ETH_SIGNATURE,
    TRANSFER_SIGNATURE,
)
from eip7702.encoding.params import encode_words
from eip7702.errors import EncodingError
from eip7702.types.call import Call, CallSpec
from eip7702.utils.validation import parse_hex_bytes, validate_address, validate_amount

_SIGNATURE_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*\((.*)\)$")
_MULTICALL_FIELDS = ("data", "to", "value")
_DYNAMIC_TYPES = frozenset({"bytes", "string"})


def function_selector(signature: str) -> bytes:
    """First 4 bytes of keccak256 over the canonical signature text."""
    return keccak(text=signature)[:ABI_SELECTOR_LENGTH]


MINT_SELECTOR = function_selector(MINT_SIGNATURE)
TRANSFER_SELECTOR = function_selector(TRANSFER_SIGNATURE)
SEND_ETH_SELECTOR = function_selector(SEND_ETH_SIGNATURE)
EXECUTE_SELECTOR = function_selector(EXECUTE_SIGNATURE)


def to_hex(data: bytes) -> str:
    """Render call data as a 0x-prefixed hex string."""
    return "0x" + data.hex()


def from_hex(text: str) -> bytes:
    """Decode 0x-prefixed call data. "0x" and "" decode to empty bytes."""
    return parse_hex_bytes(text, "data")


def _encode_token_call(selector: bytes, token: str, to: str, amount: int) -> bytes:
    encoded_params = encode(
        ["address", "address", "uint256"],
        [
            validate_address(token, "token"),
            validate_address(to, "to"),
            validate_amount(amount),
        ],
    )
    return selector + encoded_params


def encode_mint(token: str, to: str, amount: int) -> bytes:
    """
    Encode mint(address,address,uint256) on the delegate contract.

    Args:
        token: Token contract the delegate mints from
        to: Recipient
        amount: Amount in token base units

    Returns:
        100 bytes of call data
    """
    return _encode_token_call(MINT_SELECTOR, token, to, amount)


def encode_transfer(token: str, to: str, amount: int) -> bytes:
    """Encode transfer(address,address,uint256) on the delegate contract."""
    return _encode_token_call(TRANSFER_SELECTOR, token, to, amount)


def encode_send_eth(to: str, amount: int) -> bytes:
    """Encode sendETH(address,uint256) on the delegate contract."""
    encoded_params = encode(
        ["address", "uint256"],
        [validate_address(to, "to"), validate_amount(amount)],
    )
    return SEND_ETH_SELECTOR + encoded_params


def encode_multicall(calls: Sequence[Call]) -> bytes:
    """
    Encode execute((bytes,address,uint256)[]) for a batch of calls.

    Order is preserved. An empty sequence encodes an empty array.

    Args:
        calls: Calls to batch

    Returns:
        Call data for the delegate's execute()
    """
    encoded_calls = [
        (call.data, validate_address(call.to, "to"), validate_amount(call.value, "value"))
        for call in calls
    ]
    return EXECUTE_SELECTOR + encode([EXECUTE_CALLS_TYPE], [encoded_calls])


def parse_multicall_entries(entries: Any) -> list[Call]:
    """
    Validate the loosely-typed execute() argument into typed calls.

    Each entry must be an object with string fields "data" (hex, "0x" or ""
    for empty), "to" (hex address) and "value" (base-10 integer).

    Raises:
        EncodingError: Naming the offending index
    """
    if not isinstance(entries, (list, tuple)):
        raise EncodingError("execute parameter must be an array")

    calls: list[Call] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise EncodingError(f"call {index} must be an object", index=index)

        missing = [name for name in _MULTICALL_FIELDS if name not in entry]
        if missing:
            raise EncodingError(
                f"call {index}: missing field(s) {', '.join(missing)}",
                index=index,
            )

        try:
            spec = CallSpec.model_validate(dict(entry))
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            raise EncodingError(
                f"call {index}: '{field}' {first['msg']}",
                index=index,
            ) from None
        calls.append(spec.to_call())
    return calls


def encode_multicall_params(params: Sequence[Any]) -> bytes:
    """Encode execute() from its single loosely-typed array parameter."""
    if len(params) != 1:
        raise EncodingError("execute expects exactly 1 parameter (array of calls)")
    return encode_multicall(parse_multicall_entries(params[0]))


def signature_types(function_signature: str) -> Optional[list[str]]:
    """
    Split a signature into its top-level parameter types.

    Returns:
        Parameter types, or None if the text is not name(types)
    """
    match = _SIGNATURE_PATTERN.match(function_signature.strip())
    if not match:
        return None
    inner = match.group(1).strip()
    if not inner:
        return []

    types: list[str] = []
    depth = 0
    start = 0
    for position, char in enumerate(inner):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            types.append(inner[start:position].strip())
            start = position + 1
    types.append(inner[start:].strip())
    return types


def signature_arity(function_signature: str) -> Optional[int]:
    """
    Count the top-level parameter types of a signature.

    Returns:
        Number of parameters, or None if the text is not name(types)
    """
    types = signature_types(function_signature)
    return None if types is None else len(types)


def _check_single_word_type(index: int, abi_type: str) -> None:
    if abi_type.endswith("]"):
        raise EncodingError(
            f"parameter {index}: arrays not supported in generic encoding, use specific functions",
            index=index,
            details={"type": abi_type},
        )
    if abi_type.startswith("(") or abi_type.startswith("tuple"):
        raise EncodingError(
            f"parameter {index}: tuples not supported in generic encoding, use specific functions",
            index=index,
            details={"type": abi_type},
        )
    if abi_type in _DYNAMIC_TYPES:
        raise EncodingError(
            f"parameter {index}: dynamic type {abi_type} not supported in generic encoding",
            index=index,
            details={"type": abi_type},
        )


def encode_generic(function_signature: str, params: Sequence[Any]) -> bytes:
    """
    Encode a call to an arbitrary function signature.

    Every parameter becomes exactly one 32-byte word (see
    eip7702.encoding.params). Arrays, tuples and dynamic bytes/string are
    rejected; the execute() multicall signature is routed to its dedicated
    encoder instead.

    Args:
        function_signature: Canonical signature, e.g. "transfer(address,uint256)"
        params: Positional parameters

    Returns:
        Selector + encoded words

    Raises:
        EncodingError: On unsupported or malformed parameters, or a count
            that does not match the signature
    """
    if not isinstance(function_signature, str) or not function_signature:
        raise EncodingError("function signature is required")
    if params is None:
        params = []

    if function_signature == EXECUTE_SIGNATURE:
        return encode_multicall_params(params)

    abi_types = signature_types(function_signature)
    if abi_types is not None:
        if len(abi_types) != len(params):
            raise EncodingError(
                f"{function_signature} expects {len(abi_types)} parameter(s), got {len(params)}",
                details={"expected": len(abi_types), "actual": len(params)},
            )
        for index, abi_type in enumerate(abi_types):
            _check_single_word_type(index, abi_type)

    return function_selector(function_signature) + encode_words(params)
