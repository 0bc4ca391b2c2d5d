"""
Single-word ABI parameters for the generic call-data path.

Each supported parameter kind is its own variant with one encode() producing
exactly one 32-byte word:

- AddressWord: 20-byte address, left-padded
- UintWord: uint256
- IntWord: int256 (two's complement)
- BoolWord: 0 or 1
- BytesWord: up to 32 raw bytes, left-padded
- DecimalWord: base-10 string, encoded as uint256 (or int256 when negative)

coerce_param() maps loosely-typed input (JSON values, Python ints, hex
strings) onto one of these variants. Arrays, tuples and dynamic types are not
supported here; only the hard-coded multicall path encodes arrays.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

from eth_utils import is_hex_address

from eip7702.constants import ABI_WORD_LENGTH, MAX_INT256, MAX_UINT256, MIN_INT256
from eip7702.errors import EncodingError

_DECIMAL_PATTERN = re.compile(r"[+-]?[0-9]+")


class AbiWord(ABC):
    """One statically-sized ABI parameter."""

    @abstractmethod
    def encode(self) -> bytes:
        """Return the 32-byte ABI word."""


@dataclass(frozen=True)
class AddressWord(AbiWord):
    address: str

    def __post_init__(self) -> None:
        if not isinstance(self.address, str) or not is_hex_address(self.address):
            raise EncodingError(f"invalid address: {self.address}")

    def encode(self) -> bytes:
        return bytes.fromhex(self.address[-40:]).rjust(ABI_WORD_LENGTH, b"\x00")


@dataclass(frozen=True)
class UintWord(AbiWord):
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise EncodingError(f"uint256 value must be an integer, got {type(self.value).__name__}")
        if self.value < 0 or self.value > MAX_UINT256:
            raise EncodingError(f"uint256 out of range: {self.value}")

    def encode(self) -> bytes:
        return self.value.to_bytes(ABI_WORD_LENGTH, "big")


@dataclass(frozen=True)
class IntWord(AbiWord):
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise EncodingError(f"int256 value must be an integer, got {type(self.value).__name__}")
        if self.value < MIN_INT256 or self.value > MAX_INT256:
            raise EncodingError(f"int256 out of range: {self.value}")

    def encode(self) -> bytes:
        return self.value.to_bytes(ABI_WORD_LENGTH, "big", signed=True)


@dataclass(frozen=True)
class BoolWord(AbiWord):
    value: bool

    def encode(self) -> bytes:
        return (1 if self.value else 0).to_bytes(ABI_WORD_LENGTH, "big")


@dataclass(frozen=True)
class BytesWord(AbiWord):
    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) > ABI_WORD_LENGTH:
            raise EncodingError(
                f"hex data longer than one word ({len(self.data)} bytes); "
                "dynamic bytes are not supported in generic encoding"
            )

    def encode(self) -> bytes:
        return bytes(self.data).rjust(ABI_WORD_LENGTH, b"\x00")


@dataclass(frozen=True)
class DecimalWord(AbiWord):
    text: str

    def __post_init__(self) -> None:
        if not _DECIMAL_PATTERN.fullmatch(self.text):
            raise EncodingError(f"invalid decimal string: {self.text}")
        # Range check up front so encode() cannot fail
        self._as_word()

    def _as_word(self) -> AbiWord:
        number = int(self.text, 10)
        return UintWord(number) if number >= 0 else IntWord(number)

    def encode(self) -> bytes:
        return self._as_word().encode()


def _coerce_string(value: str) -> AbiWord:
    # Order matters: a 40-digit decimal string is also a valid hex address
    if is_hex_address(value):
        return AddressWord(value)
    if _DECIMAL_PATTERN.fullmatch(value):
        return DecimalWord(value)
    if value.startswith("0x"):
        try:
            data = bytes.fromhex(value[2:])
        except ValueError:
            raise EncodingError(f"invalid hex data: {value}") from None
        return BytesWord(data)
    raise EncodingError(f"unsupported string format: {value}")


def coerce_param(value: Any) -> AbiWord:
    """
    Map a loosely-typed parameter onto its ABI word variant.

    Args:
        value: AbiWord, str, bool, int or bytes

    Returns:
        AbiWord variant

    Raises:
        EncodingError: For arrays, objects, floats, None or malformed strings
    """
    if isinstance(value, AbiWord):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return BoolWord(value)
    if isinstance(value, int):
        return UintWord(value) if value >= 0 else IntWord(value)
    if isinstance(value, str):
        return _coerce_string(value)
    if isinstance(value, (bytes, bytearray)):
        return BytesWord(bytes(value))
    if isinstance(value, (list, tuple, dict)):
        raise EncodingError("arrays not supported in generic encoding, use specific functions")
    raise EncodingError(f"unsupported parameter type: {type(value).__name__}")


def encode_words(params: Sequence[Any]) -> bytes:
    """
    Encode parameters positionally, one word each.

    Raises:
        EncodingError: Naming the index of the first unsupported parameter
    """
    encoded = b""
    for index, param in enumerate(params):
        try:
            encoded += coerce_param(param).encode()
        except EncodingError as exc:
            raise EncodingError(f"parameter {index}: {exc.message}", index=index) from exc
    return encoded
