"""
Call intents.

Call is the typed, already-decoded form consumed by the encoder and the
sponsored-transaction builder. CallSpec is the loosely-typed JSON form
(hex strings, base-10 value strings) accepted at the edges.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eip7702.errors import InputError
from eip7702.utils.validation import (
    is_valid_address,
    parse_hex_bytes,
    validate_address,
)

_DECIMAL_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Call:
    """
    A single contract invocation intent.

    Attributes:
        to: Target address
        data: Encoded call data
        value: Wei forwarded with the call
        gas_limit: Optional per-call gas override (honoured for single-call transactions)
    """

    to: str
    data: bytes = b""
    value: int = 0
    gas_limit: Optional[int] = None

    def as_abi_tuple(self) -> tuple:
        """(data, to, value) in the order of the execute() tuple."""
        return (self.data, self.to, self.value)


class CallSpec(BaseModel):
    """
    JSON form of a call: {"to": "0x...", "data": "0x...", "value": "0"}.

    Fields are strict strings, mirroring the wire format where numbers that
    may exceed 2**53 travel as base-10 strings.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    to: str = Field(..., description="Target address (hex)")
    data: str = Field(default="0x", description="Call data (hex, '0x' or '' for empty)")
    value: str = Field(default="0", description="Wei value as a base-10 string")

    @field_validator("to")
    @classmethod
    def _check_to(cls, value: str) -> str:
        if not is_valid_address(value):
            raise ValueError(f"invalid address: {value}")
        return value

    @field_validator("data")
    @classmethod
    def _check_data(cls, value: str) -> str:
        try:
            parse_hex_bytes(value, "data")
        except InputError:
            raise ValueError(f"invalid data hex: {value}") from None
        return value

    @field_validator("value")
    @classmethod
    def _check_value(cls, value: str) -> str:
        if not _DECIMAL_PATTERN.fullmatch(value):
            raise ValueError(f"invalid value: {value}")
        return value

    def to_call(self) -> Call:
        """Decode into a typed Call."""
        return Call(
            to=validate_address(self.to, "to"),
            data=parse_hex_bytes(self.data, "data"),
            value=int(self.value, 10),
        )
