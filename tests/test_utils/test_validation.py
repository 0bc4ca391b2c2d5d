"""
Tests for input validation helpers.
"""

import pytest
from eth_account import Account
from eth_utils import to_checksum_address

from eip7702.errors import (
    InputError,
    InvalidAddressError,
    InvalidAmountError,
    InvalidKeyError,
    MissingKeyError,
    ZeroAddressError,
)
from eip7702.utils.validation import (
    is_valid_address,
    is_zero_address,
    load_account,
    parse_hex_bytes,
    validate_address,
    validate_amount,
)

from conftest import RECIPIENT, SIGNER_ADDRESS, SIGNER_KEY

ZERO = "0x" + "00" * 20


class TestAddresses:
    def test_valid(self) -> None:
        assert is_valid_address(RECIPIENT)
        assert is_valid_address(RECIPIENT[2:])
        assert not is_valid_address("0x1234")
        assert not is_valid_address(None)

    def test_checksums(self) -> None:
        checksummed = to_checksum_address(RECIPIENT)

        assert validate_address(RECIPIENT.lower()) == checksummed
        assert validate_address(RECIPIENT) == checksummed
        assert validate_address(checksummed) == checksummed

    def test_zero(self) -> None:
        assert is_zero_address(ZERO)
        assert validate_address(ZERO) == ZERO

        with pytest.raises(ZeroAddressError) as exc_info:
            validate_address(ZERO, "delegate", allow_zero=False)

        assert exc_info.value.field == "delegate"

    @pytest.mark.parametrize("value", ["", "0xzz", 42])
    def test_invalid(self, value) -> None:
        with pytest.raises(InvalidAddressError) as exc_info:
            validate_address(value, "recipient")

        assert exc_info.value.code == "INVALID_ADDRESS"
        assert exc_info.value.details["field"] == "recipient"


class TestAmounts:
    def test_int_and_string(self) -> None:
        assert validate_amount(5) == 5
        assert validate_amount("5") == 5

    @pytest.mark.parametrize("value", [-1, "1.5", "abc", True, 2**256])
    def test_invalid(self, value) -> None:
        with pytest.raises(InvalidAmountError):
            validate_amount(value)


class TestHexBytes:
    def test_empty_forms(self) -> None:
        assert parse_hex_bytes("0x") == b""
        assert parse_hex_bytes("") == b""

    def test_prefix_optional(self) -> None:
        assert parse_hex_bytes("0xABcd") == b"\xab\xcd"
        assert parse_hex_bytes("abcd") == b"\xab\xcd"

    def test_invalid(self) -> None:
        with pytest.raises(InputError, match="not valid hex"):
            parse_hex_bytes("0x123")


class TestLoadAccount:
    def test_hex_key(self) -> None:
        assert load_account(SIGNER_KEY, "signer").address == SIGNER_ADDRESS

    def test_bytes_key(self) -> None:
        assert load_account(bytes.fromhex(SIGNER_KEY[2:]), "signer").address == SIGNER_ADDRESS

    def test_account_passthrough(self) -> None:
        account = Account.from_key(SIGNER_KEY)

        assert load_account(account, "signer") is account

    def test_missing(self) -> None:
        with pytest.raises(MissingKeyError, match="signer private key is missing"):
            load_account(None, "signer")

    def test_invalid_hides_key(self) -> None:
        with pytest.raises(InvalidKeyError) as exc_info:
            load_account("0xdeadbeef", "sponsor")

        assert "deadbeef" not in str(exc_info.value)
        assert exc_info.value.to_dict()["code"] == "INVALID_KEY"
