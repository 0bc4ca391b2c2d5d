"""
Tests for the sponsored set-code transaction builder.

Tests cover:
- Call-set validation (empty, zero address, value cap)
- Static gas policy for single and batched calls
- Fee tip fallback and fee cap multiplier
- The signed type-0x04 envelope (decoded with rlp)
"""

import logging

import pytest
import rlp
from eth_abi import decode
from eth_utils import big_endian_to_int, encode_hex, keccak

from eip7702.builders import SponsoredTransactionBuilder
from eip7702.constants import EXECUTE_CALLS_TYPE
from eip7702.encoding import EXECUTE_SELECTOR, encode_multicall, encode_send_eth
from eip7702.errors import (
    EmptyCallListError,
    InvalidKeyError,
    MissingAuthorizationError,
    MissingKeyError,
    NonceMismatchError,
    RpcError,
    ValueCapExceededError,
    ZeroAddressError,
)
from eip7702.protocol import AuthorizationSigner, AuthorizationValidator
from eip7702.types import Call

from conftest import (
    CHAIN_ID,
    DELEGATE_CONTRACT,
    ONE_GWEI,
    OTHER_TARGET,
    RECIPIENT,
    SIGNER_ADDRESS,
    SIGNER_KEY,
    SPONSOR_ADDRESS,
    SPONSOR_KEY,
    FakeChainClient,
)

ONE_ETHER = 10**18


def _decode_envelope(raw: bytes):
    """Split a type-0x04 envelope into its RLP fields."""
    assert raw[0] == 0x04
    return rlp.decode(raw[1:])


def _wired(client, config, clock):
    signer = AuthorizationSigner(client, CHAIN_ID, config, clock=clock)
    validator = AuthorizationValidator(client, CHAIN_ID, config, clock=clock)
    builder = SponsoredTransactionBuilder(client, CHAIN_ID, config, validator=validator)
    return signer.sign_delegation(DELEGATE_CONTRACT, SIGNER_KEY), builder


# =============================================================================
# Call-set validation
# =============================================================================


class TestValidateCalls:
    def test_empty(self, builder) -> None:
        with pytest.raises(EmptyCallListError) as exc_info:
            builder.validate_calls([])

        assert exc_info.value.code == "EMPTY_CALL_LIST"

    def test_zero_address_names_index(self, builder) -> None:
        calls = [Call(to=OTHER_TARGET), Call(to="0x" + "00" * 20)]

        with pytest.raises(ZeroAddressError) as exc_info:
            builder.validate_calls(calls)

        assert exc_info.value.index == 1
        assert exc_info.value.message == "call 1 has zero address"

    def test_value_at_cap_passes(self, builder) -> None:
        builder.validate_calls([Call(to=SIGNER_ADDRESS, value=10 * ONE_ETHER)])

    def test_single_call_over_cap(self, builder) -> None:
        with pytest.raises(ValueCapExceededError) as exc_info:
            builder.validate_calls([Call(to=SIGNER_ADDRESS, value=10 * ONE_ETHER + 1)])

        assert exc_info.value.code == "VALUE_CAP_EXCEEDED"

    def test_cap_applies_to_sum(self, builder) -> None:
        """Splitting value across calls does not get around the cap."""
        calls = [Call(to=SIGNER_ADDRESS, value=6 * ONE_ETHER) for _ in range(2)]

        with pytest.raises(ValueCapExceededError):
            builder.validate_calls(calls)


# =============================================================================
# Build
# =============================================================================


class TestBuildSingleCall:
    def test_example_scenario(self, builder, authorization) -> None:
        """Sponsor nonce 12, one call: default gas, to = signer, value 0."""
        call_data = encode_send_eth(RECIPIENT, ONE_ETHER)

        tx = builder.build(authorization, [Call(to=SIGNER_ADDRESS, data=call_data)], SPONSOR_KEY)

        assert tx.type == 0x04
        assert tx.chain_id == CHAIN_ID
        assert tx.nonce == 12
        assert tx.gas == 1_000_000
        assert tx.to == SIGNER_ADDRESS
        assert tx.value == 0
        assert tx.data == call_data
        assert tx.authorization_list == (authorization,)
        assert tx.sponsor_address == SPONSOR_ADDRESS

    def test_outer_to_is_signer_not_call_target(self, builder, authorization) -> None:
        """A call to an arbitrary target still sends the transaction to the signer."""
        tx = builder.build(authorization, [Call(to="0x" + "aa" * 20, data=b"", value=0)], SPONSOR_KEY)

        assert tx.nonce == 12
        assert tx.value == 0
        assert tx.to == SIGNER_ADDRESS
        assert tx.gas == 1_000_000

    def test_fees(self, builder, authorization) -> None:
        tx = builder.build(authorization, [Call(to=SIGNER_ADDRESS)], SPONSOR_KEY)

        assert tx.max_priority_fee_per_gas == ONE_GWEI
        assert tx.max_fee_per_gas == 3 * ONE_GWEI

    def test_explicit_gas_limit(self, builder, authorization) -> None:
        tx = builder.build(
            authorization,
            [Call(to=SIGNER_ADDRESS, gas_limit=250_000)],
            SPONSOR_KEY,
        )

        assert tx.gas == 250_000

    def test_call_value_does_not_become_tx_value(self, builder, authorization) -> None:
        tx = builder.build(authorization, [Call(to=SIGNER_ADDRESS, value=ONE_ETHER)], SPONSOR_KEY)

        assert tx.value == 0

    def test_signed_envelope(self, builder, authorization) -> None:
        """The raw transaction carries the same fields and one authorization tuple."""
        tx = builder.build(authorization, [Call(to=SIGNER_ADDRESS, data=b"\x01\x02")], SPONSOR_KEY)

        fields = _decode_envelope(tx.raw_transaction)

        assert big_endian_to_int(fields[0]) == CHAIN_ID
        assert big_endian_to_int(fields[1]) == 12
        assert big_endian_to_int(fields[2]) == ONE_GWEI
        assert big_endian_to_int(fields[3]) == 3 * ONE_GWEI
        assert big_endian_to_int(fields[4]) == 1_000_000
        assert fields[5] == bytes.fromhex(SIGNER_ADDRESS[2:])
        assert big_endian_to_int(fields[6]) == 0
        assert fields[7] == b"\x01\x02"
        assert fields[8] == []

        (auth_tuple,) = fields[9]
        assert big_endian_to_int(auth_tuple[0]) == CHAIN_ID
        assert auth_tuple[1] == bytes.fromhex(DELEGATE_CONTRACT[2:])
        assert big_endian_to_int(auth_tuple[2]) == 5
        assert big_endian_to_int(auth_tuple[3]) == authorization.v
        assert big_endian_to_int(auth_tuple[4]) == int.from_bytes(authorization.r, "big")
        assert big_endian_to_int(auth_tuple[5]) == int.from_bytes(authorization.s, "big")

    def test_hash_is_keccak_of_envelope(self, builder, authorization) -> None:
        tx = builder.build(authorization, [Call(to=SIGNER_ADDRESS)], SPONSOR_KEY)

        assert tx.tx_hash == encode_hex(keccak(tx.raw_transaction))

    def test_does_not_broadcast(self, builder, authorization, chain_client) -> None:
        builder.build(authorization, [Call(to=SIGNER_ADDRESS)], SPONSOR_KEY)

        assert chain_client.broadcasts == []


class TestBuildMultipleCalls:
    def test_three_calls(self, builder, authorization) -> None:
        """Batched calls use base + per-call gas and the execute() payload."""
        calls = [
            Call(to=SIGNER_ADDRESS, data=b"\x01"),
            Call(to=OTHER_TARGET, data=b"\x02", value=1),
            Call(to=RECIPIENT, data=b"", value=2),
        ]

        tx = builder.build(authorization, calls, SPONSOR_KEY)

        assert tx.gas == 250_000
        assert tx.data == encode_multicall(calls)
        assert tx.data[:4] == EXECUTE_SELECTOR
        (decoded,) = decode([EXECUTE_CALLS_TYPE], tx.data[4:])
        assert [entry[2] for entry in decoded] == [0, 1, 2]

    def test_explicit_gas_ignored_for_batches(self, builder, authorization) -> None:
        calls = [Call(to=SIGNER_ADDRESS, gas_limit=10), Call(to=SIGNER_ADDRESS, gas_limit=10)]

        tx = builder.build(authorization, calls, SPONSOR_KEY)

        assert tx.gas == 200_000


class TestFeeTip:
    def test_fallback_on_chain_error(self, config, clock, caplog) -> None:
        client = FakeChainClient(
            nonces={SIGNER_ADDRESS: 5, SPONSOR_ADDRESS: 12},
            fee_error=RpcError("eth_maxPriorityFeePerGas", "not supported"),
        )
        authorization, builder = _wired(client, config, clock)
        caplog.set_level(logging.WARNING, logger="eip7702")

        tx = builder.build(authorization, [Call(to=SIGNER_ADDRESS)], SPONSOR_KEY)

        assert tx.max_priority_fee_per_gas == 2 * ONE_GWEI
        assert tx.max_fee_per_gas == 6 * ONE_GWEI
        assert "fallback" in caplog.text

    def test_other_errors_propagate(self, config, clock) -> None:
        client = FakeChainClient(
            nonces={SIGNER_ADDRESS: 5},
            fee_error=RuntimeError("bug"),
        )
        authorization, builder = _wired(client, config, clock)

        with pytest.raises(RuntimeError):
            builder.build(authorization, [Call(to=SIGNER_ADDRESS)], SPONSOR_KEY)

    def test_multiplier_from_config(self, chain_client, clock) -> None:
        from eip7702.config import EngineConfig
        from conftest import HOLESKY

        config = EngineConfig.for_network(HOLESKY, fee_cap_multiplier=5)
        authorization, builder = _wired(chain_client, config, clock)

        tx = builder.build(authorization, [Call(to=SIGNER_ADDRESS)], SPONSOR_KEY)

        assert tx.max_fee_per_gas == 5 * ONE_GWEI


class TestBuildRejections:
    def test_missing_authorization(self, builder) -> None:
        with pytest.raises(MissingAuthorizationError):
            builder.build(None, [Call(to=SIGNER_ADDRESS)], SPONSOR_KEY)

    def test_authorization_checked_before_calls(self, builder, authorization, chain_client) -> None:
        chain_client.nonces[SIGNER_ADDRESS.lower()] = 99

        with pytest.raises(NonceMismatchError):
            builder.build(authorization, [], SPONSOR_KEY)

    def test_empty_calls(self, builder, authorization) -> None:
        with pytest.raises(EmptyCallListError):
            builder.build(authorization, [], SPONSOR_KEY)

    def test_missing_sponsor_key(self, builder, authorization) -> None:
        with pytest.raises(MissingKeyError) as exc_info:
            builder.build(authorization, [Call(to=SIGNER_ADDRESS)], None)

        assert exc_info.value.role == "sponsor"

    def test_invalid_sponsor_key(self, builder, authorization) -> None:
        with pytest.raises(InvalidKeyError):
            builder.build(authorization, [Call(to=SIGNER_ADDRESS)], "0x1234")
