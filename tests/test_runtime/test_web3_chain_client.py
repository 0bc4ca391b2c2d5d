"""
Tests for the web3.py chain client adapter.

web3 is replaced with a MagicMock; the adapter's job is only to call the
right endpoint and translate provider failures into RpcError / BroadcastError.
"""

from unittest.mock import MagicMock, PropertyMock

import pytest

from eip7702.errors import BroadcastError, ChainError, RpcError
from eip7702.runtime import ChainClient, Web3ChainClient
from eip7702.types import SponsoredTransaction

from conftest import CHAIN_ID, FakeChainClient, SIGNER_ADDRESS


def _transaction(raw: bytes = b"\x04\x01") -> SponsoredTransaction:
    return SponsoredTransaction(
        chain_id=CHAIN_ID,
        nonce=0,
        max_priority_fee_per_gas=1,
        max_fee_per_gas=3,
        gas=1_000_000,
        to=SIGNER_ADDRESS,
        value=0,
        data=b"",
        authorization_list=(),
        sponsor_address=SIGNER_ADDRESS,
        raw_transaction=raw,
        tx_hash="0x" + "ab" * 32,
    )


@pytest.fixture
def w3() -> MagicMock:
    return MagicMock()


class TestProtocol:
    def test_adapters_satisfy_protocol(self, w3) -> None:
        assert isinstance(Web3ChainClient(w3), ChainClient)
        assert isinstance(FakeChainClient(), ChainClient)

    def test_from_rpc_url_uses_http_provider(self) -> None:
        client = Web3ChainClient.from_rpc_url("http://localhost:8545", timeout=7)

        assert client.w3.provider.endpoint_uri == "http://localhost:8545"


class TestNonceAt:
    def test_reads_latest_count(self, w3) -> None:
        w3.eth.get_transaction_count.return_value = 7
        client = Web3ChainClient(w3)

        assert client.nonce_at(SIGNER_ADDRESS.lower()) == 7
        w3.eth.get_transaction_count.assert_called_once_with(SIGNER_ADDRESS, "latest")

    def test_failure_becomes_rpc_error(self, w3) -> None:
        cause = ConnectionError("connection refused")
        w3.eth.get_transaction_count.side_effect = cause

        with pytest.raises(RpcError) as exc_info:
            Web3ChainClient(w3).nonce_at(SIGNER_ADDRESS)

        assert exc_info.value.code == "RPC_ERROR"
        assert exc_info.value.method == "eth_getTransactionCount"
        assert "connection refused" in exc_info.value.message
        assert exc_info.value.__cause__ is cause


class TestFeeTipAndChainId:
    def test_fee_tip(self, w3) -> None:
        type(w3.eth).max_priority_fee = PropertyMock(return_value=1_500_000_000)

        assert Web3ChainClient(w3).suggest_fee_tip() == 1_500_000_000

    def test_fee_tip_failure(self, w3) -> None:
        type(w3.eth).max_priority_fee = PropertyMock(
            side_effect=ValueError({"code": -32601, "message": "method not found"})
        )

        with pytest.raises(RpcError) as exc_info:
            Web3ChainClient(w3).suggest_fee_tip()

        assert "method not found" in exc_info.value.message
        assert isinstance(exc_info.value, ChainError)

    def test_chain_id(self, w3) -> None:
        type(w3.eth).chain_id = PropertyMock(return_value=CHAIN_ID)

        assert Web3ChainClient(w3).chain_id() == CHAIN_ID


class TestBroadcast:
    def test_sends_raw_transaction(self, w3) -> None:
        w3.eth.send_raw_transaction.return_value = b"\xcd" * 32
        tx = _transaction(raw=b"\x04\xaa")

        tx_hash = Web3ChainClient(w3).broadcast(tx)

        assert tx_hash == "0x" + "cd" * 32
        w3.eth.send_raw_transaction.assert_called_once_with(b"\x04\xaa")

    def test_rejection_becomes_broadcast_error(self, w3) -> None:
        w3.eth.send_raw_transaction.side_effect = ValueError(
            {"code": -32000, "message": "insufficient funds for gas * price + value"}
        )

        with pytest.raises(BroadcastError) as exc_info:
            Web3ChainClient(w3).broadcast(_transaction())

        assert exc_info.value.code == "BROADCAST_FAILED"
        assert exc_info.value.reason == "insufficient funds for gas * price + value"
        assert exc_info.value.tx_hash == "0x" + "ab" * 32
