"""
Shared fixtures for the delegation engine tests.
"""

from typing import Dict, List, Optional

import pytest
from eth_account import Account

from eip7702.config import EngineConfig, Network, get_network_config
from eip7702.protocol.authorization import AuthorizationSigner
from eip7702.protocol.validator import AuthorizationValidator
from eip7702.builders.sponsored_transaction import SponsoredTransactionBuilder
from eip7702.service import DelegationService
from eip7702.types.transaction import SponsoredTransaction


# =============================================================================
# Test Constants
# =============================================================================

CHAIN_ID = 17000
NOW = 1_700_000_000

SIGNER_KEY = "0x" + "11" * 32
SPONSOR_KEY = "0x" + "22" * 32
SIGNER_ADDRESS = Account.from_key(SIGNER_KEY).address
SPONSOR_ADDRESS = Account.from_key(SPONSOR_KEY).address

HOLESKY = get_network_config(Network.HOLESKY)
TOKEN_CONTRACT = HOLESKY.token_contract
DELEGATE_CONTRACT = HOLESKY.delegate_contract

RECIPIENT = "0xabcdefABCDEFabcdefABCDEFabcdefABCDEFabcd"
OTHER_TARGET = "0x1234567890123456789012345678901234567890"

ONE_GWEI = 10**9


# =============================================================================
# Fake chain client
# =============================================================================


class FakeChainClient:
    """Scripted ChainClient: fixed nonces per address, optional failures."""

    def __init__(
        self,
        chain_id: int = CHAIN_ID,
        nonces: Optional[Dict[str, int]] = None,
        fee_tip: int = ONE_GWEI,
        fee_error: Optional[Exception] = None,
        nonce_error: Optional[Exception] = None,
        broadcast_error: Optional[Exception] = None,
    ):
        self._chain_id = chain_id
        self.nonces = {address.lower(): nonce for address, nonce in (nonces or {}).items()}
        self.fee_tip = fee_tip
        self.fee_error = fee_error
        self.nonce_error = nonce_error
        self.broadcast_error = broadcast_error
        self.nonce_reads: List[str] = []
        self.broadcasts: List[SponsoredTransaction] = []

    def nonce_at(self, address: str) -> int:
        self.nonce_reads.append(address)
        if self.nonce_error is not None:
            raise self.nonce_error
        return self.nonces.get(address.lower(), 0)

    def suggest_fee_tip(self) -> int:
        if self.fee_error is not None:
            raise self.fee_error
        return self.fee_tip

    def chain_id(self) -> int:
        return self._chain_id

    def broadcast(self, transaction: SponsoredTransaction) -> str:
        if self.broadcast_error is not None:
            raise self.broadcast_error
        self.broadcasts.append(transaction)
        return transaction.tx_hash


class Clock:
    """Mutable clock for freshness tests."""

    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def chain_client() -> FakeChainClient:
    return FakeChainClient(nonces={SIGNER_ADDRESS: 5, SPONSOR_ADDRESS: 12})


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig.for_network(HOLESKY)


@pytest.fixture
def signer(chain_client, config, clock) -> AuthorizationSigner:
    return AuthorizationSigner(chain_client, CHAIN_ID, config, clock=clock)


@pytest.fixture
def validator(chain_client, config, clock) -> AuthorizationValidator:
    return AuthorizationValidator(chain_client, CHAIN_ID, config, clock=clock)


@pytest.fixture
def builder(chain_client, config, validator) -> SponsoredTransactionBuilder:
    return SponsoredTransactionBuilder(chain_client, CHAIN_ID, config, validator=validator)


@pytest.fixture
def authorization(signer):
    return signer.sign_delegation(DELEGATE_CONTRACT, SIGNER_KEY)


@pytest.fixture
def service(chain_client, config, clock) -> DelegationService:
    return DelegationService(chain_client, CHAIN_ID, config, clock=clock)
