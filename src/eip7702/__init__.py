"""
EIP-7702 Delegation & Sponsored-Transaction Engine.

An externally owned account (the signer) delegates its code to a trusted
delegate contract for one transaction while a separate account (the
sponsor) pays the gas.

Quick Start:
    >>> from eip7702 import DelegationService, Web3ChainClient
    >>>
    >>> client = Web3ChainClient.from_rpc_url("https://ethereum-holesky-rpc.publicnode.com")
    >>> service = DelegationService.connect(client)
    >>> result = service.sponsor_mint(
    ...     signer_key="0x...",
    ...     sponsor_key="0x...",
    ...     recipient="0xabcdefABCDEFabcdefABCDEFabcdefABCDEFabcd",
    ...     amount="100",
    ... )
    >>> print(f"Transaction: {result.tx_hash}")

Modules:
- `service`: DelegationService facade and sponsored flows
- `protocol`: AuthorizationSigner, AuthorizationValidator
- `builders`: SponsoredTransactionBuilder
- `encoding`: Call-data encoder and unit conversion
- `runtime`: ChainClient protocol and the web3.py adapter
- `errors`: Exception hierarchy
- `utils`: Logging and validation helpers
"""

from eip7702.version import __version__, __version_info__

# Service
from eip7702.service import CallDataResult, DelegationService, SponsorResult

# Components
from eip7702.builders import SponsoredTransactionBuilder
from eip7702.protocol import (
    AuthorizationSigner,
    AuthorizationValidator,
    authorization_hash,
    recover_authority,
)
from eip7702.runtime import ChainClient, Web3ChainClient

# Config
from eip7702.config import (
    NETWORKS,
    EngineConfig,
    Network,
    NetworkConfig,
    get_network_config,
)

# Types
from eip7702.types import Authorization, Call, CallSpec, SponsoredTransaction

# Encoding
from eip7702.encoding import (
    encode_generic,
    encode_mint,
    encode_multicall,
    encode_send_eth,
    encode_transfer,
    ether_to_wei,
    token_amount_to_base_units,
)

# Errors
from eip7702.errors import (
    AuthorizationExpiredError,
    BroadcastError,
    ChainError,
    ChainIdMismatchError,
    DelegationError,
    EmptyCallListError,
    EncodingError,
    InputError,
    InvalidAddressError,
    InvalidAmountError,
    InvalidKeyError,
    MissingAuthorizationError,
    MissingKeyError,
    NonceMismatchError,
    RpcError,
    ServiceNotInitializedError,
    TrustError,
    UntrustedDelegateError,
    ValueCapExceededError,
    ZeroAddressError,
)

# Logging
from eip7702.utils.logging import configure_logging, get_logger

__all__ = [
    "__version__",
    "__version_info__",
    # Service
    "DelegationService",
    "SponsorResult",
    "CallDataResult",
    # Components
    "AuthorizationSigner",
    "AuthorizationValidator",
    "SponsoredTransactionBuilder",
    "authorization_hash",
    "recover_authority",
    "ChainClient",
    "Web3ChainClient",
    # Config
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "get_network_config",
    "EngineConfig",
    # Types
    "Authorization",
    "Call",
    "CallSpec",
    "SponsoredTransaction",
    # Encoding
    "encode_mint",
    "encode_transfer",
    "encode_send_eth",
    "encode_multicall",
    "encode_generic",
    "ether_to_wei",
    "token_amount_to_base_units",
    # Errors
    "DelegationError",
    "ServiceNotInitializedError",
    "InputError",
    "InvalidAddressError",
    "ZeroAddressError",
    "InvalidAmountError",
    "MissingKeyError",
    "InvalidKeyError",
    "EmptyCallListError",
    "EncodingError",
    "TrustError",
    "UntrustedDelegateError",
    "MissingAuthorizationError",
    "AuthorizationExpiredError",
    "ChainIdMismatchError",
    "NonceMismatchError",
    "ValueCapExceededError",
    "ChainError",
    "RpcError",
    "BroadcastError",
    # Logging
    "configure_logging",
    "get_logger",
]
