"""
Exception hierarchy for the EIP-7702 sponsorship engine.

    DelegationError
    ├── ServiceNotInitializedError
    ├── InputError
    │   ├── InvalidAddressError
    │   ├── ZeroAddressError
    │   ├── InvalidAmountError
    │   ├── MissingKeyError
    │   ├── InvalidKeyError
    │   ├── EmptyCallListError
    │   └── EncodingError
    ├── TrustError
    │   ├── UntrustedDelegateError
    │   ├── MissingAuthorizationError
    │   ├── AuthorizationExpiredError
    │   ├── ChainIdMismatchError
    │   ├── NonceMismatchError
    │   └── ValueCapExceededError
    └── ChainError
        ├── RpcError
        └── BroadcastError
"""

from eip7702.errors.base import DelegationError, ServiceNotInitializedError
from eip7702.errors.delegation import (
    AuthorizationExpiredError,
    BroadcastError,
    ChainError,
    ChainIdMismatchError,
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
    TrustError,
    UntrustedDelegateError,
    ValueCapExceededError,
    ZeroAddressError,
)

__all__ = [
    "DelegationError",
    "ServiceNotInitializedError",
    # Input
    "InputError",
    "InvalidAddressError",
    "ZeroAddressError",
    "InvalidAmountError",
    "MissingKeyError",
    "InvalidKeyError",
    "EmptyCallListError",
    "EncodingError",
    # Trust
    "TrustError",
    "UntrustedDelegateError",
    "MissingAuthorizationError",
    "AuthorizationExpiredError",
    "ChainIdMismatchError",
    "NonceMismatchError",
    "ValueCapExceededError",
    # Chain
    "ChainError",
    "RpcError",
    "BroadcastError",
]
