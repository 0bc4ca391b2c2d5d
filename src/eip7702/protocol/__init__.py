"""
EIP-7702 authorization signing and validation.
"""

from eip7702.protocol.authorization import (
    AuthorizationSigner,
    authorization_hash,
    recover_authority,
)
from eip7702.protocol.validator import AuthorizationValidator

__all__ = [
    "AuthorizationSigner",
    "AuthorizationValidator",
    "authorization_hash",
    "recover_authority",
]
