"""
Data types for the EIP-7702 sponsorship engine.
"""

from eip7702.types.authorization import Authorization
from eip7702.types.call import Call, CallSpec
from eip7702.types.transaction import SponsoredTransaction

__all__ = [
    "Authorization",
    "Call",
    "CallSpec",
    "SponsoredTransaction",
]
