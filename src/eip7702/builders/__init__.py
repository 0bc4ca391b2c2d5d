"""
Transaction builders for the EIP-7702 sponsorship engine.
"""

from eip7702.builders.sponsored_transaction import SponsoredTransactionBuilder

__all__ = [
    "SponsoredTransactionBuilder",
]
