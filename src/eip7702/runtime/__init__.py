"""
Chain access for the EIP-7702 sponsorship engine.
"""

from eip7702.runtime.chain_client import ChainClient, Web3ChainClient

__all__ = [
    "ChainClient",
    "Web3ChainClient",
]
