"""
Utilities for the EIP-7702 sponsorship engine.
"""

from eip7702.utils.logging import (
    configure_logging,
    disable_logging,
    get_logger,
    set_level,
    short_address,
)
from eip7702.utils.validation import (
    PrivateKeyLike,
    is_valid_address,
    is_zero_address,
    load_account,
    parse_hex_bytes,
    validate_address,
    validate_amount,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_level",
    "disable_logging",
    "short_address",
    # Validation
    "PrivateKeyLike",
    "is_valid_address",
    "is_zero_address",
    "load_account",
    "parse_hex_bytes",
    "validate_address",
    "validate_amount",
]
