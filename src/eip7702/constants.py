"""Constants for the EIP-7702 sponsorship engine.

This module defines protocol constants (authorization domain byte,
transaction type, delegate function signatures), ABI layout sizes,
and the default gas and value policy used when sponsoring a transaction.
"""

# EIP-7702 Protocol Constants
SET_CODE_AUTH_MAGIC = b"\x05"
SET_CODE_TX_TYPE = 0x04
LEGACY_V_OFFSET = 27

# ABI Encoding Constants
ABI_SELECTOR_LENGTH = 4
ABI_WORD_LENGTH = 32
ADDRESS_LENGTH = 20
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Delegate contract entry points (canonical signatures)
MINT_SIGNATURE = "mint(address,address,uint256)"
TRANSFER_SIGNATURE = "transfer(address,address,uint256)"
SEND_ETH_SIGNATURE = "sendETH(address,uint256)"
EXECUTE_SIGNATURE = "execute((bytes,address,uint256)[])"
EXECUTE_CALLS_TYPE = "(bytes,address,uint256)[]"

# Unit Constants
WEI_PER_ETHER = 10**18
WEI_PER_GWEI = 10**9
ETHER_DECIMALS = 18
DEFAULT_TOKEN_DECIMALS = 18
MAX_UINT256 = 2**256 - 1
MAX_UINT64 = 2**64 - 1
MIN_INT256 = -(2**255)
MAX_INT256 = 2**255 - 1

# Authorization Policy
AUTHORIZATION_MAX_AGE_SECONDS = 300  # 5 minutes

# Sponsorship Policy
MAX_TOTAL_VALUE_WEI = 10 * WEI_PER_ETHER  # 10 ETH per sponsored transaction
DEFAULT_FEE_TIP_WEI = 2 * WEI_PER_GWEI  # fallback when the tip suggestion fails
FEE_CAP_MULTIPLIER = 3
DEFAULT_GAS_LIMIT = 1_000_000
MULTICALL_BASE_GAS = 100_000
MULTICALL_PER_CALL_GAS = 50_000

# Network Constants
PROVIDER_TIMEOUT_SECONDS = 30

__all__ = [
    "SET_CODE_AUTH_MAGIC",
    "SET_CODE_TX_TYPE",
    "LEGACY_V_OFFSET",
    "ABI_SELECTOR_LENGTH",
    "ABI_WORD_LENGTH",
    "ADDRESS_LENGTH",
    "ZERO_ADDRESS",
    "MINT_SIGNATURE",
    "TRANSFER_SIGNATURE",
    "SEND_ETH_SIGNATURE",
    "EXECUTE_SIGNATURE",
    "EXECUTE_CALLS_TYPE",
    "WEI_PER_ETHER",
    "WEI_PER_GWEI",
    "ETHER_DECIMALS",
    "DEFAULT_TOKEN_DECIMALS",
    "MAX_UINT256",
    "MAX_UINT64",
    "MIN_INT256",
    "MAX_INT256",
    "AUTHORIZATION_MAX_AGE_SECONDS",
    "MAX_TOTAL_VALUE_WEI",
    "DEFAULT_FEE_TIP_WEI",
    "FEE_CAP_MULTIPLIER",
    "DEFAULT_GAS_LIMIT",
    "MULTICALL_BASE_GAS",
    "MULTICALL_PER_CALL_GAS",
    "PROVIDER_TIMEOUT_SECONDS",
]
