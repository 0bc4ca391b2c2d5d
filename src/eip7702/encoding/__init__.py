"""
Call-data encoding and unit conversion for the delegate contract.
"""

from eip7702.encoding.calldata import (
    EXECUTE_SELECTOR,
    MINT_SELECTOR,
    SEND_ETH_SELECTOR,
    TRANSFER_SELECTOR,
    encode_generic,
    encode_mint,
    encode_multicall,
    encode_multicall_params,
    encode_send_eth,
    encode_transfer,
    from_hex,
    function_selector,
    parse_multicall_entries,
    signature_arity,
    signature_types,
    to_hex,
)
from eip7702.encoding.params import (
    AbiWord,
    AddressWord,
    BoolWord,
    BytesWord,
    DecimalWord,
    IntWord,
    UintWord,
    coerce_param,
    encode_words,
)
from eip7702.encoding.units import ether_to_wei, token_amount_to_base_units

__all__ = [
    # Selectors
    "function_selector",
    "MINT_SELECTOR",
    "TRANSFER_SELECTOR",
    "SEND_ETH_SELECTOR",
    "EXECUTE_SELECTOR",
    # Delegate entry points
    "encode_mint",
    "encode_transfer",
    "encode_send_eth",
    "encode_multicall",
    "encode_multicall_params",
    "parse_multicall_entries",
    # Generic path
    "encode_generic",
    "signature_arity",
    "signature_types",
    "AbiWord",
    "AddressWord",
    "UintWord",
    "IntWord",
    "BoolWord",
    "BytesWord",
    "DecimalWord",
    "coerce_param",
    "encode_words",
    # Units
    "ether_to_wei",
    "token_amount_to_base_units",
    "to_hex",
    "from_hex",
]
