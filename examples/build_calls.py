#!/usr/bin/env python3
"""
Call Data Builder Example

Builds delegate call data offline (no RPC, no keys) and prints it, the way
a client would before submitting its own authorization and calls.

Run with: python examples/build_calls.py
"""

import json

from eip7702 import DelegationService
from eip7702.constants import EXECUTE_SIGNATURE

RECIPIENT = "0xabcdefABCDEFabcdefABCDEFabcdefABCDEFabcd"


def main() -> None:
    # No chain client: only the call-data builders are usable
    service = DelegationService(None)

    results = [
        service.build_send_eth_call(RECIPIENT, "0.01"),
        service.build_mint_call(RECIPIENT, "100"),
        service.build_transfer_call(RECIPIENT, "2.5", token_decimals=6),
        service.build_generic_call(
            EXECUTE_SIGNATURE,
            [[
                {"data": "0x", "to": RECIPIENT, "value": "1000"},
                {"data": "0xdeadbeef", "to": RECIPIENT, "value": "0"},
            ]],
        ),
    ]

    for result in results:
        print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
