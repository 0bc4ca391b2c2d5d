#!/usr/bin/env python3
"""
Sponsored ETH Transfer Example

The signer delegates to the holesky delegate contract for one transaction
and sends ETH to a recipient; the sponsor pays the gas.

Usage:
    python examples/sponsor_eth.py <recipient> <amount_eth>

Environment Variables:
    RPC_URL: Holesky RPC URL (required)
    SIGNER_PRIVATE_KEY: Private key of the account sending ETH
    SPONSOR_PRIVATE_KEY: Private key of the account paying gas
"""

import os
import sys

from dotenv import load_dotenv

# Load .env file
load_dotenv()

from eip7702 import DelegationError, DelegationService, Web3ChainClient, configure_logging

RPC_URL = os.getenv("RPC_URL", "")
SIGNER_PRIVATE_KEY = os.getenv("SIGNER_PRIVATE_KEY", "")
SPONSOR_PRIVATE_KEY = os.getenv("SPONSOR_PRIVATE_KEY", "")


def main() -> None:
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)
    recipient, amount = sys.argv[1], sys.argv[2]

    if not RPC_URL:
        print("RPC_URL is not set")
        sys.exit(1)
    if not SIGNER_PRIVATE_KEY or not SPONSOR_PRIVATE_KEY:
        print("Set: SIGNER_PRIVATE_KEY and SPONSOR_PRIVATE_KEY")
        sys.exit(1)

    configure_logging(level="INFO")

    client = Web3ChainClient.from_rpc_url(RPC_URL)
    service = DelegationService.connect(client)

    info = service.contracts_info()
    print(f"Network:  {info['network']} (chain {info['chain_id']})")
    print(f"Delegate: {info['delegate_contract']}")
    print()

    try:
        result = service.sponsor_eth(
            signer_key=SIGNER_PRIVATE_KEY,
            sponsor_key=SPONSOR_PRIVATE_KEY,
            recipient=recipient,
            amount_ether=amount,
        )
    except DelegationError as exc:
        print(f"Failed: {exc}")
        sys.exit(1)

    print(f"Transaction: {result.tx_hash}")
    print(f"Amount (wei): {result.details['amount_base_units']}")


if __name__ == "__main__":
    main()
