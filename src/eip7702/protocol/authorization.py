"""
EIP-7702 Authorization Signing.

An authorization lets an EOA point its code at a delegate contract:

    digest = keccak256(0x05 || rlp([chain_id, delegate_address, nonce]))

The signer's secp256k1 signature over that digest, with the recovery id
normalized to yParity (0/1), is what ends up in the set-code transaction's
authorization list.

Reference: https://eips.ethereum.org/EIPS/eip-7702
"""

from __future__ import annotations

import time
from typing import Callable, Optional

import rlp
from eth_keys import keys
from eth_utils import keccak

from eip7702.config import EngineConfig
from eip7702.constants import LEGACY_V_OFFSET, SET_CODE_AUTH_MAGIC
from eip7702.errors import ServiceNotInitializedError, UntrustedDelegateError
from eip7702.runtime.chain_client import ChainClient
from eip7702.types.authorization import Authorization
from eip7702.utils.logging import get_logger, short_address
from eip7702.utils.validation import PrivateKeyLike, load_account, validate_address

_logger = get_logger(__name__)


def authorization_hash(chain_id: int, delegate_address: str, nonce: int) -> bytes:
    """
    Compute the EIP-7702 authorization digest.

    Args:
        chain_id: Chain the delegation is valid on
        delegate_address: Delegate contract (hex)
        nonce: Signer's account nonce

    Returns:
        32-byte keccak256 digest
    """
    address_bytes = bytes.fromhex(delegate_address[-40:])
    encoded_payload = rlp.encode([chain_id, address_bytes, nonce])
    return keccak(SET_CODE_AUTH_MAGIC + encoded_payload)


def recover_authority(authorization: Authorization) -> str:
    """
    Recover the address that signed an authorization.

    Args:
        authorization: Signed authorization

    Returns:
        Checksummed signer address
    """
    digest = authorization_hash(
        authorization.chain_id,
        authorization.delegate_address,
        authorization.nonce,
    )
    signature = keys.Signature(
        vrs=(
            authorization.v,
            int.from_bytes(authorization.r, "big"),
            int.from_bytes(authorization.s, "big"),
        )
    )
    return signature.recover_public_key_from_msg_hash(digest).to_checksum_address()


class AuthorizationSigner:
    """
    Builds and signs EIP-7702 authorizations for trusted delegate contracts.

    The allow-list comes from the injected EngineConfig, so a signer can never
    be made to authorize a contract the operator did not configure.

    Example:
        >>> signer = AuthorizationSigner(chain_client, chain_id=17000, config=config)
        >>> auth = signer.sign_delegation(config.delegate_contract, "0x...")
        >>> auth.nonce
        5
    """

    def __init__(
        self,
        chain_client: Optional[ChainClient],
        chain_id: Optional[int],
        config: Optional[EngineConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.chain_client = chain_client
        self.chain_id = chain_id
        self.config = config or EngineConfig()
        self._clock = clock

    def sign_delegation(
        self,
        delegate_address: str,
        signer_key: Optional[PrivateKeyLike],
    ) -> Authorization:
        """
        Sign an authorization delegating the signer's code to a contract.

        Args:
            delegate_address: Delegate contract to authorize
            signer_key: Signer's private key (hex/bytes) or LocalAccount

        Returns:
            Signed Authorization with created_at set to now

        Raises:
            ServiceNotInitializedError: If chain client or chain id is missing
            MissingKeyError / InvalidKeyError: If the signer key is absent or malformed
            ZeroAddressError / InvalidAddressError: If the delegate address is unusable
            UntrustedDelegateError: If the delegate is not on the allow-list
            ChainError: If the nonce read fails
        """
        if self.chain_client is None:
            raise ServiceNotInitializedError("chain client")
        if self.chain_id is None:
            raise ServiceNotInitializedError("chain id")

        account = load_account(signer_key, "signer")
        delegate = validate_address(delegate_address, "delegate_address", allow_zero=False)

        if not self.config.is_trusted(delegate):
            raise UntrustedDelegateError(delegate)

        nonce = self.chain_client.nonce_at(account.address)

        digest = authorization_hash(self.chain_id, delegate, nonce)
        signed = account.unsafe_sign_hash(digest)

        v = signed.v
        if v >= LEGACY_V_OFFSET:
            v -= LEGACY_V_OFFSET

        authorization = Authorization(
            chain_id=self.chain_id,
            delegate_address=delegate,
            nonce=nonce,
            v=v,
            r=signed.r.to_bytes(32, "big"),
            s=signed.s.to_bytes(32, "big"),
            signer_address=account.address,
            created_at=int(self._clock()),
        )

        _logger.info(
            "Signed delegation of %s to %s (chain %s, nonce %s)",
            short_address(account.address),
            short_address(delegate),
            self.chain_id,
            nonce,
        )
        return authorization
