"""Liveness checks for an authorization before it is spent."""

from __future__ import annotations

import time
from typing import Callable, Optional

from eip7702.config import EngineConfig
from eip7702.errors import (
    AuthorizationExpiredError,
    ChainIdMismatchError,
    MissingAuthorizationError,
    NonceMismatchError,
    ServiceNotInitializedError,
)
from eip7702.runtime.chain_client import ChainClient
from eip7702.types.authorization import Authorization
from eip7702.utils.logging import get_logger, short_address

_logger = get_logger(__name__)


class AuthorizationValidator:
    """
    Gate an Authorization on freshness, chain binding and the signer's nonce.

    Signatures are not re-verified here; the signer's output is trusted. What
    is re-checked is liveness against current chain state: an authorization
    is implicitly single-use because spending it bumps the signer's nonce.
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

    def validate(self, authorization: Optional[Authorization]) -> None:
        """
        Check an authorization, in order:

        1. present and initialized
        2. no older than authorization_max_age_seconds
        3. chain id matches the service chain id
        4. nonce equals the signer's current on-chain nonce

        Raises:
            MissingAuthorizationError: (AUTHORIZATION_MISSING)
            AuthorizationExpiredError: (AUTHORIZATION_EXPIRED)
            ChainIdMismatchError: (CHAIN_ID_MISMATCH)
            NonceMismatchError: (NONCE_MISMATCH)
            ServiceNotInitializedError: If chain client or chain id is missing
            ChainError: If the nonce read fails
        """
        if self.chain_client is None:
            raise ServiceNotInitializedError("chain client")
        if self.chain_id is None:
            raise ServiceNotInitializedError("chain id")

        if authorization is None or not authorization.is_initialized:
            raise MissingAuthorizationError()

        age = int(self._clock()) - authorization.created_at
        if age > self.config.authorization_max_age_seconds:
            raise AuthorizationExpiredError(age, self.config.authorization_max_age_seconds)

        if authorization.chain_id != self.chain_id:
            raise ChainIdMismatchError(self.chain_id, authorization.chain_id)

        current_nonce = self.chain_client.nonce_at(authorization.signer_address)
        if authorization.nonce != current_nonce:
            raise NonceMismatchError(current_nonce, authorization.nonce)

        _logger.debug(
            "Authorization from %s valid (age %ss, nonce %s)",
            short_address(authorization.signer_address),
            age,
            current_nonce,
        )
