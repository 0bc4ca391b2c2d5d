"""Network presets and engine policy configuration.

NetworkConfig describes where the delegate contracts live. EngineConfig holds
the sponsorship policy (trusted delegates, freshness window, value cap, gas
heuristics) and is injected into the signer, validator and builder so tests
can substitute their own trusted-contract set.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import FrozenSet, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    AUTHORIZATION_MAX_AGE_SECONDS,
    DEFAULT_FEE_TIP_WEI,
    DEFAULT_GAS_LIMIT,
    FEE_CAP_MULTIPLIER,
    MAX_TOTAL_VALUE_WEI,
    MULTICALL_BASE_GAS,
    MULTICALL_PER_CALL_GAS,
)
from .utils.validation import validate_address

__all__ = [
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "get_network_config",
    "EngineConfig",
]


class Network(str, Enum):
    HOLESKY = "holesky"


@dataclass(frozen=True)
class NetworkConfig:
    name: Network
    chain_id: int
    rpc_url: str
    token_contract: str
    delegate_contract: str


NETWORKS: dict[Network, NetworkConfig] = {
    Network.HOLESKY: NetworkConfig(
        name=Network.HOLESKY,
        chain_id=17000,
        rpc_url="https://ethereum-holesky-rpc.publicnode.com",
        token_contract="0x93d77bE58A977350B924C0694242b075eB26AEdE",
        delegate_contract="0x1f0F9d7e19991e7E296630DC0073610f23CF066a",
    ),
}


def get_network_config(network: Network, rpc_url: Optional[str] = None) -> NetworkConfig:
    cfg = NETWORKS[Network(network)]
    if rpc_url:
        return replace(cfg, rpc_url=rpc_url)
    return cfg


class EngineConfig(BaseModel):
    """
    Sponsorship policy for the delegation engine.

    Example:
        ```python
        config = EngineConfig(
            trusted_delegates={"0x1f0F9d7e19991e7E296630DC0073610f23CF066a"},
            delegate_contract="0x1f0F9d7e19991e7E296630DC0073610f23CF066a",
        )
        ```
    """

    model_config = ConfigDict(frozen=True)

    trusted_delegates: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Delegate contracts a signer may authorize",
    )
    authorization_max_age_seconds: int = Field(
        default=AUTHORIZATION_MAX_AGE_SECONDS,
        ge=1,
        description="Freshness window for a signed authorization",
    )
    max_total_value_wei: int = Field(
        default=MAX_TOTAL_VALUE_WEI,
        ge=0,
        description="Cap on the summed value of all calls in one sponsored transaction",
    )
    default_fee_tip_wei: int = Field(
        default=DEFAULT_FEE_TIP_WEI,
        ge=0,
        description="Priority fee used when the tip suggestion fails",
    )
    fee_cap_multiplier: int = Field(
        default=FEE_CAP_MULTIPLIER,
        ge=1,
        description="maxFeePerGas = tip * multiplier",
    )
    default_gas_limit: int = Field(
        default=DEFAULT_GAS_LIMIT,
        ge=21_000,
        description="Gas limit for a single call without an explicit override",
    )
    multicall_base_gas: int = Field(default=MULTICALL_BASE_GAS, ge=0)
    multicall_per_call_gas: int = Field(default=MULTICALL_PER_CALL_GAS, ge=0)
    token_contract: Optional[str] = Field(
        default=None,
        description="Token used by the mint/transfer flows",
    )
    delegate_contract: Optional[str] = Field(
        default=None,
        description="Delegate authorized by the built-in sponsor flows",
    )
    network_name: Optional[str] = None

    @field_validator("trusted_delegates", mode="before")
    @classmethod
    def _checksum_delegates(cls, value: Iterable[str]) -> FrozenSet[str]:
        return frozenset(
            validate_address(addr, "trusted_delegates", allow_zero=False) for addr in value
        )

    @field_validator("token_contract", "delegate_contract")
    @classmethod
    def _checksum_contract(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return validate_address(value, "contract", allow_zero=False)

    def is_trusted(self, delegate_address: str) -> bool:
        """Check a checksummed address against the allow-list."""
        return delegate_address in self.trusted_delegates

    @classmethod
    def for_network(cls, network: NetworkConfig, **overrides) -> "EngineConfig":
        """Build a config that trusts the network's token and delegate contracts."""
        values = {
            "trusted_delegates": {network.token_contract, network.delegate_contract},
            "token_contract": network.token_contract,
            "delegate_contract": network.delegate_contract,
            "network_name": network.name.value,
        }
        values.update(overrides)
        return cls(**values)
