"""
Detector configuration: the monitored contracts, the event signature hash,
and the topic decoding mode for one chain.

Built from config/chains/<chain_id>.json and config/detector.json, or
directly in code for other chains and protocol versions.

Usage:
    from core.detector_config import load_detector_config

    detector_config = load_detector_config()  # validates, honours env overrides
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from hexbytes import HexBytes
from web3 import Web3

from config.loader import get_config
from config.validate import (
    ConfigValidationError,
    validate_chain_config,
    validate_detector_config,
)
from core.address_filter import MonitoredContracts
from shared.constants import (
    AAVE_V2_LENDING_POOL,
    AAVE_V3_POOL,
    ETHEREUM_MAINNET_CHAIN_ID,
    LIQUIDATION_CALL_TOPIC,
    TOPIC_LENGTH,
)
from shared.types import AddressDecoding


@dataclass(frozen=True)
class DetectorConfig:
    chain_id: int
    contracts: MonitoredContracts
    event_signature: bytes  # 32-byte topic0
    address_decoding: AddressDecoding = AddressDecoding.CANONICAL
    chain_name: str | None = None

    def __post_init__(self) -> None:
        if len(self.event_signature) != TOPIC_LENGTH:
            raise ValueError(
                f"event_signature must be {TOPIC_LENGTH} bytes, got {len(self.event_signature)}"
            )


def aave_mainnet_config(
    address_decoding: AddressDecoding = AddressDecoding.CANONICAL,
) -> DetectorConfig:
    """Reference deployment: Aave V2 LendingPool and V3 Pool on Ethereum mainnet."""
    return DetectorConfig(
        chain_id=ETHEREUM_MAINNET_CHAIN_ID,
        chain_name="Ethereum mainnet",
        contracts=MonitoredContracts(
            {
                "Aave V2 LendingPool": AAVE_V2_LENDING_POOL,
                "Aave V3 Pool": AAVE_V3_POOL,
            }
        ),
        event_signature=LIQUIDATION_CALL_TOPIC,
        address_decoding=address_decoding,
    )


def build_detector_config(
    chain_cfg: dict[str, Any],
    detector_cfg: dict[str, Any] | None = None,
) -> DetectorConfig:
    """
    Turn validated config dicts into a DetectorConfig.

    The signature hash is keccak256 of events.liquidation_call.signature unless
    events.liquidation_call.topic pins it explicitly.

    Raises:
        ConfigValidationError: if either dict fails validation.
    """
    if detector_cfg is None:
        detector_cfg = {"chain_id": chain_cfg.get("chain_id"), "address_decoding": "canonical"}
    errors = validate_chain_config(chain_cfg) + validate_detector_config(detector_cfg)
    if errors:
        raise ConfigValidationError("Invalid detector configuration:\n  - " + "\n  - ".join(errors))

    event_cfg = chain_cfg["events"]["liquidation_call"]
    if event_cfg.get("topic"):
        signature = bytes(HexBytes(event_cfg["topic"]))
    else:
        signature = bytes(Web3.keccak(text=event_cfg["signature"]))

    return DetectorConfig(
        chain_id=int(chain_cfg["chain_id"]),
        chain_name=chain_cfg.get("name"),
        contracts=MonitoredContracts(chain_cfg["contracts"]),
        event_signature=signature,
        address_decoding=AddressDecoding(detector_cfg["address_decoding"]),
    )


def load_detector_config() -> DetectorConfig:
    """Load and validate the configured chain (DETECTOR_CHAIN_ID, default 1)."""
    loader = get_config()
    detector_cfg = loader.get_detector_config()
    chain_cfg = loader.get_chain_config(detector_cfg["chain_id"])
    if not chain_cfg:
        raise ConfigValidationError(
            f"No chain config for chain_id {detector_cfg['chain_id']} (config/chains/)"
        )
    return build_detector_config(chain_cfg, detector_cfg)
