"""
Configuration schema validation for the Aave Liquidation Detector.

Validates that the chain and detector config files exist and contain the
required keys with well-formed values. Run at startup to fail fast on
misconfiguration.
"""

from typing import Any

from hexbytes import HexBytes

from config.loader import get_config
from shared.constants import ADDRESS_LENGTH, TOPIC_LENGTH
from shared.types import AddressDecoding


class ConfigValidationError(ValueError):
    """Raised when a required config key is missing or invalid."""

    pass


def _check_keys(config: dict[str, Any], required_keys: list[str], config_name: str) -> list[str]:
    """Check that all required keys exist in a config dict. Returns list of missing keys."""
    missing = []
    for key in required_keys:
        parts = key.split(".")
        current = config
        for part in parts:
            if not isinstance(current, dict) or part not in current:
                missing.append(f"missing: {key}")
                break
            current = current[part]
    return missing


def _hex_length(value: Any) -> int | None:
    """Byte length of a hex string, or None if it is not valid hex."""
    if not isinstance(value, str):
        return None
    try:
        return len(HexBytes(value))
    except ValueError:
        return None


def validate_chain_config(config: dict[str, Any]) -> list[str]:
    """Validate chains/<chain_id>.json has required, well-formed fields."""
    errors = _check_keys(
        config,
        [
            "chain_id",
            "contracts",
            "events.liquidation_call.signature",
        ],
        "chains/<chain_id>.json",
    )
    if errors:
        return errors

    contracts = config["contracts"]
    if not isinstance(contracts, dict) or len(contracts) == 0:
        errors.append("contracts: must be a non-empty name -> address mapping")
    else:
        for name, address in contracts.items():
            if _hex_length(address) != ADDRESS_LENGTH:
                errors.append(f"contracts.{name}: not a {ADDRESS_LENGTH}-byte address: {address!r}")

    topic = config["events"]["liquidation_call"].get("topic")
    if topic is not None and _hex_length(topic) != TOPIC_LENGTH:
        errors.append(f"events.liquidation_call.topic: not a {TOPIC_LENGTH}-byte hash: {topic!r}")
    return errors


def validate_detector_config(config: dict[str, Any]) -> list[str]:
    """Validate detector settings (after env overrides)."""
    errors = _check_keys(config, ["chain_id", "address_decoding"], "detector.json")
    if errors:
        return errors
    known = [mode.value for mode in AddressDecoding]
    if config["address_decoding"] not in known:
        errors.append(f"address_decoding: must be one of {known}")
    return errors


def validate_all_configs() -> None:
    """
    Validate all config files. Raises ConfigValidationError with details
    if any required keys are missing or malformed.
    """
    loader = get_config()
    all_errors: dict[str, list[str]] = {}

    detector_cfg = loader.get_detector_config()
    errors = validate_detector_config(detector_cfg)
    if errors:
        all_errors["detector.json"] = errors

    chain_id = detector_cfg.get("chain_id", 1)
    chain_name = f"chains/{chain_id}.json"
    chain_cfg = loader.get_chain_config(chain_id)
    if not chain_cfg:
        all_errors[chain_name] = ["Config file is empty or not found"]
    else:
        errors = validate_chain_config(chain_cfg)
        if errors:
            all_errors[chain_name] = errors

    if all_errors:
        lines = ["Configuration validation failed:"]
        for config_name, errors in all_errors.items():
            lines.append(f"\n  {config_name}:")
            for error in errors:
                lines.append(f"    - {error}")
        raise ConfigValidationError("\n".join(lines))
