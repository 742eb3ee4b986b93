"""
Configuration loader for the Aave Liquidation Detector.

Provides centralized configuration management with .env overrides.

Usage:
    from config.loader import get_config

    config = get_config()
    chain_config = config.get_chain_config(1)
    detector_config = config.get_detector_config()
"""

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from shared.constants import DEFAULT_ADDRESS_DECODING, DEFAULT_CHAIN_ID, DEFAULT_REPORT_JSON

load_dotenv()

# Resolve config directory relative to this file
_CONFIG_DIR = Path(__file__).parent


def _load_json(filepath: Path) -> Dict[str, Any]:
    """Load a JSON config file. Returns empty dict if file doesn't exist."""
    try:
        with open(filepath, "r") as f:
            return json.load(f)
    except FileNotFoundError:
        print(f"[CONFIG_WARN] Config file not found: {filepath}")
        return {}
    except json.JSONDecodeError as e:
        print(f"[CONFIG_ERROR] Invalid JSON in {filepath}: {e}")
        return {}


def get_env_var(var_name: str, default_value: Any, var_type: type) -> Any:
    """Get environment variable with type conversion and fallback."""
    value = os.getenv(var_name, None)
    if value is None:
        return default_value
    try:
        if var_type == bool:
            return value.lower() in ("true", "1", "yes")
        return var_type(value)
    except (ValueError, TypeError):
        return default_value


class ConfigLoader:
    """
    Central configuration manager for the detector.

    Loads configuration from JSON files in the config/ directory with .env overrides.
    File accessors are cached via @lru_cache; call clear_cache() after editing files.
    """

    _instance: Optional["ConfigLoader"] = None

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or _CONFIG_DIR

    @classmethod
    def get_instance(cls) -> "ConfigLoader":
        """Singleton accessor."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    # ------------------------------------------------------------------
    # Core config file loaders (cached)
    # ------------------------------------------------------------------

    @lru_cache(maxsize=8)
    def get_chain_config(self, chain_id: int = DEFAULT_CHAIN_ID) -> Dict[str, Any]:
        """Load chain-specific config (Ethereum mainnet = 1)."""
        return _load_json(self._config_dir / "chains" / f"{chain_id}.json")

    @lru_cache(maxsize=1)
    def get_app_config(self) -> Dict[str, Any]:
        """Load general application settings (logging)."""
        return _load_json(self._config_dir / "app.json")

    @lru_cache(maxsize=1)
    def _get_detector_file(self) -> Dict[str, Any]:
        return _load_json(self._config_dir / "detector.json")

    def get_detector_config(self) -> Dict[str, Any]:
        """
        Load detector settings with environment overrides applied.

        Env vars: DETECTOR_CHAIN_ID, DETECTOR_ADDRESS_DECODING, DETECTOR_REPORT_JSON.
        """
        settings = dict(self._get_detector_file())
        settings["chain_id"] = get_env_var(
            "DETECTOR_CHAIN_ID", settings.get("chain_id", DEFAULT_CHAIN_ID), int
        )
        settings["address_decoding"] = get_env_var(
            "DETECTOR_ADDRESS_DECODING",
            settings.get("address_decoding", DEFAULT_ADDRESS_DECODING),
            str,
        )
        settings["report_json"] = get_env_var(
            "DETECTOR_REPORT_JSON", settings.get("report_json", DEFAULT_REPORT_JSON), bool
        )
        return settings

    # ------------------------------------------------------------------
    # Arbitrary config file loader
    # ------------------------------------------------------------------

    @lru_cache(maxsize=16)
    def get_config_file(self, config_name: str) -> Dict[str, Any]:
        """Load an arbitrary JSON config file from config/ directory."""
        return _load_json(self._config_dir / f"{config_name}.json")

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        """Clear all cached configurations (useful for testing)."""
        for method_name in dir(self):
            method = getattr(self, method_name)
            if hasattr(method, "cache_clear"):
                method.cache_clear()


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------

def get_config() -> ConfigLoader:
    """Get the singleton ConfigLoader instance."""
    return ConfigLoader.get_instance()
