"""
Shared pytest configuration and fixtures for Aave Liquidation Detector tests.

Provides sample addresses, topic-word builders and a scanner whose logger is
patched out, used across the unit test suite.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from web3 import Web3

from shared.constants import AAVE_V3_POOL, LIQUIDATION_CALL_TOPIC
from shared.types import Block, Log

# ---------------------------------------------------------------------------
# Sample addresses
# ---------------------------------------------------------------------------

SAMPLE_USER_ADDRESS = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
SAMPLE_COLLATERAL_ASSET = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"  # WETH
SAMPLE_DEBT_ASSET = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"  # USDC
UNMONITORED_ADDRESS = "0x1234567890abcdef1234567890abcdef12345678"

OTHER_TOPIC = bytes(Web3.keccak(text="Transfer(address,address,uint256)"))


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def addr_bytes(address: str) -> bytes:
    """20 raw bytes of a 0x-prefixed hex address."""
    return bytes.fromhex(address[2:])


def topic_word(address: str) -> bytes:
    """Left-pad an address to a 32-byte indexed topic word."""
    return b"\x00" * 12 + addr_bytes(address)


def liquidation_log(
    address: str = AAVE_V3_POOL,
    topics: tuple[bytes, ...] | None = None,
    data: bytes = b"\x12\x34",
    log_index: int | None = None,
) -> Log:
    """LiquidationCall log with user/collateral/debt topics unless topics given."""
    if topics is None:
        topics = (
            LIQUIDATION_CALL_TOPIC,
            topic_word(SAMPLE_USER_ADDRESS),
            topic_word(SAMPLE_COLLATERAL_ASSET),
            topic_word(SAMPLE_DEBT_ASSET),
        )
    return Log(address=addr_bytes(address), topics=topics, data=data, log_index=log_index)


def make_block(*logs: Log, number: int = 18_000_000) -> Block:
    return Block(number=number, logs=tuple(logs))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def detector_config():
    from core.detector_config import aave_mainnet_config

    return aave_mainnet_config()


@pytest.fixture
def scanner_logger():
    return MagicMock()


@pytest.fixture
def scanner(detector_config, scanner_logger):
    """BlockScanner for the Aave mainnet reference deployment, logger mocked."""
    with patch("core.block_scanner.setup_module_logger", return_value=scanner_logger):
        from core.block_scanner import BlockScanner

        return BlockScanner(detector_config)
