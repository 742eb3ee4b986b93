"""
Shared constants for the Aave Liquidation Detector.

Protocol addresses, event signatures, and word sizes used across all modules.
"""

from web3 import Web3

# ---------------------------------------------------------------------------
# EVM word sizes
# ---------------------------------------------------------------------------

ADDRESS_LENGTH = 20
TOPIC_LENGTH = 32
MIN_LIQUIDATION_TOPICS = 4  # signature + user + collateral + debt

# ---------------------------------------------------------------------------
# Chains
# ---------------------------------------------------------------------------

ETHEREUM_MAINNET_CHAIN_ID = 1

# ---------------------------------------------------------------------------
# Aave Ethereum Mainnet Addresses
# ---------------------------------------------------------------------------

AAVE_V2_LENDING_POOL = "0x7d2768dE32b0b80b7a3454c06BdAC94A69DDc7A9"
AAVE_V3_POOL = "0x87870Bca3F3fD6335C3F4ce8392D69350B4fA4E2"

# ---------------------------------------------------------------------------
# Event Signatures
# ---------------------------------------------------------------------------

# Same signature for the V2 LendingPool and the V3 Pool
LIQUIDATION_CALL_SIGNATURE = (
    "LiquidationCall(address,address,address,uint256,uint256,address,bool)"
)
LIQUIDATION_CALL_TOPIC = bytes(Web3.keccak(text=LIQUIDATION_CALL_SIGNATURE))

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_CHAIN_ID = ETHEREUM_MAINNET_CHAIN_ID
DEFAULT_ADDRESS_DECODING = "canonical"
DEFAULT_REPORT_JSON = False
