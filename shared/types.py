"""
Shared data types for the Aave Liquidation Detector.

Centralized dataclasses and enums used across all modules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class AddressDecoding(Enum):
    CANONICAL = "canonical"  # strip 12 zero bytes -> EIP-55 address
    RAW_WORD = "raw_word"  # full 32-byte topic word as hex


# ---------------------------------------------------------------------------
# Host Input Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Log:
    """Single event emission as handed over by the host."""

    address: bytes  # 20 bytes
    topics: tuple[bytes, ...] = ()  # 32-byte words, topic0 = signature hash
    data: bytes = b""  # non-indexed fields, not decoded
    log_index: int | None = None
    transaction_hash: bytes | None = None


@dataclass(frozen=True)
class Block:
    number: int
    logs: tuple[Log, ...] = field(default_factory=tuple)


# ---------------------------------------------------------------------------
# Detection Output Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LiquidationFields:
    user: str
    collateral_asset: str
    debt_asset: str


@dataclass(frozen=True)
class LiquidationEvent:
    block_number: int
    contract_address: str  # EIP-55 checksum
    data: bytes
    contract_name: str | None = None
    log_index: int | None = None
    transaction_hash: bytes | None = None
    fields: LiquidationFields | None = None  # None when the log had < 4 topics

    @property
    def user(self) -> str | None:
        return self.fields.user if self.fields else None

    @property
    def collateral_asset(self) -> str | None:
        return self.fields.collateral_asset if self.fields else None

    @property
    def debt_asset(self) -> str | None:
        return self.fields.debt_asset if self.fields else None

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation; field keys are omitted when undecoded."""
        result: dict[str, Any] = {
            "event_type": "LIQUIDATION_CALL",
            "block_number": self.block_number,
            "contract_address": self.contract_address,
            "contract_name": self.contract_name,
            "log_index": self.log_index,
            "transaction_hash": (
                "0x" + self.transaction_hash.hex() if self.transaction_hash is not None else None
            ),
        }
        if self.fields is not None:
            result["user"] = self.fields.user
            result["collateral_asset"] = self.fields.collateral_asset
            result["debt_asset"] = self.fields.debt_asset
        result["data"] = "0x" + self.data.hex()
        return result
