"""
Serialization utilities for the Aave Liquidation Detector.

JSON encoding for HexBytes, raw bytes and detector records.

Usage:
    from shared.serialization_utils import HexBytesEncoder
    json.dumps(event, cls=HexBytesEncoder)
"""

import json
from json import JSONEncoder
from typing import Any

from hexbytes import HexBytes

from shared.types import LiquidationEvent


class HexBytesEncoder(JSONEncoder):
    """JSON encoder handling HexBytes, bytes and LiquidationEvent."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, LiquidationEvent):
            return obj.to_dict()
        # HexBytes.hex() dropped the 0x prefix in hexbytes 1.x; render explicitly
        if isinstance(obj, (HexBytes, bytes, bytearray)):
            return "0x" + bytes(obj).hex()
        return super().default(obj)


def dumps_event(event: LiquidationEvent) -> str:
    """Serialize a single event to a compact JSON line."""
    return json.dumps(event, cls=HexBytesEncoder, separators=(",", ":"))
