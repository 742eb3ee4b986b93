"""
Block Reader - JSON-RPC style block input for the detector

Purpose:
    Convert block and log dicts as returned by eth_getBlockReceipts /
    eth_getLogs style payloads (hex strings, with or without 0x prefix, or raw
    bytes) into the Block / Log types consumed by core.block_scanner, and read
    JSON Lines files holding one block per line.

Input shape (one line):
    {"number": "0x12a05f2", "logs": [
        {"address": "0x8787...", "topics": ["0x...", ...], "data": "0x...",
         "logIndex": "0x3", "transactionHash": "0x..."}
    ]}

    "blockNumber" is accepted in place of "number"; a log without its own
    blockNumber inherits the block's.

Problems inside one log stay with that log. Undecodable hex becomes empty
bytes, an unparseable logIndex becomes None, and a log entry that is not an
object is skipped with a warning. The rest of the block is still scanned.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

from hexbytes import HexBytes

from bot_logging.logger_manager import setup_module_logger
from shared.types import Block, Log

reader_logger = setup_module_logger(
    "block_reader", "block_reader.log", module_folder="Block_Reader_Logs"
)


class BlockReadError(ValueError):
    """Raised when a block payload cannot be parsed at all."""


# ============================================================================
# FIELD NORMALIZATION
# ============================================================================

def _to_bytes(value: Any) -> bytes:
    """Hex string / bytes -> bytes. Undecodable values become b''."""
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return bytes(HexBytes(value))
        except ValueError:
            return b""
    return b""


def _to_int(value: Any) -> Optional[int]:
    """Hex quantity ("0x1a") or decimal string/int -> int."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a quantity: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value)
    raise ValueError(f"Not a quantity: {value!r}")


def _to_log_index(value: Any) -> Optional[int]:
    """Positional metadata only; an unparseable logIndex is dropped, not fatal."""
    try:
        return _to_int(value)
    except ValueError:
        reader_logger.warning(f"Ignoring invalid logIndex {value!r}")
        return None


def parse_log(log_data: Dict[str, Any]) -> Log:
    """Convert one JSON-RPC log dict into a Log."""
    topics = log_data.get("topics") or []
    if not isinstance(topics, list):
        topics = []
    tx_hash = log_data.get("transactionHash")
    return Log(
        address=_to_bytes(log_data.get("address")),
        topics=tuple(_to_bytes(topic) for topic in topics),
        data=_to_bytes(log_data.get("data", "0x")),
        log_index=_to_log_index(log_data.get("logIndex")),
        transaction_hash=_to_bytes(tx_hash) if tx_hash is not None else None,
    )


def parse_block(block_data: Dict[str, Any]) -> Block:
    """
    Convert a block dict into a Block.

    A log entry that is not an object is skipped with a warning; the other
    logs of the block are kept.

    Raises:
        BlockReadError: missing/invalid block number or a non-list `logs`.
    """
    if not isinstance(block_data, dict):
        raise BlockReadError(f"Block payload must be an object, got {type(block_data).__name__}")

    raw_number = block_data.get("number", block_data.get("blockNumber"))
    try:
        number = _to_int(raw_number)
    except ValueError as e:
        raise BlockReadError(f"Invalid block number {raw_number!r}") from e
    if number is None:
        raise BlockReadError("Block payload has no number")

    raw_logs = block_data.get("logs", [])
    if not isinstance(raw_logs, list):
        raise BlockReadError(f"Block {number}: logs must be a list")

    logs = []
    for position, log_data in enumerate(raw_logs):
        if not isinstance(log_data, dict):
            reader_logger.warning(
                f"Block {number}: skipping log entry #{position}, "
                f"expected an object, got {type(log_data).__name__}"
            )
            continue
        logs.append(parse_log(log_data))
    return Block(number=number, logs=tuple(logs))


# ============================================================================
# JSON LINES INPUT
# ============================================================================

def iter_blocks(lines: Iterable[str]) -> Iterator[Block]:
    """
    Lazily parse one block per non-empty line.

    Lines that are not valid JSON or not a valid block are logged and skipped.
    """
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            yield parse_block(json.loads(line))
        except (json.JSONDecodeError, BlockReadError) as e:
            reader_logger.warning(f"Skipping line {line_number}: {e}")


def read_blocks(source: Optional[str | Path] = None, stream: Optional[TextIO] = None) -> Iterator[Block]:
    """Read blocks from a JSON Lines file, a given stream, or stdin."""
    if source is not None:
        with open(source, "r", encoding="utf-8") as f:
            yield from iter_blocks(f)
        return
    yield from iter_blocks(stream if stream is not None else sys.stdin)
