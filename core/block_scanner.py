"""
Block scanner: turns one block's logs into LiquidationEvent records.

Each log passes three gates in order, each short-circuiting:
    1. Address filter    -- emitted by a monitored contract?
    2. Signature matcher -- topic0 == LiquidationCall hash?
    3. Field extractor   -- user / collateral / debt from topics 1..3

A log that passes gates 1 and 2 is always reported. If its topics cannot be
decoded the event carries no field detail and a warning is logged.

The scanner holds only immutable configuration, so one instance can scan any
number of blocks, from any number of threads. It returns records and never
renders them; see core.liquidation_reporter for that.

Usage:
    from core.block_scanner import BlockScanner
    from core.detector_config import load_detector_config

    scanner = BlockScanner(load_detector_config())
    for event in scanner.iter_events(block):
        ...
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from web3 import Web3

from bot_logging.logger_manager import setup_module_logger
from core.detector_config import DetectorConfig
from core.field_extractor import MalformedLogError, extract_fields
from core.signature_matcher import matches_signature
from shared.types import LiquidationEvent


class BlockScanError(Exception):
    """Raised when the block itself cannot be read (not for per-log problems)."""


class BlockScanner:
    """Stateless LiquidationCall detector for a single chain configuration."""

    def __init__(self, config: DetectorConfig) -> None:
        self._config = config
        self._logger = setup_module_logger(
            "block_scanner",
            "block_scanner.jsonl",
            module_folder="Block_Scanner_Logs",
            use_json_formatter=True,
        )

    @property
    def config(self) -> DetectorConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def iter_events(self, block: Any) -> Iterator[LiquidationEvent]:
        """
        Lazily yield one LiquidationEvent per matching log, in log order.

        Raises:
            BlockScanError: block has no readable `number` or `logs`.
        """
        try:
            block_number = int(block.number)
            logs = iter(block.logs)
        except (AttributeError, TypeError, ValueError) as e:
            raise BlockScanError(f"Unreadable block {block!r}: {e}") from e

        for position, log in enumerate(logs):
            try:
                event = self.classify_log(log, block_number)
            except (AttributeError, TypeError, MalformedLogError) as e:
                self._logger.warning(
                    "Skipping malformed log #%d in block %d",
                    position,
                    block_number,
                    extra={"block_number": block_number, "error": str(e)},
                )
                continue
            if event is not None:
                yield event

    def scan_block(self, block: Any) -> list[LiquidationEvent]:
        """Eager variant of iter_events."""
        return list(self.iter_events(block))

    def classify_log(self, log: Any, block_number: int) -> LiquidationEvent | None:
        """
        Run one log through the three gates.

        Returns None for any non-match. A matched log with fewer than 4 topics,
        or with topic words that do not decode as addresses, yields an event
        without field detail.

        Raises:
            MalformedLogError: log data is not bytes.
        """
        contracts = self._config.contracts
        if not contracts.is_monitored(log.address):
            return None

        topics = log.topics
        if not matches_signature(topics, self._config.event_signature):
            return None

        data = log.data
        if not isinstance(data, (bytes, bytearray)):
            raise MalformedLogError(f"Log data is not bytes: {type(data).__name__}")

        address = bytes(log.address)
        try:
            fields = extract_fields(topics, self._config.address_decoding)
        except MalformedLogError as e:
            self._logger.warning(
                "Undecodable LiquidationCall topics in block %d, reporting without fields",
                block_number,
                extra={
                    "block_number": block_number,
                    "contract_address": Web3.to_checksum_address(address),
                    "error": str(e),
                },
            )
            fields = None

        return LiquidationEvent(
            block_number=block_number,
            contract_address=Web3.to_checksum_address(address),
            contract_name=contracts.get_name(address),
            data=bytes(data),
            log_index=getattr(log, "log_index", None),
            transaction_hash=getattr(log, "transaction_hash", None),
            fields=fields,
        )
