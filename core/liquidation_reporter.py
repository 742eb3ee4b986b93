"""
Liquidation reporter: renders LiquidationEvent records as log lines.

Kept apart from the scanner so detection stays testable on its own. Human
readable lines go to logs/Liquidation_Logs/liquidations.log (and stderr when
console=True); with json_lines=True every event is also written as one JSON
object per line to liquidations.jsonl.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bot_logging.logger_manager import setup_module_logger
from shared.serialization_utils import dumps_event
from shared.types import LiquidationEvent


class LiquidationReporter:

    def __init__(
        self,
        chain_name: str | None = None,
        json_lines: bool = False,
        console: bool = False,
        logger: logging.Logger | None = None,
        json_logger: logging.Logger | None = None,
    ) -> None:
        self._chain_name = chain_name or "unknown chain"
        self._logger = logger or setup_module_logger(
            "liquidations", "liquidations.log", module_folder="Liquidation_Logs", console=console
        )
        self._json_logger: logging.Logger | None = None
        if json_lines:
            self._json_logger = json_logger or setup_module_logger(
                "liquidations_json",
                "liquidations.jsonl",
                module_folder="Liquidation_Logs",
                use_raw_formatter=True,
            )

    def report(self, event: LiquidationEvent) -> None:
        extra = {
            "block_number": event.block_number,
            "contract_address": event.contract_address,
            "event_type": "LIQUIDATION_CALL",
        }
        self._logger.warning(
            "LIQUIDATION DETECTED on %s in block %d",
            self._chain_name,
            event.block_number,
            extra=extra,
        )
        if event.contract_name:
            self._logger.info("   Contract: %s (%s)", event.contract_address, event.contract_name)
        else:
            self._logger.info("   Contract: %s", event.contract_address)
        if event.fields is not None:
            self._logger.info("   User: %s", event.fields.user)
            self._logger.info("   Collateral Asset: %s", event.fields.collateral_asset)
            self._logger.info("   Debt Asset: %s", event.fields.debt_asset)
        self._logger.info("   Data: 0x%s", event.data.hex())

        if self._json_logger is not None:
            self._json_logger.info(dumps_event(event))

    def report_all(self, events: Iterable[LiquidationEvent]) -> int:
        """Report every event; returns how many were reported."""
        count = 0
        for event in events:
            self.report(event)
            count += 1
        return count
