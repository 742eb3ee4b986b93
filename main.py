"""
Aave Liquidation Detector — Main Entrypoint.

Synchronous runner standing in for the block-streaming host:
    1. Validate configuration (config/detector.json + config/chains/<id>.json)
    2. Build the BlockScanner for the configured chain
    3. Read blocks (JSON Lines, one block per line) from BLOCK_SOURCE_PATH or stdin
    4. Scan each block and hand matches to the LiquidationReporter

The scanner holds no state between blocks, so blocks are processed one at a
time in input order.

Usage:
    BLOCK_SOURCE_PATH=blocks.jsonl python main.py
    cat blocks.jsonl | python main.py
"""

from __future__ import annotations

import sys

from dotenv import load_dotenv

from bot_logging.logger_manager import create_module_log_directories, setup_module_logger
from config.loader import get_config, get_env_var
from config.validate import ConfigValidationError, validate_all_configs

# ---------------------------------------------------------------------------
# Module logger (logged to logs/ root, no sub-folder)
# ---------------------------------------------------------------------------
_logger = setup_module_logger("main", "main.log", console=True)


def _log_banner(detector_config, source: str, report_json: bool) -> None:
    """Log a concise startup summary."""
    _logger.info("=" * 60)
    _logger.info("Aave Liquidation Detector starting")
    _logger.info("=" * 60)
    _logger.info("  chain           : %s (%d)", detector_config.chain_name, detector_config.chain_id)
    for address in detector_config.contracts.get_all_addresses():
        _logger.info("  monitoring      : %s", address)
    _logger.info("  event topic     : 0x%s", detector_config.event_signature.hex())
    _logger.info("  address decoding: %s", detector_config.address_decoding.value)
    _logger.info("  source          : %s", source)
    _logger.info("  json lines      : %s", report_json)
    _logger.info("=" * 60)


def run() -> int:
    """Wire components and scan every input block. Returns the process exit code."""
    load_dotenv()
    create_module_log_directories()

    try:
        validate_all_configs()
    except ConfigValidationError as exc:
        _logger.critical("Config validation failed:\n%s", exc)
        return 1

    from core.block_scanner import BlockScanner, BlockScanError
    from core.detector_config import load_detector_config
    from core.liquidation_reporter import LiquidationReporter
    from data.block_reader import read_blocks

    detector_config = load_detector_config()
    report_json: bool = get_config().get_detector_config().get("report_json", False)
    source: str | None = get_env_var("BLOCK_SOURCE_PATH", None, str)

    _log_banner(detector_config, source or "<stdin>", report_json)

    scanner = BlockScanner(detector_config)
    reporter = LiquidationReporter(
        chain_name=detector_config.chain_name, json_lines=report_json, console=True
    )

    blocks_scanned = 0
    liquidations = 0
    try:
        for block in read_blocks(source):
            _logger.info("Processing %s block %d", detector_config.chain_name, block.number)
            try:
                liquidations += reporter.report_all(scanner.iter_events(block))
            except BlockScanError as exc:
                _logger.error("Block scan failed: %s", exc)
                return 1
            blocks_scanned += 1
    except OSError as exc:
        _logger.critical("Cannot read blocks from %s: %s", source, exc)
        return 1

    _logger.info("Scanned %d blocks, %d liquidations detected", blocks_scanned, liquidations)
    return 0


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    """Synchronous entry point."""
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        _logger.info("Interrupted by user")


if __name__ == "__main__":
    main()
