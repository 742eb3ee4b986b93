from core.address_filter import MonitoredContracts
from core.block_scanner import BlockScanError, BlockScanner
from core.detector_config import DetectorConfig, build_detector_config, load_detector_config
from core.field_extractor import MalformedLogError, extract_fields
from core.liquidation_reporter import LiquidationReporter
from core.signature_matcher import matches_signature

__all__ = [
    "BlockScanError",
    "BlockScanner",
    "DetectorConfig",
    "LiquidationReporter",
    "MalformedLogError",
    "MonitoredContracts",
    "build_detector_config",
    "extract_fields",
    "load_detector_config",
    "matches_signature",
]
