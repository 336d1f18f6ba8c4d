from woodpuzzle.engine.scanner.scanner import (
    CHUNK_SIZE,
    ReachabilityScanner,
    ScanReport,
    classify_range,
)

__all__ = ["CHUNK_SIZE", "ReachabilityScanner", "ScanReport", "classify_range"]
