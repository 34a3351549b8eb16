"""
Structured logging system for the ECA system.

Provides centralized logging with console and file outputs, log levels,
and metrics tracking for duplicate scans, entry checks and resolutions.
"""

import copy
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for monitoring duplicate detection activity.
    """

    def __init__(
        self,
        name: str = "ecasystem",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        self.metrics = {
            "records_loaded": 0,
            "scans": 0,
            "comparisons": 0,
            "matches_found": 0,
            "duplicate_checks": 0,
            "duplicates_flagged": 0,
            "resolutions": {},
            "errors_by_type": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"eca_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_scan(self, records: int, comparisons: int, matches: int):
        """Record one duplicate scan over `records` records."""
        self.metrics["scans"] += 1
        self.metrics["records_loaded"] += records
        self.metrics["comparisons"] += comparisons
        self.metrics["matches_found"] += matches

    def record_duplicate_check(self, flagged: bool):
        """Record an entry-time duplicate check."""
        self.metrics["duplicate_checks"] += 1
        if flagged:
            self.metrics["duplicates_flagged"] += 1

    def record_resolution(self, decision: str):
        """Record an operator's resolution decision."""
        resolutions = self.metrics["resolutions"]
        resolutions[decision] = resolutions.get(decision, 0) + 1

    def record_error(self, error_type: str):
        """Record a failure by type."""
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return a snapshot of current metrics with the flag rate."""
        metrics_copy = copy.deepcopy(self.metrics)
        checks = metrics_copy["duplicate_checks"]
        metrics_copy["flag_rate"] = (
            round(metrics_copy["duplicates_flagged"] / checks, 3) if checks else 0.0
        )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Duplicate Detection Metrics ===")
        self.info(f"Scans: {metrics['scans']} ({metrics['records_loaded']} records, {metrics['comparisons']} comparisons)")
        self.info(f"Matches found: {metrics['matches_found']}")
        self.info(
            f"Entry checks: {metrics['duplicates_flagged']}/{metrics['duplicate_checks']} flagged "
            f"({metrics['flag_rate'] * 100:.1f}%)"
        )

        if metrics["resolutions"]:
            self.info("Resolutions:")
            for decision, count in metrics["resolutions"].items():
                self.info(f"  {decision}: {count}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "ecasystem",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
