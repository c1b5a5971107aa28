"""
Structured logging system for peopledir.

Provides centralized logging with console and file outputs, plus metrics
tracking for search evaluations and directory loads.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks how many searches ran, how many were superseded by newer input,
    and how directory loads fared.
    """

    def __init__(
        self,
        name: str = "peopledir",
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
            "evaluations": 0,
            "evaluations_superseded": 0,
            "reconciliations": 0,
            "loads_attempted": 0,
            "records_loaded": 0,
            "load_failures_by_type": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"peopledir_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
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

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_evaluation(self):
        """Count a settled search evaluation."""
        self.metrics["evaluations"] += 1

    def record_superseded(self):
        """Count a pending evaluation cancelled by newer input."""
        self.metrics["evaluations_superseded"] += 1

    def record_reconciliation(self):
        self.metrics["reconciliations"] += 1

    def record_load(self, record_count: int):
        """Record a directory load and how many records it produced."""
        self.metrics["loads_attempted"] += 1
        self.metrics["records_loaded"] += record_count

    def record_load_failure(self, error_type: str):
        self.metrics["loads_attempted"] += 1
        failures = self.metrics["load_failures_by_type"]
        failures[error_type] = failures.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return a snapshot of current metrics."""
        snapshot = dict(self.metrics)
        snapshot["load_failures_by_type"] = dict(self.metrics["load_failures_by_type"])
        total = snapshot["evaluations"] + snapshot["evaluations_superseded"]
        snapshot["coalescing_rate"] = (
            round(snapshot["evaluations_superseded"] / total, 3) if total else None
        )
        return snapshot

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Directory Search Metrics ===")
        self.info(f"Evaluations: {metrics['evaluations']} "
                  f"(superseded: {metrics['evaluations_superseded']})")
        self.info(f"Reconciliations: {metrics['reconciliations']}")
        self.info(f"Loads: {metrics['loads_attempted']} ({metrics['records_loaded']} records)")

        if metrics["load_failures_by_type"]:
            self.info("Load failures:")
            for error_type, count in metrics["load_failures_by_type"].items():
                self.info(f"  {error_type}: {count}")


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "peopledir",
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
