"""
Example logging configuration for the sigmatau package.

The package logs through ``logging.getLogger("sigmatau.<module>")`` with a
NullHandler attached, so nothing is printed until the application configures
logging. Records carry structured fields via ``extra`` (``event``,
``dataset``, ``statistic``, ``m``, ``n_skipped``, ...).
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

STRUCTURED_FIELDS = [
    "dataset",
    "statistic",
    "m",
    "n_terms",
    "n_phase",
    "n_freq",
    "n_samples",
    "n_skipped",
    "filepath",
    "url",
    "status_code",
    "error_type",
]

# Attributes every LogRecord has; anything else came from ``extra``
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "event"}


class StructuredFormatter(logging.Formatter):
    """Render ``event=... | key=value`` lines from the record's extra fields."""

    def format(self, record):
        event = getattr(record, "event", record.getMessage())
        parts = [f"event={event}"]
        for key in STRUCTURED_FIELDS:
            if hasattr(record, key):
                parts.append(f"{key}={getattr(record, key)}")
        record.msg = " | ".join(parts)
        record.args = ()
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record):
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", record.getMessage()),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                entry[key] = value
        return json.dumps(entry, default=str)


# Example 1: Basic console logging (INFO level)
def setup_basic_logging():
    """Loads and analysis start/complete records on the console."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# Example 2: Cache tracing (DEBUG level)
def setup_debug_logging():
    """
    Also show ``statistic_computed`` (one per cache miss) and
    ``insufficient_data`` records.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter("%(levelname)s - %(name)s - %(message)s"))
    package_logger = logging.getLogger("sigmatau")
    package_logger.setLevel(logging.DEBUG)
    package_logger.addHandler(handler)


# Example 3: Production configuration
def setup_production_logging(log_dir="logs", log_level=logging.INFO, console_level=logging.WARNING):
    """
    Rotating JSON log file plus warnings (skipped lines, fetch failures) on
    the console.

    Parameters:
    -----------
    log_dir : str
        Directory for log files
    log_level : int
        Logging level for file handler
    console_level : int
        Logging level for console handler
    """
    log_path = Path(log_dir)
    log_path.mkdir(exist_ok=True)

    file_handler = RotatingFileHandler(
        log_path / "sigmatau.jsonl",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(JSONFormatter())

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(StructuredFormatter("%(levelname)s - %(name)s - %(message)s"))

    package_logger = logging.getLogger("sigmatau")
    package_logger.setLevel(min(log_level, console_level))
    package_logger.addHandler(file_handler)
    package_logger.addHandler(console_handler)
    package_logger.propagate = False


if __name__ == "__main__":
    from sigmatau import Dataset

    setup_debug_logging()

    dataset = Dataset(name="demo")
    dataset.load_freq([892, 809, 823, 798, 671, 644, 883, 903, 677])
    dataset.get_adev(1)
    dataset.get_adev(1)  # cached, no record
    dataset.get_hdev(2)  # four terms
    dataset.get_hdev(3)  # insufficient_data
