"""
Logging utilities for the satisfier package.

This module configures Python's logging for the package and provides a
SearchTraceLogger that writes search events as JSON Lines, one file per run.
"""

import json
import logging
import os
import time
from datetime import datetime
from typing import Any

import numpy as np

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class NumpyJSONEncoder(json.JSONEncoder):
    """JSON encoder that can handle NumPy arrays and scalars."""

    def default(self, obj):
        """Convert numpy objects to standard Python types."""
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.bool_):
            return bool(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


def configure_logging(
    level: str | int = "INFO",
    fmt: str = DEFAULT_FORMAT,
    log_file: str | None = None,
) -> logging.Logger:
    """
    Configure the 'satisfier' logger with a console handler and an optional
    file handler. Existing handlers are replaced.

    Args:
        level: Logging level name or number
        fmt: Format string for both handlers
        log_file: Optional path of a log file

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("satisfier")
    logger.setLevel(level)

    # Remove any existing handlers
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(fmt)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class SearchTraceLogger:
    """
    Structured trace of one search run.

    Events are appended to ``<output_dir>/<run_name>_trace.jsonl``; each line
    holds an 'event' field ('decision', 'conflict' or 'result').
    """

    def __init__(self, output_dir: str, run_name: str):
        """
        Initialize the trace logger.

        Args:
            output_dir: Directory to save trace files in
            run_name: Name of the run (used in the filename)
        """
        self.output_dir = output_dir
        self.run_name = run_name
        self.write_count = 0

        # Ensure the output directory exists
        os.makedirs(output_dir, exist_ok=True)

        self.path = os.path.join(output_dir, f"{run_name}_trace.jsonl")
        self.file = open(self.path, "w")
        self.metadata = {
            "run_name": run_name,
            "start_time": datetime.now().isoformat(),
        }

    def _write_event(self, event: str, data: dict[str, Any]) -> None:
        record = {"event": event, "timestamp": time.time(), **data}
        self.file.write(json.dumps(record, cls=NumpyJSONEncoder) + "\n")
        self.write_count += 1

    def log_decision(self, depth: int, variable: int, value: bool) -> None:
        """
        Log a branching decision.

        Args:
            depth: Depth of the node created by the decision
            variable: Variable branched on
            value: Value tried
        """
        self._write_event("decision", {"depth": depth, "variable": variable, "value": value})

    def log_conflict(self, depth: int, assigned: int) -> None:
        self._write_event("conflict", {"depth": depth, "assigned": assigned})

    def log_result(self, status: str, runtime: float, statistics: dict[str, Any]) -> None:
        self._write_event(
            "result", {"status": status, "runtime": runtime, "statistics": statistics}
        )

    def close(self) -> None:
        """Flush and close the trace file."""
        if not self.file.closed:
            self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
