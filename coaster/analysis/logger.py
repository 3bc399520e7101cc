# Logging utilities

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from ..core.types import SimulationState


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Configure the "coaster" logger for a run.

    Handlers from an earlier call are closed and replaced, so calling this
    again (a second run in one process, or a test) does not duplicate output.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file that also receives DEBUG records

    Returns:
        Configured logger
    """
    logger = logging.getLogger("coaster")
    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(log_level)
    console.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%H:%M:%S",
    ))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        ))
        logger.addHandler(file_handler)

    return logger


class TelemetryLogger:
    """Per-step simulation telemetry written to CSV, with a JSON summary."""

    def __init__(self, log_dir: Path):
        """Initialize telemetry logger.

        Args:
            log_dir: Directory for log files
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.csv_path = self.log_dir / "telemetry.csv"
        self.json_path = self.log_dir / "telemetry.json"

        self._history: List[Dict[str, Any]] = []
        self._csv_initialized = False
        self._fieldnames: List[str] = []

    def log(self, step: int, state: SimulationState) -> None:
        """Log one simulation snapshot.

        Args:
            step: Simulation step index
            state: Snapshot returned by the engine
        """
        record = {
            "step": step,
            "timestamp": datetime.now().isoformat(),
            **state.to_dict(),
        }
        self._history.append(record)

        # Initialize CSV with fieldnames from first record
        if not self._csv_initialized:
            self._fieldnames = list(record.keys())
            with open(self.csv_path, "w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=self._fieldnames)
                writer.writeheader()
            self._csv_initialized = True

        with open(self.csv_path, "a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=self._fieldnames, extrasaction="ignore")
            writer.writerow(record)

    def save_summary(self) -> None:
        """Save complete telemetry history as JSON."""
        with open(self.json_path, "w") as f:
            json.dump(self._history, f, indent=2)

    def get_series(self, name: str) -> List[Any]:
        """Get time series of one field.

        Args:
            name: Field name, e.g. "speed" or "position_y"

        Returns:
            List of values in step order
        """
        return [r[name] for r in self._history if name in r]

    def get_latest(self, name: str) -> Optional[Any]:
        for r in reversed(self._history):
            if name in r:
                return r[name]
        return None

    def get_summary_stats(self, name: str, window: int = 100) -> Dict[str, float]:
        """Get summary statistics for a numeric field.

        Args:
            name: Field name
            window: Number of recent values to consider

        Returns:
            Dict with mean, std, min, max (empty if no values)
        """
        values = [v for v in self.get_series(name)[-window:] if v is not None]
        if not values:
            return {}

        return {
            "mean": float(np.mean(values)),
            "std": float(np.std(values)),
            "min": float(np.min(values)),
            "max": float(np.max(values)),
        }
