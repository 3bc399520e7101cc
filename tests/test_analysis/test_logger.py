# Tests for logging utilities

import csv
import json
import logging

import pytest

from coaster.analysis.logger import TelemetryLogger, setup_logging
from coaster.sim.engine import PhysicsEngine


@pytest.fixture
def states(oval_track, dt):
    engine = PhysicsEngine()
    engine.set_track(oval_track, looped=True)
    engine.set_speed(10.0)
    return [engine.step(dt) for _ in range(5)]


class TestSetupLogging:

    def test_level_and_file(self, temp_dir):
        log_file = temp_dir / "logs" / "run.log"
        logger = setup_logging("DEBUG", log_file)

        try:
            assert logger.name == "coaster"
            assert logger.level == logging.DEBUG
            logger.debug("hello")
            for handler in logger.handlers:
                handler.flush()
            assert log_file.exists()
            assert "hello" in log_file.read_text()
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def test_repeated_setup_replaces_handlers(self, temp_dir):
        log_file = temp_dir / "run.log"
        setup_logging("INFO", log_file)
        logger = setup_logging("WARNING", log_file)

        try:
            assert len(logger.handlers) == 2
            assert logger.level == logging.WARNING
            logger.warning("once")
            for handler in logger.handlers:
                handler.flush()
            assert log_file.read_text().count("once") == 1

            logger = setup_logging("INFO")
            assert len(logger.handlers) == 1
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)


class TestTelemetryLogger:

    def test_csv_written(self, temp_dir, states):
        telemetry = TelemetryLogger(temp_dir)
        for step, state in enumerate(states):
            telemetry.log(step, state)

        with open(telemetry.csv_path, newline="") as f:
            rows = list(csv.DictReader(f))

        assert len(rows) == 5
        assert "speed" in rows[0]
        assert "position_x" in rows[0]
        assert float(rows[-1]["speed"]) == pytest.approx(states[-1].speed)

    def test_series_and_latest(self, temp_dir, states):
        telemetry = TelemetryLogger(temp_dir)
        for step, state in enumerate(states):
            telemetry.log(step, state)

        assert telemetry.get_series("step") == [0, 1, 2, 3, 4]
        assert telemetry.get_latest("progress") == states[-1].progress
        assert telemetry.get_latest("missing") is None

    def test_summary_stats(self, temp_dir, states):
        telemetry = TelemetryLogger(temp_dir)
        for step, state in enumerate(states):
            telemetry.log(step, state)

        stats = telemetry.get_summary_stats("speed", window=3)
        speeds = [s.speed for s in states[-3:]]

        assert stats["max"] == pytest.approx(max(speeds))
        assert stats["min"] == pytest.approx(min(speeds))
        assert telemetry.get_summary_stats("missing") == {}

    def test_save_summary(self, temp_dir, states):
        telemetry = TelemetryLogger(temp_dir)
        telemetry.log(0, states[0])
        telemetry.save_summary()

        with open(telemetry.json_path) as f:
            history = json.load(f)
        assert history[0]["step"] == 0
        assert history[0]["speed"] == pytest.approx(states[0].speed)
