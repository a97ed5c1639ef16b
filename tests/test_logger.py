import csv

import numpy as np
import pytest

from ridepath.dynamics.kinematics import RigPose
from ridepath.dynamics.metrics import TelemetrySnapshot
from ridepath.logger import CSVLogger


# --- Mock Objects for Isolation ---
class MockSession:
    def __init__(self):
        self.t = 0.0
        self.progress = 0.25
        self.is_playing = True
        self.anchors = np.zeros((2, 3))
        self.pose = RigPose(
            position=np.array([1.0, 2.0, 3.0]),
            orientation=np.array([0.0, 0.0, 0.0, 1.0]),
            rope_lengths=np.array([4.0, 5.0]),
        )
        self.telemetry = TelemetrySnapshot(speed=10.0, total_g=1.5, vertical_g=0.5, lateral_g=1.0, altitude=2.0)


# --- Tests ---

def test_logger_basic_io(tmp_path):
    """Logger creates file and writes header + data correctly."""
    log_path = tmp_path / "test_basic.csv"

    with CSVLogger(str(log_path), buffer_size=1) as logger:
        logger.log(MockSession())

    assert log_path.exists()

    with open(log_path, "r", newline="") as f:
        rows = list(csv.reader(f))

    assert len(rows) == 2
    header = rows[0]
    # t, progress, playing + 7 pose + 2 ropes + 5 telemetry
    assert len(header) == 3 + 7 + 2 + 5
    assert header[:3] == ["t", "progress", "playing"]
    assert "rope_1" in header
    assert header[-1] == "altitude"

    row = dict(zip(header, rows[1]))
    assert float(row["t"]) == 0.0
    assert float(row["progress"]) == 0.25
    assert row["playing"] == "1"
    assert float(row["p_y"]) == 2.0
    assert float(row["q_w"]) == 1.0
    assert float(row["rope_1"]) == 5.0
    assert float(row["speed"]) == 10.0


def test_logger_buffering(tmp_path):
    """Data is buffered and only written when buffer fills or flush is called."""
    log_path = tmp_path / "test_buffer.csv"
    buffer_size = 5

    logger = CSVLogger(str(log_path), buffer_size=buffer_size)
    session = MockSession()

    for i in range(buffer_size - 1):
        session.t = float(i)
        logger.log(session)

    with open(log_path, "r") as f:
        lines = f.readlines()
    assert len(lines) == 1  # Header only

    logger.log(session)

    with open(log_path, "r") as f:
        lines = f.readlines()
    assert len(lines) == 1 + buffer_size

    logger.close()


def test_logger_field_selection(tmp_path):
    log_path = tmp_path / "telemetry_only.csv"
    with CSVLogger(log_path, fields=["telemetry"]) as logger:
        logger.log(MockSession())

    with open(log_path, newline="") as f:
        header = next(csv.reader(f))
    assert header == ["t", "progress", "playing", "speed", "total_g", "vertical_g", "lateral_g", "altitude"]


def test_logger_invalid_field(tmp_path):
    with pytest.raises(ValueError, match="Invalid fields"):
        CSVLogger(tmp_path / "bad.csv", fields=["pose", "velocity"])


def test_logger_creates_parent_dirs(tmp_path):
    log_path = tmp_path / "nested" / "deeper" / "log.csv"
    with CSVLogger(log_path) as logger:
        logger.log(MockSession())
    assert log_path.exists()
