"""
Tests for the visualization module.

Covers:
- Dense path, telemetry and rope-length plots
- Saving to disk
- Error handling for malformed logs
"""
import pytest
import pandas as pd
import numpy as np
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for testing
import matplotlib.pyplot as plt

from ridepath.geometry.path import build_dense_path
from ridepath.dynamics.kinematics import default_anchors
from ridepath.visualization import plotting


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def dummy_csv(tmp_path):
    """Create a valid session CSV for testing."""
    fn = tmp_path / "session.csv"
    t = np.linspace(0, 8, 100)
    progress = np.linspace(0, 1, 100)
    data = {
        "t": t,
        "progress": progress,
        "playing": np.ones_like(t),
        "p_x": 10 * progress,
        "p_y": np.sin(t),
        "p_z": np.zeros_like(t),
        "q_x": np.zeros_like(t),
        "q_y": np.zeros_like(t),
        "q_z": np.zeros_like(t),
        "q_w": np.ones_like(t),
        "rope_0": 10 + np.cos(t),
        "rope_1": 10 - np.cos(t),
        "speed": np.full_like(t, 10.0),
        "total_g": np.abs(np.sin(t)),
        "vertical_g": np.sin(t),
        "lateral_g": np.zeros_like(t),
        "altitude": np.sin(t),
    }
    pd.DataFrame(data).to_csv(fn, index=False)
    return str(fn)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


# =============================================================================
# Dense path
# =============================================================================

def test_plot_dense_path(reference_points, tmp_path):
    dense = build_dense_path(reference_points, divisions_per_segment=25)
    out = tmp_path / "plots" / "path.png"
    fig = plotting.plot_dense_path(
        dense, control_points=reference_points, anchors=default_anchors(),
        save_path=str(out), show=False,
    )
    assert out.exists()
    assert len(fig.axes) == 2


def test_plot_empty_path():
    fig = plotting.plot_dense_path(np.zeros((0, 3)), show=False)
    assert "0 points" in fig.axes[0].get_title()


# =============================================================================
# Telemetry
# =============================================================================

def test_plot_telemetry(dummy_csv, tmp_path):
    out = tmp_path / "telemetry.png"
    fig = plotting.plot_telemetry(dummy_csv, save_path=str(out), show=False)
    assert out.exists()
    assert len(fig.axes) == 3
    assert fig.axes[2].get_xlabel() == "t [s]"


def test_plot_telemetry_against_progress(dummy_csv):
    fig = plotting.plot_telemetry(dummy_csv, show=False, x_axis="progress")
    assert fig.axes[2].get_xlabel() == "progress"


def test_plot_telemetry_bad_axis(dummy_csv):
    with pytest.raises(KeyError):
        plotting.plot_telemetry(dummy_csv, show=False, x_axis="distance")


def test_plot_telemetry_missing_columns(tmp_path):
    fn = tmp_path / "ropes_only.csv"
    pd.DataFrame({"t": [0.0, 1.0], "rope_0": [1.0, 2.0]}).to_csv(fn, index=False)
    with pytest.raises(KeyError, match="speed"):
        plotting.plot_telemetry(str(fn), show=False)


# =============================================================================
# Rope lengths
# =============================================================================

def test_plot_rope_lengths(dummy_csv):
    fig = plotting.plot_rope_lengths(dummy_csv, show=False)
    labels = [line.get_label() for line in fig.axes[0].get_lines()]
    assert labels == ["rope_0", "rope_1"]


def test_plot_rope_lengths_without_ropes(tmp_path):
    fn = tmp_path / "telemetry_only.csv"
    pd.DataFrame({"t": [0.0, 1.0], "speed": [1.0, 2.0]}).to_csv(fn, index=False)
    with pytest.raises(KeyError, match="rope"):
        plotting.plot_rope_lengths(str(fn), show=False)


# =============================================================================
# Error handling
# =============================================================================

def test_csv_must_start_with_time(tmp_path):
    fn = tmp_path / "bad.csv"
    pd.DataFrame({"progress": [0.0], "t": [0.0]}).to_csv(fn, index=False)
    with pytest.raises(ValueError, match="time"):
        plotting.plot_telemetry(str(fn), show=False)


def test_csv_without_rows(tmp_path):
    fn = tmp_path / "empty.csv"
    fn.write_text("t,progress,speed\n")
    with pytest.raises(ValueError, match="No data rows"):
        plotting.plot_rope_lengths(str(fn), show=False)
