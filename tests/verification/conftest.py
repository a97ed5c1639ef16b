"""
Verification Test Suite for ridepath.

These tests compare engine output against closed-form solutions
to validate path geometry, rig kinematics and playback timing.

Test Categories:
- Geometry: Quadratic Bezier closed form, arc length of a known curve
- Rig: Rope lengths against Euclidean distance, steady-state attitude
- Playback: Tick counts to the end of the path for every speed preset
"""

import numpy as np
import pytest

from ridepath.core.session import RideSession
from ridepath.geometry.path import build_dense_path
from ridepath.geometry.sampler import CurveSampler
from ridepath.profiles import KINEMATICS_PRESETS


# -----------------------------------------------------------------------------
# Common Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def arc_points():
    """Two points and one offset: a parabolic arc of span 10 and height 2 in the X-Y plane."""
    return np.array([
        [0.0, 0.0, 0.0],
        [10.0, 0.0, 0.0],
    ]), np.array([[0.0, 4.0, 0.0]])


@pytest.fixture
def fine_arc(arc_points):
    """Arc sampled at high resolution."""
    points, offsets = arc_points
    return CurveSampler(build_dense_path(points, offsets, divisions_per_segment=2000))


@pytest.fixture
def rigid_session(reference_points):
    """Session whose rig snaps to its target attitude on every tick."""
    return RideSession.from_control_points(reference_points, profile=KINEMATICS_PRESETS["rigid"])
