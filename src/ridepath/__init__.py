"""
RidePath - Ride track sculpting and suspended-rig kinematics.

Core Components
---------------
build_dense_path / PathBuilder : Control points + offsets -> dense path
CurveSampler : Point and tangent queries over normalized progress
KinematicsEngine : Damped pose tracking of the suspended rig
MetricsCalculator : Speed and G-force telemetry
PlaybackScheduler : Play/pause/seek progress driver

Orchestration
-------------
RideSession : One simulated ride, stepped per animation tick
Scenario : Fluent builder for sessions
RideProfile : Course types and their kinematics constants

Examples
--------
>>> from ridepath import build_dense_path, CurveSampler, RideSession
>>> sampler = CurveSampler(build_dense_path(points, offsets))
>>> session = RideSession(sampler)
"""

__version__ = "0.1.0"

# Path construction
from ridepath.geometry.path import (
    PathBuilder,
    build_dense_path,
    divisions_for_total,
    resize_offsets,
    support_positions,
)
from ridepath.geometry.sampler import CurveSampler

# Rig and telemetry
from ridepath.dynamics.kinematics import KinematicsEngine, RigPose, default_anchors
from ridepath.dynamics.metrics import MetricsCalculator, TelemetrySnapshot

# Playback and orchestration
from ridepath.core.playback import PlaybackScheduler, PlaybackState
from ridepath.core.session import RideSession
from ridepath.profiles import KINEMATICS_PRESETS, KinematicsParams, RideProfile

# Logging
from ridepath.logger import CSVLogger
from ridepath.api.scenario import Scenario

__all__ = [
    # Version
    "__version__",
    # Path
    "PathBuilder",
    "build_dense_path",
    "divisions_for_total",
    "resize_offsets",
    "support_positions",
    "CurveSampler",
    # Rig
    "KinematicsEngine",
    "RigPose",
    "default_anchors",
    "MetricsCalculator",
    "TelemetrySnapshot",
    # Playback
    "PlaybackScheduler",
    "PlaybackState",
    "RideSession",
    # Profiles
    "RideProfile",
    "KinematicsParams",
    "KINEMATICS_PRESETS",
    # Logging
    "CSVLogger",
    # API
    "Scenario",
]
