from .kinematics import KinematicsEngine, RigPose, default_anchors
from .metrics import MetricsCalculator, TelemetrySnapshot
