import os
import sys

import numpy as np
import pytest

# Get the path to the project root (one level up from 'tests')
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, 'src')

# Add 'src' to sys.path
sys.path.insert(0, src_path)


@pytest.fixture
def reference_points():
    """Five-point reference course."""
    return np.array([
        [-6.0, 2.0, 0.0],
        [-2.0, 4.0, 3.0],
        [0.0, 2.0, 5.0],
        [3.0, 6.0, 2.0],
        [8.0, 1.0, 0.0],
    ])


@pytest.fixture
def straight_sampler():
    """Straight line from the origin to (10, 0, 0), 101 evenly spaced points."""
    from ridepath.geometry.path import build_dense_path
    from ridepath.geometry.sampler import CurveSampler

    return CurveSampler(build_dense_path([(0, 0, 0), (10, 0, 0)], divisions_per_segment=100))
