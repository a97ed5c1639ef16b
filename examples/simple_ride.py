"""
Simple ride: Reference course ridden once at normal speed.

Demonstrates:
- Dense path construction from control points and offsets
- RideSession setup with logging
- Automatic plot generation
"""
import numpy as np
import time
from pathlib import Path
import sys

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ridepath.core.session import RideSession
from ridepath.geometry.path import PathBuilder, support_positions
from ridepath.geometry.sampler import CurveSampler
from ridepath.dynamics.kinematics import default_anchors
from ridepath.utils.orientation import describe_orientation


def main():
    """Run the reference course."""
    print("=" * 60)
    print("Simple Ride")
    print("=" * 60)

    points = np.array([
        [-6.0, 2.0, 0.0],
        [-2.0, 4.0, 3.0],
        [0.0, 2.0, 5.0],
        [3.0, 6.0, 2.0],
        [8.0, 1.0, 0.0],
    ])
    offsets = np.zeros((len(points) - 1, 3))
    offsets[1] = [0.0, 2.5, 0.0]  # Raise the hump between points 1 and 2

    dense = PathBuilder(total_divisions=100).build(points, offsets)
    sampler = CurveSampler(dense)

    print(f"\nCourse:")
    print(f"  Control points: {len(points)}")
    print(f"  Dense points: {len(sampler)}")
    print(f"  Length: {sampler.length():.2f} m")
    print(f"  Support beams: {len(support_positions(dense))}")

    session = RideSession.with_logging(
        "simple_ride",
        sampler,
        anchors=default_anchors(),
        auto_save_plots=True,  # Plots generated automatically
    )

    print(f"\nRunning ride...")
    start = time.time()
    ticks = session.run(log_interval=2.0)
    elapsed = time.time() - start
    session.close()

    peak = session.metrics.peak(sampler)
    print(f"\nResults:")
    print(f"  Ticks: {ticks}")
    print(f"  Ride time: {session.t:.3f} s")
    print(f"  Wall clock time: {elapsed:.3f} s")
    print(f"  Peak speed: {peak['speed']:.2f}")
    print(f"  Peak G: {peak['total_g']:.2f}")
    print(f"  Final attitude: {describe_orientation(session.pose.orientation)}")

    print(f"\nOutput saved to: {session.output_path}")
    print("=" * 60)


if __name__ == "__main__":
    main()
