"""
Example 01: Reference course using the Scenario API.

This script rides the five-point reference course with minimal code
using the high-level API.
"""
import sys
from pathlib import Path

# Setup path for local development (not needed if installed via pip)
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from ridepath.api.scenario import Scenario

def run_example():
    # 1. Control points of the track, in editor order.
    # Y is up; the rig hangs from four poles 20 m tall.
    points = [
        (-6, 2, 0),
        (-2, 4, 3),
        (0, 2, 5),
        (3, 6, 2),
        (8, 1, 0),
    ]

    # 2. Create and run the scenario
    # The Scenario manager builds the path, rig and playback, and handles logging.
    scenario = Scenario(name="01_reference_course") \
        .set_course(points) \
        .set_offset(2, (0, 2, 0)) \
        .enable_plotting(show=True)
    session = scenario.run()

    print(f"Ride complete. Results saved to {session.output_path}")

if __name__ == "__main__":
    run_example()
