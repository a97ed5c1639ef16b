"""
Example 02: Closed course loaded from a JSON file.

Demonstrates:
- Loading control points and curve offsets saved by the course editor
- Closing the loop back to the first point
- Kinematics and playback presets
"""
import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from ridepath.api.scenario import Scenario

COURSE = Path(__file__).parent.parent / "courses" / "figure_eight.json"


def run_example():
    scenario = (
        Scenario(name="02_figure_eight")
        .load_course(str(COURSE), closed=True)
        .set_resolution(total_divisions=160)
        .configure_kinematics("responsive")
        .configure_playback("default", speed=2)
        .enable_plotting()
    )
    session = scenario.run(log_interval=1.0)

    df = session.metrics.compute_series(session.sampler, np.linspace(0.0, 1.0, 201))
    print(f"\nTelemetry over the course:")
    print(df[["speed", "total_g", "vertical_g", "lateral_g"]].describe().round(2))
    print(f"\nResults saved to {session.output_path}")


if __name__ == "__main__":
    run_example()
