# src/ridepath/utils/io.py
import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd

from ridepath.utils.validation import as_points


def save_simulation_history(history: List[Dict[str, Any]], filepath: str) -> None:
    """
    Saves a list of per-tick records to a CSV file.

    Args:
        history: List of dicts, e.g. RideSession.history
        filepath: Destination path (e.g., 'results/run1.csv')
    """
    if not history:
        raise ValueError("Simulation history is empty. Nothing to save.")

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(history)
    df.to_csv(path, index=False)
    print(f"Simulation results saved to {path.absolute()}")


def _vectors(raw: Any, name: str) -> np.ndarray:
    # Stored vectors come either as [x, y, z] lists or {"x":..,"y":..,"z":..} objects
    if raw is None:
        return np.zeros((0, 3), dtype=np.float64)
    rows = []
    for item in raw:
        if isinstance(item, dict):
            try:
                rows.append([item["x"], item["y"], item["z"]])
            except KeyError as e:
                raise ValueError(f"{name} entry {item!r} is missing key {e}") from e
        else:
            rows.append(item)
    return as_points(rows, name)


def course_from_dict(data: Dict[str, Any]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Read control points and segment offsets from stored course data.

    Accepts the storage layer's course payload, e.g.
    {"points": [[x, y, z], ...], "curveControlOffsets": [{"x": .., "y": .., "z": ..}, ...]}.
    The offsets key may also be spelled "offsets".

    Returns:
        (points, offsets) arrays of shape (N, 3) and (K, 3)
    """
    if "points" not in data:
        raise ValueError("Course data has no 'points' entry.")
    points = _vectors(data["points"], "points")
    raw_offsets = data.get("curveControlOffsets", data.get("offsets"))
    offsets = _vectors(raw_offsets, "offsets")
    return points, offsets


def course_to_dict(points: Any, offsets: Any = None) -> Dict[str, Any]:
    """Inverse of course_from_dict, using plain [x, y, z] lists."""
    return {
        "points": as_points(points, "points").tolist(),
        "curveControlOffsets": as_points(offsets, "offsets").tolist(),
    }


def load_course(filepath: str) -> Tuple[np.ndarray, np.ndarray]:
    """Load (points, offsets) from a JSON course file."""
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)
    return course_from_dict(data)


def save_course(points: Any, offsets: Any, filepath: str) -> None:
    """Write (points, offsets) to a JSON course file."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(course_to_dict(points, offsets), f, indent=2)
