from __future__ import annotations
import os
import csv
from typing import Dict, Tuple, List, Iterable
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  (registers 3D projection)


def _load_csv(filepath: str) -> Tuple[np.ndarray, Dict[str, np.ndarray], List[str]]:
    """
    Load a CSV produced by CSVLogger.

    Returns
    -------
    t : (N,) array
        Time vector.
    cols : dict[str, np.ndarray]
        Mapping column_name -> (N,) array.
    headers : list[str]
        Column headers in order (first one should be 't').
    """
    with open(filepath, "r", newline="") as f:
        reader = csv.reader(f)
        headers = next(reader)
    if headers[0] != "t":
        raise ValueError("First column must be time 't'.")
    data = np.loadtxt(filepath, delimiter=",", skiprows=1, dtype=float, ndmin=2)
    if data.shape[0] == 0:
        raise ValueError(f"No data rows in {filepath}.")
    cols: Dict[str, np.ndarray] = {}
    for j, name in enumerate(headers):
        cols[name] = data[:, j]
    t = cols["t"]
    return t, cols, headers


def _get_components(cols: Dict[str, np.ndarray], names: Iterable[str]) -> List[np.ndarray]:
    out = []
    for name in names:
        if name not in cols:
            raise KeyError(f"Column '{name}' not found in CSV.")
        out.append(cols[name])
    return out


def _finish(fig: Figure, save_path: str | None, show: bool) -> Figure:
    fig.tight_layout()
    if save_path:
        os.makedirs(os.path.dirname(save_path) or ".", exist_ok=True)
        fig.savefig(save_path, dpi=180, bbox_inches="tight")
    if show:
        plt.show()
    return fig


def plot_dense_path(
    dense_path: np.ndarray,
    control_points: np.ndarray | None = None,
    anchors: np.ndarray | None = None,
    save_path: str | None = None,
    show: bool = True,
) -> Figure:
    """
    Plot the dense path in 3D with its height profile.

    Parameters
    ----------
    dense_path : (M, 3) array
        Output of build_dense_path.
    control_points : (N, 3) array | None
        If given, drawn as markers on the path.
    anchors : (K, 3) array | None
        If given, drawn as pole tops.
    save_path : str | None
        If given, save the figure to this path (png/svg).
    show : bool
        Whether to call plt.show().

    Returns
    -------
    fig : Figure
    """
    pts = np.asarray(dense_path, dtype=float).reshape(-1, 3)

    fig = plt.figure(figsize=(10, 6))
    gs = fig.add_gridspec(2, 2, height_ratios=[2.0, 1.0])
    ax3d = fig.add_subplot(gs[0, :], projection="3d")
    axh = fig.add_subplot(gs[1, :])

    if len(pts):
        ax3d.plot(pts[:, 0], pts[:, 1], pts[:, 2], lw=2.0, color="#1a73e8")
        ax3d.scatter(*pts[0], color="#34a853", s=40, label="start")
        ax3d.scatter(*pts[-1], color="#ea4335", s=40, label="end")
    if control_points is not None and len(control_points):
        cp = np.asarray(control_points, dtype=float).reshape(-1, 3)
        ax3d.scatter(cp[:, 0], cp[:, 1], cp[:, 2], color="#fbbc05", s=30, label="control points")
    if anchors is not None and len(anchors):
        an = np.asarray(anchors, dtype=float).reshape(-1, 3)
        ax3d.scatter(an[:, 0], an[:, 1], an[:, 2], color="#666666", marker="^", s=40, label="anchors")
    ax3d.set_xlabel("x"); ax3d.set_ylabel("y"); ax3d.set_zlabel("z")
    ax3d.set_title(f"Dense path: {len(pts)} points")
    if len(pts):
        ax3d.legend(loc="best")

    # Height (y) against point index
    axh.plot(np.arange(len(pts)), pts[:, 1] if len(pts) else [], color="#1a73e8", lw=2)
    axh.set_xlabel("point index"); axh.set_ylabel("y")
    axh.grid(True, alpha=0.3)
    axh.set_title("Height profile")

    return _finish(fig, save_path, show)


def plot_telemetry(
    csv_path: str,
    save_path: str | None = None,
    show: bool = True,
    x_axis: str = "t",
) -> Figure:
    """
    Plot speed and G-force readouts from a session log.

    Parameters
    ----------
    csv_path : str
        Path to logger CSV.
    save_path : str | None
    show : bool
    x_axis : str
        "t" (session time) or "progress".

    Returns
    -------
    fig : Figure
    """
    t, cols, _ = _load_csv(csv_path)
    if x_axis not in cols:
        raise KeyError(f"Column '{x_axis}' not found in CSV.")
    x = cols[x_axis]
    speed, total_g, vertical_g, lateral_g, altitude = _get_components(
        cols, ["speed", "total_g", "vertical_g", "lateral_g", "altitude"]
    )

    fig, axes = plt.subplots(3, 1, figsize=(10, 8), sharex=True)

    axes[0].plot(x, speed, color="#1a73e8", lw=2.0)
    axes[0].set_ylabel("speed [m/s]")
    axes[0].grid(True, alpha=0.3)
    axes[0].set_title("Speed")

    axes[1].plot(x, total_g, label="total", color="#ea4335", lw=2.0)
    axes[1].plot(x, vertical_g, label="vertical", color="#34a853")
    axes[1].plot(x, lateral_g, label="lateral", color="#fbbc05")
    axes[1].set_ylabel("G")
    axes[1].grid(True, alpha=0.3)
    axes[1].legend(loc="best")
    axes[1].set_title("G-forces")

    axes[2].plot(x, altitude, color="#1a73e8", lw=2.0)
    axes[2].set_xlabel("t [s]" if x_axis == "t" else x_axis)
    axes[2].set_ylabel("altitude [m]")
    axes[2].grid(True, alpha=0.3)
    axes[2].set_title("Altitude")

    return _finish(fig, save_path, show)


def plot_rope_lengths(
    csv_path: str,
    save_path: str | None = None,
    show: bool = True,
) -> Figure:
    """
    Plot each anchor's rope length over time.

    Returns
    -------
    fig : Figure
    """
    t, cols, headers = _load_csv(csv_path)
    rope_cols = [h for h in headers if h.startswith("rope_")]
    if not rope_cols:
        raise KeyError("No rope length columns found in CSV.")

    fig, ax = plt.subplots(1, 1, figsize=(10, 4))
    for name in rope_cols:
        ax.plot(t, cols[name], label=name)
    ax.set_xlabel("t [s]"); ax.set_ylabel("length [m]")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")
    ax.set_title("Rope lengths")

    return _finish(fig, save_path, show)
