"""
CSV logging for ride sessions.

Buffers rows in memory and writes in batches to minimize I/O overhead.
Implements context manager protocol for safe resource handling.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, TextIO

VALID_FIELDS = ("pose", "ropes", "telemetry")

POSE_COLUMNS = ["p_x", "p_y", "p_z", "q_x", "q_y", "q_z", "q_w"]
TELEMETRY_COLUMNS = ["speed", "total_g", "vertical_g", "lateral_g", "altitude"]


class CSVLogger:
    """
    Buffered CSV logger for ride sessions.

    Each row holds the session time, progress and playback state,
    followed by the selected field groups of the latest tick.

    Parameters
    ----------
    filepath : str | Path
        Output CSV file path
    buffer_size : int
        Number of rows to buffer before writing. Default 1000.
    fields : list[str] | None
        Field groups to log. Default: ["pose", "ropes", "telemetry"]
        Options: "pose" (position + quaternion), "ropes" (rope lengths),
                 "telemetry" (speed, G-forces, altitude)

    Notes
    -----
    **Usage Patterns:**

    1. Context manager (recommended):
    >>> with CSVLogger("ride.csv") as logger:
    ...     while session.step():
    ...         logger.log(session)

    2. Auto-managed (via RideSession):
    >>> session = RideSession.with_logging("loop_test", sampler, anchors)
    >>> session.run()
    """

    def __init__(
        self,
        filepath: str | Path,
        buffer_size: int = 1000,
        fields: list[str] | None = None
    ) -> None:
        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self.fields = list(fields) if fields is not None else list(VALID_FIELDS)

        invalid = set(self.fields) - set(VALID_FIELDS)
        if invalid:
            raise ValueError(
                f"Invalid fields: {invalid}. Valid options: {set(VALID_FIELDS)}"
            )

        self._buffer: list[list[str]] = []
        self._file: TextIO | None = None
        self._writer: Any = None  # csv.writer is a function, not a type
        self._header_written = False

        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self) -> CSVLogger:
        """Open file for writing."""
        self._file = open(self.filepath, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close file, flushing any remaining data."""
        self.close()

    def _write_header(self, session: Any) -> None:
        hdr = ["t", "progress", "playing"]
        if "pose" in self.fields:
            hdr.extend(POSE_COLUMNS)
        if "ropes" in self.fields:
            hdr.extend(f"rope_{i}" for i in range(len(session.anchors)))
        if "telemetry" in self.fields:
            hdr.extend(TELEMETRY_COLUMNS)

        if self._writer:
            self._writer.writerow(hdr)
            if self._file:
                self._file.flush()  # Ensure header written immediately

        self._header_written = True

    def log(self, session: Any) -> None:
        """
        Log the session's latest tick to the buffer.

        Parameters
        ----------
        session : RideSession
            Any object exposing `t`, `progress`, `is_playing`, `anchors`,
            `pose` and `telemetry`.

        Notes
        -----
        Automatically opens file on first call if not using context manager.
        Writes to disk when buffer is full.
        """
        if self._file is None:
            self.__enter__()

        if not self._header_written:
            self._write_header(session)

        row = [f"{session.t:.6f}", f"{session.progress:.10f}", str(int(session.is_playing))]
        if "pose" in self.fields:
            pose = session.pose
            row.extend(f"{v:.10e}" for v in pose.position)
            row.extend(f"{v:.10e}" for v in pose.orientation)
        if "ropes" in self.fields:
            row.extend(f"{v:.10e}" for v in session.pose.rope_lengths)
        if "telemetry" in self.fields:
            snap = session.telemetry.as_dict()
            row.extend(f"{snap[k]:.10e}" for k in TELEMETRY_COLUMNS)

        self._buffer.append(row)

        if len(self._buffer) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write buffered data to disk and clear buffer."""
        if self._writer and self._buffer:
            self._writer.writerows(self._buffer)
            if self._file:
                self._file.flush()
            self._buffer.clear()

    def close(self) -> None:
        """Flush remaining data and close file."""
        self.flush()
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None
