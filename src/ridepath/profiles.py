"""
Ride profiles and their kinematics constants.

A ride profile names a course type together with the capabilities the
engine has for it. Only the rollercoaster profile is implemented; the
other course types are listed so that editors can show them, but
selecting one raises.

Kinematics constants are bundled in `KinematicsParams`. Named presets
live in `KINEMATICS_PRESETS` and are looked up by `Scenario`.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ridepath.utils.validation import validate_non_negative


@dataclass(frozen=True)
class KinematicsParams:
    """
    Constants shaping how the rig follows the path.

    Parameters
    ----------
    slerp_factor : float
        Fraction of the way the orientation moves toward the target on
        each update. Small values make orientation lag position.
    bank_coefficient : float
        Roll added per unit of the direction's world-Z component.
    pitch_coefficient : float
        Pitch added per unit of the direction's world-Y component.
    min_direction : float
        Direction length at or below which the orientation is left as is.

    Notes
    -----
    `slerp_factor` is applied once per update, so the visible damping
    depends on how often the host calls `KinematicsEngine.update`.
    """

    slerp_factor: float = 0.02
    bank_coefficient: float = -0.1
    pitch_coefficient: float = 0.05
    min_direction: float = 0.01

    def __post_init__(self) -> None:
        if not 0.0 < self.slerp_factor <= 1.0:
            raise ValueError(f"slerp_factor must be in (0, 1], got {self.slerp_factor}")
        validate_non_negative(self.min_direction, "min_direction")

    def with_overrides(self, **kwargs) -> KinematicsParams:
        """Copy with some fields replaced."""
        return replace(self, **kwargs)


KINEMATICS_PRESETS: dict[str, KinematicsParams] = {
    "default": KinematicsParams(),
    "gentle": KinematicsParams(slerp_factor=0.01, bank_coefficient=-0.05, pitch_coefficient=0.025),
    "responsive": KinematicsParams(slerp_factor=0.1),
    "rigid": KinematicsParams(slerp_factor=1.0, bank_coefficient=0.0, pitch_coefficient=0.0),
}


class RideProfile(Enum):
    """
    Course types known to the editor.

    Each member carries a display label, whether the engine supports it,
    and the kinematics constants used for it.
    """

    ROLLERCOASTER = ("Rollercoaster", True, KINEMATICS_PRESETS["default"])
    FLIGHT_PATH = ("Flight Path", False, None)
    ROAD_RACING = ("Road Racing", False, None)

    def __init__(self, label: str, enabled: bool, kinematics: KinematicsParams | None) -> None:
        self.label = label
        self.enabled = enabled
        self._kinematics = kinematics

    @property
    def kinematics(self) -> KinematicsParams:
        """Kinematics constants for this profile."""
        self.require_enabled()
        return self._kinematics

    def require_enabled(self) -> None:
        """Raise if the engine has no implementation for this profile."""
        if not self.enabled:
            raise ValueError(f"Ride profile '{self.label}' is not available yet")

    @classmethod
    def from_label(cls, label: str) -> RideProfile:
        """Look up a profile by label or member name, case-insensitive."""
        key = label.strip().lower()
        for profile in cls:
            if key in (profile.label.lower(), profile.name.lower()):
                return profile
        valid = ", ".join(p.label for p in cls)
        raise ValueError(f"Unknown ride profile '{label}'. Valid options: {valid}")

    @classmethod
    def available(cls) -> list[RideProfile]:
        """Profiles the engine can simulate."""
        return [p for p in cls if p.enabled]
