"""Utility functions for RidePath."""

from .io import course_from_dict, course_to_dict, load_course, save_course, save_simulation_history
from .validation import (
    as_count,
    as_points,
    as_vector,
    clamp_progress,
    validate_fraction,
    validate_non_negative,
    validate_positive,
)

__all__ = [
    "save_simulation_history",
    "course_from_dict",
    "course_to_dict",
    "load_course",
    "save_course",
    "as_count",
    "as_points",
    "clamp_progress",
    "as_vector",
    "validate_positive",
    "validate_non_negative",
    "validate_fraction",
]
