"""Geometry helpers for the orbit and ellipse calculations."""
from __future__ import annotations

import math

import numpy as np


def normalize_degrees(angle_deg: float) -> float:
    """Wrap an angle in degrees into ``[0, 360)``."""

    wrapped = math.fmod(angle_deg, 360.0)
    if wrapped < 0.0:
        wrapped += 360.0
    # tiny negatives can round up to 360; also folds -0.0 into 0.0
    if wrapped >= 360.0 or wrapped == 0.0:
        wrapped = 0.0
    return wrapped


def normalize_radians(angle: float) -> float:
    """Wrap an angle in radians into ``[0, 2*pi)``."""

    tau = 2.0 * math.pi
    wrapped = math.fmod(angle, tau)
    if wrapped < 0.0:
        wrapped += tau
    if wrapped >= tau or wrapped == 0.0:
        wrapped = 0.0
    return wrapped


def displayed_longitude(angle: float) -> float:
    """Longitude in degrees, counter-clockwise as drawn on a y-down screen."""

    return normalize_degrees(-math.degrees(angle))


def direction_longitude(origin: np.ndarray, target: np.ndarray) -> float:
    """Displayed longitude of the vector from *origin* to *target*."""

    delta = np.asarray(target, dtype=float) - np.asarray(origin, dtype=float)
    return displayed_longitude(math.atan2(float(delta[1]), float(delta[0])))


def ellipse_eccentricity(rx: float, ry: float) -> float:
    """Eccentricity of an axis-aligned ellipse with radii ``rx`` and ``ry``.

    The larger radius is treated as the semi-major axis, so the result is
    symmetric in its arguments and always lies in ``[0, 1)``.
    """

    if rx <= 0.0 or ry <= 0.0:
        return 0.0
    major = max(rx, ry)
    minor = min(rx, ry)
    return math.sqrt(1.0 - (minor / major) ** 2)


def focal_distance(rx: float, ry: float) -> float:
    """Distance from the ellipse centre to either focus."""

    if rx <= 0.0 or ry <= 0.0:
        return 0.0
    return math.sqrt(abs(rx * rx - ry * ry))


def perigee_apogee(rx: float, ry: float) -> tuple[float, float]:
    """Closest and farthest distance of the ellipse from its focus."""

    major = max(rx, ry, 0.0)
    c = focal_distance(rx, ry)
    return major - c, major + c


__all__ = [
    "direction_longitude",
    "displayed_longitude",
    "ellipse_eccentricity",
    "focal_distance",
    "normalize_degrees",
    "normalize_radians",
    "perigee_apogee",
]
