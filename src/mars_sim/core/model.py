"""Data models for the orbit and experiment state."""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum, auto

import numpy as np

from .physics import ellipse_eccentricity, focal_distance, normalize_radians, perigee_apogee


class Mode(Enum):
    OBSERVING = auto()
    ELLIPSE_EXPLORING = auto()


class Phase(Enum):
    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()
    ELLIPSE_EXPLORING = auto()


class RayKind(Enum):
    INITIAL = "ray"
    FINAL = "final_ray"


@dataclass
class OrbitalBody:
    """A body on a fixed Keplerian path around the Sun."""

    name: str
    angular_speed: float
    semi_major_axis: float
    eccentricity: float = 0.0
    angle: float = 0.0

    @property
    def semi_minor_axis(self) -> float:
        return self.semi_major_axis * math.sqrt(1.0 - self.eccentricity**2)

    @property
    def focus_offset(self) -> float:
        return self.semi_major_axis * self.eccentricity

    @property
    def is_circular(self) -> bool:
        return self.eccentricity == 0.0

    @property
    def normalized_angle(self) -> float:
        return normalize_radians(self.angle)


@dataclass
class ExperimentState:
    """Counters and flags driven by user actions and ticks."""

    days_counter: int = 0
    experiment_days: int = 0
    is_paused: bool = False
    has_drawn_ray: bool = False
    has_drawn_final_ray: bool = False
    experiment_begun: bool = False
    mode: Mode = Mode.OBSERVING
    is_started: bool = False

    @property
    def phase(self) -> Phase:
        if self.mode is Mode.ELLIPSE_EXPLORING:
            return Phase.ELLIPSE_EXPLORING
        if not self.is_started:
            return Phase.IDLE
        if self.is_paused:
            return Phase.PAUSED
        return Phase.RUNNING

    def copy(self) -> "ExperimentState":
        return replace(self)


@dataclass(frozen=True)
class EllipseParams:
    """Exploratory ellipse, axis aligned, in simulation units."""

    center_x: float
    center_y: float
    rx: float
    ry: float

    @property
    def eccentricity(self) -> float:
        return ellipse_eccentricity(self.rx, self.ry)

    @property
    def focal_distance(self) -> float:
        return focal_distance(self.rx, self.ry)

    @property
    def perigee(self) -> float:
        return perigee_apogee(self.rx, self.ry)[0]

    @property
    def apogee(self) -> float:
        return perigee_apogee(self.rx, self.ry)[1]

    def scaled_perigee_apogee(self, unit_length: float) -> tuple[float, float]:
        """Perigee and apogee expressed in multiples of *unit_length*."""

        if unit_length <= 0.0:
            raise ValueError("unit_length must be positive")
        perigee, apogee = perigee_apogee(self.rx, self.ry)
        return perigee / unit_length, apogee / unit_length


@dataclass(frozen=True)
class Ray:
    """Observation ray from Earth through Mars."""

    kind: RayKind
    earth: np.ndarray
    mars: np.ndarray
    day: int

    @property
    def direction(self) -> np.ndarray:
        return self.mars - self.earth


@dataclass(frozen=True)
class FrameSnapshot:
    """Result of one state-update phase, consumed by the renderer."""

    elapsed_days: float
    earth: np.ndarray
    mars: np.ndarray
    earth_angle: float
    mars_angle: float
    heliocentric_longitude: float
    geocentric_longitude: float
    state: ExperimentState
    rays: tuple[Ray, ...] = field(default_factory=tuple)
    ellipse: EllipseParams | None = None
    final_ray: Ray | None = None
    generation: int = 0

    @property
    def phase(self) -> Phase:
        return self.state.phase


__all__ = [
    "EllipseParams",
    "ExperimentState",
    "FrameSnapshot",
    "Mode",
    "OrbitalBody",
    "Phase",
    "Ray",
    "RayKind",
]
