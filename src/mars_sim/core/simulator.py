"""Earth and Mars on fixed orbits around the Sun, one simulated day per step."""
from __future__ import annotations

import math

import numpy as np

from .config import ORBIT_CFG, OrbitCfg
from .model import OrbitalBody
from .physics import direction_longitude, displayed_longitude


class OrbitalSimulator:
    """Owns simulation time and the angles of Earth and Mars.

    Positions are Sun-relative with x to the right and y pointing down, the
    way they are drawn. Angles decrease every step, which reads as
    counter-clockwise motion on screen. Longitudes are always derived from the
    current angles and measured counter-clockwise as displayed.
    """

    def __init__(self, cfg: OrbitCfg = ORBIT_CFG) -> None:
        self._cfg = cfg
        self.earth = OrbitalBody(
            name="Earth",
            angular_speed=cfg.earth_angular_speed,
            semi_major_axis=cfg.earth_orbit_radius,
        )
        self.mars = OrbitalBody(
            name="Mars",
            angular_speed=cfg.mars_angular_speed,
            semi_major_axis=cfg.mars_semi_major_axis,
            eccentricity=cfg.mars_eccentricity,
        )
        self.elapsed_days = 0.0

    @property
    def cfg(self) -> OrbitCfg:
        return self._cfg

    @property
    def bodies(self) -> tuple[OrbitalBody, OrbitalBody]:
        return self.earth, self.mars

    def advance(self, dt_days: float = 1.0) -> None:
        for body in self.bodies:
            body.angle -= body.angular_speed * dt_days
        self.elapsed_days += dt_days

    def reset(self) -> None:
        for body in self.bodies:
            body.angle = 0.0
        self.elapsed_days = 0.0

    @staticmethod
    def position_of(body: OrbitalBody) -> np.ndarray:
        """Cartesian position of *body* with the Sun at the origin.

        Circular orbits are centred on the Sun. Elliptical orbits are shifted
        by ``a * e`` along x so that the Sun sits at a focus.
        """

        if body.is_circular:
            return np.array(
                [
                    body.semi_major_axis * math.cos(body.angle),
                    body.semi_major_axis * math.sin(body.angle),
                ],
                dtype=float,
            )
        return np.array(
            [
                -body.focus_offset + body.semi_major_axis * math.cos(body.angle),
                body.semi_minor_axis * math.sin(body.angle),
            ],
            dtype=float,
        )

    def earth_position(self) -> np.ndarray:
        return self.position_of(self.earth)

    def mars_position(self) -> np.ndarray:
        return self.position_of(self.mars)

    def heliocentric_longitude(self) -> float:
        return displayed_longitude(self.earth.angle)

    def geocentric_longitude(
        self,
        earth_pos: np.ndarray | None = None,
        mars_pos: np.ndarray | None = None,
    ) -> float:
        if earth_pos is None:
            earth_pos = self.earth_position()
        if mars_pos is None:
            mars_pos = self.mars_position()
        return direction_longitude(earth_pos, mars_pos)

    def orbit_points(self, body: OrbitalBody, samples: int = 360) -> np.ndarray:
        """Sampled closed path of *body*'s orbit, shape ``(samples, 2)``."""

        if samples < 3:
            raise ValueError("samples must be at least 3")
        theta = np.linspace(0.0, 2.0 * np.pi, samples, endpoint=False)
        if body.is_circular:
            xs = body.semi_major_axis * np.cos(theta)
        else:
            xs = -body.focus_offset + body.semi_major_axis * np.cos(theta)
        ys = body.semi_minor_axis * np.sin(theta)
        return np.column_stack((xs, ys))


__all__ = ["OrbitalSimulator"]
