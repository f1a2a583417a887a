"""Configuration dataclasses for the Mars longitude experiment."""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class OrbitCfg:
    earth_orbit_radius: float = 200.0
    mars_semi_major_axis: float = 300.0
    mars_eccentricity: float = 0.0934
    earth_sidereal_period: float = 365.25
    mars_sidereal_period: float = 687.0
    time_scale: float = 1.0

    @property
    def earth_angular_speed(self) -> float:
        return 2.0 * math.pi / self.earth_sidereal_period * self.time_scale

    @property
    def mars_angular_speed(self) -> float:
        return 2.0 * math.pi / self.mars_sidereal_period * self.time_scale

    @property
    def mars_semi_minor_axis(self) -> float:
        return self.mars_semi_major_axis * math.sqrt(1.0 - self.mars_eccentricity**2)

    @property
    def mars_aphelion(self) -> float:
        return self.mars_semi_major_axis * (1.0 + self.mars_eccentricity)


@dataclass(frozen=True)
class ExperimentCfg:
    final_ray_day: int = 687
    dt_days: float = 1.0
    ellipse_size_step: float = 10.0
    ellipse_eccentricity_step: float = 10.0
    ellipse_min_radius: float = 1.0
    log_every_days: int = 1


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1000
    height: int = 800
    fps: int = 60
    world_margin: float = 40.0
    background_color: tuple[int, int, int] = (250, 250, 252)
    sun_color: tuple[int, int, int] = (255, 205, 40)
    sun_radius: float = 10.0
    earth_color: tuple[int, int, int] = (40, 90, 220)
    mars_color: tuple[int, int, int] = (210, 50, 40)
    body_radius: float = 5.0
    earth_orbit_color: tuple[int, int, int] = (40, 90, 220)
    mars_orbit_color: tuple[int, int, int] = (210, 50, 40)
    ray_color: tuple[int, int, int] = (210, 50, 40)
    final_ray_color: tuple[int, int, int] = (150, 20, 120)
    ray_width: int = 2
    ray_arrow_fraction: float = 0.05
    arrow_head_length: int = 10
    arrow_head_angle_deg: int = 26
    arc_gradient_steps: int = 6
    arc_gradient_alpha: int = 90
    sun_line_color: tuple[int, int, int] = (40, 90, 220)
    mars_line_color: tuple[int, int, int] = (210, 50, 40)
    helio_arc_color: tuple[int, int, int] = (40, 90, 220)
    helio_arc_radius: float = 40.0
    geo_arc_color: tuple[int, int, int] = (210, 50, 40)
    geo_arc_radius: float = 28.0
    reference_line_length: float = 60.0
    reference_line_color: tuple[int, int, int] = (150, 150, 160)
    ellipse_color: tuple[int, int, int] = (20, 140, 90)
    hud_text_color: tuple[int, int, int] = (20, 20, 30)
    hud_font_size: int = 16
    hud_margin: int = 10
    hud_line_spacing: int = 20
    font_names: tuple[str, ...] = ("arial", "helvetica", "dejavusans")
    button_width: int = 150
    button_height: int = 36
    button_spacing: int = 12
    button_margin: int = 16
    button_color: tuple[int, int, int, int] = (225, 232, 245, 235)
    button_hover_color: tuple[int, int, int, int] = (200, 214, 240, 245)
    button_text_color: tuple[int, int, int] = (20, 30, 60)
    button_border_color: tuple[int, int, int, int] = (90, 110, 160, 200)
    button_radius: int = 10
    panel_background_color: tuple[int, int, int, int] = (255, 255, 255, 200)


ORBIT_CFG = OrbitCfg()
EXPERIMENT_CFG = ExperimentCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "EXPERIMENT_CFG",
    "ORBIT_CFG",
    "RENDER_CFG",
    "ExperimentCfg",
    "OrbitCfg",
    "RenderCfg",
]
