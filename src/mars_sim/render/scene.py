"""Turns frame snapshots into draw commands on two layers.

The background layer holds what persists between frames: the Sun, both orbit
paths and every ray cast so far. Rays are appended to it as they appear, and
the layer is redrawn from scratch only after a reset or a resize. The dynamic
layer is rebuilt every frame with the bodies, the Earth-Sun and Earth-Mars
lines, the longitude arcs and the HUD text.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np

from mars_sim.core.config import EXPERIMENT_CFG, ORBIT_CFG, RENDER_CFG, OrbitCfg, RenderCfg
from mars_sim.core.model import EllipseParams, FrameSnapshot, Phase, Ray, RayKind

from .base import Point, Renderer


class Viewport:
    """Maps Sun-relative simulation units onto window pixels."""

    def __init__(self, size: tuple[int, int], world_extent: float, *, margin: float = 0.0) -> None:
        if world_extent <= 0.0:
            raise ValueError("world_extent must be positive")
        self._world_extent = world_extent
        self._margin = margin
        self._size = size
        self._scale = self._fit_scale(size)

    def _fit_scale(self, size: tuple[int, int]) -> float:
        width, height = size
        if width <= 0 or height <= 0:
            raise ValueError("Viewport size must be positive")
        usable = max(1.0, min(width, height) / 2.0 - self._margin)
        return usable / self._world_extent

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def origin(self) -> Point:
        width, height = self._size
        return width / 2.0, height / 2.0

    def update_size(self, size: tuple[int, int]) -> None:
        self._scale = self._fit_scale(size)
        self._size = size

    def to_screen(self, point: Sequence[float]) -> Point:
        ox, oy = self.origin
        return ox + float(point[0]) * self._scale, oy + float(point[1]) * self._scale

    def to_pixels(self, length: float) -> float:
        return length * self._scale


class Scene:
    def __init__(
        self,
        viewport: Viewport,
        orbit_cfg: OrbitCfg = ORBIT_CFG,
        render_cfg: RenderCfg = RENDER_CFG,
        *,
        final_ray_day: int = EXPERIMENT_CFG.final_ray_day,
    ) -> None:
        self.viewport = viewport
        self._orbit_cfg = orbit_cfg
        self._cfg = render_cfg
        self._final_ray_day = final_ray_day
        self._rays_drawn = 0
        self._generation: int | None = None
        self._needs_full_redraw = True

    @classmethod
    def for_window(
        cls,
        size: tuple[int, int],
        orbit_cfg: OrbitCfg = ORBIT_CFG,
        render_cfg: RenderCfg = RENDER_CFG,
        *,
        final_ray_day: int = EXPERIMENT_CFG.final_ray_day,
    ) -> "Scene":
        viewport = Viewport(size, orbit_cfg.mars_aphelion, margin=render_cfg.world_margin)
        return cls(viewport, orbit_cfg, render_cfg, final_ray_day=final_ray_day)

    @property
    def rays_drawn(self) -> int:
        return self._rays_drawn

    def invalidate(self) -> None:
        self._needs_full_redraw = True

    def resize(self, size: tuple[int, int]) -> None:
        self.viewport.update_size(size)
        self.invalidate()

    # ------------------------------------------------------------------ #
    # Background layer
    # ------------------------------------------------------------------ #
    def update_background(
        self, renderer: Renderer, rays: Sequence[Ray], generation: int = 0
    ) -> bool:
        """Bring the background layer up to date; return ``True`` if it changed.

        *generation* comes from the controller and changes on every reset, so a
        reset followed by a new ray in the same frame still redraws the layer.
        """

        if (
            self._needs_full_redraw
            or generation != self._generation
            or len(rays) < self._rays_drawn
        ):
            self.compose_background(renderer, rays)
            self._generation = generation
            return True
        if len(rays) == self._rays_drawn:
            return False
        for ray in rays[self._rays_drawn :]:
            self._draw_ray(renderer, ray)
        self._rays_drawn = len(rays)
        return True

    def compose_background(self, renderer: Renderer, rays: Sequence[Ray]) -> None:
        cfg = self._cfg
        orbit = self._orbit_cfg
        vp = self.viewport
        renderer.clear()

        sx, sy = vp.origin
        renderer.draw_circle(sx, sy, cfg.sun_radius, cfg.sun_color)
        renderer.draw_ellipse(
            sx,
            sy,
            vp.to_pixels(orbit.earth_orbit_radius),
            vp.to_pixels(orbit.earth_orbit_radius),
            cfg.earth_orbit_color,
        )
        mars_cx, mars_cy = vp.to_screen(
            (-orbit.mars_semi_major_axis * orbit.mars_eccentricity, 0.0)
        )
        renderer.draw_ellipse(
            mars_cx,
            mars_cy,
            vp.to_pixels(orbit.mars_semi_major_axis),
            vp.to_pixels(orbit.mars_semi_minor_axis),
            cfg.mars_orbit_color,
        )
        for ray in rays:
            self._draw_ray(renderer, ray)
        self._rays_drawn = len(rays)
        self._needs_full_redraw = False

    def _draw_ray(self, renderer: Renderer, ray: Ray) -> None:
        cfg = self._cfg
        color = cfg.final_ray_color if ray.kind is RayKind.FINAL else cfg.ray_color
        tip = ray.mars + ray.direction * cfg.ray_arrow_fraction
        renderer.draw_arrow(
            self.viewport.to_screen(ray.earth),
            self.viewport.to_screen(tip),
            color,
            width=cfg.ray_width,
        )

    # ------------------------------------------------------------------ #
    # Dynamic layer
    # ------------------------------------------------------------------ #
    def compose_frame(self, renderer: Renderer, snapshot: FrameSnapshot) -> None:
        cfg = self._cfg
        vp = self.viewport
        renderer.clear()

        sun = vp.origin
        earth = vp.to_screen(snapshot.earth)
        mars = vp.to_screen(snapshot.mars)

        renderer.draw_line(earth[0], earth[1], sun[0], sun[1], cfg.sun_line_color)
        renderer.draw_line(earth[0], earth[1], mars[0], mars[1], cfg.mars_line_color)

        self._draw_reference(renderer, sun)
        renderer.draw_arc(
            sun,
            cfg.helio_arc_radius,
            0.0,
            snapshot.heliocentric_longitude,
            cfg.helio_arc_color,
            True,
        )
        self._draw_reference(renderer, earth)
        renderer.draw_arc(
            earth,
            cfg.geo_arc_radius,
            0.0,
            snapshot.geocentric_longitude,
            cfg.geo_arc_color,
            True,
        )

        renderer.draw_circle(earth[0], earth[1], cfg.body_radius, cfg.earth_color)
        renderer.draw_circle(mars[0], mars[1], cfg.body_radius, cfg.mars_color)

        if snapshot.ellipse is not None:
            self._draw_ellipse(renderer, snapshot.ellipse)

        for idx, line in enumerate(self.hud_lines(snapshot)):
            renderer.draw_text(
                cfg.hud_margin,
                cfg.hud_margin + idx * cfg.hud_line_spacing,
                line,
                color=cfg.hud_text_color,
            )

    def _draw_reference(self, renderer: Renderer, origin: Point) -> None:
        cfg = self._cfg
        renderer.draw_line(
            origin[0],
            origin[1],
            origin[0] + cfg.reference_line_length,
            origin[1],
            cfg.reference_line_color,
        )

    def _draw_ellipse(self, renderer: Renderer, ellipse: EllipseParams) -> None:
        vp = self.viewport
        cx, cy = vp.to_screen(np.array([ellipse.center_x, ellipse.center_y]))
        renderer.draw_ellipse(
            cx,
            cy,
            vp.to_pixels(ellipse.rx),
            vp.to_pixels(ellipse.ry),
            self._cfg.ellipse_color,
            width=2,
        )

    def hud_lines(self, snapshot: FrameSnapshot) -> list[str]:
        state = snapshot.state
        phase = snapshot.phase
        lines = [
            self._prompt(snapshot),
            f"Days Counter: {state.days_counter}",
            f"Experiment Days: {state.experiment_days}",
            f"Heliocentric Longitude (Earth): {snapshot.heliocentric_longitude:.1f}°",
            f"Geocentric Longitude (Mars): {snapshot.geocentric_longitude:.1f}°",
        ]
        if phase is Phase.PAUSED:
            lines.append("Paused")
        if snapshot.ellipse is not None:
            lines.extend(self.ellipse_lines(snapshot.ellipse))
        return lines

    def ellipse_lines(self, ellipse: EllipseParams) -> list[str]:
        perigee, apogee = ellipse.scaled_perigee_apogee(self._orbit_cfg.earth_orbit_radius)
        return [
            f"Eccentricity: {ellipse.eccentricity:.4f}",
            f"Perigee: {perigee:.2f} AU",
            f"Apogee: {apogee:.2f} AU",
        ]

    def _prompt(self, snapshot: FrameSnapshot) -> str:
        state = snapshot.state
        if snapshot.phase is Phase.ELLIPSE_EXPLORING:
            return "Ellipse mode: arrows change size and eccentricity"
        if state.has_drawn_ray:
            remaining = self._final_ray_day - state.days_counter
            return f"Waiting for Mars to return: {remaining} days left"
        if state.has_drawn_final_ray:
            return "Mars is back at the same spot. Press Space for a new ray"
        return "Press Space to Begin"


__all__ = ["Scene", "Viewport"]
