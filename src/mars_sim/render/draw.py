from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
import pygame

from .base import Color

if TYPE_CHECKING:  # pragma: no cover
    from mars_sim.core.config import RenderCfg


def _to_int(point: tuple[float, float]) -> tuple[int, int]:
    return int(round(point[0])), int(round(point[1]))


def draw_body(
    surface: pygame.Surface,
    position: tuple[float, float],
    radius: float,
    *,
    color: Color,
    filled: bool = True,
) -> None:
    if radius <= 0:
        return
    pygame.draw.circle(surface, color, _to_int(position), max(1, int(round(radius))), 0 if filled else 1)


def draw_orbit_ellipse(
    surface: pygame.Surface,
    center: tuple[float, float],
    rx: float,
    ry: float,
    *,
    color: Color,
    width: int = 1,
) -> None:
    if rx <= 0 or ry <= 0:
        return
    rect = pygame.Rect(0, 0, max(1, int(round(2 * rx))), max(1, int(round(2 * ry))))
    rect.center = _to_int(center)
    pygame.draw.ellipse(surface, color, rect, max(1, width))


def draw_segment(
    surface: pygame.Surface,
    start: tuple[float, float],
    end: tuple[float, float],
    *,
    color: Color,
    width: int = 1,
) -> None:
    if width <= 1:
        pygame.draw.aaline(surface, color, start, end)
    else:
        pygame.draw.line(surface, color, _to_int(start), _to_int(end), width)


def draw_arrow(
    surface: pygame.Surface,
    start: tuple[float, float],
    end: tuple[float, float],
    *,
    color: Color,
    render_cfg: RenderCfg,
    width: int = 2,
) -> None:
    draw_segment(surface, start, end, color=color, width=width)
    if start == end:
        return
    angle = math.atan2(start[1] - end[1], end[0] - start[0])
    head_angle = math.radians(render_cfg.arrow_head_angle_deg)
    head_length = render_cfg.arrow_head_length
    tip = _to_int(end)
    left = (
        int(end[0] - head_length * math.cos(angle - head_angle)),
        int(end[1] + head_length * math.sin(angle - head_angle)),
    )
    right = (
        int(end[0] - head_length * math.cos(angle + head_angle)),
        int(end[1] + head_length * math.sin(angle + head_angle)),
    )
    pygame.draw.polygon(surface, color, [tip, left, right])


def arc_points(
    center: tuple[float, float],
    radius: float,
    start_deg: float,
    end_deg: float,
    *,
    segments_per_degree: float = 0.5,
) -> list[tuple[float, float]]:
    """Points along a counter-clockwise (as displayed) arc."""

    sweep = (end_deg - start_deg) % 360.0
    count = max(2, int(math.ceil(sweep * segments_per_degree)) + 1)
    angles = np.radians(np.linspace(start_deg, start_deg + sweep, count))
    xs = center[0] + radius * np.cos(angles)
    ys = center[1] - radius * np.sin(angles)
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def draw_longitude_arc(
    surface: pygame.Surface,
    center: tuple[float, float],
    radius: float,
    start_deg: float,
    end_deg: float,
    *,
    color: tuple[int, int, int],
    render_cfg: RenderCfg,
    fill_gradient: bool = False,
) -> None:
    if radius <= 0 or (end_deg - start_deg) % 360.0 == 0.0:
        return
    if fill_gradient:
        size = int(math.ceil(radius)) * 2 + 2
        wedge_surface = pygame.Surface((size, size), pygame.SRCALPHA)
        local_center = (size / 2.0, size / 2.0)
        steps = max(1, render_cfg.arc_gradient_steps)
        # Each smaller wedge overwrites the previous one with a higher alpha.
        for step in range(steps):
            layer_radius = radius * (1.0 - step / steps)
            alpha = int(render_cfg.arc_gradient_alpha * (step + 1) / steps)
            points = [local_center, *arc_points(local_center, layer_radius, start_deg, end_deg)]
            pygame.draw.polygon(wedge_surface, (*color[:3], alpha), points)
        surface.blit(wedge_surface, wedge_surface.get_rect(center=_to_int(center)))
    outline = arc_points(center, radius, start_deg, end_deg)
    pygame.draw.aalines(surface, color, False, outline)
