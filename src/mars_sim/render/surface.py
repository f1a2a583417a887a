"""pygame backend for the :class:`~mars_sim.render.base.Renderer` protocol."""
from __future__ import annotations

import pygame

from mars_sim.core.config import RENDER_CFG, RenderCfg

from .assets import get_text_surface
from .base import Color, Point
from .draw import draw_arrow, draw_body, draw_longitude_arc, draw_orbit_ellipse, draw_segment


class PygameRenderer:
    """Rasterises draw commands onto one pygame surface.

    ``clear`` either copies *backdrop* onto the surface (the dynamic layer
    sits on top of the background layer) or fills it with *clear_color*.
    """

    def __init__(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        render_cfg: RenderCfg = RENDER_CFG,
        *,
        backdrop: pygame.Surface | None = None,
        clear_color: Color | None = None,
    ) -> None:
        self.surface = surface
        self.font = font
        self.backdrop = backdrop
        self._cfg = render_cfg
        self._clear_color = clear_color or render_cfg.background_color

    def clear(self) -> None:
        if self.backdrop is not None:
            self.surface.blit(self.backdrop, (0, 0))
        else:
            self.surface.fill(self._clear_color)

    def draw_circle(self, x: float, y: float, r: float, color: Color, *, filled: bool = True) -> None:
        draw_body(self.surface, (x, y), r, color=color, filled=filled)

    def draw_ellipse(
        self, x: float, y: float, rx: float, ry: float, color: Color, *, width: int = 1
    ) -> None:
        draw_orbit_ellipse(self.surface, (x, y), rx, ry, color=color, width=width)

    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, color: Color, *, width: int = 1
    ) -> None:
        draw_segment(self.surface, (x1, y1), (x2, y2), color=color, width=width)

    def draw_arrow(self, start: Point, end: Point, color: Color, *, width: int = 1) -> None:
        draw_arrow(self.surface, start, end, color=color, render_cfg=self._cfg, width=width)

    def draw_text(self, x: float, y: float, text: str, *, color: Color | None = None) -> None:
        text_surf = get_text_surface(self.font, text, color or self._cfg.hud_text_color)
        self.surface.blit(text_surf, (int(x), int(y)))

    def draw_arc(
        self,
        center: Point,
        radius: float,
        start_angle: float,
        end_angle: float,
        color: Color,
        fill_gradient: bool = False,
    ) -> None:
        draw_longitude_arc(
            self.surface,
            center,
            radius,
            start_angle,
            end_angle,
            color=color[:3],
            render_cfg=self._cfg,
            fill_gradient=fill_gradient,
        )


__all__ = ["PygameRenderer"]
