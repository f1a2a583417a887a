import math

import pygame
import pytest

from mars_sim.core.config import RENDER_CFG
from mars_sim.render.draw import arc_points, draw_arrow, draw_longitude_arc

RED = (255, 0, 0)
WHITE = (255, 255, 255)


def blank(size=(100, 100)):
    surface = pygame.Surface(size)
    surface.fill((0, 0, 0))
    return surface


def lit(surface, point):
    return surface.get_at(point)[:3] != (0, 0, 0)


def test_arc_runs_counter_clockwise_on_screen():
    points = arc_points((0.0, 0.0), 10.0, 0.0, 90.0)
    assert points[0] == pytest.approx((10.0, 0.0))
    assert points[-1] == pytest.approx((0.0, -10.0), abs=1e-9)
    # y grows downward, so a counter-clockwise sweep moves up the screen
    assert all(y <= 1e-9 for _, y in points)


def test_arc_wraps_through_zero():
    points = arc_points((0.0, 0.0), 10.0, 350.0, 10.0)
    end = math.radians(10.0)
    assert points[-1] == pytest.approx((10.0 * math.cos(end), -10.0 * math.sin(end)))
    assert len(points) >= 2


def test_zero_sweep_draws_nothing():
    surface = blank()
    draw_longitude_arc(
        surface, (50, 50), 20, 0.0, 0.0, color=RED, render_cfg=RENDER_CFG, fill_gradient=True
    )
    assert not any(lit(surface, (x, y)) for x in range(100) for y in range(100))


def test_gradient_wedge_fills_the_swept_quadrant():
    surface = blank()
    draw_longitude_arc(
        surface, (50, 50), 20, 0.0, 90.0, color=RED, render_cfg=RENDER_CFG, fill_gradient=True
    )
    assert surface.get_at((57, 43)).r > 0
    assert not lit(surface, (57, 57))
    assert not lit(surface, (43, 43))


def test_arrow_has_a_head_at_the_tip():
    surface = blank()
    draw_arrow(surface, (10.0, 50.0), (90.0, 50.0), color=WHITE, render_cfg=RENDER_CFG, width=2)
    assert lit(surface, (84, 48))
    assert not lit(surface, (30, 46))


def test_degenerate_arrow_draws_no_head():
    surface = blank()
    draw_arrow(surface, (50.0, 50.0), (50.0, 50.0), color=WHITE, render_cfg=RENDER_CFG, width=2)
    assert not lit(surface, (45, 47))
