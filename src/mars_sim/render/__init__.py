"""Rendering helpers for the Mars longitude experiment."""

from .assets import get_text_surface, load_font
from .base import Color, DrawCommand, RecordingRenderer, Renderer
from .draw import (
    arc_points,
    draw_arrow,
    draw_body,
    draw_longitude_arc,
    draw_orbit_ellipse,
    draw_segment,
)
from .scene import Scene, Viewport
from .surface import PygameRenderer
from .ui import Button, ButtonVisualStyle, build_text_panel, layout_button_row

__all__ = [
    "Button",
    "ButtonVisualStyle",
    "Color",
    "DrawCommand",
    "PygameRenderer",
    "RecordingRenderer",
    "Renderer",
    "Scene",
    "Viewport",
    "arc_points",
    "build_text_panel",
    "draw_arrow",
    "draw_body",
    "draw_longitude_arc",
    "draw_orbit_ellipse",
    "draw_segment",
    "get_text_surface",
    "layout_button_row",
    "load_font",
]
