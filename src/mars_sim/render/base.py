"""Draw-command interface shared by the scene and its backends."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

Color = tuple[int, int, int] | tuple[int, int, int, int]
Point = tuple[float, float]


class Renderer(Protocol):
    """Target for draw commands, one per display layer.

    Angles passed to :meth:`draw_arc` are in degrees, counter-clockwise as
    seen on screen, with 0 pointing to the right.
    """

    def clear(self) -> None: ...

    def draw_circle(
        self, x: float, y: float, r: float, color: Color, *, filled: bool = True
    ) -> None: ...

    def draw_ellipse(
        self, x: float, y: float, rx: float, ry: float, color: Color, *, width: int = 1
    ) -> None: ...

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: Color,
        *,
        width: int = 1,
    ) -> None: ...

    def draw_arrow(self, start: Point, end: Point, color: Color, *, width: int = 1) -> None: ...

    def draw_text(
        self, x: float, y: float, text: str, *, color: Color | None = None
    ) -> None: ...

    def draw_arc(
        self,
        center: Point,
        radius: float,
        start_angle: float,
        end_angle: float,
        color: Color,
        fill_gradient: bool = False,
    ) -> None: ...


@dataclass(frozen=True)
class DrawCommand:
    name: str
    args: tuple
    kwargs: tuple[tuple[str, object], ...] = ()

    def option(self, key: str, default: object = None) -> object:
        return dict(self.kwargs).get(key, default)


class RecordingRenderer:
    """Renderer that keeps the commands issued since the last clear."""

    def __init__(self) -> None:
        self.commands: list[DrawCommand] = []
        self.clear_count = 0

    def _record(self, name: str, *args: object, **kwargs: object) -> None:
        self.commands.append(DrawCommand(name, args, tuple(sorted(kwargs.items()))))

    def named(self, name: str) -> list[DrawCommand]:
        return [command for command in self.commands if command.name == name]

    def texts(self) -> list[str]:
        return [str(command.args[2]) for command in self.named("text")]

    def clear(self) -> None:
        self.commands.clear()
        self.clear_count += 1

    def draw_circle(self, x, y, r, color, *, filled=True) -> None:
        self._record("circle", x, y, r, color, filled=filled)

    def draw_ellipse(self, x, y, rx, ry, color, *, width=1) -> None:
        self._record("ellipse", x, y, rx, ry, color, width=width)

    def draw_line(self, x1, y1, x2, y2, color, *, width=1) -> None:
        self._record("line", x1, y1, x2, y2, color, width=width)

    def draw_arrow(self, start, end, color, *, width=1) -> None:
        self._record("arrow", tuple(start), tuple(end), color, width=width)

    def draw_text(self, x, y, text, *, color=None) -> None:
        self._record("text", x, y, text, color=color)

    def draw_arc(self, center, radius, start_angle, end_angle, color, fill_gradient=False) -> None:
        self._record(
            "arc",
            tuple(center),
            radius,
            start_angle,
            end_angle,
            color,
            fill_gradient=fill_gradient,
        )


__all__ = ["Color", "DrawCommand", "Point", "RecordingRenderer", "Renderer"]
