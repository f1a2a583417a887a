"""Keyboard and button input mapped onto experiment commands."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pygame

from mars_sim.core.experiment import ExperimentController


class Command(Enum):
    CAST_RAY = "cast_ray"
    TOGGLE_PAUSE = "toggle_pause"
    ENTER_ELLIPSE_MODE = "enter_ellipse_mode"
    RESET = "reset"
    GROW_ELLIPSE = "grow_ellipse"
    SHRINK_ELLIPSE = "shrink_ellipse"
    INCREASE_ECCENTRICITY = "increase_eccentricity"
    DECREASE_ECCENTRICITY = "decrease_eccentricity"


# Button ids map 1:1 onto these commands.
BUTTON_COMMANDS: tuple[Command, ...] = (
    Command.CAST_RAY,
    Command.TOGGLE_PAUSE,
    Command.ENTER_ELLIPSE_MODE,
    Command.RESET,
)


@dataclass(frozen=True)
class KeyBindings:
    cast_ray: int = pygame.K_SPACE
    grow_ellipse: int = pygame.K_UP
    shrink_ellipse: int = pygame.K_DOWN
    increase_eccentricity: int = pygame.K_RIGHT
    decrease_eccentricity: int = pygame.K_LEFT

    def as_mapping(self) -> dict[int, Command]:
        return {
            self.cast_ray: Command.CAST_RAY,
            self.grow_ellipse: Command.GROW_ELLIPSE,
            self.shrink_ellipse: Command.SHRINK_ELLIPSE,
            self.increase_eccentricity: Command.INCREASE_ECCENTRICITY,
            self.decrease_eccentricity: Command.DECREASE_ECCENTRICITY,
        }


DEFAULT_BINDINGS = KeyBindings()


class InputSource:
    """Single entry point that turns key presses and clicks into controller calls.

    ``dispatch`` returns the command's result: ``True``/``False`` for state
    changes, the new :class:`~mars_sim.core.model.Ray` or ellipse for commands
    that create one, and ``None`` when the command was a no-op.
    """

    def __init__(
        self,
        controller: ExperimentController,
        bindings: KeyBindings = DEFAULT_BINDINGS,
    ) -> None:
        self._controller = controller
        self._keymap = bindings.as_mapping()

    @property
    def controller(self) -> ExperimentController:
        return self._controller

    def command_for_key(self, code: int) -> Command | None:
        return self._keymap.get(code)

    def key_press(self, code: int) -> tuple[Command, object] | None:
        command = self.command_for_key(code)
        if command is None:
            return None
        return command, self.dispatch(command)

    def click(self, button_id: int) -> tuple[Command, object] | None:
        if not 0 <= button_id < len(BUTTON_COMMANDS):
            return None
        command = BUTTON_COMMANDS[button_id]
        return command, self.dispatch(command)

    def dispatch(self, command: Command) -> object:
        controller = self._controller
        if command is Command.CAST_RAY:
            ray = controller.cast_ray()
            # Casting also gets a paused or idle animation moving again.
            controller.start()
            return ray
        if command is Command.TOGGLE_PAUSE:
            return controller.toggle_pause()
        if command is Command.ENTER_ELLIPSE_MODE:
            return controller.enter_ellipse_mode()
        if command is Command.RESET:
            controller.reset_experiment()
            return True
        if command is Command.GROW_ELLIPSE:
            return controller.grow_size()
        if command is Command.SHRINK_ELLIPSE:
            return controller.shrink_size()
        if command is Command.INCREASE_ECCENTRICITY:
            return controller.increase_eccentricity()
        if command is Command.DECREASE_ECCENTRICITY:
            return controller.decrease_eccentricity()
        raise ValueError(f"Unknown command: {command!r}")


__all__ = [
    "BUTTON_COMMANDS",
    "DEFAULT_BINDINGS",
    "Command",
    "InputSource",
    "KeyBindings",
]
