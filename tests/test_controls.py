import pygame
import pytest

from mars_sim.controls import BUTTON_COMMANDS, Command, InputSource, KeyBindings
from mars_sim.core.experiment import ExperimentController
from mars_sim.core.model import EllipseParams, Phase, Ray


@pytest.fixture
def inputs():
    controller = ExperimentController()
    controller.start()
    return InputSource(controller)


def test_space_casts_a_ray(inputs):
    command, result = inputs.key_press(pygame.K_SPACE)
    assert command is Command.CAST_RAY
    assert isinstance(result, Ray)
    assert inputs.controller.state.has_drawn_ray is True


def test_space_resumes_a_paused_run(inputs):
    inputs.controller.pause()
    inputs.key_press(pygame.K_SPACE)
    assert inputs.controller.phase is Phase.RUNNING


def test_unknown_key_changes_nothing(inputs):
    before = inputs.controller.state.copy()
    assert inputs.key_press(pygame.K_q) is None
    assert inputs.controller.state == before


def test_buttons_map_one_to_one():
    assert BUTTON_COMMANDS == (
        Command.CAST_RAY,
        Command.TOGGLE_PAUSE,
        Command.ENTER_ELLIPSE_MODE,
        Command.RESET,
    )


def test_pause_button_toggles(inputs):
    assert inputs.click(1) == (Command.TOGGLE_PAUSE, True)
    assert inputs.controller.phase is Phase.PAUSED
    inputs.click(1)
    assert inputs.controller.phase is Phase.RUNNING


def test_out_of_range_button_is_ignored(inputs):
    assert inputs.click(-1) is None
    assert inputs.click(len(BUTTON_COMMANDS)) is None


def test_ellipse_keys_after_entering_mode(inputs):
    inputs.click(1)
    command, ellipse = inputs.click(2)
    assert command is Command.ENTER_ELLIPSE_MODE
    assert isinstance(ellipse, EllipseParams)

    _, grown = inputs.key_press(pygame.K_UP)
    assert grown.rx == grown.ry == 210.0
    _, shrunk = inputs.key_press(pygame.K_DOWN)
    assert shrunk.rx == shrunk.ry == 200.0
    _, wider = inputs.key_press(pygame.K_RIGHT)
    assert wider.rx > wider.ry
    _, narrower = inputs.key_press(pygame.K_LEFT)
    assert narrower.rx == narrower.ry


def test_ellipse_button_ignored_while_running(inputs):
    assert inputs.click(2) == (Command.ENTER_ELLIPSE_MODE, None)
    assert inputs.controller.ellipse is None


def test_reset_button(inputs):
    inputs.key_press(pygame.K_SPACE)
    for _ in range(20):
        inputs.controller.tick()
    assert inputs.click(3) == (Command.RESET, True)
    assert inputs.controller.state.days_counter == 0
    assert inputs.controller.simulator.earth.angle == 0.0


def test_custom_bindings():
    controller = ExperimentController()
    inputs = InputSource(controller, KeyBindings(cast_ray=pygame.K_RETURN))
    assert inputs.command_for_key(pygame.K_RETURN) is Command.CAST_RAY
    assert inputs.command_for_key(pygame.K_SPACE) is None
