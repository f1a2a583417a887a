import argparse

import pygame
import pytest

from mars_sim import app
from mars_sim.analysis import load_events
from mars_sim.controls import Command, InputSource
from mars_sim.core.experiment import ExperimentController
from mars_sim.core.logging_utils import RunLogger
from mars_sim.core.model import Phase


@pytest.fixture
def inputs():
    controller = ExperimentController()
    controller.start()
    return InputSource(controller)


def press(logger, inputs, key):
    previous_phase = inputs.controller.phase
    command, result = inputs.key_press(key)
    app.log_command(logger, inputs.controller, command, result, previous_phase)


def click(logger, inputs, button_id):
    previous_phase = inputs.controller.phase
    command, result = inputs.click(button_id)
    app.log_command(logger, inputs.controller, command, result, previous_phase)


@pytest.mark.parametrize("value", ["0", "-5", "fast"])
def test_bad_fps_is_a_usage_error(value):
    with pytest.raises(SystemExit):
        app.main(["--fps", value, "--no-log"])


def test_fps_and_size_parse():
    args = app.build_parser().parse_args(["--fps", "30", "--size", "800x600"])
    assert args.fps == 30
    assert args.size == (800, 600)
    with pytest.raises(argparse.ArgumentTypeError):
        app.parse_size("100x100")


def test_space_on_paused_run_logs_resume(tmp_path, inputs):
    inputs.controller.cast_ray()
    inputs.controller.pause()
    with RunLogger(tmp_path, run_id="resume") as logger:
        press(logger, inputs, pygame.K_SPACE)

    assert inputs.controller.phase is Phase.RUNNING
    events = load_events(logger.events_path)
    assert [event["type"] for event in events] == ["resume"]


def test_space_on_running_run_with_pending_ray_logs_nothing(tmp_path, inputs):
    inputs.controller.cast_ray()
    with RunLogger(tmp_path, run_id="quiet") as logger:
        press(logger, inputs, pygame.K_SPACE)
    assert load_events(logger.events_path) == []


def test_ellipse_events_use_logged_names(tmp_path, inputs):
    with RunLogger(tmp_path, run_id="ellipse") as logger:
        click(logger, inputs, 1)
        click(logger, inputs, 2)
        press(logger, inputs, pygame.K_UP)
        click(logger, inputs, 3)

    events = load_events(logger.events_path)
    assert [event["type"] for event in events] == ["pause", "ellipse_mode", "ellipse_adjust", "reset"]
    assert events[2]["details"]["action"] == Command.GROW_ELLIPSE.value
    assert events[2]["details"]["rx"] == 210.0


def test_log_command_without_logger_is_a_no_op(inputs):
    app.log_command(None, inputs.controller, Command.RESET, True, Phase.RUNNING)
