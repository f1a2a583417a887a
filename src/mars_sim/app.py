"""pygame front end for the Mars longitude experiment."""
from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

import pygame
from pygame.locals import DOUBLEBUF, RESIZABLE

from mars_sim.controls import BUTTON_COMMANDS, Command, InputSource
from mars_sim.core.config import EXPERIMENT_CFG, ORBIT_CFG, RENDER_CFG, RenderCfg
from mars_sim.core.experiment import ExperimentController
from mars_sim.core.logging_utils import RunLogger
from mars_sim.core.model import EllipseParams, FrameSnapshot, Phase, Ray
from mars_sim.core.simulator import OrbitalSimulator
from mars_sim.render import (
    Button,
    ButtonVisualStyle,
    PygameRenderer,
    Scene,
    build_text_panel,
    layout_button_row,
    load_font,
)

HELP_LINES = (
    "Space: cast a ray",
    "Up/Down: ellipse size",
    "Right/Left: ellipse eccentricity",
    "Esc: quit",
)


def parse_size(text: str) -> tuple[int, int]:
    try:
        width_text, height_text = text.lower().split("x", 1)
        width, height = int(width_text), int(height_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from exc
    if width < 320 or height < 240:
        raise argparse.ArgumentTypeError("window must be at least 320x240")
    return width, height


def parse_fps(text: str) -> int:
    try:
        fps = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {text!r}") from exc
    if fps <= 0:
        raise argparse.ArgumentTypeError("fps must be positive")
    return fps


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Heliocentric and geocentric longitude of Mars, one day per frame."
    )
    parser.add_argument("--fps", type=parse_fps, default=RENDER_CFG.fps, help="Frames (simulated days) per second")
    parser.add_argument(
        "--size",
        type=parse_size,
        default=(RENDER_CFG.width, RENDER_CFG.height),
        help="Window size as WIDTHxHEIGHT",
    )
    parser.add_argument("--no-log", action="store_true", help="Do not write run logs")
    parser.add_argument("--log-dir", default="data/runs", help="Folder for run logs")
    return parser


def button_label(command: Command, controller: ExperimentController) -> str:
    if command is Command.CAST_RAY:
        return "Cast Ray"
    if command is Command.TOGGLE_PAUSE:
        return "Resume" if controller.phase is Phase.PAUSED else "Pause"
    if command is Command.ENTER_ELLIPSE_MODE:
        return "Ellipse Mode"
    return "Reset"


ELLIPSE_ADJUST_COMMANDS = frozenset(
    {
        Command.GROW_ELLIPSE,
        Command.SHRINK_ELLIPSE,
        Command.INCREASE_ECCENTRICITY,
        Command.DECREASE_ECCENTRICITY,
    }
)


def log_command(
    logger: RunLogger | None,
    controller: ExperimentController,
    command: Command,
    result: object,
    previous_phase: Phase,
) -> None:
    """Write the events caused by one dispatched command.

    *previous_phase* is the controller phase before the command ran. The
    cast-ray command can restart a paused run even when no ray is cast.
    """

    if logger is None:
        return
    snapshot = controller.snapshot()
    if command is Command.CAST_RAY and controller.phase is Phase.RUNNING:
        if previous_phase is Phase.PAUSED:
            logger.log_action("resume", snapshot)
        elif previous_phase is Phase.IDLE:
            logger.log_action("start", snapshot)
    if result is None or result is False:
        return
    if isinstance(result, Ray):
        logger.log_ray(result, snapshot)
    elif isinstance(result, EllipseParams):
        details = {"rx": result.rx, "ry": result.ry, "eccentricity": round(result.eccentricity, 6)}
        if command in ELLIPSE_ADJUST_COMMANDS:
            logger.log_action("ellipse_adjust", snapshot, {"action": command.value, **details})
        else:
            logger.log_action("ellipse_mode", snapshot, details)
    elif command is Command.TOGGLE_PAUSE:
        logger.log_action("pause" if controller.phase is Phase.PAUSED else "resume", snapshot)
    else:
        logger.log_action(command.value, snapshot)


def run(args: argparse.Namespace) -> None:
    render_cfg: RenderCfg = replace(RENDER_CFG, width=args.size[0], height=args.size[1], fps=args.fps)

    pygame.init()
    pygame.display.set_caption("Mars: heliocentric and geocentric longitude")
    screen = pygame.display.set_mode(args.size, RESIZABLE | DOUBLEBUF)
    clock = pygame.time.Clock()
    font = load_font(render_cfg.font_names, render_cfg.hud_font_size)
    button_font = load_font(render_cfg.font_names, render_cfg.hud_font_size, bold=True)

    controller = ExperimentController(OrbitalSimulator(ORBIT_CFG), EXPERIMENT_CFG)
    inputs = InputSource(controller)
    scene = Scene.for_window(
        screen.get_size(),
        ORBIT_CFG,
        render_cfg,
        final_ray_day=EXPERIMENT_CFG.final_ray_day,
    )

    background = pygame.Surface(screen.get_size())
    background_renderer = PygameRenderer(background, font, render_cfg)
    frame_renderer = PygameRenderer(screen, font, render_cfg, backdrop=background)

    logger: RunLogger | None = None
    if not args.no_log:
        logger = RunLogger(Path(args.log_dir))
        logger.write_meta(
            {
                "earth_orbit_radius": ORBIT_CFG.earth_orbit_radius,
                "mars_semi_major_axis": ORBIT_CFG.mars_semi_major_axis,
                "mars_eccentricity": ORBIT_CFG.mars_eccentricity,
                "earth_sidereal_period": ORBIT_CFG.earth_sidereal_period,
                "mars_sidereal_period": ORBIT_CFG.mars_sidereal_period,
                "final_ray_day": EXPERIMENT_CFG.final_ray_day,
                "dt_days": EXPERIMENT_CFG.dt_days,
                "log_every_days": EXPERIMENT_CFG.log_every_days,
                "longitude_sense": "counter-clockwise as displayed",
            }
        )

    button_style = ButtonVisualStyle(
        base_color=render_cfg.button_color,
        hover_color=render_cfg.button_hover_color,
        text_color=render_cfg.button_text_color,
        radius=render_cfg.button_radius,
        border_color=render_cfg.button_border_color,
        border_width=1,
    )
    buttons: list[Button] = []
    help_panel = build_text_panel(
        font,
        [(line, render_cfg.hud_text_color) for line in HELP_LINES],
        background_color=render_cfg.panel_background_color,
    )

    def handle_click(button_id: int) -> None:
        previous_phase = controller.phase
        outcome = inputs.click(button_id)
        if outcome is not None:
            log_command(logger, controller, *outcome, previous_phase)

    def update_button_layout() -> None:
        rects = layout_button_row(
            len(BUTTON_COMMANDS),
            screen.get_size(),
            width=render_cfg.button_width,
            height=render_cfg.button_height,
            spacing=render_cfg.button_spacing,
            margin=render_cfg.button_margin,
        )
        buttons.clear()
        for button_id, (rect, command) in enumerate(zip(rects, BUTTON_COMMANDS)):
            buttons.append(
                Button(
                    rect,
                    button_label(command, controller),
                    lambda button_id=button_id: handle_click(button_id),
                    lambda command=command: button_label(command, controller),
                    style=button_style,
                )
            )

    def close_logger() -> None:
        nonlocal logger
        if logger is not None:
            logger.close()
            logger = None

    def quit_app() -> None:
        close_logger()
        pygame.quit()
        sys.exit()

    def log_tick(snapshot: FrameSnapshot, advanced: bool) -> None:
        if logger is None or not advanced:
            return
        if int(snapshot.elapsed_days) % max(1, EXPERIMENT_CFG.log_every_days) == 0:
            logger.log_snapshot(snapshot)
        if snapshot.final_ray is not None:
            logger.log_ray(snapshot.final_ray, snapshot)

    update_button_layout()
    controller.start()
    if logger is not None:
        logger.log_action("start", controller.snapshot())

    try:
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    quit_app()
                elif event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.set_mode((event.w, event.h), RESIZABLE | DOUBLEBUF)
                    background = pygame.Surface(screen.get_size())
                    background_renderer.surface = background
                    frame_renderer.surface = screen
                    frame_renderer.backdrop = background
                    scene.resize(screen.get_size())
                    update_button_layout()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        quit_app()
                    previous_phase = controller.phase
                    outcome = inputs.key_press(event.key)
                    if outcome is not None:
                        log_command(logger, controller, *outcome, previous_phase)
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    for button in buttons:
                        if button.handle_event(event):
                            break

            # Paused frames keep polling but leave the simulation untouched.
            advanced = controller.is_running
            snapshot = controller.tick()
            log_tick(snapshot, advanced)

            scene.update_background(background_renderer, snapshot.rays, snapshot.generation)
            scene.compose_frame(frame_renderer, snapshot)

            mouse_pos = pygame.mouse.get_pos()
            for button in buttons:
                button.draw(screen, button_font, mouse_pos)
            help_rect = help_panel.get_rect(
                topright=(screen.get_width() - render_cfg.hud_margin, render_cfg.hud_margin)
            )
            screen.blit(help_panel, help_rect)

            pygame.display.flip()
            clock.tick(render_cfg.fps)
    finally:
        close_logger()


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        run(args)
    except KeyboardInterrupt:
        pygame.quit()
        sys.exit()


if __name__ == "__main__":
    main()
