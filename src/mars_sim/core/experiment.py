"""State machine for the ray-casting experiment and the ellipse explorer."""
from __future__ import annotations

from .config import EXPERIMENT_CFG, ExperimentCfg
from .model import (
    EllipseParams,
    ExperimentState,
    FrameSnapshot,
    Mode,
    Phase,
    Ray,
    RayKind,
)
from .physics import focal_distance
from .simulator import OrbitalSimulator


class ExperimentController:
    """Drives the simulator and owns the experiment and ellipse state.

    Every public method is safe to call in any phase. Calls that make no sense
    in the current phase leave the state untouched.
    """

    def __init__(
        self,
        simulator: OrbitalSimulator | None = None,
        cfg: ExperimentCfg = EXPERIMENT_CFG,
    ) -> None:
        self.simulator = simulator or OrbitalSimulator()
        self._cfg = cfg
        self.state = ExperimentState()
        self.ellipse: EllipseParams | None = None
        self._rays: list[Ray] = []
        self._generation = 0

    @property
    def cfg(self) -> ExperimentCfg:
        return self._cfg

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def rays(self) -> tuple[Ray, ...]:
        return tuple(self._rays)

    @property
    def generation(self) -> int:
        """Bumped by every reset, so layers built from older rays can tell."""

        return self._generation

    @property
    def is_running(self) -> bool:
        return self.phase is Phase.RUNNING

    def start(self) -> bool:
        if self.phase not in (Phase.IDLE, Phase.PAUSED):
            return False
        self.state.is_started = True
        self.state.is_paused = False
        return True

    def pause(self) -> bool:
        if self.phase is not Phase.RUNNING:
            return False
        self.state.is_paused = True
        return True

    def resume(self) -> bool:
        if self.phase is not Phase.PAUSED:
            return False
        self.state.is_paused = False
        return True

    def toggle_pause(self) -> bool:
        if self.phase is Phase.RUNNING:
            return self.pause()
        return self.resume()

    def cast_ray(self) -> Ray | None:
        state = self.state
        if state.mode is not Mode.OBSERVING or state.has_drawn_ray:
            return None
        if state.days_counter >= self._cfg.final_ray_day:
            state.days_counter = 0
        state.has_drawn_ray = True
        state.has_drawn_final_ray = False
        state.experiment_begun = True
        return self._record_ray(RayKind.INITIAL)

    def tick(self) -> FrameSnapshot:
        """Advance one simulated day if running and return the new snapshot."""

        if not self.is_running:
            return self.snapshot()

        self.simulator.advance(self._cfg.dt_days)
        state = self.state
        final_day = self._cfg.final_ray_day
        if state.has_drawn_ray and state.days_counter < final_day:
            state.days_counter += 1
        if state.experiment_begun:
            state.experiment_days += 1

        final_ray = None
        if state.days_counter >= final_day and not state.has_drawn_final_ray:
            final_ray = self._record_ray(RayKind.FINAL)
            state.has_drawn_final_ray = True
            state.has_drawn_ray = False
        return self.snapshot(final_ray=final_ray)

    def enter_ellipse_mode(self) -> EllipseParams | None:
        if self.phase is not Phase.PAUSED:
            return None
        radius = self.simulator.cfg.earth_orbit_radius
        self.state.mode = Mode.ELLIPSE_EXPLORING
        self.ellipse = self._reshape(radius, radius)
        return self.ellipse

    def grow_size(self) -> EllipseParams | None:
        if self.ellipse is None:
            return None
        step = self._cfg.ellipse_size_step
        return self._apply(self.ellipse.rx + step, self.ellipse.ry + step)

    def shrink_size(self) -> EllipseParams | None:
        if self.ellipse is None:
            return None
        step = self._cfg.ellipse_size_step
        return self._apply(self.ellipse.rx - step, self.ellipse.ry - step)

    def increase_eccentricity(self) -> EllipseParams | None:
        if self.ellipse is None:
            return None
        step = self._cfg.ellipse_eccentricity_step
        return self._apply(self.ellipse.rx + step, self.ellipse.ry)

    def decrease_eccentricity(self) -> EllipseParams | None:
        if self.ellipse is None:
            return None
        step = self._cfg.ellipse_eccentricity_step
        rx = max(self.ellipse.ry, self.ellipse.rx - step)
        return self._apply(rx, self.ellipse.ry)

    def reset_experiment(self) -> None:
        self.simulator.reset()
        self.state = ExperimentState()
        self.ellipse = None
        self._rays.clear()
        self._generation += 1
        self.start()

    def snapshot(self, final_ray: Ray | None = None) -> FrameSnapshot:
        sim = self.simulator
        earth = sim.earth_position()
        mars = sim.mars_position()
        return FrameSnapshot(
            elapsed_days=sim.elapsed_days,
            earth=earth,
            mars=mars,
            earth_angle=sim.earth.angle,
            mars_angle=sim.mars.angle,
            heliocentric_longitude=sim.heliocentric_longitude(),
            geocentric_longitude=sim.geocentric_longitude(earth, mars),
            state=self.state.copy(),
            rays=self.rays,
            ellipse=self.ellipse,
            final_ray=final_ray,
            generation=self._generation,
        )

    def _record_ray(self, kind: RayKind) -> Ray:
        ray = Ray(
            kind=kind,
            earth=self.simulator.earth_position(),
            mars=self.simulator.mars_position(),
            day=self.state.experiment_days,
        )
        self._rays.append(ray)
        return ray

    def _apply(self, rx: float, ry: float) -> EllipseParams:
        floor = self._cfg.ellipse_min_radius
        self.ellipse = self._reshape(max(floor, rx), max(floor, ry))
        return self.ellipse

    @staticmethod
    def _reshape(rx: float, ry: float) -> EllipseParams:
        # Sun stays at the +x focus, same as the Mars orbit.
        return EllipseParams(center_x=-focal_distance(rx, ry), center_y=0.0, rx=rx, ry=ry)


__all__ = ["ExperimentController"]
