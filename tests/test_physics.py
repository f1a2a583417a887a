import math

import numpy as np
import pytest

from mars_sim.core.config import ORBIT_CFG
from mars_sim.core.physics import (
    direction_longitude,
    ellipse_eccentricity,
    focal_distance,
    normalize_degrees,
    normalize_radians,
    perigee_apogee,
)
from mars_sim.core.simulator import OrbitalSimulator


def test_normalize_degrees_wraps_into_range():
    assert normalize_degrees(-30.0) == pytest.approx(330.0)
    assert normalize_degrees(720.0) == 0.0
    assert normalize_degrees(359.5) == pytest.approx(359.5)
    # a tiny negative angle must not come back as 360
    assert 0.0 <= normalize_degrees(-1e-15) < 360.0


def test_normalize_radians_wraps_into_range():
    assert normalize_radians(-math.pi / 2) == pytest.approx(1.5 * math.pi)
    assert 0.0 <= normalize_radians(-1e-17) < 2 * math.pi


def test_angles_decrease_by_angular_speed_each_day():
    sim = OrbitalSimulator()
    for n in (1, 10, 100, 365, 1000):
        sim.reset()
        for _ in range(n):
            sim.advance(1.0)
        for body in sim.bodies:
            expected = -n * body.angular_speed
            assert sim.elapsed_days == n
            assert body.angle == pytest.approx(expected, rel=1e-9)
            assert math.cos(body.normalized_angle) == pytest.approx(math.cos(expected), abs=1e-9)
            assert math.sin(body.normalized_angle) == pytest.approx(math.sin(expected), abs=1e-9)


def test_earth_position_is_circular():
    sim = OrbitalSimulator()
    np.testing.assert_allclose(sim.earth_position(), [200.0, 0.0])
    for _ in range(50):
        sim.advance()
        assert float(np.linalg.norm(sim.earth_position())) == pytest.approx(200.0)


def test_mars_orbit_has_sun_at_focus():
    sim = OrbitalSimulator()
    a = ORBIT_CFG.mars_semi_major_axis
    e = ORBIT_CFG.mars_eccentricity
    np.testing.assert_allclose(sim.mars_position(), [a * (1 - e), 0.0])
    sim.mars.angle = -math.pi
    np.testing.assert_allclose(sim.mars_position(), [-a * (1 + e), 0.0], atol=1e-9)


def test_mars_returns_after_one_sidereal_period():
    sim = OrbitalSimulator()
    start = sim.mars_position()
    for _ in range(687):
        sim.advance()
    np.testing.assert_allclose(sim.mars_position(), start, atol=1e-6)


def test_heliocentric_longitude_grows_counter_clockwise():
    sim = OrbitalSimulator()
    assert sim.heliocentric_longitude() == 0.0
    sim.advance()
    assert sim.heliocentric_longitude() == pytest.approx(360.0 / 365.25)
    # angle decreases, so the on-screen y coordinate goes negative (upwards)
    assert sim.earth_position()[1] < 0.0


def test_longitudes_stay_in_range():
    sim = OrbitalSimulator()
    for _ in range(2000):
        sim.advance()
        assert 0.0 <= sim.heliocentric_longitude() < 360.0
        assert 0.0 <= sim.geocentric_longitude() < 360.0


def test_geocentric_longitude_direction():
    sim = OrbitalSimulator()
    # Mars straight out from Earth along +x at the start
    assert sim.geocentric_longitude() == pytest.approx(0.0)
    origin = np.array([0.0, 0.0])
    assert direction_longitude(origin, np.array([0.0, -10.0])) == pytest.approx(90.0)
    assert direction_longitude(origin, np.array([-10.0, 0.0])) == pytest.approx(180.0)
    assert direction_longitude(origin, np.array([0.0, 10.0])) == pytest.approx(270.0)


def test_geocentric_longitude_uses_given_positions():
    sim = OrbitalSimulator()
    earth = np.array([100.0, 100.0])
    mars = np.array([200.0, 0.0])
    assert sim.geocentric_longitude(earth, mars) == pytest.approx(45.0)


def test_reset_returns_angles_to_zero():
    sim = OrbitalSimulator()
    for _ in range(123):
        sim.advance()
    sim.reset()
    assert sim.earth.angle == 0.0
    assert sim.mars.angle == 0.0
    assert sim.elapsed_days == 0.0


def test_ellipse_eccentricity_values():
    assert ellipse_eccentricity(200.0, 200.0) == 0.0
    assert ellipse_eccentricity(300.0, 298.69) == pytest.approx(0.0934, abs=1e-3)
    assert ellipse_eccentricity(298.69, 300.0) == pytest.approx(0.0934, abs=1e-3)
    assert ellipse_eccentricity(0.0, 10.0) == 0.0
    assert ellipse_eccentricity(10.0, 0.0) == 0.0
    assert 0.0 <= ellipse_eccentricity(1000.0, 1.0) < 1.0


def test_focal_distance_and_apsides():
    assert focal_distance(5.0, 3.0) == pytest.approx(4.0)
    assert focal_distance(3.0, 5.0) == pytest.approx(4.0)
    perigee, apogee = perigee_apogee(5.0, 3.0)
    assert perigee == pytest.approx(1.0)
    assert apogee == pytest.approx(9.0)
    assert perigee_apogee(200.0, 200.0) == (200.0, 200.0)


def test_orbit_points_shape():
    sim = OrbitalSimulator()
    points = sim.orbit_points(sim.mars, samples=90)
    assert points.shape == (90, 2)
    with pytest.raises(ValueError):
        sim.orbit_points(sim.earth, samples=2)
