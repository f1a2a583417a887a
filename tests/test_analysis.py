import pytest

from mars_sim import analysis
from mars_sim.core.experiment import ExperimentController
from mars_sim.core.logging_utils import RunLogger


def record_run(root, run_id="run"):
    controller = ExperimentController()
    controller.start()
    with RunLogger(root, run_id=run_id) as logger:
        logger.write_meta({"final_ray_day": 687})
        for _ in range(40):
            logger.log_snapshot(controller.tick())
        logger.log_ray(controller.cast_ray(), controller.snapshot())
        for _ in range(700):
            snapshot = controller.tick()
            logger.log_snapshot(snapshot)
            if snapshot.final_ray is not None:
                logger.log_ray(snapshot.final_ray, snapshot)
    return logger.run_dir


def test_longitude_shift_wraps():
    assert analysis.longitude_shift(350.0, 10.0) == pytest.approx(20.0)
    assert analysis.longitude_shift(10.0, 350.0) == pytest.approx(-20.0)
    assert analysis.longitude_shift(0.0, 180.0) == pytest.approx(180.0)


def test_ray_intervals_pair_rays_and_skip_resets():
    events = [
        {"day": 0.0, "type": "ray", "helio_lon": 0.0, "geo_lon": 10.0},
        {"day": 100.0, "type": "reset", "helio_lon": 0.0, "geo_lon": 0.0},
        {"day": 5.0, "type": "ray", "helio_lon": 5.0, "geo_lon": 20.0},
        {"day": 692.0, "type": "final_ray", "helio_lon": 322.0, "geo_lon": 50.0},
    ]
    intervals = analysis.ray_intervals(events)
    assert len(intervals) == 1
    assert intervals[0]["start_day"] == 5.0
    assert intervals[0]["geo_shift"] == pytest.approx(30.0)
    assert intervals[0]["helio_shift"] == pytest.approx(-43.0)


def test_summarize_events_counts_types():
    events = [{"type": "ray"}, {"type": "final_ray"}, {"type": "ray"}, {"type": "pause"}]
    assert analysis.summarize_events(events) == {"ray": 2, "final_ray": 1, "reset": 0}


def test_analyze_recorded_run(tmp_path, capsys):
    run_dir = record_run(tmp_path)
    analysis.main([str(run_dir)])

    assert (run_dir / "figs" / "longitudes.png").exists()
    assert (run_dir / "figs" / "rays.png").exists()
    out = capsys.readouterr().out
    assert "Run: run" in out
    assert "Simulated days: 740" in out
    assert "Interval 1: day 40 -> 727" in out


def test_analyze_uses_last_run(tmp_path, capsys):
    record_run(tmp_path, run_id="latest")
    analysis.main(["--runs-dir", str(tmp_path)])
    assert "Run: latest" in capsys.readouterr().out


def test_missing_run_is_reported(tmp_path):
    with pytest.raises(SystemExit):
        analysis.main(["--runs-dir", str(tmp_path)])
