import csv
import json

from mars_sim.analysis import load_events
from mars_sim.core.experiment import ExperimentController
from mars_sim.core.logging_utils import RunLogger


def test_run_folder_and_last_run_marker(tmp_path):
    with RunLogger(tmp_path, run_id="demo") as logger:
        assert logger.run_dir == tmp_path / "demo"
    assert (tmp_path / "last_run.txt").read_text(encoding="utf-8") == "demo"

    with RunLogger(tmp_path, run_id="demo") as second:
        assert second.run_id == "demo_01"
    assert (tmp_path / "last_run.txt").read_text(encoding="utf-8") == "demo_01"


def test_timeseries_rows_follow_header(tmp_path):
    controller = ExperimentController()
    controller.start()
    controller.cast_ray()
    with RunLogger(tmp_path, run_id="ts", timeseries_flush_threshold=3) as logger:
        for _ in range(10):
            logger.log_snapshot(controller.tick())

    with logger.timeseries_path.open(newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert list(rows[0].keys()) == RunLogger.TIMESERIES_HEADER
    assert len(rows) == 10
    assert float(rows[-1]["day"]) == 10.0
    assert int(rows[-1]["days_counter"]) == 10
    assert 0.0 <= float(rows[-1]["geo_lon"]) < 360.0


def test_ray_events_round_trip_details(tmp_path):
    controller = ExperimentController()
    controller.start()
    ray = controller.cast_ray()
    with RunLogger(tmp_path, run_id="ev") as logger:
        logger.log_ray(ray, controller.snapshot())
        logger.log_action("reset", controller.snapshot())

    events = load_events(logger.events_path)
    assert [event["type"] for event in events] == ["ray", "reset"]
    assert events[0]["details"]["experiment_day"] == 0
    assert events[0]["details"]["earth"] == [200.0, 0.0]
    assert "details" not in events[1]


def test_meta_is_json(tmp_path):
    with RunLogger(tmp_path, run_id="meta") as logger:
        logger.write_meta({"final_ray_day": 687})
    assert json.loads(logger.meta_path.read_text(encoding="utf-8")) == {"final_ray_day": 687}


def test_close_is_idempotent(tmp_path):
    logger = RunLogger(tmp_path, run_id="twice")
    logger.log_ts([1.0, 2.0])
    logger.close()
    logger.close()
    assert logger.timeseries_path.read_text().splitlines()[1] == "1,2"
