import pandas as pd
import pytest

from loomgen import (
    ApproachFrame,
    DegenerateTrajectory,
    ModelResult,
    constant_speed_model,
    diameter_model,
)


def _frames(diameters, distances=None):
    distances = distances or [None] * len(diameters)
    return [
        ApproachFrame(frame_index=i, time=i / 10, diameter_on_screen=d, distance=r)
        for i, (d, r) in enumerate(zip(diameters, distances), start=1)
    ]


def test_valid_result():
    result = ModelResult("test", 10, _frames([1.0, 2.0], [20.0, 10.0]), {"a": 1})

    assert result.diameters == (1.0, 2.0)
    assert result.distances == (20.0, 10.0)
    assert result.times == (0.1, 0.2)
    assert result.total_frames == 2
    assert result.duration == pytest.approx(0.2)
    assert dict(result.parameters) == {"a": 1}


def test_empty_frames():
    with pytest.raises(DegenerateTrajectory):
        ModelResult("test", 10, [])


def test_frame_indices_must_start_at_one_and_be_consecutive():
    frames = _frames([1.0, 2.0, 3.0])
    with pytest.raises(DegenerateTrajectory):
        ModelResult("test", 10, [frames[0], frames[2]])
    with pytest.raises(DegenerateTrajectory):
        ModelResult("test", 10, frames[1:])


@pytest.mark.parametrize("bad", [0.0, -1.0, float("inf"), float("nan")])
def test_diameters_must_be_finite_and_positive(bad):
    with pytest.raises(DegenerateTrajectory):
        ModelResult("test", 10, _frames([1.0, bad]))


def test_distances_must_decrease():
    with pytest.raises(DegenerateTrajectory):
        ModelResult("test", 10, _frames([1.0, 2.0], [10.0, 10.0]))


def test_diameters_without_distance_must_not_shrink():
    with pytest.raises(DegenerateTrajectory):
        ModelResult("test", 10, _frames([2.0, 1.0]))


def test_parameters_are_a_copy():
    params = {"speed": 500}
    result = ModelResult("test", 10, _frames([1.0]), params)
    params["speed"] = 1

    assert result.parameters["speed"] == 500


def test_constant_speed_rows():
    rows = constant_speed_model().to_rows()

    assert rows[0] == {
        "frame": 1,
        "time": pytest.approx(1 / 60),
        "distance": pytest.approx(991.667),
        "diam_on_screen": pytest.approx(1000 / 991.667),
    }
    assert rows[-1]["diam_on_screen"] == 1000


def test_dataframe_columns():
    loom = constant_speed_model().to_dataframe()
    expand = diameter_model(2, 50, 3, 60).to_dataframe()

    assert isinstance(loom, pd.DataFrame)
    assert list(loom.columns) == ["frame", "time", "distance", "diam_on_screen"]
    assert len(loom) == 120
    assert list(expand.columns) == ["frame", "time", "diam_on_screen"]
    assert expand["diam_on_screen"].is_monotonic_increasing


@pytest.mark.parametrize("missing", [0, 1, 2])
def test_frames_must_agree_on_distance(missing):
    distances = [30.0, 20.0, 10.0]
    distances[missing] = None
    frames = [
        ApproachFrame(frame_index=i, time=i / 10, diameter_on_screen=float(i), distance=r)
        for i, r in enumerate(distances, start=1)
    ]

    with pytest.raises(DegenerateTrajectory, match="distance"):
        ModelResult("test", 10, frames)
