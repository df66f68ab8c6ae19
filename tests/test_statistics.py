import json

import pytest

from liftsim.statistics import SAMPLING_INTERVAL_MS, Statistics


class RecordingWindow:
    def __init__(self):
        self.elevator_updates = []
        self.passenger_updates = []

    def set_elevator_statistics(self, elevator, elevator_statistics):
        self.elevator_updates.append((elevator, tuple(elevator_statistics)))

    def set_passenger_statistics(self, passenger_statistics):
        self.passenger_updates.append(tuple(passenger_statistics))


@pytest.fixture
def window():
    return RecordingWindow()


@pytest.fixture
def stats(tmp_path, window):
    return Statistics(2, window, path=tmp_path / "data.json", base_timestamp=0, time_unit=1000)


def test_load_missing_file_returns_false(stats):
    assert stats.load() is False
    assert stats.estimated_waiting_time(0) == {}


def test_idle_time_buffers_until_threshold(stats, window):
    stats.add_elevator_idle_time(0, 5)
    assert window.elevator_updates == []
    assert stats.elevator_statistics(0) == (5, 0)
    stats.add_elevator_idle_time(0, 5)
    assert window.elevator_updates == [(0, (10, 0))]


def test_zero_time_is_ignored(stats, window):
    stats.add_elevator_running_time(1, 0)
    assert stats.elevator_statistics(1) == (0, 0)
    assert window.elevator_updates == []


def test_slow_refresh_after_limit(stats, window):
    stats.add_elevator_running_time(1, 36000)
    assert window.elevator_updates == [(1, (0, 36000))]
    stats.add_elevator_running_time(1, 50)
    assert len(window.elevator_updates) == 1
    assert stats.elevator_statistics(1) == (0, 36050)
    stats.add_elevator_running_time(1, 50)
    assert window.elevator_updates[-1] == (1, (0, 36100))


def test_passenger_statistics_single_wait(stats, window):
    stats.add_passenger_waiting_time(0, 0, 3000)
    assert stats.passenger_statistics() == (3000, 3000, 3000, 3000)
    assert window.passenger_updates == [(3000, 3000, 3000, 3000)]


def test_mode_tie_goes_to_shortest_and_median_is_upper(stats):
    stats.add_passenger_waiting_time(0, 0, 4000)
    stats.add_passenger_waiting_time(0, 0, 1000)
    mean, maximum, mode, median = stats.passenger_statistics()
    assert maximum == 4000
    assert mode == 1000
    assert median == 4000
    assert 1000 <= mean <= 4000


def test_passenger_statistics_empty_raises(stats):
    with pytest.raises(ValueError):
        stats.passenger_statistics()


def test_estimated_waiting_time_average(stats):
    stats.add_passenger_waiting_time(1, 1000, 3000)
    stats.add_passenger_waiting_time(1, 2000, 6000)
    assert stats.estimated_waiting_time(1) == {0: 3000}
    assert stats.estimated_waiting_time(0) == {}


def test_estimated_waiting_time_divisions_are_sampling_multiples(stats):
    for start in (0, 4999, 5000, 12345):
        stats.add_passenger_waiting_time(0, start, start + 100)
    keys = list(stats.estimated_waiting_time(0))
    assert keys == sorted(keys)
    assert all(key % SAMPLING_INTERVAL_MS == 0 for key in keys)


@pytest.mark.parametrize("elevator", [-1, 2])
def test_estimated_waiting_time_out_of_range(stats, elevator):
    with pytest.raises(IndexError):
        stats.estimated_waiting_time(elevator)


def test_save_and_load_round_trip(tmp_path, stats):
    stats.add_passenger_waiting_time(0, 1000, 3000)
    stats.add_passenger_waiting_time(1, 7000, 9500)
    assert stats.save() is True
    reloaded = Statistics(2, path=tmp_path / "data.json")
    assert reloaded.estimated_waiting_time(0) == stats.estimated_waiting_time(0)
    assert reloaded.estimated_waiting_time(1) == stats.estimated_waiting_time(1)


def test_saved_format_is_list_of_pairs(tmp_path, stats):
    stats.add_passenger_waiting_time(0, 0, 2000)
    assert stats.save() is True
    data = json.loads((tmp_path / "data.json").read_text())
    assert data == [[[0, [2000, 1]]], []]
    reloaded = Statistics(2, path=tmp_path / "data.json")
    assert reloaded.estimated_waiting_time(0) == {0: 2000}


def test_save_into_missing_directory_fails(tmp_path):
    stats = Statistics(1, path=tmp_path / "missing" / "data.json")
    assert stats.save() is False


def test_rush_hour_detected_after_long_wait(stats):
    stats.add_passenger_waiting_time(0, 0, 61000)
    assert stats.is_rush_hour(1, 0) is True
    assert stats.is_rush_hour(2, 0) is False


def test_rush_hour_window_ends(stats):
    stats.add_passenger_waiting_time(0, 0, 61000)
    assert stats.is_rush_hour(1, 4 * SAMPLING_INTERVAL_MS) is False


@pytest.mark.parametrize("elevator", [0, 3])
def test_rush_hour_out_of_range(stats, elevator):
    with pytest.raises(IndexError):
        stats.is_rush_hour(elevator, 0)