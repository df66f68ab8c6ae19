import pytest

from liftsim.charts import Chart


def test_initial_pies():
    chart = Chart(3)
    assert len(chart.pies) == 3
    for idle, running in chart.pies:
        assert idle.label == "Idle: 0 s"
        assert running.label == "Running: 0 s"
        assert idle.value == 1 and running.value == 1


def test_elevator_statistics_updates_one_pie():
    chart = Chart(2)
    chart.set_elevator_statistics(0, (2500, 7000))
    idle, running = chart.pies[0]
    assert idle.value == 2500
    assert running.value == 7000
    assert idle.label == "Idle: 2 s"
    assert running.label == "Running: 7 s"
    assert chart.pies[1][0].value == 1


def test_elevator_statistics_unchanged_value_keeps_label():
    chart = Chart(1)
    chart.set_elevator_statistics(0, (1, 1))
    assert chart.pies[0][0].label == "Idle: 0 s"


@pytest.mark.parametrize("stats", [(), (1, 2, 3), (1, 2, 3, 4, 5)])
def test_passenger_statistics_wrong_length(stats):
    chart = Chart(1)
    with pytest.raises(ValueError):
        chart.set_passenger_statistics(stats)


def test_passenger_statistics_small_values():
    chart = Chart(1)
    chart.set_passenger_statistics((1000, 2000, 1000, 1500))
    assert chart.bars == pytest.approx([1.0, 2.0, 1.0, 1.5])
    assert chart.axis_max >= chart.bars[1]
    assert chart.label_format == "%.1f s"


def test_passenger_statistics_large_max_switches_format():
    chart = Chart(1)
    chart.set_passenger_statistics((5000, 20000, 5000, 6000))
    assert chart.label_format == "%d s"
    assert chart.axis_max > chart.bars[1]


def test_axis_does_not_shrink():
    chart = Chart(1)
    chart.set_passenger_statistics((5000, 20000, 5000, 6000))
    axis = chart.axis_max
    chart.set_passenger_statistics((1000, 3000, 1000, 1000))
    assert chart.axis_max == axis
    assert chart.bars[1] < axis


def test_render_mentions_panels():
    chart = Chart(2)
    text = chart.render()
    assert "E1" in text and "E2" in text
    assert "Passenger Waiting Time" in text
    assert all(name in text for name in ("Mean", "Maximum", "Mode", "Median"))