import time

import pytest

from champkit.timing import SECONDS_TO_MICROS, map_float, time_us


def test_map_float_endpoints():
    assert map_float(2.0, 2.0, 6.0, -1.0, 1.0) == pytest.approx(-1.0)
    assert map_float(6.0, 2.0, 6.0, -1.0, 1.0) == pytest.approx(1.0)


def test_map_float_midpoint_maps_to_midpoint():
    assert map_float(4.0, 2.0, 6.0, -1.0, 1.0) == pytest.approx(0.0)


def test_map_float_round_trip():
    for x in (0.1, 3.3, 7.9):
        y = map_float(x, 0.0, 8.0, 100.0, 200.0)
        assert map_float(y, 100.0, 200.0, 0.0, 8.0) == pytest.approx(x)


def test_map_float_zero_width_input_raises():
    with pytest.raises(ZeroDivisionError):
        map_float(1.0, 1.0, 1.0, 0.0, 1.0)


def test_time_us_matches_wall_clock():
    before = time.time()
    now = time_us()
    after = time.time()
    assert before * SECONDS_TO_MICROS - 1000 <= now <= after * SECONDS_TO_MICROS + 1000


def test_time_us_does_not_go_backwards():
    a = time_us()
    b = time_us()
    assert b >= a


def test_seconds_to_micros_scaling():
    assert map_float(1.0, 0.0, 1.0, 0.0, SECONDS_TO_MICROS) == pytest.approx(1000000.0)