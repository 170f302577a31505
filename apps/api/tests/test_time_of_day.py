import logging
from datetime import date, datetime

import pytest

from happyhour.services.happy_hours import format_time, format_time_range, normalize_time, time_to_hhmm

from conftest import TODAY


@pytest.mark.parametrize(
    "value, hour, minute",
    [
        ("17:00", 17, 0),
        ("9:05", 9, 5),
        ("09:05", 9, 5),
        ("00:00", 0, 0),
        ("23:59", 23, 59),
    ],
)
def test_normalize_time_accepts_24_hour_strings(value, hour, minute):
    assert normalize_time(value, TODAY) == datetime(2024, 6, 3, hour, minute)


@pytest.mark.parametrize(
    "value",
    ["", None, "25:99", "24:00", "17:60", "5pm", "17:30:00", " 17:30", "1730", "ab:cd", 1700, ["17:00"]],
)
def test_normalize_time_rejects_without_raising(value):
    assert normalize_time(value, TODAY) is None


def test_normalize_time_anchors_to_today_by_default():
    result = normalize_time("18:30")
    assert result is not None
    assert result.date() == date.today()


def test_time_to_hhmm():
    assert time_to_hhmm(datetime(2024, 6, 3, 7, 5)) == "07:05"
    assert time_to_hhmm(None) == ""


@pytest.mark.parametrize(
    "hour, minute, expected",
    [(17, 5, "5:05 PM"), (12, 0, "12:00 PM"), (0, 15, "12:15 AM"), (9, 30, "9:30 AM")],
)
def test_format_time(hour, minute, expected):
    assert format_time(datetime(2024, 6, 3, hour, minute)) == expected


def test_format_time_range():
    start = datetime(2024, 6, 3, 16, 0)
    end = datetime(2024, 6, 3, 18, 30)
    assert format_time_range(start, end) == "4:00 PM - 6:30 PM"
    assert format_time_range(None, None) == ""


@pytest.mark.parametrize("value", ["", None, 1700, "25:99"])
def test_normalize_time_logs_rejections(value, caplog):
    with caplog.at_level(logging.DEBUG, logger="happyhour.services.happy_hours.time_of_day"):
        assert normalize_time(value, TODAY) is None
    assert caplog.records
