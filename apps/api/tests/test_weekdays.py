from happyhour.domain import WeekDay
from happyhour.services.happy_hours import map_weekday, map_weekdays


def test_map_weekday_is_case_insensitive():
    assert map_weekday("monday") is WeekDay.MONDAY
    assert map_weekday("FRIDAY") is WeekDay.FRIDAY
    assert map_weekday("SunDay") is WeekDay.SUNDAY


def test_map_weekday_unknown_tokens():
    assert map_weekday("Funday") is None
    assert map_weekday("mon") is None
    assert map_weekday("") is None
    assert map_weekday(None) is None
    assert map_weekday(3) is None


def test_map_weekdays_keeps_order_and_duplicates():
    tokens = ["friday", "Funday", None, "monday", "FRIDAY"]
    assert map_weekdays(tokens) == [WeekDay.FRIDAY, WeekDay.MONDAY, WeekDay.FRIDAY]


def test_map_weekdays_empty():
    assert map_weekdays([]) == []
    assert map_weekdays(None) == []
