from happyhour.db.documents import apply_updates, bar_to_document, record_to_bar
from happyhour.db.models import BarRecord
from happyhour.db.objects import legacy_menu_path, menu_path

from conftest import make_bar


def test_apply_updates_sets_nested_paths_without_touching_siblings():
    document = {"name": "Old", "address": {"city": "Seattle", "state": "WA"}}
    result = apply_updates(document, {"name": "New", "address.city": "Tacoma"})
    assert result == {"name": "New", "address": {"city": "Tacoma", "state": "WA"}}
    assert document["address"]["city"] == "Seattle"


def test_apply_updates_creates_missing_objects():
    result = apply_updates({"address": "unknown"}, {"address.city": "Austin", "a.b.c": 1})
    assert result == {"address": {"city": "Austin"}, "a": {"b": {"c": 1}}}


def test_apply_updates_does_not_alias_values():
    happy_hours = [{"id": "hh-1"}]
    result = apply_updates({}, {"happy_hours": happy_hours})
    happy_hours.append({"id": "hh-2"})
    assert result["happy_hours"] == [{"id": "hh-1"}]


def test_record_round_trip():
    bar = make_bar()
    record = BarRecord(id=bar.id, document=bar_to_document(bar))
    assert record_to_bar(record) == bar


def test_record_with_legacy_day_key():
    record = BarRecord(
        id="b1",
        document={"name": "Legacy", "happy_hours": [{"id": "hh-1", "day": ["Monday"], "deals": None}]},
    )
    bar = record_to_bar(record)
    assert bar.happy_hours[0].days[0].value == "Monday"
    assert bar.happy_hours[0].deals == []
    assert bar.address.city == ""


def test_menu_paths():
    assert menu_path("hh-1") == "happyHourMenu/hh-1.pdf"
    assert legacy_menu_path("The Anchor", "hh-1") == "happyHourMenu/The Anchor/hh-1.pdf"
