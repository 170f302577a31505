import pytest

from happyhour.core import DEFAULT_DEAL_DESCRIPTION, DEFAULT_DEAL_ITEM, DEFAULT_DEAL_TEXT
from happyhour.domain import Deal
from happyhour.services.happy_hours import normalize_deal


def test_complete_deal_is_unchanged():
    raw = {"item": "Wings", "description": "Ten piece", "deal": "$6"}
    assert normalize_deal(raw) == Deal(item="Wings", description="Ten piece", deal="$6")


def test_missing_fields_get_placeholders():
    assert normalize_deal({"item": "Wings"}) == Deal(
        item="Wings",
        description=DEFAULT_DEAL_DESCRIPTION,
        deal=DEFAULT_DEAL_TEXT,
    )


@pytest.mark.parametrize("raw", [None, {}, {"item": "", "description": None, "deal": 5}, "Wings $6"])
def test_unusable_input_gets_all_placeholders(raw):
    assert normalize_deal(raw) == Deal(
        item=DEFAULT_DEAL_ITEM,
        description=DEFAULT_DEAL_DESCRIPTION,
        deal=DEFAULT_DEAL_TEXT,
    )


def test_normalize_deal_is_idempotent():
    once = normalize_deal({"deal": "2 for 1"})
    assert normalize_deal(once) == once
