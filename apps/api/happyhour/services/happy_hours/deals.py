from typing import Any, Mapping

from happyhour.core.constants import DEFAULT_DEAL_ITEM, DEFAULT_DEAL_DESCRIPTION, DEFAULT_DEAL_TEXT
from happyhour.domain import Deal


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value:
        return value
    return default


def normalize_deal(raw: Mapping[str, Any] | Deal | None) -> Deal:
    """Complete a partial deal with placeholder text for missing fields."""
    if isinstance(raw, Deal):
        raw = raw.model_dump()
    elif not isinstance(raw, Mapping):
        raw = {}
    return Deal(
        item=_text(raw.get("item"), DEFAULT_DEAL_ITEM),
        description=_text(raw.get("description"), DEFAULT_DEAL_DESCRIPTION),
        deal=_text(raw.get("deal"), DEFAULT_DEAL_TEXT),
    )
