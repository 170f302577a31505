"""Reconcile PDF analysis output into happy-hour entries of a bar draft.

The analysis service is an LLM pipeline, so its payload is treated as a loose
shape: every field may be missing or of the wrong type. Conversion fills
defaults field by field and never rejects a session.
"""

import logging
import uuid
from typing import Any, Iterable, Mapping

from happyhour.core.constants import DEFAULT_HAPPY_HOUR_NAME, PDF_MEDIA_TYPE
from happyhour.db.objects import menu_path
from happyhour.domain import Bar, HappyHourEntry
from happyhour.services.happy_hours.deals import normalize_deal
from happyhour.services.happy_hours.edit_state import EditState
from happyhour.services.happy_hours.time_of_day import normalize_time
from happyhour.services.happy_hours.weekdays import map_weekdays

logger = logging.getLogger(__name__)


def new_entry_id() -> str:
    return str(uuid.uuid4())


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def session_to_entry(session: Mapping[str, Any]) -> HappyHourEntry:
    """Build a fresh entry from one analysis session; missing parts become defaults."""
    schedule = _mapping(session.get("schedule"))
    name = session.get("name")
    summary = session.get("deals_summary")
    return HappyHourEntry(
        id=new_entry_id(),
        name=name if isinstance(name, str) and name else DEFAULT_HAPPY_HOUR_NAME,
        days=map_weekdays(_list(schedule.get("days"))),
        start_time=normalize_time(schedule.get("start_time")),
        end_time=normalize_time(schedule.get("end_time")),
        drinks=[],
        deals=[normalize_deal(d) for d in _list(session.get("deals"))],
        deals_summary=summary if isinstance(summary, str) else "",
    )


def reconcile_sessions(sessions: Iterable[Any] | None) -> list[HappyHourEntry]:
    entries: list[HappyHourEntry] = []
    for index, session in enumerate(sessions or []):
        if not isinstance(session, Mapping):
            logger.info("Skipping malformed happy hour session #%d: %r", index, session)
            continue
        entries.append(session_to_entry(session))
    return entries


def append_entries(draft: Bar, entries: list[HappyHourEntry]) -> Bar:
    """Return ``draft`` with ``entries`` appended; the same object when nothing is added."""
    if not entries:
        return draft
    return draft.model_copy(update={"happy_hours": [*draft.happy_hours, *entries]})


async def apply_analysis(
    state: EditState,
    sessions: Iterable[Any] | None,
    pdf_content: bytes,
    objects,
) -> list[HappyHourEntry]:
    """Reconcile analysis sessions into the edit state's draft.

    The source PDF is stored under every new entry's menu path before the entry
    is added to the draft. With no usable sessions the state is left alone.
    """
    entries = reconcile_sessions(sessions)
    if not entries:
        logger.info("Analysis for bar %s produced no happy hours", state.bar_id)
        return []

    for entry in entries:
        await objects.upload_bytes(menu_path(entry.id), pdf_content, PDF_MEDIA_TYPE)

    state.begin_edit()
    state.replace_draft(append_entries(state.require_draft(), entries))
    logger.info("Reconciled %d happy hours into draft of bar %s", len(entries), state.bar_id)
    return entries
