"""Bars dashboard and the per-user edit workflow (edit, change draft, save, cancel)."""

import logging
from dataclasses import dataclass

from fastapi import HTTPException, status

from happyhour.core import SUMMARY_DRINKS_LIMIT
from happyhour.db.documents import BarNotFoundError, BarStore
from happyhour.db.edit_sessions import EditSessionStore
from happyhour.db.objects import ObjectStore
from happyhour.domain import Bar, HappyHourEntry
from happyhour.schemas import BarSummary, BarView, DraftUpdateRequest, HappyHourSummary
from happyhour.services.happy_hours import (
    EditState,
    NotEditingError,
    format_time_range,
    new_entry_id,
    save_edit,
)

logger = logging.getLogger(__name__)


@dataclass
class BarWorkspace:
    """Stores a request works against, scoped to the signed-in user."""

    bars: BarStore
    objects: ObjectStore
    sessions: EditSessionStore
    user_id: str


def summarize_happy_hour(hh: HappyHourEntry) -> HappyHourSummary:
    return HappyHourSummary(
        name=hh.name,
        days=hh.days,
        time_range=format_time_range(hh.start_time, hh.end_time),
        drinks=hh.drinks[:SUMMARY_DRINKS_LIMIT],
        more_drinks=len(hh.drinks) > SUMMARY_DRINKS_LIMIT,
    )


def summarize_bar(bar: Bar) -> BarSummary:
    return BarSummary(
        id=bar.id,
        name=bar.name,
        hero_image_url=bar.hero_image_url,
        neighborhood=bar.address.neighborhood,
        full_address=bar.address.full_address,
        phone_number=bar.phone_number,
        website=bar.website,
        happy_hours=[summarize_happy_hour(hh) for hh in bar.happy_hours],
    )


def to_view(state: EditState) -> BarView:
    return BarView(
        bar=state.displayed,
        editing=state.editing,
        has_pending_menu=state.pending_menu is not None,
        pending_menu_filename=state.pending_menu.filename if state.pending_menu else None,
    )


def _require_draft(state: EditState) -> Bar:
    try:
        return state.require_draft()
    except NotEditingError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Bar is not being edited")


async def list_bars(ws: BarWorkspace) -> list[BarSummary]:
    return [summarize_bar(bar) for bar in await ws.bars.list_bars()]


async def load_state(ws: BarWorkspace, bar_id: str) -> EditState:
    bar = await ws.bars.get_bar(bar_id)
    if not bar:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bar not found")
    return await ws.sessions.load(ws.user_id, bar)


async def get_bar_view(ws: BarWorkspace, bar_id: str) -> BarView:
    return to_view(await load_state(ws, bar_id))


async def begin_edit(ws: BarWorkspace, bar_id: str) -> BarView:
    state = await load_state(ws, bar_id)
    state.begin_edit()
    await ws.sessions.save(ws.user_id, state)
    return to_view(state)


async def cancel_edit(ws: BarWorkspace, bar_id: str) -> BarView:
    state = await load_state(ws, bar_id)
    state.cancel()
    await ws.sessions.save(ws.user_id, state)
    return to_view(state)


async def save_bar(ws: BarWorkspace, bar_id: str) -> BarView:
    """Persist the draft. On failure the draft and selected menu are kept for a retry."""
    state = await load_state(ws, bar_id)
    _require_draft(state)
    try:
        await save_edit(state, ws.bars, ws.objects)
    except BarNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bar not found")
    except Exception:
        logger.exception("Error saving bar %s", bar_id)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to save bar")
    await ws.sessions.save(ws.user_id, state)
    return to_view(state)


async def update_draft(ws: BarWorkspace, bar_id: str, body: DraftUpdateRequest) -> BarView:
    """Replace the draft's fields. Entries keep their ids; new ones come from add_happy_hour."""
    state = await load_state(ws, bar_id)
    draft = _require_draft(state)
    known = set(draft.entry_ids())
    unknown = [hh.id for hh in body.happy_hours if hh.id not in known]
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown happy hour id(s): {', '.join(unknown)}",
        )
    state.replace_draft(Bar.model_validate({**body.model_dump(), "id": bar_id}))
    await ws.sessions.save(ws.user_id, state)
    return to_view(state)


async def add_happy_hour(ws: BarWorkspace, bar_id: str) -> BarView:
    state = await load_state(ws, bar_id)
    draft = _require_draft(state)
    entry = HappyHourEntry(id=new_entry_id())
    state.replace_draft(draft.model_copy(update={"happy_hours": [*draft.happy_hours, entry]}))
    await ws.sessions.save(ws.user_id, state)
    return to_view(state)


async def remove_happy_hour(ws: BarWorkspace, bar_id: str, entry_id: str) -> BarView:
    state = await load_state(ws, bar_id)
    draft = _require_draft(state)
    if draft.find_entry(entry_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Happy hour not found")
    remaining = [hh for hh in draft.happy_hours if hh.id != entry_id]
    state.replace_draft(draft.model_copy(update={"happy_hours": remaining}))
    await ws.sessions.save(ws.user_id, state)
    return to_view(state)
