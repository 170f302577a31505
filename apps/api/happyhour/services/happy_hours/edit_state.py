"""Committed/draft working copy of a bar with save and cancel transitions.

Viewing (draft is None) is the initial state. ``begin_edit`` forks the draft
from the committed copy; ``save_edit`` persists the draft and makes it the
committed copy; ``cancel`` drops the draft and any selected menu PDF.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from happyhour.core.constants import PDF_MEDIA_TYPE
from happyhour.db.objects import menu_path
from happyhour.domain import Bar

logger = logging.getLogger(__name__)


class NotEditingError(Exception):
    """Raised when a draft operation is attempted while viewing."""


@dataclass
class PendingMenu:
    """PDF selected for upload but not yet saved with the bar."""

    filename: str
    content: bytes


class EditState:
    def __init__(
        self,
        committed: Bar,
        draft: Optional[Bar] = None,
        pending_menu: Optional[PendingMenu] = None,
    ):
        self.committed = committed
        self.draft = draft
        self.pending_menu = pending_menu

    @property
    def bar_id(self) -> str:
        return self.committed.id

    @property
    def editing(self) -> bool:
        return self.draft is not None

    @property
    def displayed(self) -> Bar:
        """What a reader sees: the draft only while editing."""
        return self.draft if self.draft is not None else self.committed

    def begin_edit(self) -> None:
        if self.draft is None:
            self.draft = self.committed.model_copy(deep=True)

    def require_draft(self) -> Bar:
        if self.draft is None:
            raise NotEditingError(f"Bar {self.bar_id} is not being edited")
        return self.draft

    def replace_draft(self, draft: Bar) -> None:
        self.require_draft()
        self.draft = draft

    def select_menu(self, filename: str, content: bytes) -> None:
        self.pending_menu = PendingMenu(filename=filename, content=content)

    def cancel(self) -> None:
        self.draft = None
        self.pending_menu = None

    def mark_saved(self) -> None:
        self.committed = self.require_draft()
        self.draft = None
        self.pending_menu = None


def bar_to_updates(bar: Bar) -> dict:
    """Field-path updates that rewrite every stored field of ``bar``."""
    data = bar.model_dump(mode="json", exclude={"id"})
    updates = {key: value for key, value in data.items() if key != "address"}
    for key, value in data["address"].items():
        updates[f"address.{key}"] = value
    return updates


async def save_edit(state: EditState, bars, objects) -> Bar:
    """Persist the draft; on any failure the state stays in editing, untouched.

    A selected menu PDF is stored under each entry's menu path one entry at a
    time, then the whole bar record is written.
    """
    draft = state.require_draft()
    if state.pending_menu is not None:
        for entry in draft.happy_hours:
            await objects.upload_bytes(menu_path(entry.id), state.pending_menu.content, PDF_MEDIA_TYPE)
    await bars.update_bar(draft.id, bar_to_updates(draft))
    state.mark_saved()
    logger.info("Saved bar %s with %d happy hours", state.bar_id, len(state.committed.happy_hours))
    return state.committed
