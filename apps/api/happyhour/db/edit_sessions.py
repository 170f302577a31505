"""Per-user edit sessions: the persisted half of an EditState."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from happyhour.db.documents import bar_to_document
from happyhour.db.models import BarEditSession
from happyhour.domain import Bar
from happyhour.services.happy_hours.edit_state import EditState, PendingMenu


class EditSessionStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, user_id: str, bar_id: str) -> BarEditSession | None:
        result = await self.db.execute(
            select(BarEditSession).where(
                BarEditSession.user_id == user_id,
                BarEditSession.bar_id == bar_id,
            )
        )
        return result.scalar_one_or_none()

    async def load(self, user_id: str, committed: Bar) -> EditState:
        """Combine the freshly loaded committed bar with the user's draft, if any."""
        row = await self._get(user_id, committed.id)
        if row is None:
            return EditState(committed)
        draft = Bar.model_validate({**row.draft, "id": committed.id}) if row.draft is not None else None
        pending = None
        if row.pending_menu is not None:
            pending = PendingMenu(filename=row.pending_menu_filename or "menu.pdf", content=bytes(row.pending_menu))
        return EditState(committed, draft=draft, pending_menu=pending)

    async def save(self, user_id: str, state: EditState) -> None:
        if state.draft is None and state.pending_menu is None:
            await self.db.execute(
                delete(BarEditSession).where(
                    BarEditSession.user_id == user_id,
                    BarEditSession.bar_id == state.bar_id,
                )
            )
            return
        row = await self._get(user_id, state.bar_id)
        if row is None:
            row = BarEditSession(user_id=user_id, bar_id=state.bar_id)
            self.db.add(row)
        row.draft = bar_to_document(state.draft) if state.draft is not None else None
        row.pending_menu = state.pending_menu.content if state.pending_menu else None
        row.pending_menu_filename = state.pending_menu.filename if state.pending_menu else None
        await self.db.flush()
