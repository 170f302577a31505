"""Bar documents: read-all, read-one, and field-path updates over the bars table."""

import copy
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from happyhour.db.models import BarRecord
from happyhour.domain import Bar

logger = logging.getLogger(__name__)


class BarNotFoundError(Exception):
    """Raised when a bar id has no document."""


def apply_updates(document: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``document`` with each dotted path in ``updates`` set.

    ``{"address.city": "Austin"}`` replaces only the nested city; intermediate
    objects are created when missing or not objects.
    """
    result = copy.deepcopy(document)
    for path, value in updates.items():
        keys = path.split(".")
        target = result
        for key in keys[:-1]:
            child = target.get(key)
            if not isinstance(child, dict):
                child = {}
                target[key] = child
            target = child
        target[keys[-1]] = copy.deepcopy(value)
    return result


def record_to_bar(record: BarRecord) -> Bar:
    return Bar.model_validate({**(record.document or {}), "id": record.id})


def bar_to_document(bar: Bar) -> dict[str, Any]:
    return bar.model_dump(mode="json", exclude={"id"})


class BarStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_bars(self) -> list[Bar]:
        result = await self.db.execute(select(BarRecord).order_by(BarRecord.created_at, BarRecord.id))
        return [record_to_bar(r) for r in result.scalars().all()]

    async def get_bar(self, bar_id: str) -> Bar | None:
        record = await self.db.get(BarRecord, bar_id)
        return record_to_bar(record) if record else None

    async def create_bar(self, bar: Bar) -> Bar:
        record = BarRecord(id=bar.id, document=bar_to_document(bar))
        self.db.add(record)
        await self.db.flush()
        return bar

    async def update_bar(self, bar_id: str, updates: dict[str, Any]) -> None:
        record = await self.db.get(BarRecord, bar_id)
        if not record:
            raise BarNotFoundError(f"Bar {bar_id} not found")
        # Assign a new dict so the JSONB column is flagged dirty
        record.document = apply_updates(record.document or {}, updates)
        await self.db.flush()
        logger.debug("Updated bar %s fields: %s", bar_id, ", ".join(sorted(updates)))
