"""Path-addressed binary objects (PDF menus) with signed download URLs."""

import logging
from urllib.parse import quote

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from happyhour.core.auth import create_object_token
from happyhour.core.constants import MENU_PREFIX
from happyhour.db.models import StoredObject

logger = logging.getLogger(__name__)


class ObjectNotFoundError(Exception):
    """Raised when no object exists at a path."""


def menu_path(entry_id: str) -> str:
    return f"{MENU_PREFIX}/{entry_id}.pdf"


def legacy_menu_path(bar_name: str, entry_id: str) -> str:
    """Older uploads were namespaced by bar name."""
    return f"{MENU_PREFIX}/{bar_name}/{entry_id}.pdf"


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ObjectStore:
    def __init__(self, db: AsyncSession, public_base_url: str):
        self.db = db
        self.public_base_url = public_base_url.rstrip("/")

    async def _get(self, path: str) -> StoredObject | None:
        result = await self.db.execute(select(StoredObject).where(StoredObject.path == path))
        return result.scalar_one_or_none()

    def savepoint(self):
        """Nested transaction; writes inside it roll back alone on error."""
        return self.db.begin_nested()

    async def upload_bytes(self, path: str, content: bytes, content_type: str) -> None:
        obj = await self._get(path)
        if obj is None:
            obj = StoredObject(path=path, content=content, content_type=content_type)
            self.db.add(obj)
        else:
            obj.content = content
            obj.content_type = content_type
        await self.db.flush()
        logger.info("Stored object %s (%d bytes)", path, len(content))

    async def exists(self, path: str) -> bool:
        result = await self.db.execute(select(StoredObject.id).where(StoredObject.path == path))
        return result.scalar_one_or_none() is not None

    async def download_bytes(self, path: str) -> tuple[bytes, str]:
        """Return (content, content_type) or raise ObjectNotFoundError."""
        obj = await self._get(path)
        if obj is None:
            raise ObjectNotFoundError(path)
        return bytes(obj.content), obj.content_type

    async def get_download_url(self, path: str) -> str:
        if not await self.exists(path):
            raise ObjectNotFoundError(path)
        token = create_object_token(path)
        return f"{self.public_base_url}/objects/{quote(path)}?t={token}"

    async def find_legacy_menu_path(self, entry_id: str) -> str | None:
        pattern = f"{_escape_like(MENU_PREFIX)}/%/{_escape_like(entry_id)}.pdf"
        result = await self.db.execute(
            select(StoredObject.path)
            .where(StoredObject.path.like(pattern, escape="\\"))
            .order_by(StoredObject.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()


async def resolve_menu_path(objects, entry_id: str) -> str:
    """Find the stored menu for an entry under the current or the legacy layout."""
    path = menu_path(entry_id)
    if await objects.exists(path):
        return path
    legacy = await objects.find_legacy_menu_path(entry_id)
    if legacy is None:
        raise ObjectNotFoundError(path)
    return legacy
