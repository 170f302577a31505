from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from happyhour.core import decode_access_token, get_settings
from happyhour.db.documents import BarStore
from happyhour.db.edit_sessions import EditSessionStore
from happyhour.db.models import User
from happyhour.db.objects import ObjectStore
from happyhour.db.session import get_db
from happyhour.services.bars import BarWorkspace

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = decode_access_token(credentials.credentials)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_bar_store(db: Annotated[AsyncSession, Depends(get_db)]) -> BarStore:
    return BarStore(db)


def get_object_store(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ObjectStore:
    base = get_settings().api_public_url or str(request.base_url)
    return ObjectStore(db, base)


def get_edit_session_store(db: Annotated[AsyncSession, Depends(get_db)]) -> EditSessionStore:
    return EditSessionStore(db)


def get_workspace(
    current_user: Annotated[User, Depends(get_current_user)],
    bars: Annotated[BarStore, Depends(get_bar_store)],
    objects: Annotated[ObjectStore, Depends(get_object_store)],
    sessions: Annotated[EditSessionStore, Depends(get_edit_session_store)],
) -> BarWorkspace:
    return BarWorkspace(bars=bars, objects=objects, sessions=sessions, user_id=str(current_user.id))
