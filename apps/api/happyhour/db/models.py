import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column,
    String,
    LargeBinary,
    DateTime,
    ForeignKey,
    Index,
    func,
)
from sqlalchemy.dialects.postgresql import UUID, JSONB

from .session import Base


def uuid4_str():
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=True)
    # E.164 phone enrolled as second factor; null => password-only sign-in
    mfa_phone = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))


class BarRecord(Base):
    """One bar document (name, address, contact, happy hours) keyed by id."""
    __tablename__ = "bars"

    id = Column(String(128), primary_key=True, default=uuid4_str)
    document = Column(JSONB, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))


class StoredObject(Base):
    """Binary object addressed by path (e.g. happyHourMenu/<entryId>.pdf)."""
    __tablename__ = "stored_objects"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    path = Column(String(1024), unique=True, nullable=False, index=True)
    content = Column(LargeBinary, nullable=False)
    content_type = Column(String(100), nullable=False, default="application/octet-stream")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))


class BarEditSession(Base):
    """A user's working copy of a bar: draft (null while viewing) and a selected menu PDF."""
    __tablename__ = "bar_edit_sessions"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    bar_id = Column(String(128), ForeignKey("bars.id", ondelete="CASCADE"), nullable=False)
    draft = Column(JSONB, nullable=True)
    pending_menu = Column(LargeBinary, nullable=True)
    pending_menu_filename = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (Index("ix_bar_edit_sessions_user_bar", "user_id", "bar_id", unique=True),)
