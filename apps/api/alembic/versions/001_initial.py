"""Initial schema: users, bar documents, stored objects, edit sessions.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("mfa_phone", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "bars",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("document", postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "stored_objects",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("path", sa.String(1024), nullable=False),
        sa.Column("content", sa.LargeBinary(), nullable=False),
        sa.Column("content_type", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_stored_objects_path", "stored_objects", ["path"], unique=True)

    op.create_table(
        "bar_edit_sessions",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("bar_id", sa.String(128), sa.ForeignKey("bars.id", ondelete="CASCADE"), nullable=False),
        sa.Column("draft", postgresql.JSONB(), nullable=True),
        sa.Column("pending_menu", sa.LargeBinary(), nullable=True),
        sa.Column("pending_menu_filename", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_bar_edit_sessions_user_bar", "bar_edit_sessions", ["user_id", "bar_id"], unique=True
    )


def downgrade() -> None:
    op.drop_index("ix_bar_edit_sessions_user_bar", table_name="bar_edit_sessions")
    op.drop_table("bar_edit_sessions")
    op.drop_index("ix_stored_objects_path", table_name="stored_objects")
    op.drop_table("stored_objects")
    op.drop_table("bars")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
