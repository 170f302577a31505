import json
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Any

import pytest
from fastapi.testclient import TestClient

from happyhour.core import limiter
from happyhour.db.documents import BarNotFoundError, apply_updates, bar_to_document
from happyhour.db.models import User
from happyhour.db.objects import ObjectNotFoundError
from happyhour.dependencies import (
    get_bar_store,
    get_current_user,
    get_edit_session_store,
    get_object_store,
)
from happyhour.domain import Address, Bar, Deal, HappyHourEntry, WeekDay
from happyhour.main import app
from happyhour.services.happy_hours import EditState, PendingMenu

TODAY = date(2024, 6, 3)
PDF_BYTES = b"%PDF-1.4\n1 0 obj<<>>endobj\ntrailer<<>>\n%%EOF\n"


class FakeBarStore:
    """In-memory stand-in for BarStore that keeps JSON documents like the bars table."""

    def __init__(self):
        self.documents: dict[str, dict[str, Any]] = {}
        self.fail_updates = False
        self.updates: list[tuple[str, dict[str, Any]]] = []

    async def list_bars(self) -> list[Bar]:
        return [Bar.model_validate({**doc, "id": bar_id}) for bar_id, doc in self.documents.items()]

    async def get_bar(self, bar_id: str) -> Bar | None:
        doc = self.documents.get(bar_id)
        return Bar.model_validate({**doc, "id": bar_id}) if doc is not None else None

    async def create_bar(self, bar: Bar) -> Bar:
        self.documents[bar.id] = bar_to_document(bar)
        return bar

    async def update_bar(self, bar_id: str, updates: dict[str, Any]) -> None:
        if self.fail_updates:
            raise RuntimeError("database unavailable")
        if bar_id not in self.documents:
            raise BarNotFoundError(bar_id)
        self.updates.append((bar_id, updates))
        self.documents[bar_id] = apply_updates(self.documents[bar_id], updates)


class FakeObjectStore:
    def __init__(self, public_base_url: str = "http://testserver"):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.uploads: list[str] = []
        self.fail_uploads = False
        self.public_base_url = public_base_url

    @asynccontextmanager
    async def savepoint(self):
        yield

    async def upload_bytes(self, path: str, content: bytes, content_type: str) -> None:
        if self.fail_uploads:
            raise RuntimeError("object store unavailable")
        self.uploads.append(path)
        self.objects[path] = (content, content_type)

    async def exists(self, path: str) -> bool:
        return path in self.objects

    async def download_bytes(self, path: str) -> tuple[bytes, str]:
        if path not in self.objects:
            raise ObjectNotFoundError(path)
        return self.objects[path]

    async def get_download_url(self, path: str) -> str:
        if path not in self.objects:
            raise ObjectNotFoundError(path)
        return f"{self.public_base_url}/objects/{path}?t=signed"

    async def find_legacy_menu_path(self, entry_id: str) -> str | None:
        for path in self.objects:
            parts = path.split("/")
            if len(parts) == 3 and parts[2] == f"{entry_id}.pdf":
                return path
        return None


class FakeEditSessionStore:
    def __init__(self):
        self.rows: dict[tuple[str, str], dict[str, Any]] = {}

    async def load(self, user_id: str, committed: Bar) -> EditState:
        row = self.rows.get((user_id, committed.id))
        if row is None:
            return EditState(committed)
        draft = Bar.model_validate({**row["draft"], "id": committed.id}) if row["draft"] is not None else None
        pending = PendingMenu(*row["pending"]) if row["pending"] is not None else None
        return EditState(committed, draft=draft, pending_menu=pending)

    async def save(self, user_id: str, state: EditState) -> None:
        if state.draft is None and state.pending_menu is None:
            self.rows.pop((user_id, state.bar_id), None)
            return
        self.rows[(user_id, state.bar_id)] = {
            "draft": bar_to_document(state.draft) if state.draft is not None else None,
            "pending": (state.pending_menu.filename, state.pending_menu.content) if state.pending_menu else None,
        }


def make_entry(entry_id: str = "hh-1", **overrides) -> HappyHourEntry:
    data = {
        "id": entry_id,
        "name": "Early Bird",
        "days": [WeekDay.MONDAY, WeekDay.FRIDAY],
        "start_time": datetime(2024, 6, 3, 16, 0),
        "end_time": datetime(2024, 6, 3, 18, 0),
        "drinks": ["Lager", "Rosé", "Gin & Tonic", "Old Fashioned"],
        "deals": [Deal(item="Draft beer", description="All drafts", deal="$4")],
        "deals_summary": "$4 drafts",
    }
    data.update(overrides)
    return HappyHourEntry(**data)


def make_bar(bar_id: str = "rusty-anchor", happy_hours: list[HappyHourEntry] | None = None) -> Bar:
    return Bar(
        id=bar_id,
        name="The Rusty Anchor",
        hero_image_url="https://images.example.com/anchor.jpg",
        address=Address(
            neighborhood="Harbor District",
            city="Seattle",
            state="WA",
            full_address="112 Pier Way, Seattle, WA 98101",
        ),
        phone_number="(206) 555-0142",
        website="https://anchor.example.com",
        happy_hours=happy_hours if happy_hours is not None else [make_entry()],
    )


def analysis_payload(happy_hours: list[Any]) -> dict[str, Any]:
    return {
        "message": "PDF processed",
        "filename": "menu.pdf",
        "pages": [{"page": 1, "text": "Happy hour"}],
        "analysis": json.dumps({"happy_hours": happy_hours}),
    }


@pytest.fixture
def bar_store() -> FakeBarStore:
    return FakeBarStore()


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def session_store() -> FakeEditSessionStore:
    return FakeEditSessionStore()


@pytest.fixture
def current_user() -> User:
    return User(id="user-1", email="owner@example.com", display_name="Owner", hashed_password="x")


@pytest.fixture
def client(bar_store, object_store, session_store, current_user):
    limiter.enabled = False
    app.dependency_overrides[get_bar_store] = lambda: bar_store
    app.dependency_overrides[get_object_store] = lambda: object_store
    app.dependency_overrides[get_edit_session_store] = lambda: session_store
    app.dependency_overrides[get_current_user] = lambda: current_user
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    limiter.enabled = True
