"""
Seed the database with a dashboard user and a handful of bars with happy hours.
Run from apps/api: uv run python scripts/seed_bars.py [--email ...] [--mfa-phone +15551234567]
"""
import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

# Ensure happyhour is importable when run from repo root or apps/api
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logger = logging.getLogger(__name__)

from sqlalchemy import select

from happyhour.core import hash_password
from happyhour.db.documents import BarStore
from happyhour.db.models import User
from happyhour.db.session import async_session
from happyhour.domain import Address, Bar, Deal, HappyHourEntry, WeekDay
from happyhour.services.happy_hours import new_entry_id, normalize_time

DEFAULT_EMAIL = "owner@example.com"
DEFAULT_PASSWORD = "SeedPassword123!"

WEEKNIGHTS = [WeekDay.MONDAY, WeekDay.TUESDAY, WeekDay.WEDNESDAY, WeekDay.THURSDAY, WeekDay.FRIDAY]

SAMPLE_BARS = [
    {
        "id": "the-rusty-anchor",
        "name": "The Rusty Anchor",
        "hero_image_url": "https://images.example.com/bars/rusty-anchor.jpg",
        "address": {
            "neighborhood": "Harbor District",
            "city": "Seattle",
            "state": "WA",
            "full_address": "112 Pier Way, Seattle, WA 98101",
        },
        "phone_number": "(206) 555-0142",
        "website": "https://rustyanchor.example.com",
        "happy_hours": [
            ("Early Bird", WEEKNIGHTS, "16:00", "18:00",
             ["House Lager", "Well Gin & Tonic", "Rosé", "Old Fashioned"],
             [("Draft beer", "All drafts on tap", "$4"), ("Oysters", "Half dozen, daily catch", "$1 each")],
             "$4 drafts and dollar oysters"),
            ("Late Night", [WeekDay.FRIDAY, WeekDay.SATURDAY], "22:00", "23:59",
             ["Whiskey Sour"],
             [("Wells", "", "$5")],
             "$5 wells"),
        ],
    },
    {
        "id": "copper-fox",
        "name": "Copper Fox",
        "hero_image_url": "",
        "address": {
            "neighborhood": "Capitol Hill",
            "city": "Seattle",
            "state": "WA",
            "full_address": "1520 Pike St, Seattle, WA 98122",
        },
        "phone_number": "(206) 555-0199",
        "website": "",
        "happy_hours": [
            ("Happy Hour", [WeekDay.TUESDAY, WeekDay.THURSDAY, WeekDay.SUNDAY], "15:30", "17:30",
             ["Negroni", "Spritz"],
             [("Cocktails", "Classic cocktails", "Half off")],
             "Half-off classics"),
        ],
    },
]


def build_bar(data: dict, today: date) -> Bar:
    entries = []
    for name, days, start, end, drinks, deals, summary in data["happy_hours"]:
        entries.append(
            HappyHourEntry(
                id=new_entry_id(),
                name=name,
                days=days,
                start_time=normalize_time(start, today),
                end_time=normalize_time(end, today),
                drinks=drinks,
                deals=[Deal(item=i, description=d, deal=t) for i, d, t in deals],
                deals_summary=summary,
            )
        )
    return Bar(
        id=data["id"],
        name=data["name"],
        hero_image_url=data["hero_image_url"],
        address=Address(**data["address"]),
        phone_number=data["phone_number"],
        website=data["website"],
        happy_hours=entries,
    )


async def run_seed(email: str, password: str, mfa_phone: str | None):
    async with async_session() as session:
        existing = await session.execute(select(User).where(User.email == email))
        if existing.scalar_one_or_none():
            logger.info("User %s already exists; skipping", email)
        else:
            session.add(
                User(
                    email=email,
                    hashed_password=hash_password(password),
                    display_name="Bar Owner",
                    mfa_phone=mfa_phone,
                )
            )
            logger.info("Created user %s%s", email, " (phone MFA)" if mfa_phone else "")

        store = BarStore(session)
        today = date.today()
        for data in SAMPLE_BARS:
            if await store.get_bar(data["id"]):
                logger.info("Bar %s already exists; skipping", data["id"])
                continue
            bar = await store.create_bar(build_bar(data, today))
            logger.info("Seeded bar %s with %s happy hours", bar.name, len(bar.happy_hours))

        await session.commit()

    logger.info("Done. Sign in with %s / %s", email, password)


def main():
    parser = argparse.ArgumentParser(description="Seed a dashboard user and sample bars.")
    parser.add_argument("--email", default=DEFAULT_EMAIL, help="Dashboard user email")
    parser.add_argument("--password", default=DEFAULT_PASSWORD, help="Dashboard user password")
    parser.add_argument("--mfa-phone", default=None, help="E.164 phone to enroll as second factor")
    parser.add_argument("--log-level", default="INFO", choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    asyncio.run(run_seed(args.email.strip().lower(), args.password, args.mfa_phone))


if __name__ == "__main__":
    main()
