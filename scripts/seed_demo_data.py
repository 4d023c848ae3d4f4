#!/usr/bin/env python3
"""
Seed the wellness database with a demo user and generated daily metrics.

Entries go through the same upsert path as the API, so re-running the
script updates the existing days instead of duplicating them.

Usage:
    python scripts/seed_demo_data.py
    python scripts/seed_demo_data.py --days 60 --email demo@example.com --password demo1234
"""
import sys
import random
import argparse
from datetime import date, timedelta
from pathlib import Path
from dotenv import load_dotenv

# Base directory (project root)
BASE_DIR = Path(__file__).parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from server.wellness_api.database import DatabaseManager  # noqa: E402
from server.wellness_api.models.metric import MOOD_ORDER  # noqa: E402
from server.wellness_api.services import accounts, upsert  # noqa: E402
from server.wellness_api.services.errors import ConflictError  # noqa: E402
from server.wellness_api.services.metric_store import MetricStore  # noqa: E402

# Relative likelihood of each mood in generated data
MOOD_WEIGHTS = {"Happy": 4, "Neutral": 3, "Tired": 2, "Stressed": 1}

SAMPLE_NOTES = [
    "Morning walk before work",
    "Long day at the office",
    "Yoga in the evening",
    "Slept badly, noisy neighbours",
    "",
]


def generate_day(rng: random.Random) -> dict:
    """Generate one day's worth of plausible metric fields."""
    return {
        "steps": rng.randint(2000, 14000),
        "sleep_hours": round(rng.uniform(5.0, 9.0), 1),
        "mood": rng.choices(MOOD_ORDER, weights=[MOOD_WEIGHTS[m] for m in MOOD_ORDER])[0],
        "notes": rng.choice(SAMPLE_NOTES) or None,
    }


def get_or_create_user(db: DatabaseManager, email: str, password: str) -> accounts.User:
    try:
        return accounts.register_user(db, email, password)
    except ConflictError:
        return accounts.authenticate_user(db, email, password)


def seed(
    db: DatabaseManager,
    email: str,
    password: str,
    days: int,
    end_date: date | None = None,
    seed_value: int | None = None,
) -> tuple[accounts.User, int]:
    """
    Create the demo user and upsert ``days`` consecutive days ending at ``end_date``.

    Returns:
        The demo user and the number of days written.
    """
    db.init_schema()
    user = get_or_create_user(db, email, password)
    store = MetricStore(db)
    rng = random.Random(seed_value)
    end_date = end_date or date.today()

    for offset in range(days):
        day = end_date - timedelta(days=days - 1 - offset)
        upsert.upsert(store, user.id, day, generate_day(rng))

    return user, days


def main():
    """Seed the configured wellness database."""
    load_dotenv()

    parser = argparse.ArgumentParser(description="Seed demo wellness data")
    parser.add_argument("--days", type=int, default=30, help="Number of days to generate")
    parser.add_argument("--email", default="demo@example.com")
    parser.add_argument("--password", default="demo1234")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    args = parser.parse_args()

    db = DatabaseManager()

    print("=" * 60)
    print("Wellness Tracker Demo Data Script")
    print("=" * 60)
    print(f"\nDatabase: {db.db_path}\n")

    user, count = seed(db, args.email, args.password, args.days, seed_value=args.seed)

    print(f"  User: {user.email} ({user.id})")
    print(f"  Days written: {count}")
    print("=" * 60)


if __name__ == "__main__":
    main()
