#!/usr/bin/env python3
"""
Create a demo driver with a license and a few fines.

Licenses and fines are issued by the authorities, so the API has no
endpoint to create them; this script stands in for that feed.

Usage:
  python scripts/seed_demo_data.py
  # Requires DATABASE_URL and SECRET_KEY in .env (or export)
"""
import asyncio
import os
import sys
from datetime import date, timedelta

from dotenv import load_dotenv

_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(_ROOT, ".env"))

if not os.getenv("DATABASE_URL") or not os.getenv("SECRET_KEY"):
    sys.exit("ERROR: DATABASE_URL and SECRET_KEY must be set. Add to .env or export.")

sys.path.insert(0, _ROOT)

from app.core.logging import get_logger, setup_logging
from app.core.security import get_password_hash
from app.database import AsyncSessionLocal, close_db, init_db
from app.models import Fine, FineStatus, License, LicenseStatus, User
from app.services.user_service import UserService
from app.utils.time import get_utc_now

logger = get_logger("seed")

DEMO_ID_NUMBER = "199012345678"
DEMO_PASSWORD = "DemoPass123!"


async def seed() -> None:
    await init_db()
    try:
        await _seed_demo_user()
    finally:
        await close_db()


async def _seed_demo_user() -> None:
    now = get_utc_now()

    async with AsyncSessionLocal() as db:
        if await UserService.get_user_by_id_number(db, DEMO_ID_NUMBER):
            logger.info("Demo user already present, nothing to do")
            return

        user = User(
            name="Demo Driver",
            id_number=DEMO_ID_NUMBER,
            phone="+94770000000",
            dl_number="B1234567",
            dl_expire_date=date.today() + timedelta(days=20),
            email="demo.driver@example.com",
            hashed_password=get_password_hash(DEMO_PASSWORD),
        )
        db.add(user)
        await db.flush()

        db.add(License(
            user_id=user.id,
            license_number="B1234567",
            issued_date=now - timedelta(days=8 * 365),
            expiry_date=now + timedelta(days=20),
            category="B",
            status=LicenseStatus.ACTIVE,
            restrictions=["Corrective lenses"],
        ))

        fines = [
            ("FN-0001", 2500.0, "Speeding", "Galle Road, Colombo", -40, -10, FineStatus.OVERDUE),
            ("FN-0002", 1000.0, "Illegal parking", "Kandy City Centre", -5, 9, FineStatus.UNPAID),
            ("FN-0003", 3000.0, "Running a red light", "Negombo Road", -2, 12, FineStatus.UNPAID),
        ]
        for number, amount, reason, location, issued, due, status in fines:
            db.add(Fine(
                user_id=user.id,
                fine_number=number,
                amount=amount,
                reason=reason,
                location=location,
                date=now + timedelta(days=issued),
                due_date=now + timedelta(days=due),
                status=status,
            ))

        await db.commit()
        logger.info(f"Seeded demo user {DEMO_ID_NUMBER} with {len(fines)} fines")


def main():
    setup_logging()
    asyncio.run(seed())
    print(f"Login with idNumber={DEMO_ID_NUMBER} password={DEMO_PASSWORD}")


if __name__ == "__main__":
    main()
