# scripts/seed_database.py
"""Load demo accounts and a year of validated records.

    python -m scripts.seed_database
"""
import asyncio
import logging
import random
from datetime import date

from sqlalchemy import delete

from app.core.logging import configure_logging
from app.database import AsyncSessionLocal, engine, init_models
from app.models.performance import PerformanceRecord
from app.models.user import User
from app.services import performance as performance_service
from app.services import users as user_service

logger = logging.getLogger("seed")

SEED_PASSWORD = "password123"

SEED_USERS = [
    {"name": "Marie", "surname": "Therese", "email": "marie@salesperf.io", "role": "admin",
     "job_title": "Sales Director", "department": "Sales", "hire_date": date(2020, 1, 15)},
    {"name": "Bourama", "surname": "Ngom", "email": "boura@salesperf.io", "role": "manager",
     "job_title": "Sales Manager", "department": "Sales", "hire_date": date(2021, 3, 10)},
    {"name": "Awa", "surname": "Diop", "email": "awa@salesperf.io", "role": "user",
     "job_title": "Account Executive", "department": "Sales", "hire_date": date(2022, 9, 1)},
]


def build_month(year: int, month: int) -> dict:
    appointments = random.randint(20, 50)
    total_files = random.randint(30, 60)
    return {
        "year": year,
        "month": month,
        "revenue": float(random.randint(60_000, 130_000)),
        "revenue_target": 100_000.0,
        "new_clients": random.randint(3, 15),
        "appointments_completed": appointments,
        "appointments_planned": appointments + random.randint(0, 10),
        "sales_completed": random.randint(5, appointments),
        "files_updated": random.randint(10, total_files),
        "total_files": total_files,
        "events": random.randint(0, 4),
        "satisfaction": round(random.uniform(3.0, 5.0), 1),
        "comment": None,
        "status": "validated",
    }


async def seed(year: int) -> None:
    await init_models()
    async with AsyncSessionLocal() as db:
        await db.execute(delete(PerformanceRecord))
        await db.execute(delete(User))
        await db.commit()

        for spec in SEED_USERS:
            fields = dict(spec)
            role = fields.pop("role")
            user = await user_service.register(db, password=SEED_PASSWORD, **fields)
            user.role = role
            await db.commit()

            for month in range(1, 13):
                await performance_service.upsert(db, user.id, build_month(year, month))
            logger.info("Seeded %s (%s) with 12 months of %d", user.email, role, year)

    await engine.dispose()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(seed(date.today().year))
