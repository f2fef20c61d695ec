"""
Seed the configured database with known patient records.

    python -m scripts.db.seed_db                 # default fixtures
    python -m scripts.db.seed_db fixtures.json   # fixtures from a JSON file
"""
import asyncio
import sys

from dotenv import load_dotenv

from app.db import DbManager
from app.db.seed import load_patient_fixtures, seed_patients
from common import get_app_logger
from common.config import initialize_config

logger = get_app_logger(__name__)


async def main(argv: list[str]) -> None:
    load_dotenv()
    config = initialize_config()

    fixtures = load_patient_fixtures(argv[0]) if argv else None

    db_manager = DbManager.from_config(config.database)
    await db_manager.verify_connection()
    try:
        if config.database.auto_create_schema:
            await db_manager.create_schema()
        seeded = await seed_patients(db_manager, fixtures)
    finally:
        await db_manager.dispose()

    logger.info("Seeded patients", count=len(seeded))


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))
