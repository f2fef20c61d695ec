"""
Fixture loading for known patient records.

    Example: Seed the default fixtures
        await seed_patients(db_manager)

    Example: Seed from a JSON file
        await seed_patients(db_manager, load_patient_fixtures("fixtures.json"))
"""

from datetime import date
from pathlib import Path
from typing import Optional, Sequence, Union

from pydantic import TypeAdapter
from sqlalchemy import text

from app.db.db_manager import DbManager
from app.db.models import Patient
from app.db.schemas import PatientResponse
from common import get_app_logger

logger = get_app_logger(__name__)

DEFAULT_PATIENT_FIXTURES: tuple[PatientResponse, ...] = (
    PatientResponse(id=1, given_name="Phillip", family_name="Spec", birth_date=date(1972, 5, 5)),
    PatientResponse(id=2, given_name="Sally", family_name="Certify", birth_date=date(1973, 6, 6)),
)

_fixture_list = TypeAdapter(list[PatientResponse])


def load_patient_fixtures(path: Union[str, Path]) -> list[PatientResponse]:
    """Read fixtures from a JSON array of patients (camelCase keys, ids required)."""
    return _fixture_list.validate_json(Path(path).read_bytes())


async def seed_patients(
    db_manager: DbManager,
    fixtures: Optional[Sequence[PatientResponse]] = None,
) -> list[Patient]:
    """
    Insert fixture records with their fixed ids.

    On PostgreSQL the identity sequence is moved past the highest seeded id
    so later inserts do not collide.
    """
    records = [
        Patient(**fixture.model_dump())
        for fixture in (DEFAULT_PATIENT_FIXTURES if fixtures is None else fixtures)
    ]

    async with db_manager.session() as session:
        session.add_all(records)
        await session.flush()

        if db_manager.engine.dialect.name == "postgresql":
            await session.execute(
                text(
                    "SELECT setval(pg_get_serial_sequence('patients', 'id'), "
                    "(SELECT MAX(id) FROM patients))"
                )
            )
        # Commit happens automatically on context exit

    logger.info("Seeded patients", count=len(records))
    return records


__all__ = ["DEFAULT_PATIENT_FIXTURES", "load_patient_fixtures", "seed_patients"]
