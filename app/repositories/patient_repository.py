from typing import Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models import Patient
from common import get_app_logger

logger = get_app_logger(__name__)

# Range of the 32-bit INTEGER identity column; no row can hold an id outside it
MIN_PATIENT_ID = -(2**31)
MAX_PATIENT_ID = 2**31 - 1


def _storable_id(patient_id: int) -> bool:
    return MIN_PATIENT_ID <= patient_id <= MAX_PATIENT_ID


class PatientRepository:
    """
    Persistence operations for Patient records.

    Lookups return `None` for a miss; nothing here raises for a missing
    record. Storage errors from SQLAlchemy propagate unchanged and the
    surrounding session rolls back.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, patient: Patient) -> Patient:
        """
        Insert a transient patient or update a persisted one.

        Commits before returning, so the caller only ever sees a patient
        whose row is durable. A failed commit raises.
        """
        is_new = patient.id is None
        if is_new:
            self.db.add(patient)
        else:
            patient = await self.db.merge(patient)

        await self.db.flush()
        await self.db.refresh(patient)
        await self.db.commit()

        logger.debug(
            "Patient created" if is_new else "Patient updated",
            patient_id=patient.id,
        )
        return patient

    async def find_by_id(self, patient_id: int) -> Optional[Patient]:
        """Return the patient with this id, or None when there is none."""
        if not _storable_id(patient_id):
            return None

        query = (
            select(Patient)
            .where(Patient.id == patient_id)
            .execution_options(logging_token="PatientRepository.find_by_id")
        )

        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def find_all(self) -> list[Patient]:
        query = (
            select(Patient)
            .order_by(Patient.id)
            .execution_options(logging_token="PatientRepository.find_all")
        )

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def exists_by_id(self, patient_id: int) -> bool:
        if not _storable_id(patient_id):
            return False

        query = select(Patient.id).where(Patient.id == patient_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Patient))
        return int(result.scalar_one())

    async def delete(self, patient: Patient) -> None:
        await self.db.delete(patient)
        await self.db.flush()
        logger.debug("Patient deleted", patient_id=patient.id)


__all__ = ["PatientRepository", "MIN_PATIENT_ID", "MAX_PATIENT_ID"]
