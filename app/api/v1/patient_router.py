from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db import get_db
from app.db.models import Patient
from app.db.schemas import PatientCreate, PatientResponse, ErrorResponse
from app.repositories import PatientRepository
from common import NotFoundError, get_app_logger

logger = get_app_logger(__name__)

patient_router = APIRouter(
    prefix="/patient",
    tags=["Patient"],
)


def get_patient_repository(db: AsyncSession = Depends(get_db)) -> PatientRepository:
    return PatientRepository(db)


@patient_router.get(
    "/{patient_id}",
    response_model=PatientResponse,
    status_code=status.HTTP_200_OK,
    summary="Get a patient",
    responses={
        400: {"description": "Identifier is not an integer", "model": ErrorResponse},
        404: {"description": "Patient not found", "model": ErrorResponse},
        500: {"description": "Internal Database Error", "model": ErrorResponse},
    },
)
async def get_patient(
    patient_id: int,
    repository: PatientRepository = Depends(get_patient_repository),
) -> Patient:
    patient = await repository.find_by_id(patient_id)

    if patient is None:
        raise NotFoundError(f"Patient with id {patient_id} not found")

    return patient


@patient_router.get(
    "",
    response_model=list[PatientResponse],
    status_code=status.HTTP_200_OK,
    summary="List all patients",
)
async def list_patients(
    repository: PatientRepository = Depends(get_patient_repository),
) -> list[Patient]:
    return await repository.find_all()


@patient_router.post(
    "",
    response_model=PatientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a patient",
    description="""
    Persists a new patient and returns it with its assigned `id`.

    Not idempotent: posting the same body twice creates two records.
    """,
    responses={
        400: {"description": "Malformed body or birthDate", "model": ErrorResponse},
        500: {"description": "Internal Database Error", "model": ErrorResponse},
    },
)
async def create_patient(
    payload: PatientCreate,
    repository: PatientRepository = Depends(get_patient_repository),
) -> Patient:
    patient = await repository.save(Patient(**payload.model_dump()))
    logger.info("Patient created", patient_id=patient.id)
    return patient


__all__ = ["patient_router", "get_patient_repository"]
