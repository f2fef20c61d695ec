"""Tests for fixture loading."""
from datetime import date
from pathlib import Path

from app.db.models import Patient
from app.db.seed import DEFAULT_PATIENT_FIXTURES, load_patient_fixtures, seed_patients
from app.repositories import PatientRepository

FIXTURE_FILE = Path(__file__).resolve().parents[1] / "scripts" / "db" / "fixtures" / "patients.json"


def test_fixture_file_matches_defaults():
    assert load_patient_fixtures(FIXTURE_FILE) == list(DEFAULT_PATIENT_FIXTURES)


async def test_seed_keeps_fixed_ids(db_manager):
    await seed_patients(db_manager)

    async with db_manager.session() as session:
        sally = await PatientRepository(session).find_by_id(2)

    assert (sally.given_name, sally.family_name, sally.birth_date) == (
        "Sally",
        "Certify",
        date(1973, 6, 6),
    )


async def test_new_records_follow_seeded_ids(db_manager):
    await seed_patients(db_manager, DEFAULT_PATIENT_FIXTURES[:1])

    async with db_manager.session() as session:
        created = await PatientRepository(session).save(Patient(given_name="Max"))

    assert created.id == 2


async def test_seed_script_logs_seeded_count(tmp_path, monkeypatch, capture_logs):
    from scripts.db import seed_db

    for key in ("DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD"):
        monkeypatch.delenv(key, raising=False)
    for key, value in {
        "APP_TITLE": "Patient Service",
        "APP_VERSION": "0.1.0",
        "ENVIRONMENT": "development",
        "LOG_LEVEL": "debug",
        "DB_DRIVER": "aiosqlite",
        "DB_NAME": str(tmp_path / "seeded.db"),
        "DB_AUTO_CREATE_SCHEMA": "true",
    }.items():
        monkeypatch.setenv(key, value)
    records = capture_logs(seed_db)

    await seed_db.main([str(FIXTURE_FILE)])

    assert records == [("info", "Seeded patients", {"count": 2})]
