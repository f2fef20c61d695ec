"""Tests for PatientRepository against a SQLite database."""
from datetime import date

import pytest
from sqlalchemy import inspect, select
from sqlalchemy.types import Date

from app.db.models import Patient
from app.repositories import PatientRepository


class TestSave:
    async def test_save_assigns_id(self, session):
        repository = PatientRepository(session)
        patient = Patient(given_name="Max", family_name="Colorado", birth_date=date(1942, 12, 11))
        assert patient.is_transient

        saved = await repository.save(patient)

        assert saved.id is not None
        assert not saved.is_transient

    async def test_each_save_gets_a_new_id(self, session):
        repository = PatientRepository(session)
        first = await repository.save(Patient(given_name="Max", family_name="Colorado"))
        second = await repository.save(Patient(given_name="Max", family_name="Colorado"))

        assert first.id != second.id
        assert await repository.count() == 2

    async def test_all_fields_may_be_null(self, session):
        saved = await PatientRepository(session).save(Patient())

        assert saved.id is not None
        assert saved.given_name is None
        assert saved.birth_date is None

    async def test_save_updates_persisted_patient(self, db_manager, seeded):
        async with db_manager.session() as session:
            repository = PatientRepository(session)
            patient = await repository.find_by_id(1)
            patient.family_name = "Specification"
            await repository.save(patient)

        async with db_manager.session() as session:
            repository = PatientRepository(session)
            reloaded = await repository.find_by_id(1)
            assert reloaded.family_name == "Specification"
            assert await repository.count() == 2

    async def test_saved_patient_is_visible_to_other_sessions_immediately(self, db_manager):
        async with db_manager.session() as writer:
            saved = await PatientRepository(writer).save(Patient(given_name="Max"))

            async with db_manager.session() as reader:
                found = await PatientRepository(reader).find_by_id(saved.id)

            assert found is not None
            assert found.given_name == "Max"


class TestFindById:
    async def test_returns_seeded_patient(self, session, seeded):
        patient = await PatientRepository(session).find_by_id(1)

        assert patient is not None
        assert patient.given_name == "Phillip"
        assert patient.family_name == "Spec"
        assert patient.birth_date == date(1972, 5, 5)

    async def test_miss_returns_none(self, session, seeded):
        assert await PatientRepository(session).find_by_id(999) is None

    async def test_miss_on_empty_store_returns_none(self, session):
        assert await PatientRepository(session).find_by_id(1) is None

    @pytest.mark.parametrize("patient_id", [2**31, 2**63, -(2**31) - 1, 10**20])
    async def test_id_outside_column_range_is_a_miss(self, session, seeded, patient_id):
        repository = PatientRepository(session)

        assert await repository.find_by_id(patient_id) is None
        assert not await repository.exists_by_id(patient_id)


class TestBirthDateStorage:
    @pytest.mark.parametrize(
        "birth_date",
        [date(1, 1, 1), date(1942, 12, 11), date(2000, 2, 29), date(9999, 12, 31), None],
    )
    async def test_birth_date_survives_storage(self, db_manager, birth_date):
        async with db_manager.session() as session:
            saved = await PatientRepository(session).save(Patient(birth_date=birth_date))
            patient_id = saved.id

        # Fresh session so the value is read back from the database
        async with db_manager.session() as session:
            reloaded = await PatientRepository(session).find_by_id(patient_id)
            assert reloaded.birth_date == birth_date

    async def test_birth_date_is_a_native_date_column(self, db_manager):
        async with db_manager.engine.connect() as conn:
            columns = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_columns("patients")
            )

        birth_date_column = next(c for c in columns if c["name"] == "birth_date")
        assert isinstance(birth_date_column["type"], Date)

    async def test_birth_date_is_queryable(self, session, seeded):
        result = await session.execute(
            select(Patient).where(Patient.birth_date > date(1973, 1, 1))
        )
        assert [p.given_name for p in result.scalars()] == ["Sally"]


class TestOtherOperations:
    async def test_find_all(self, session, seeded):
        patients = await PatientRepository(session).find_all()
        assert sorted(p.id for p in patients) == [1, 2]

    async def test_exists_by_id(self, session, seeded):
        repository = PatientRepository(session)
        assert await repository.exists_by_id(2)
        assert not await repository.exists_by_id(3)

    async def test_delete(self, session, seeded):
        repository = PatientRepository(session)
        await repository.delete(await repository.find_by_id(2))

        assert await repository.find_by_id(2) is None
        assert await repository.count() == 1
