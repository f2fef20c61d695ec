from datetime import date
from typing import Optional
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from app.db.converters import CalendarDate
from .db_base_model import DbBaseModel


class Patient(DbBaseModel):
    """
    A patient record.

    `id` is None until the repository persists the instance; the store
    assigns it and it never changes afterwards.
    """

    __tablename__ = "patients"

    id: Mapped[Optional[int]] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    given_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    family_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        index=True,
    )

    birth_date: Mapped[Optional[date]] = mapped_column(
        CalendarDate(),
        nullable=True,
    )

    @property
    def is_transient(self) -> bool:
        return self.id is None

    def __repr__(self) -> str:
        return (
            f"Patient(id={self.id!r}, given_name={self.given_name!r}, "
            f"family_name={self.family_name!r}, birth_date={self.birth_date!r})"
        )


__all__ = ["Patient"]
