# carnet/database/models/person.py
from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Date, String, Text, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from carnet.database.core.main import Base
from carnet.database.core.service_object import ServiceObject

PHONE_MAX_LENGTH = 32


class Person(ServiceObject, Base):
    """
    A person record ("personne").
      - last_name stored upper-cased, first_name capitalized
      - phone stored without whitespace; unique when present (NULLs never collide)
    """
    __tablename__ = "personne"
    __table_args__ = (
        UniqueConstraint("phone", name="uq_personne_phone"),
        Index("ix_personne_last_name", "last_name"),
    )

    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[Optional[str]] = mapped_column(Text)
    phone: Mapped[Optional[str]] = mapped_column(String(PHONE_MAX_LENGTH))
    birth_date: Mapped[Optional[date]] = mapped_column(Date)

    def __repr__(self) -> str:
        return f"<Person id={self.id} name={self.last_name!r} {self.first_name!r}>"
