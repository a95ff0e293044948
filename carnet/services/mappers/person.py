# carnet/services/mappers/person.py
from __future__ import annotations

from carnet.database.models.person import Person as DBPerson
from carnet.services.schemas.persons import PersonCreate, PersonRead, PersonUpdate


def to_read(row: DBPerson) -> PersonRead:
    return PersonRead.model_validate(row)


def to_entity(payload: PersonCreate) -> DBPerson:
    return DBPerson(
        last_name=payload.last_name,
        first_name=payload.first_name,
        address=payload.address,
        phone=payload.phone,
        birth_date=payload.birth_date,
    )


def update_entity(payload: PersonUpdate, row: DBPerson) -> DBPerson:
    """Overwrite every mutable column of `row`; id and audit columns stay as they are."""
    row.last_name = payload.last_name
    row.first_name = payload.first_name
    row.address = payload.address
    row.phone = payload.phone
    row.birth_date = payload.birth_date
    return row
