# carnet/services/graphql/types.py
from __future__ import annotations

import dataclasses
from datetime import date
from typing import Optional, Type, TypeVar

import strawberry

from carnet.services.schemas.persons import PersonBase, PersonRead

P = TypeVar("P", bound=PersonBase)


@strawberry.type(name="Personne")
class PersonType:
    id: int
    last_name: str
    first_name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None

    @classmethod
    def from_read(cls, person: PersonRead) -> "PersonType":
        return cls(**person.model_dump())


@strawberry.input(name="PersonneInput")
class PersonInput:
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None

    def to_payload(self, model: Type[P]) -> P:
        return model(**dataclasses.asdict(self))
