# carnet/services/schemas/persons.py
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PersonBase(BaseModel):
    last_name: Optional[str] = Field(default=None, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = None
    # raw input may carry spaces; the stored (whitespace-free) form is capped at PHONE_MAX_LENGTH
    phone: Optional[str] = Field(default=None, max_length=64)
    birth_date: Optional[date] = None


class PersonCreate(PersonBase):
    pass


class PersonUpdate(PersonBase):
    """Full replacement of the mutable fields; omitted optional fields are cleared."""


class PersonRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    last_name: str
    first_name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None
