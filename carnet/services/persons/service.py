from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from carnet.common.logging import get_logger
from carnet.common.settings import get_settings
from carnet.common.strings.normalize import (
    is_blank,
    normalize_address,
    normalize_first_name,
    normalize_last_name,
    normalize_phone,
)
from carnet.database.models.person import PHONE_MAX_LENGTH
from carnet.database.repos.person_repo import SqlAlchemyPersonRepo
from carnet.domain.errors import (
    DuplicatePhone,
    InvalidBirthDate,
    InvalidInput,
    NotFound,
    TooYoung,
)
from carnet.services.mappers.person import to_entity, to_read, update_entity
from carnet.services.schemas.persons import PersonCreate, PersonRead, PersonUpdate

logger = get_logger(__name__)


def _is_phone_conflict(exc: IntegrityError) -> bool:
    return "phone" in str(exc.orig)


def age_in_years(born: date, today: date) -> int:
    """Whole years elapsed between `born` and `today`."""
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


class PersonService:
    """
    Business rules for Person records: validation, normalization and the
    translation between API payloads and stored rows.

    Every validation runs before the first write. Writes go through a
    SAVEPOINT so a unique-constraint hit on `phone` only rolls back the
    attempted write and surfaces as DuplicatePhone.
    """

    def __init__(self, db: Session, *, today: Callable[[], date] = date.today):
        self.db = db
        self.repo = SqlAlchemyPersonRepo(db)
        self.cfg = get_settings()
        self._today = today

    # ---- commands ----

    def create(self, payload: PersonCreate) -> PersonRead:
        logger.info("Creating person: %s", payload.model_dump())

        self._require_names(payload)
        phone = self._clean_phone(payload.phone)
        if phone and self._phone_taken(phone):
            raise DuplicatePhone("This phone number already exists")

        if payload.birth_date is not None:
            today = self._today()
            self._check_not_future(payload.birth_date, today)
            min_age = self.cfg.rules.min_age_years
            if age_in_years(payload.birth_date, today) < min_age:
                raise TooYoung(f"A person must be at least {min_age} year(s) old")

        data = self._normalized(payload, phone)
        try:
            with self.db.begin_nested():
                row = self.repo.save(to_entity(data))
        except IntegrityError as exc:
            if not _is_phone_conflict(exc):
                raise
            raise DuplicatePhone("This phone number is already used by another person") from exc

        logger.info("Person created with id: %s", row.id)
        return to_read(row)

    def update(self, person_id: int, payload: PersonUpdate) -> PersonRead:
        logger.info("Updating person with id: %s", person_id)

        existing = self.repo.get(person_id)
        if existing is None:
            raise NotFound.for_id(person_id)

        self._require_names(payload)
        if payload.birth_date is not None:
            self._check_not_future(payload.birth_date, self._today())

        phone = self._clean_phone(payload.phone)
        if phone and phone != normalize_phone(existing.phone):
            if self._phone_taken(phone, exclude_id=person_id):
                raise DuplicatePhone("This phone number is already used by another person")

        data = self._normalized(payload, phone)
        try:
            with self.db.begin_nested():
                update_entity(data, existing)
                row = self.repo.save(existing)
        except IntegrityError as exc:
            if not _is_phone_conflict(exc):
                raise
            raise DuplicatePhone("This phone number is already used by another person") from exc

        logger.info("Person updated: %s", person_id)
        return to_read(row)

    def delete(self, person_id: int) -> None:
        logger.info("Deleting person with id: %s", person_id)
        if not self.repo.exists(person_id):
            raise NotFound.for_id(person_id)
        self.repo.delete(person_id)
        logger.info("Person deleted: %s", person_id)

    def reset_table(self) -> None:
        logger.warning("RESET of the personne table")
        # one savepoint: a failed sequence reset also undoes the delete
        with self.db.begin_nested():
            removed = self.repo.delete_all()
            self.repo.reset_identifier_sequence()
        logger.info("Table reset (%d rows removed)", removed)

    # ---- queries ----

    def find_all(self) -> List[PersonRead]:
        logger.info("Listing all persons")
        return [to_read(p) for p in self.repo.list_all()]

    def find_by_id(self, person_id: int) -> PersonRead:
        logger.info("Fetching person with id: %s", person_id)
        row = self.repo.get(person_id)
        if row is None:
            raise NotFound.for_id(person_id)
        return to_read(row)

    def search(
        self,
        last_name: Optional[str] = None,
        first_name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> List[PersonRead]:
        logger.info(
            "Searching persons - last_name: %s, first_name: %s, phone: %s",
            last_name, first_name, phone,
        )
        rows = self.repo.search(last_name=last_name, first_name=first_name, phone=phone)
        return [to_read(p) for p in rows]

    # ---- helpers ----

    @staticmethod
    def _require_names(payload: PersonCreate | PersonUpdate) -> None:
        if is_blank(payload.last_name):
            raise InvalidInput("Last name must not be empty")
        if is_blank(payload.first_name):
            raise InvalidInput("First name must not be empty")

    @staticmethod
    def _check_not_future(born: date, today: date) -> None:
        if born > today:
            raise InvalidBirthDate("Birth date cannot be in the future")

    @staticmethod
    def _clean_phone(raw: Optional[str]) -> Optional[str]:
        # blank phones are stored as NULL so the unique constraint ignores them
        phone = normalize_phone(raw)
        if phone and len(phone) > PHONE_MAX_LENGTH:
            raise InvalidInput(f"Phone number must be at most {PHONE_MAX_LENGTH} characters")
        return phone or None

    def _phone_taken(self, phone: str, *, exclude_id: Optional[int] = None) -> bool:
        return any(
            p.id != exclude_id and normalize_phone(p.phone) == phone
            for p in self.repo.find_by_phone_fragment(phone)
        )

    @staticmethod
    def _normalized(payload: PersonCreate | PersonUpdate, phone: Optional[str]):
        return payload.model_copy(
            update={
                "last_name": normalize_last_name(payload.last_name),
                "first_name": normalize_first_name(payload.first_name),
                "address": normalize_address(payload.address),
                "phone": phone,
            }
        )

