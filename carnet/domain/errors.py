# carnet/domain/errors.py
from __future__ import annotations

from http import HTTPStatus


class PersonError(Exception):
    """Base class for failures raised by PersonService. Transports map `status`/`code`."""
    code: str = "PERSON_ERROR"
    status: int = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> dict:
        # graphql-core copies this onto the located GraphQLError
        return {"code": self.code}


class NotFound(PersonError, LookupError):
    code = "NOT_FOUND"
    status = HTTPStatus.NOT_FOUND

    @classmethod
    def for_id(cls, person_id: int) -> "NotFound":
        return cls(f"Person not found with id: {person_id}")


class InvalidInput(PersonError, ValueError):
    code = "INVALID_INPUT"


class InvalidBirthDate(InvalidInput):
    code = "INVALID_BIRTH_DATE"


class TooYoung(InvalidInput):
    code = "TOO_YOUNG"


class DuplicatePhone(PersonError, ValueError):
    code = "DUPLICATE_PHONE"
    status = HTTPStatus.CONFLICT


class ResetDisabled(PersonError):
    code = "RESET_DISABLED"
    status = HTTPStatus.FORBIDDEN
