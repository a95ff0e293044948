# carnet/services/api/deps.py
from __future__ import annotations
from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from carnet.common.settings import get_settings
from carnet.database.core.main import SessionLocal
from carnet.domain.errors import ResetDisabled
from carnet.services.persons.service import PersonService


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def transactional_session(db: Session = Depends(get_db)) -> Generator[Session, None, None]:
    """
    Request-scoped transaction. Any repo/service using this session
    participates in the same transaction.

    Usage in routers:
      def endpoint(session: Session = Depends(transactional_session)):
          ...
    """
    # Session.begin() commits on normal exit and rolls back if an exception bubbles out.
    with db.begin():
        yield db


def get_person_service(db: Session = Depends(transactional_session)) -> PersonService:
    return PersonService(db)


def require_reset_enabled() -> None:
    """Gate for the destructive table reset (REST and GraphQL)."""
    if not get_settings().features.reset_enabled:
        raise ResetDisabled("Table reset is disabled on this deployment")
