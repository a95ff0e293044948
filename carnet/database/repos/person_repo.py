# carnet/database/repos/person_repo.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select, func, text, delete as sa_delete
from sqlalchemy.orm import Session

from carnet.database.models.person import Person as DBPerson


class SqlAlchemyPersonRepo:
    """
    SQLAlchemy-backed record store for Person rows.

    The repo never commits; callers own the transaction (request-scoped
    session from the API deps, or the test's outer transaction).
    Listing methods order by id so results are stable.
    """

    def __init__(self, session: Session) -> None:
        self.db = session

    # -------- Lookups --------

    def get(self, person_id: int) -> Optional[DBPerson]:
        return self.db.get(DBPerson, person_id)

    def exists(self, person_id: int) -> bool:
        stmt = select(func.count()).select_from(DBPerson).where(DBPerson.id == person_id)
        return (self.db.execute(stmt).scalar_one() or 0) > 0

    def list_all(self) -> List[DBPerson]:
        stmt = select(DBPerson).order_by(DBPerson.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def find_by_last_name_fragment(self, fragment: str) -> List[DBPerson]:
        return self.search(last_name=fragment)

    def find_by_first_name_fragment(self, fragment: str) -> List[DBPerson]:
        return self.search(first_name=fragment)

    def find_by_phone_fragment(self, fragment: str) -> List[DBPerson]:
        return self.search(phone=fragment)

    def search(
        self,
        last_name: Optional[str] = None,
        first_name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> List[DBPerson]:
        """
        AND-combined substring filters; a None argument matches everything.
        Names compare case-insensitively, phone compares as stored.
        """
        stmt = select(DBPerson)
        if last_name is not None:
            stmt = stmt.where(DBPerson.last_name.icontains(last_name, autoescape=True))
        if first_name is not None:
            stmt = stmt.where(DBPerson.first_name.icontains(first_name, autoescape=True))
        if phone is not None:
            stmt = stmt.where(DBPerson.phone.contains(phone, autoescape=True))
        stmt = stmt.order_by(DBPerson.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    # -------- Mutations --------

    def save(self, person: DBPerson) -> DBPerson:
        """Insert or update; the id is assigned by the flush on insert."""
        self.db.add(person)
        self.db.flush()
        self.db.refresh(person)
        return person

    def delete(self, person_id: int) -> None:
        obj = self.get(person_id)
        if not obj:
            return
        self.db.delete(obj)
        self.db.flush()

    def delete_all(self) -> int:
        result = self.db.execute(sa_delete(DBPerson))
        return result.rowcount or 0

    def reset_identifier_sequence(self) -> None:
        """Restart id generation so the next insert gets id 1."""
        dialect = self.db.get_bind().dialect.name
        table = DBPerson.__table__
        if dialect == "postgresql":
            self.db.execute(
                text("SELECT setval(pg_get_serial_sequence(:table, 'id'), 1, false)"),
                {"table": table.fullname},
            )
        elif dialect in ("mysql", "mariadb"):
            self.db.execute(text(f"ALTER TABLE {table.fullname} AUTO_INCREMENT = 1"))
        elif dialect == "sqlite":
            # sqlite_sequence only exists once an AUTOINCREMENT table was created;
            # plain rowid tables restart at max(rowid)+1 on their own
            has_sequence = self.db.execute(
                text("SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'sqlite_sequence'")
            ).first()
            if has_sequence:
                self.db.execute(text("DELETE FROM sqlite_sequence WHERE name = :table"), {"table": table.name})
        else:
            raise NotImplementedError(f"Sequence reset is not supported on {dialect!r}")
