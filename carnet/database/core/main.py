# carnet/database/core/main.py
from __future__ import annotations

from typing import List

from sqlalchemy import MetaData, create_engine, event, Column, Table, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from carnet.common.settings import get_settings

_settings = get_settings()

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

_serviceobject_first = ("id", "date_created", "last_updated")


def _uses_schema(url: str, schema: str | None) -> bool:
    # schemas are a Postgres concern here; SQLite/MySQL keep tables unqualified
    return bool(schema) and schema.lower() != "public" and url.startswith("postgresql")


class Base(DeclarativeBase):
    metadata = MetaData(
        schema=_settings.db_schema if _uses_schema(_settings.database_url, _settings.db_schema) else None,
        naming_convention=NAMING_CONVENTION,
    )

    @classmethod
    def __table_cls__(cls, *args, **kw):
        """Reorder columns so ServiceObject fields come first."""
        if not args:
            return super().__table_cls__(*args, **kw)

        # Positional args are (name, metadata, *columns_and_constraints)
        name, metadata, *rest = args

        cols: List[Column] = [x for x in rest if isinstance(x, Column)]
        others = [x for x in rest if not isinstance(x, Column)]

        priority = {n: i for i, n in enumerate(_serviceobject_first)}
        original_index = {c: i for i, c in enumerate(cols)}

        cols.sort(key=lambda c: (priority.get(c.name, 10_000), original_index[c]))

        return Table(name, metadata, *(cols + others), **kw)


engine = create_engine(
    _settings.database_url,
    echo=_settings.db.echo,
    pool_pre_ping=_settings.db.pool_pre_ping,
    future=True,
)

if Base.metadata.schema:
    @event.listens_for(engine, "connect")
    def _set_search_path(dbapi_conn, _):
        with dbapi_conn.cursor() as cur:
            cur.execute(f'SET search_path TO "{Base.metadata.schema}", public')


SessionLocal = sessionmaker(bind=engine, expire_on_commit=False, future=True, autoflush=False)


def create_all(bind: Engine | None = None) -> None:
    """Create the app schema (Postgres) and every table known to Base.metadata."""
    # models must be imported so their tables are registered on the metadata
    import carnet.database.models  # noqa: F401

    bind = bind or engine
    with bind.begin() as conn:
        if Base.metadata.schema:
            conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{Base.metadata.schema}"'))
        Base.metadata.create_all(bind=conn)

