# tests/conftest.py
from __future__ import annotations
import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from testcontainers.postgres import PostgresContainer

from carnet.database.models import Base  # <-- imports the models/metadata

APP_SCHEMA = Base.metadata.schema or "carnet"

@pytest.fixture(scope="session")
def _postgres_container():
    with PostgresContainer("postgres:15-alpine") as pg:
        # Force psycopg (v3) driver in the URL returned by testcontainers (it defaults to psycopg2)
        url = pg.get_connection_url().replace("psycopg2", "psycopg")
        yield url

def _prepare_schema(engine: Engine, schema: str = APP_SCHEMA) -> None:
    with engine.begin() as conn:
        conn.execute(text(f'create schema if not exists "{schema}"'))

@pytest.fixture(scope="session")
def db_engine(_postgres_container) -> Engine:
    engine = create_engine(_postgres_container, future=True)
    _prepare_schema(engine, APP_SCHEMA)

    # No migrations; tables come straight from the models
    Base.metadata.create_all(bind=engine)

    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
