# tests/services/conftest.py
from __future__ import annotations
import pytest
from sqlalchemy.orm import Session
from sqlalchemy import text
from starlette.testclient import TestClient

from carnet.database.models import Base
from carnet.services.api.app import create_app
from carnet.services.api.deps import transactional_session

APP_SCHEMA = Base.metadata.schema or "carnet"


@pytest.fixture()
def db(db_engine):
    """Session inside an outer transaction that is rolled back after the test."""
    conn = db_engine.connect()
    trans = conn.begin()
    session = Session(bind=conn, future=True, join_transaction_mode="create_savepoint")
    session.execute(text(f'SET search_path TO "{APP_SCHEMA}", public'))
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        conn.close()


@pytest.fixture()
def api_client(db):
    """
    A TestClient whose FastAPI dependency `transactional_session` is overridden
    to yield the test's Session. All API calls in one test share it (so POST -> GET
    works), and everything is rolled back at the end of the test.
    """
    app = create_app()

    def _override():
        # yield the same session for every request in this test
        yield db

    app.dependency_overrides[transactional_session] = _override

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
