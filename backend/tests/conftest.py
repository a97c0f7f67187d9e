"""Pytest fixtures for activity log tests."""

import datetime as dt
import os

# Settings are read at import time; keep tests off Postgres and off the dev seed.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from restro_admin.db.session import Base, get_db

# Ensure all models are loaded for create_all
import restro_admin.models  # noqa: F401
from restro_admin.core.security import create_access_token
from restro_admin.models.activity_log import ActivityLog
from restro_admin.services.users import create_admin

BASE_TIME = dt.datetime(2026, 3, 1, 9, 0, 0)


@pytest.fixture(scope="function")
def engine(tmp_path):
    """File-backed SQLite so concurrent API requests each get their own connection."""
    engine = create_engine(
        f"sqlite+pysqlite:///{tmp_path / 'activity.db'}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="function")
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_entry(db):
    """Insert an entry directly; `minutes` offsets the timestamp from BASE_TIME."""

    def _make(module="Orders", sub_module="Order Requests", action="update", minutes=0, **kw):
        entry = ActivityLog(
            user_name=kw.pop("user_name", "Asha"),
            module=module,
            sub_module=sub_module,
            action=action,
            timestamp=BASE_TIME + dt.timedelta(minutes=minutes),
            **kw,
        )
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    return _make


@pytest.fixture
def admin(db):
    return create_admin(db, name="Super Admin", email="admin@example.com", password="secret123")


@pytest.fixture
def app(session_factory):
    from restro_admin.main import create_app

    application = create_app()

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = _get_db
    return application


@pytest.fixture
def auth_headers(admin):
    token = create_access_token(subject=str(admin.id), email=admin.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(app):
    return TestClient(app)
