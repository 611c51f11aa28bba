"""Shared fixtures: in-memory SQLite database + FastAPI test client.

Every test gets a fresh database. The app's get_db dependency is overridden
so requests and the `db` fixture share the same StaticPool connection.
"""

import os

# Must be set before app.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models.user import User
from app.seed import seed_departments


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def departments(db):
    """Departments 1: Ventas, 2: Recursos Humanos."""
    seed_departments(db, ["Ventas", "Recursos Humanos"])
    return {"Ventas": 1, "Recursos Humanos": 2}


@pytest.fixture
def seeded_users(db, departments):
    """Three users in each seeded department."""
    for i in range(1, 7):
        dept_id = departments["Ventas"] if i <= 3 else departments["Recursos Humanos"]
        db.add(User(name=f"Usuario {i}", email=f"user{i}@example.com", departmentId=dept_id))
    db.commit()
