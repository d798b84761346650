"""
Shared fixtures: in-memory database and API client.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.db.base import Base
from app.db.session import get_db
from app.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """API client whose requests use the test database."""
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def project(client):
    """Project with three participants, returned as the API JSON."""
    response = client.post(
        "/api/projects",
        json={
            "name": "Goa Trip",
            "description": "Beach week",
            "currency": "inr",
            "participants": ["Asha", "Bilal", "Chen"]
        }
    )
    assert response.status_code == 201
    return response.json()


def participant_id(project, name):
    """Look up a participant id by name."""
    return next(p["id"] for p in project["participants"] if p["name"] == name)


def add_expense(client, project, payer, day, items, note=None):
    """Create an expense through the API and return its JSON."""
    response = client.post(
        "/api/expenses",
        json={
            "project_id": project["id"],
            "payer_id": participant_id(project, payer),
            "date": day,
            "note": note,
            "items": items
        }
    )
    assert response.status_code == 201, response.text
    return response.json()
