"""
Configuration partagée pour tous les tests.
- `client` : dépendances get_db (MagicMock) et get_current_user surchargées
- `anon_client` : get_db mockée, authentification réelle (pour les 401)
- `db_session` : base SQLite en mémoire pour les tests de services sur de vraies requêtes
"""

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest.mock import MagicMock

import fluentflow.models  # noqa: F401
from fluentflow.database import Base, get_db
from fluentflow.dependencies import get_current_user
from fluentflow.main import app
from fluentflow.models.user import User


def make_user() -> User:
    return User(id=uuid.uuid4(), email="slp@fluentflow.com", password_hash="x", name="Demo SLP", role="SLP")


@pytest.fixture
def client():
    """Client HTTP de test avec la BDD mockée et un utilisateur connecté."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_user] = make_user
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    """Client HTTP de test sans utilisateur connecté."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Session SQLAlchemy sur une base SQLite en mémoire, recréée pour chaque test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
