"""
Configuration partagée pour tous les tests.

Les variables d'environnement sont posées avant l'import de l'application :
JWT_SECRET est obligatoire et bcrypt tourne au coût minimal pour garder les tests rapides.

Deux familles de fixtures :
- client / anon_client : BDD mockée (MagicMock), aucune connexion réelle ;
- db_session / sqlite_client : SQLite en mémoire, pour vérifier le comportement réel
  des UPDATE ... RETURNING, des contraintes et des agrégats.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("INIT_DB", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.dependencies import get_current_user_id  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture
def client():
    """Client HTTP de test avec la BDD mockée et un utilisateur authentifié (id 1)."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_user_id] = lambda: "1"
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    """Client HTTP de test avec la BDD mockée, sans authentification."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def sqlite_engine():
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
def db_session(sqlite_engine):
    """Session sur une base SQLite en mémoire, schéma complet créé."""
    session = sessionmaker(bind=sqlite_engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def sqlite_client(sqlite_engine):
    """Client HTTP de test branché sur la base SQLite en mémoire, authentification réelle."""
    TestingSession = sessionmaker(bind=sqlite_engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
