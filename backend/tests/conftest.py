"""
Configuration partagée pour tous les tests.
Override les dépendances get_db et get_storage pour éviter toute connexion réelle
à PostgreSQL ou au stockage objet, et get_current_user pour simuler un utilisateur connecté.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from classroom_api.database import get_db
from classroom_api.dependencies import get_current_user
from classroom_api.main import app
from classroom_api.models.user import User
from classroom_api.services.storage_service import get_storage


def _make_user(user_id: int, role: str) -> User:
    now = datetime.now(timezone.utc)
    return User(
        id=user_id,
        email=f"{role}{user_id}@ecole.be",
        password_hash="hash",
        full_name=f"{role.capitalize()} {user_id}",
        phone_number=f"04700000{user_id:02d}",
        role=role,
        is_active=True,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def mock_storage():
    storage = MagicMock()
    storage.presigned_url.return_value = "http://minio.local/classroom-media/presigned"
    return storage


@pytest.fixture
def client(mock_db, mock_storage):
    """Client HTTP de test avec la BDD et le stockage mockés."""
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_storage] = lambda: mock_storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user():
    return _make_user(1, "admin")


@pytest.fixture
def student_user():
    return _make_user(7, "student")


@pytest.fixture
def admin_client(client, admin_user):
    """Client connecté en tant qu'administrateur."""
    app.dependency_overrides[get_current_user] = lambda: admin_user
    return client


@pytest.fixture
def student_client(client, student_user):
    """Client connecté en tant qu'élève."""
    app.dependency_overrides[get_current_user] = lambda: student_user
    return client
