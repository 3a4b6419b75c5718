import os
import sys
import time
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

# Config de test AVANT d'importer orbit (les settings sont lus à l'import)
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SUPABASE_URL"] = "https://orbit-test.supabase.co"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ.pop("OPENAI_API_KEY", None)

import pytest
from jose import jwt

from orbit.core.config import settings
from orbit.core.database import Base, SessionLocal, engine, get_db
from orbit.main import app

USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"


def override_get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


def make_token(user_id: str = USER_ID, email: str = "test@example.com", expires_in: int = 3600, **claims) -> str:
    """Token signé comme ceux de Supabase"""
    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "iss": settings.supabase_issuer,
        "exp": int(time.time()) + expires_in,
    }
    payload.update(claims)
    return jwt.encode(payload, settings.SUPABASE_JWT_SECRET, algorithm="HS256")


@pytest.fixture(autouse=True)
def setup_teardown(monkeypatch):
    """Crée et nettoie la DB avant/après chaque test"""
    # jamais d'appel réseau au LLM pendant les tests
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = SessionLocal()
    yield db
    db.close()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def other_headers():
    return {"Authorization": f"Bearer {make_token(OTHER_USER_ID, 'other@example.com')}"}


@pytest.fixture
def token_factory():
    return make_token
