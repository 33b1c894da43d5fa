"""
Configuração dos testes: SQLite local e rate limiting desligado.

As variáveis precisam existir antes do primeiro import de app.config.
"""
import os

os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", "sqlite:///./test_doctemplates.db")
os.environ["DEBUG"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENFORCE_PREMIUM_ACCESS"] = "false"

import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.database import SessionLocal, Base, engine
from app.rpc.client import RpcClient
from app.seeds.catalog import seed_catalog


@pytest.fixture(scope="function")
def db_session():
    """Cria as tabelas e uma sessão de banco de dados para cada teste"""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    return TestClient(app)


@pytest.fixture
def rpc(client):
    """Cliente RPC tipado sobre o TestClient"""
    return RpcClient(client)


@pytest.fixture
def catalog(db_session):
    """Catálogo padrão (3 categorias, 5 templates)"""
    seed_catalog(db_session)
    return db_session


@pytest.fixture
def test_user(rpc):
    return rpc.create_user(email="test@example.com", name="Test User")
