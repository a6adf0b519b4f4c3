import sys
import os

# Add backend to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Banco em memória e bcrypt barato ANTES de importar a app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from core.config import Settings


def make_client(**overrides) -> TestClient:
    from main import create_app

    config = Settings(database_url="sqlite://", **overrides)
    return TestClient(create_app(config))


@pytest.fixture
def client():
    with make_client() as c:
        yield c


@pytest.fixture
def client_email():
    with make_client(identificador="email") as c:
        yield c


@pytest.fixture
def client_apenas_ativos():
    with make_client(listar_apenas_ativos=True) as c:
        yield c


@pytest.fixture
def client_sem_exclusao():
    with make_client(permitir_exclusao=False) as c:
        yield c


@pytest.fixture
def novo_usuario(client):
    """Cria um usuário ativo e devolve (dados_resposta, senha)."""
    senha = "Senha@123"
    resp = client.post("/usuarios", json={
        "nome": "maria das dores",
        "telefone": "(11) 91234-5678",
        "senha": senha,
    })
    assert resp.status_code == 201, resp.text
    return resp.json(), senha
