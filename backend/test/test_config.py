import pytest

from core.config import Settings


def test_from_env(monkeypatch):
    monkeypatch.setenv("USUARIOS_IDENTIFICADOR", "EMAIL")
    monkeypatch.setenv("USUARIOS_APENAS_ATIVOS", "true")
    monkeypatch.setenv("USUARIOS_PERMITIR_EXCLUSAO", "0")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:3000, http://127.0.0.1:5500")

    config = Settings.from_env()

    assert config.identificador == "email"
    assert config.listar_apenas_ativos is True
    assert config.permitir_exclusao is False
    assert config.port == 8080
    assert config.origens() == ["http://localhost:3000", "http://127.0.0.1:5500"]


def test_identificador_invalido():
    with pytest.raises(ValueError):
        Settings(identificador="cpf")


def test_url_banco_a_partir_de_db_vars():
    config = Settings(
        database_url=None,
        db_host="db.local",
        db_port=5433,
        db_user="app",
        db_password="p@ss:word",
        db_name="usuarios",
    )
    url = config.url_banco()

    assert url.drivername == "postgresql+psycopg"
    assert url.host == "db.local"
    assert url.port == 5433
    assert url.password == "p@ss:word"
    assert url.database == "usuarios"


def test_database_url_tem_prioridade():
    config = Settings(database_url="sqlite://", db_host="ignorado")
    assert config.url_banco() == "sqlite://"


def test_foto_url_template_com_campo_desconhecido():
    with pytest.raises(ValueError):
        Settings(foto_url_template="/perfis/{id}-{tam}.jpg")
    with pytest.raises(ValueError):
        Settings(foto_url_template="/perfis/{}.jpg")

    assert Settings(foto_url_template="/fotos/{id}.png").foto_url_template == "/fotos/{id}.png"
