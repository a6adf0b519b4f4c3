import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from sqlalchemy.pool import StaticPool

from core.config import Settings

logger = logging.getLogger("usuarios.db")

Base = declarative_base()


def criar_engine(config: Settings) -> Engine:
    url = config.url_banco()

    # SQLite (testes/dev): uma conexão compartilhada entre threads
    if str(url).startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    # Pool limitado: com todas as conexões em uso a requisição espera na fila
    # até pool_timeout. pool_pre_ping evita "server closed the connection unexpectedly"
    return create_engine(
        url,
        pool_size=config.db_pool_size,
        max_overflow=0,
        pool_timeout=config.db_pool_timeout,
        pool_pre_ping=True,
    )


def criar_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def testar_conexao(engine: Engine) -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.warning("[DB] Falha ao conectar no banco", exc_info=True)
        return False


# Dependency do FastAPI: abre/fecha sessão por request
def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
