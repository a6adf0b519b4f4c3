import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

import logging, traceback, uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import Settings, settings
from core.exceptions import UsuarioErro
from database import Base, criar_engine, criar_sessionmaker, testar_conexao
from models import usuario as _usuario_model  # registra a tabela em Base.metadata
from routers import usuario, auth

logger = logging.getLogger("usuarios.errors")
db_logger = logging.getLogger("usuarios.db")

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _resolver_perfis_dir(perfis_dir: str) -> str:
    if os.path.isabs(perfis_dir):
        return perfis_dir
    # Suporta main.py em backend/ (repo_root/public/perfis) ou na raiz
    candidates = [
        os.path.abspath(os.path.join(BASE_DIR, "..", perfis_dir)),
        os.path.abspath(os.path.join(BASE_DIR, perfis_dir)),
    ]
    return next((p for p in candidates if os.path.isdir(p)), candidates[0])


def _erro(status_code: int, mensagem: str, **extra) -> JSONResponse:
    return JSONResponse({"error": mensagem, **extra}, status_code=status_code)


def create_app(config: Optional[Settings] = None) -> FastAPI:
    config = config or settings

    logging.basicConfig(level=getattr(logging, config.log_level.upper(), logging.INFO))

    engine = criar_engine(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if testar_conexao(engine):
            db_logger.info("[DB] Conectado ao banco de dados")
            if config.criar_tabelas:
                Base.metadata.create_all(bind=engine)
        else:
            db_logger.error("[DB] Erro de conexão; a API sobe mas as rotas de usuário vão falhar")
        yield
        engine.dispose()
        db_logger.info("Servidor encerrado")

    app = FastAPI(title=config.project_name, version=config.api_version, lifespan=lifespan)
    app.state.settings = config
    app.state.engine = engine
    app.state.SessionLocal = criar_sessionmaker(engine)

    @app.get("/")
    def root(request: Request):
        conectado = testar_conexao(request.app.state.engine)
        return {
            "status": "API online",
            "database": "Conectado" if conectado else "Indisponível",
        }

    # ---- Handlers: toda falha vira {"error": mensagem} ----
    @app.exception_handler(UsuarioErro)
    async def usuario_erro_handler(request: Request, exc: UsuarioErro):
        return _erro(exc.status_code, exc.mensagem)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _erro(404, "Rota não encontrada")
        if exc.status_code == 405:
            return _erro(405, "Método não permitido")
        return _erro(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _erro(400, "Dados inválidos", detalhes=jsonable_encoder(exc.errors()))

    # ---- MIDDLEWARE: loga 5xx e devolve JSON em exceções não tratadas ----
    @app.middleware("http")
    async def errors_to_json(request: Request, call_next):
        try:
            resp = await call_next(request)
            if resp.status_code >= 500:
                logger.error(
                    "5xx: %s %s?%s -> %s",
                    request.method, request.url.path, request.url.query, resp.status_code
                )
            return resp
        except Exception:
            err_id = uuid.uuid4().hex[:8]
            logger.error(
                "EXC %s: %s %s?%s\n%s",
                err_id, request.method, request.url.path, request.url.query,
                traceback.format_exc()
            )
            resp = _erro(500, "Erro interno no servidor", error_id=err_id)
            resp.headers["x-error-id"] = err_id
            return resp

    # ---- Routers ----
    app.include_router(usuario.router)   # /usuarios/*
    app.include_router(auth.router)      # /login

    # ---- Static: fotos de perfil em /perfis/{id}.jpg ----
    perfis_dir = _resolver_perfis_dir(config.perfis_dir)
    if os.path.isdir(perfis_dir):
        logger.info("[STATIC] /perfis -> %s", perfis_dir)
        app.mount("/perfis", StaticFiles(directory=perfis_dir), name="perfis")
    else:
        logger.warning("[STATIC] Pasta de perfis não encontrada: %s", perfis_dir)

    # ---- CORS: adicionar por ÚLTIMO (camada mais externa) ----
    origens = config.origens()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origens,
        allow_credentials="*" not in origens,  # credenciais não combinam com "*"
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["x-error-id"],
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
