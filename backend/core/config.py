"""
Configuração da API de usuários.

Os valores vêm de variáveis de ambiente (com suporte a arquivo ``.env``
via python-dotenv).  ``Settings.from_env()`` é chamado uma vez na
importação e o resultado fica em ``settings``; testes e scripts podem
instanciar ``Settings`` diretamente para montar apps com outras opções.
"""

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()

IDENTIFICADORES = ("telefone", "email")


def _env_bool(nome: str, padrao: str) -> bool:
    return os.getenv(nome, padrao).strip().lower() in {"1", "true", "yes", "sim"}


@dataclass
class Settings:
    project_name: str = "API Usuários"
    api_version: str = "1.0.0"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    # Banco de dados. ``database_url`` tem prioridade sobre os campos separados.
    database_url: Optional[str] = None
    db_driver: str = "postgresql+psycopg"
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_name: Optional[str] = None
    db_pool_size: int = 10
    db_pool_timeout: int = 30
    criar_tabelas: bool = True

    bcrypt_rounds: int = 10

    # Diferenças entre as revisões do serviço
    identificador: str = "telefone"
    listar_apenas_ativos: bool = False
    permitir_exclusao: bool = True

    perfis_dir: str = "public/perfis"
    foto_url_template: str = "/perfis/{id}.jpg"
    allowed_origins: str = "*"

    def __post_init__(self):
        if self.identificador not in IDENTIFICADORES:
            raise ValueError(
                f"identificador inválido: {self.identificador!r} (use 'telefone' ou 'email')"
            )
        # O template só pode usar o placeholder {id}
        try:
            self.foto_url_template.format(id=1)
        except (KeyError, IndexError, ValueError):
            raise ValueError(
                f"foto_url_template inválido: {self.foto_url_template!r} (único campo aceito: {{id}})"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            project_name=os.getenv("PROJECT_NAME", "API Usuários"),
            api_version=os.getenv("API_VERSION", "1.0.0"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            database_url=os.getenv("DATABASE_URL") or None,
            db_driver=os.getenv("DB_DRIVER", "postgresql+psycopg"),
            db_host=os.getenv("DB_HOST", "localhost"),
            db_port=int(os.getenv("DB_PORT", "5432")),
            db_user=os.getenv("DB_USER"),
            db_password=os.getenv("DB_PASSWORD"),
            db_name=os.getenv("DB_NAME"),
            db_pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
            db_pool_timeout=int(os.getenv("DB_POOL_TIMEOUT", "30")),
            criar_tabelas=_env_bool("DB_CRIAR_TABELAS", "true"),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
            identificador=os.getenv("USUARIOS_IDENTIFICADOR", "telefone").strip().lower(),
            listar_apenas_ativos=_env_bool("USUARIOS_APENAS_ATIVOS", "false"),
            permitir_exclusao=_env_bool("USUARIOS_PERMITIR_EXCLUSAO", "true"),
            perfis_dir=os.getenv("PERFIS_DIR", "public/perfis"),
            foto_url_template=os.getenv("FOTO_URL_TEMPLATE", "/perfis/{id}.jpg"),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*"),
        )

    def url_banco(self):
        """URL do SQLAlchemy; monta a partir de DB_* quando DATABASE_URL não existe."""
        if self.database_url:
            return self.database_url
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    def origens(self) -> List[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


settings = Settings.from_env()
