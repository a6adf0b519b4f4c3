from functools import lru_cache
from typing import Optional

from passlib.context import CryptContext

from core.config import settings

# bcrypt com custo fixo (BCRYPT_ROUNDS, padrão 10); o salt é gerado por hash
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


@lru_cache(maxsize=None)
def _contexto(rounds: int) -> CryptContext:
    return pwd_context.copy(bcrypt__rounds=rounds)


def get_password_hash(senha: str, rounds: Optional[int] = None) -> str:
    """Hash bcrypt da senha; ``rounds`` vem do Settings da app (padrão: env)."""
    contexto = _contexto(rounds) if rounds else pwd_context
    return contexto.hash(senha)


def verify_password(senha: str, senha_hash: str) -> bool:
    """Compara a senha em texto com o hash salvo (comparação em tempo constante).

    Hash vazio ou em formato desconhecido conta como senha incorreta.
    """
    if not senha_hash:
        return False
    try:
        return pwd_context.verify(senha, senha_hash)
    except ValueError:
        return False


def dummy_verify() -> None:
    # Gasta o mesmo tempo de um verify real quando o usuário não existe
    pwd_context.dummy_verify()
