from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.config import Settings
from database import get_db, get_settings
from schemas.usuario import UsuarioLogin, UsuarioPublic
from services.usuario import autenticar

router = APIRouter(prefix="/login", tags=["auth"])

@router.post("", response_model=UsuarioPublic, response_model_exclude_none=True)
def login(dados: UsuarioLogin, db: Session = Depends(get_db), config: Settings = Depends(get_settings)):
    # Sem emissão de token: devolve o registro do usuário sem o hash da senha
    return autenticar(db, config, dados)
