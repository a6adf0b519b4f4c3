from typing import Annotated, List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from core.config import Settings
from database import get_db, get_settings
from schemas.usuario import (
    UsuarioCreate,
    UsuarioUpdate,
    UsuarioStatusUpdate,
    UsuarioPublic,
    UsuarioAtualizado,
    UsuarioStatus,
    Mensagem,
)
from services.usuario import (
    listar_usuarios,
    obter_usuario,
    criar_usuario,
    atualizar_status,
    atualizar_usuario,
    excluir_usuario,
)

router = APIRouter(prefix="/usuarios", tags=["usuarios"])

# Limite da coluna INTEGER; ids fora da faixa viram 400 antes de chegar ao banco
UsuarioId = Annotated[int, Path(ge=1, le=2**31 - 1)]

@router.get("", response_model=List[UsuarioPublic], response_model_exclude_none=True)
def list_users(db: Session = Depends(get_db), config: Settings = Depends(get_settings)):
    return listar_usuarios(db, config)

@router.get("/{usuario_id}", response_model=UsuarioPublic, response_model_exclude_none=True)
def get_user(usuario_id: UsuarioId, db: Session = Depends(get_db), config: Settings = Depends(get_settings)):
    return obter_usuario(db, config, usuario_id)

@router.post(
    "",
    response_model=UsuarioPublic,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    usuario: UsuarioCreate,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    return criar_usuario(db, config, usuario)

@router.api_route("/{usuario_id}/status", methods=["PATCH", "PUT"], response_model=UsuarioStatus)
def update_status(
    usuario_id: UsuarioId,
    dados: UsuarioStatusUpdate,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    return atualizar_status(db, config, usuario_id, dados.status)

@router.put("/{usuario_id}", response_model=UsuarioAtualizado, response_model_exclude_none=True)
def replace_user(
    usuario_id: UsuarioId,
    dados: UsuarioUpdate,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    return atualizar_usuario(db, config, usuario_id, dados)

@router.patch("/{usuario_id}", response_model=UsuarioAtualizado, response_model_exclude_none=True)
def update_user(
    usuario_id: UsuarioId,
    dados: UsuarioUpdate,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    return atualizar_usuario(db, config, usuario_id, dados, parcial=True)

@router.delete("/{usuario_id}", response_model=Mensagem)
def delete_user(usuario_id: UsuarioId, db: Session = Depends(get_db), config: Settings = Depends(get_settings)):
    return excluir_usuario(db, config, usuario_id)
