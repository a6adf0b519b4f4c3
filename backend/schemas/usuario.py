from pydantic import BaseModel
from typing import Optional

# Campos de entrada são opcionais no schema: obrigatoriedade e formato são
# verificados no service, que devolve as mensagens de erro da API.

class UsuarioCreate(BaseModel):
    nome: Optional[str] = None
    telefone: Optional[str] = None
    email: Optional[str] = None
    senha: Optional[str] = None

class UsuarioUpdate(BaseModel):
    nome: Optional[str] = None
    telefone: Optional[str] = None
    email: Optional[str] = None
    senha: Optional[str] = None

class UsuarioStatusUpdate(BaseModel):
    status: Optional[int] = None

class UsuarioLogin(BaseModel):
    telefone: Optional[str] = None
    email: Optional[str] = None
    senha: Optional[str] = None

# Respostas: o campo identificador que não está em uso fica None e é
# omitido com response_model_exclude_none.

class UsuarioPublic(BaseModel):
    id: int
    nome: str
    telefone: Optional[str] = None
    email: Optional[str] = None
    status: int
    fotoUrl: Optional[str] = None

    class Config:
        from_attributes = True

class UsuarioAtualizado(BaseModel):
    id: int
    nome: str
    telefone: Optional[str] = None
    email: Optional[str] = None

class UsuarioStatus(BaseModel):
    id: int
    status: int

class Mensagem(BaseModel):
    message: str
