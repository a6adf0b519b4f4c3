from sqlalchemy import Column, Integer, String, DateTime, func, text
from database import Base

class UsuarioModel(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    nome = Column(String(100), nullable=False)
    telefone = Column(String(11), unique=True, index=True, nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    senha = Column(String(255), nullable=False)  # hash bcrypt, nunca a senha em texto
    status = Column(Integer, nullable=False, default=1, server_default=text("1"))  # 1 ativo, 0 inativo
    data_criacao = Column(DateTime, default=func.now())
    data_atualizacao = Column(DateTime, default=func.now(), onupdate=func.now())
