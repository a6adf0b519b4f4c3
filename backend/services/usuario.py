import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import Settings
from core.exceptions import (
    AutenticacaoErro,
    DuplicadoErro,
    ErroInterno,
    NaoEncontradoErro,
    OperacaoNaoPermitida,
    UsuarioInativoErro,
    ValidacaoErro,
)
from core.security import get_password_hash, verify_password, dummy_verify
from models.usuario import UsuarioModel
from schemas.usuario import UsuarioCreate, UsuarioUpdate, UsuarioLogin
from utils.validators import (
    normalizar_email,
    normalizar_nome,
    normalizar_telefone,
    texto_preenchido,
    validar_email,
    validar_telefone,
)

logger = logging.getLogger("usuarios.service")

ROTULOS = {"telefone": "Telefone", "email": "Email"}
MSG_TELEFONE_INVALIDO = "Telefone inválido. Use DDD seguido de 8 ou 9 dígitos, ex: 11912345678"


def _normalizar_identificador(config: Settings, valor: str) -> str:
    if config.identificador == "telefone":
        telefone = normalizar_telefone(valor)
        if not validar_telefone(telefone):
            raise ValidacaoErro(MSG_TELEFONE_INVALIDO)
        return telefone

    email = normalizar_email(valor)
    if not validar_email(email):
        raise ValidacaoErro("Email inválido")
    return email


def foto_url(config: Settings, usuario_id: int) -> str:
    return config.foto_url_template.format(id=usuario_id)


def _publico(config: Settings, usuario: UsuarioModel, com_foto: bool = False) -> dict:
    """Representação do usuário para a API (nunca inclui o hash da senha)."""
    dados = {
        "id": usuario.id,
        "nome": usuario.nome,
        config.identificador: getattr(usuario, config.identificador),
        "status": usuario.status,
    }
    if com_foto:
        dados["fotoUrl"] = foto_url(config, usuario.id)
    return dados


def _buscar_por_id(db: Session, usuario_id: int, erro_msg: str) -> Optional[UsuarioModel]:
    try:
        return db.query(UsuarioModel).filter(UsuarioModel.id == usuario_id).first()
    except SQLAlchemyError:
        logger.exception("[DB] %s (id=%s)", erro_msg, usuario_id)
        raise ErroInterno(erro_msg)


def _commit(db: Session, config: Settings, erro_msg: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("[DB] %s duplicado", config.identificador)
        raise DuplicadoErro(f"{ROTULOS[config.identificador]} já cadastrado")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[DB] %s", erro_msg)
        raise ErroInterno(erro_msg)


def listar_usuarios(db: Session, config: Settings) -> List[dict]:
    query = db.query(UsuarioModel)
    if config.listar_apenas_ativos:
        query = query.filter(UsuarioModel.status == 1)
    try:
        usuarios = query.order_by(UsuarioModel.id).all()
    except SQLAlchemyError:
        logger.exception("[LISTAR] Falha ao buscar usuários")
        raise ErroInterno("Erro ao buscar usuários")
    return [_publico(config, u, com_foto=True) for u in usuarios]


def obter_usuario(db: Session, config: Settings, usuario_id: int) -> dict:
    usuario = _buscar_por_id(db, usuario_id, "Erro ao buscar usuário")
    if usuario is None:
        raise NaoEncontradoErro()
    return _publico(config, usuario, com_foto=True)


def criar_usuario(db: Session, config: Settings, dados: UsuarioCreate) -> dict:
    ident = config.identificador
    valor = getattr(dados, ident)

    if not texto_preenchido(dados.nome) or not texto_preenchido(valor) or not dados.senha:
        raise ValidacaoErro(f"Nome, {ident} e senha são obrigatórios")

    nome = normalizar_nome(dados.nome)
    valor = _normalizar_identificador(config, valor)

    usuario = UsuarioModel(nome=nome, senha=get_password_hash(dados.senha, config.bcrypt_rounds), status=1)
    setattr(usuario, ident, valor)
    db.add(usuario)
    _commit(db, config, "Erro ao criar usuário")
    db.refresh(usuario)

    logger.info("[CRIAR] usuario=%s %s=%s", usuario.id, ident, valor)
    return _publico(config, usuario)


def atualizar_status(db: Session, config: Settings, usuario_id: int, status: Optional[int]) -> dict:
    if status is None:
        raise ValidacaoErro("Status é obrigatório")
    if status not in (0, 1):
        raise ValidacaoErro("Status inválido. Use 1 (ativo) ou 0 (inativo)")

    usuario = _buscar_por_id(db, usuario_id, "Erro ao atualizar status")
    if usuario is None:
        raise NaoEncontradoErro()

    usuario.status = status
    _commit(db, config, "Erro ao atualizar status")
    logger.info("[STATUS] usuario=%s status=%s", usuario_id, status)
    return {"id": usuario.id, "status": usuario.status}


def atualizar_usuario(
    db: Session,
    config: Settings,
    usuario_id: int,
    dados: UsuarioUpdate,
    parcial: bool = False,
) -> dict:
    """
    Atualiza nome, identificador e senha.

    PUT (parcial=False) exige nome e identificador; PATCH altera só o que veio.
    Em ambos a senha só é trocada (e re-hasheada) quando uma nova é enviada.
    """
    ident = config.identificador
    valor = getattr(dados, ident)

    if parcial:
        if dados.nome is None and valor is None and not dados.senha:
            raise ValidacaoErro("Nenhum campo para atualizar")
        if dados.nome is not None and not texto_preenchido(dados.nome):
            raise ValidacaoErro("Nome não pode ser vazio")
    elif not texto_preenchido(dados.nome) or not texto_preenchido(valor):
        raise ValidacaoErro(f"Nome e {ident} são obrigatórios")

    novos = {}
    if dados.nome is not None:
        novos["nome"] = normalizar_nome(dados.nome)
    if valor is not None:
        novos[ident] = _normalizar_identificador(config, valor)
    if dados.senha:
        novos["senha"] = get_password_hash(dados.senha, config.bcrypt_rounds)

    usuario = _buscar_por_id(db, usuario_id, "Erro ao atualizar usuário")
    if usuario is None:
        raise NaoEncontradoErro()

    for campo, novo_valor in novos.items():
        setattr(usuario, campo, novo_valor)
    _commit(db, config, "Erro ao atualizar usuário")

    logger.info("[ATUALIZAR] usuario=%s campos=%s", usuario_id, sorted(novos))
    return {"id": usuario.id, "nome": usuario.nome, ident: getattr(usuario, ident)}


def excluir_usuario(db: Session, config: Settings, usuario_id: int) -> dict:
    if not config.permitir_exclusao:
        raise OperacaoNaoPermitida("Exclusão de usuários desabilitada")

    usuario = _buscar_por_id(db, usuario_id, "Erro ao excluir usuário")
    if usuario is None:
        raise NaoEncontradoErro()

    db.delete(usuario)
    _commit(db, config, "Erro ao excluir usuário")
    logger.info("[EXCLUIR] usuario=%s", usuario_id)
    return {"message": "Usuário excluído com sucesso"}


def autenticar(db: Session, config: Settings, dados: UsuarioLogin) -> dict:
    ident = config.identificador
    rotulo = ROTULOS[ident]
    valor = getattr(dados, ident)

    if not texto_preenchido(valor) or not dados.senha:
        raise ValidacaoErro(f"{rotulo} e senha são obrigatórios")

    valor = normalizar_telefone(valor) if ident == "telefone" else normalizar_email(valor)

    try:
        usuario = db.query(UsuarioModel).filter(getattr(UsuarioModel, ident) == valor).first()
    except SQLAlchemyError:
        logger.exception("[LOGIN] Falha ao consultar usuário")
        raise ErroInterno("Erro ao fazer login")

    if usuario is None:
        dummy_verify()
        logger.info("[LOGIN] %s=%s não cadastrado", ident, valor)
        raise AutenticacaoErro(f"{rotulo} não cadastrado")

    # Verifica o hash antes do status: inativo e ativo gastam o mesmo tempo
    senha_ok = verify_password(dados.senha, usuario.senha)

    if not usuario.status:
        logger.info("[LOGIN] usuario=%s inativo", usuario.id)
        raise UsuarioInativoErro("Usuário inativo")

    if not senha_ok:
        logger.info("[LOGIN] usuario=%s senha incorreta", usuario.id)
        raise AutenticacaoErro("Senha incorreta")

    return _publico(config, usuario)
