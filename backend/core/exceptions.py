from typing import Optional

# Erros de domínio da API de usuários. Cada classe carrega o status HTTP
# que o handler em main.py devolve como {"error": mensagem}.


class UsuarioErro(Exception):
    status_code = 500
    mensagem_padrao = "Erro interno no servidor"

    def __init__(self, mensagem: Optional[str] = None):
        self.mensagem = mensagem or self.mensagem_padrao
        super().__init__(self.mensagem)


class ValidacaoErro(UsuarioErro):
    status_code = 400
    mensagem_padrao = "Dados inválidos"


class DuplicadoErro(UsuarioErro):
    status_code = 400
    mensagem_padrao = "Usuário já cadastrado"


class AutenticacaoErro(UsuarioErro):
    status_code = 401
    mensagem_padrao = "Credenciais inválidas"


class UsuarioInativoErro(UsuarioErro):
    status_code = 403
    mensagem_padrao = "Usuário inativo"


class NaoEncontradoErro(UsuarioErro):
    status_code = 404
    mensagem_padrao = "Usuário não encontrado"


class OperacaoNaoPermitida(UsuarioErro):
    status_code = 405
    mensagem_padrao = "Operação não permitida"


class ErroInterno(UsuarioErro):
    status_code = 500
