import re
from typing import Optional

# Nome
def normalizar_nome(nome: str) -> str:
    """
    Primeira letra de cada palavra maiúscula, o resto minúsculo.
    Espaços extras (início, fim e entre palavras) são removidos; hífen e
    apóstrofo também iniciam palavra.
    Ex.: "  joão DA silva " -> "João Da Silva", "ana-maria d'ávila" -> "Ana-Maria D'Ávila"
    """
    nome = " ".join(nome.split()).lower()
    return re.sub(r"(^|[\s\-'])(\w)", lambda m: m.group(1) + m.group(2).upper(), nome)

# Telefone/Celular
def normalizar_telefone(telefone: str) -> str:
    return re.sub(r"\D", "", telefone)  # Remove tudo que não for número

def validar_telefone(telefone: str) -> bool:
    # DDD + 8 ou 9 dígitos
    telefone = normalizar_telefone(telefone)
    return re.fullmatch(r"\d{10,11}", telefone) is not None

# Email
def normalizar_email(email: str) -> str:
    return email.strip().lower()

def validar_email(email: str) -> bool:
    regex = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"
    return re.match(regex, email) is not None

# Texto obrigatório
def texto_preenchido(valor: Optional[str]) -> bool:
    return valor is not None and str(valor).strip() != ""
