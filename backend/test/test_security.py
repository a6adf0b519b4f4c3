from core.security import get_password_hash, verify_password


def test_hash_e_salgado_e_verificavel():
    h1 = get_password_hash("StrongPass1!")
    h2 = get_password_hash("StrongPass1!")

    assert h1 != "StrongPass1!"
    assert h1.startswith("$2b$")
    assert h1 != h2  # salt diferente por hash
    assert verify_password("StrongPass1!", h1)
    assert verify_password("StrongPass1!", h2)


def test_senha_incorreta():
    h = get_password_hash("StrongPass1!")
    assert not verify_password("WrongPassword", h)


def test_hash_invalido_nao_levanta():
    assert not verify_password("qualquer", "")
    assert not verify_password("qualquer", "nao-e-um-hash")
