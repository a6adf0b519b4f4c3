from unittest.mock import patch


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"status": "API online", "database": "Conectado"}


def test_root_banco_indisponivel(client):
    with patch("main.testar_conexao", return_value=False):
        resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["database"] == "Indisponível"


def test_rota_inexistente(client):
    resp = client.get("/nao-existe")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Rota não encontrada"}


def test_id_nao_numerico(client):
    resp = client.get("/usuarios/abc")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Dados inválidos"


def test_excecao_nao_tratada_vira_500(client):
    with patch("routers.usuario.listar_usuarios", side_effect=RuntimeError("boom")):
        resp = client.get("/usuarios")
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Erro interno no servidor"
    assert body["error_id"] == resp.headers["x-error-id"]


def test_id_fora_da_faixa(client):
    for metodo, url in (
        ("get", "/usuarios/1180591620717411303424"),
        ("delete", "/usuarios/1180591620717411303424"),
        ("get", "/usuarios/0"),
    ):
        resp = getattr(client, metodo)(url)
        assert resp.status_code == 400, url
        assert resp.json()["error"] == "Dados inválidos"

    resp = client.patch("/usuarios/1180591620717411303424/status", json={"status": 0})
    assert resp.status_code == 400


def test_fotos_de_perfil_servidas(tmp_path):
    from conftest import make_client

    (tmp_path / "1.jpg").write_bytes(b"\xff\xd8foto")

    with make_client(perfis_dir=str(tmp_path)) as c:
        criado = c.post("/usuarios", json={"nome": "Ana", "telefone": "11912345678", "senha": "x"}).json()
        foto = c.get(f"/usuarios/{criado['id']}").json()["fotoUrl"]
        assert foto == "/perfis/1.jpg"

        resp = c.get(foto)
        assert resp.status_code == 200
        assert resp.content == b"\xff\xd8foto"

        faltando = c.get("/perfis/2.jpg")
        assert faltando.status_code == 404
        assert faltando.json() == {"error": "Rota não encontrada"}


def test_cors_expoe_error_id(client):
    resp = client.get("/", headers={"Origin": "http://localhost:3000"})
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.headers["access-control-expose-headers"] == "x-error-id"
