# tests/integration/test_api_documentos.py
import pytest
from fastapi.testclient import TestClient

from api.application.services import documento_service as modulo

MEMBRO = {
    "name": "Maria Silva",
    "cpf": "12345678901",
    "estadoCivil": "Solteiro(a)",
    "cargo": "membro",
    "idInterno": "0042",
    "qtdeFilhos": 2,
    "nomeConjuge": None,
    "filhos": [{"name": "Ana", "cpf": None}],
}


def test_carteira_retorna_html(client: TestClient) -> None:
    response = client.post("/api/membros/carteira", json={"membro": MEMBRO})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Maria Silva" in response.text
    assert "123.456.789-01" in response.text
    assert "0042" in response.text


def test_carteira_com_settings_e_toolbar(client: TestClient) -> None:
    response = client.post(
        "/api/membros/carteira",
        json={
            "membro": MEMBRO,
            "settings": {"locationAddress1": "Rua A, 10", "presidentSignatureName": "Pr. Fulano"},
            "options": {"toolbar": True, "forceDesktop": True, "showPrintButton": False},
        },
    )
    assert response.status_code == 200
    assert "Pr. Fulano" in response.text
    assert "Rua A, 10" in response.text
    assert 'id="toolbar-download"' in response.text
    assert 'id="toolbar-print"' not in response.text


def test_carteira_sem_membro_retorna_422(client: TestClient) -> None:
    response = client.post("/api/membros/carteira", json={})
    assert response.status_code == 422


def test_carteira_modo_invalido_retorna_422(client: TestClient) -> None:
    response = client.post("/api/membros/carteira", json={"membro": MEMBRO, "options": {"mode": "fax"}})
    assert response.status_code == 422


def test_fichas_retorna_html_com_uma_pagina_por_membro(client: TestClient) -> None:
    response = client.post(
        "/api/membros/fichas",
        json={
            "membros": [MEMBRO, {"name": "Joao", "estadoCivil": "Casado(a)", "nomeConjuge": "Ana"}],
            "meta": {"loginLabel": "sec@igreja.org", "generatedAt": "10/03/2026, 09:00:00"},
            "options": {"mode": "download"},
        },
    )
    assert response.status_code == 200
    html = response.text
    assert html.count('<div class="page">') == 2
    assert "Dados Matrimoniais" in html
    assert "Filhos (Quantidade: 2)" in html
    assert '"action": "exportPdf"' in html
    assert "sec@igreja.org" in html


def test_fichas_lista_vazia_retorna_422(client: TestClient) -> None:
    response = client.post("/api/membros/fichas", json={"membros": []})
    assert response.status_code == 422


def test_fichas_pdf_sem_engine_retorna_501(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def sem_engine(*args, **kwargs):
        raise RuntimeError("PDF export requires weasyprint.")

    monkeypatch.setattr(modulo, "gerar_pdf_fichas", sem_engine)
    response = client.post("/api/membros/fichas?formato=pdf", json={"membros": [MEMBRO]})
    assert response.status_code == 501


def test_fichas_pdf_retorna_anexo(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(modulo, "gerar_pdf_fichas", lambda html, base_url=None: b"%PDF-1.7 fake")
    response = client.post(
        "/api/membros/fichas?formato=pdf",
        json={"membros": [MEMBRO], "options": {"filename": "ficha-maria"}},
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert "ficha-maria.pdf" in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_fichas_formato_invalido_retorna_422(client: TestClient) -> None:
    response = client.post("/api/membros/fichas?formato=xml", json={"membros": [MEMBRO]})
    assert response.status_code == 422


def test_headers_de_seguranca(client: TestClient) -> None:
    response = client.post("/api/membros/carteira", json={"membro": MEMBRO})
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"


def test_carteira_nao_busca_foto_em_host_interno(client: TestClient) -> None:
    import httpx

    from api.interfaces.api.dependencies import get_http_client
    from api.interfaces.api.main import app

    pedidos: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        pedidos.append(request.url.host)
        return httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"})

    foto = "http://169.254.169.254/latest/meta-data"
    anterior = app.dependency_overrides[get_http_client]
    http = httpx.Client(transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_http_client] = lambda: http
    try:
        response = client.post("/api/membros/carteira", json={"membro": {**MEMBRO, "photo": foto}})
    finally:
        app.dependency_overrides[get_http_client] = anterior
        http.close()

    assert response.status_code == 200
    assert pedidos == []
    assert 'src="http://169.254.169.254/latest/meta-data"' in response.text
