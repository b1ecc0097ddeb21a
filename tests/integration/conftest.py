# tests/integration/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

# Desabilitar rate limit em testes
os.environ["API_RATE_LIMIT_PER_MINUTE"] = "0"
os.environ["PUBLIC_BASE_URL"] = "https://censo.igreja.test"

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"
JPEG_BYTES = b"\xff\xd8\xff\xe0fake"


def storage_handler(request: httpx.Request) -> httpx.Response:
    """Storage falso: /ok.png e imagem, /texto nao e imagem, /erro falha."""
    url = request.url
    if url.host == "censo.igreja.test" and url.path == "/api/card-photo":
        alvo = url.params.get("url", "")
        if alvo.endswith("/cors.jpg"):
            return httpx.Response(200, content=JPEG_BYTES, headers={"content-type": "image/jpeg"})
        return httpx.Response(502, text="Fetch failed")
    if url.host == "censo.igreja.test" and url.path == "/fotos/local.png":
        return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})
    if url.path.endswith("/ok.png"):
        return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png; charset=binary"})
    if url.path.endswith("/texto"):
        return httpx.Response(200, text="<html></html>", headers={"content-type": "text/html"})
    if url.path.endswith("/cors.jpg"):
        raise httpx.ConnectError("bloqueado", request=request)
    return httpx.Response(500, text="erro")


@pytest.fixture()
def mock_http() -> Generator[httpx.Client, None, None]:
    with httpx.Client(transport=httpx.MockTransport(storage_handler)) as c:
        yield c


@pytest.fixture(scope="session")
def client() -> Generator[TestClient, None, None]:
    """TestClient do FastAPI com o storage substituido por MockTransport."""
    # Limpar cache de settings para pegar as variaveis acima
    from api.infrastructure.config import get_settings
    get_settings.cache_clear()

    from api.interfaces.api.dependencies import get_http_client
    from api.interfaces.api.main import app

    http = httpx.Client(transport=httpx.MockTransport(storage_handler))
    app.dependency_overrides[get_http_client] = lambda: http
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.pop(get_http_client, None)
    http.close()


@pytest.fixture()
def storage_transport() -> httpx.MockTransport:
    return httpx.MockTransport(storage_handler)
