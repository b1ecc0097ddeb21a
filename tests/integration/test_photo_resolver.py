# tests/integration/test_photo_resolver.py
import base64

import httpx
import pytest

from api.infrastructure.photo_resolver import (
    PhotoProxyError,
    fetch_proxied_photo,
    resolve_photo_for_card,
    validate_proxy_target,
)

BASE = "https://censo.igreja.test"
STORAGE = "https://firebasestorage.googleapis.com/v0/b/app/o"
HOSTS = ("firebasestorage.googleapis.com", "storage.googleapis.com")


def test_foto_remota_vira_data_uri(mock_http: httpx.Client):
    foto = resolve_photo_for_card(f"{STORAGE}/ok.png", client=mock_http, base_url=BASE)
    assert foto.startswith("data:image/png;base64,")
    assert base64.b64decode(foto.split(",", 1)[1]).startswith(b"\x89PNG")


def test_foto_relativa_usa_base_url(mock_http: httpx.Client):
    foto = resolve_photo_for_card("/fotos/local.png", client=mock_http, base_url=BASE)
    assert foto.startswith("data:image/png;base64,")


def test_foto_relativa_sem_base_url_volta_crua(mock_http: httpx.Client):
    assert resolve_photo_for_card("/fotos/local.png", client=mock_http) == "/fotos/local.png"


def test_falha_direta_tenta_proxy(mock_http: httpx.Client):
    foto = resolve_photo_for_card(f"{STORAGE}/cors.jpg", client=mock_http, base_url=BASE)
    assert foto.startswith("data:image/jpeg;base64,")
    assert base64.b64decode(foto.split(",", 1)[1]).startswith(b"\xff\xd8")


def test_resposta_nao_imagem_e_falhas_devolvem_referencia_crua(mock_http: httpx.Client):
    for caminho in ("texto", "erro"):
        url = f"{STORAGE}/{caminho}"
        assert resolve_photo_for_card(url, client=mock_http, base_url=BASE) == url


def test_data_uri_e_referencia_insegura_sem_rede():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("nao deveria buscar")

    with httpx.Client(transport=httpx.MockTransport(handler)) as c:
        assert resolve_photo_for_card("data:image/png;base64,AA", client=c) == "data:image/png;base64,AA"
        assert resolve_photo_for_card("javascript:alert(1)", client=c) == ""
        assert resolve_photo_for_card("", client=c) == ""


@pytest.mark.parametrize(
    ("url", "status", "detail"),
    [
        (None, 400, "Missing url"),
        ("", 400, "Missing url"),
        ("nao e url", 400, "Invalid url"),
        ("ftp://firebasestorage.googleapis.com/a.png", 400, "Invalid protocol"),
        ("https://evil.example.com/a.png", 403, "Host not allowed"),
    ],
)
def test_validacao_do_proxy(url, status, detail):
    with pytest.raises(PhotoProxyError) as exc:
        validate_proxy_target(url, HOSTS)
    assert exc.value.status_code == status
    assert exc.value.detail == detail


def test_validacao_do_proxy_aceita_host_permitido():
    url = "https://storage.googleapis.com/bucket/a.png"
    assert validate_proxy_target(url, HOSTS) == url


def test_fetch_proxied_falha_upstream_vira_502(mock_http: httpx.Client):
    with pytest.raises(PhotoProxyError) as exc:
        fetch_proxied_photo(mock_http, f"{STORAGE}/erro")
    assert exc.value.status_code == 502
    assert exc.value.detail == "Fetch failed"


def _recording_client(pedidos: list[str]) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        pedidos.append(request.url.host)
        return httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"})

    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.mark.parametrize(
    "foto",
    [
        "http://169.254.169.254/latest/meta-data",
        "http://localhost:8080/admin.png",
        "https://evil.example.com/a.png",
    ],
)
def test_host_fora_da_allow_list_nao_e_buscado(foto):
    pedidos: list[str] = []
    with _recording_client(pedidos) as c:
        assert resolve_photo_for_card(foto, client=c, base_url=BASE, allowed_hosts=HOSTS) == foto
    assert pedidos == []


def test_host_permitido_e_host_publico_sao_buscados():
    pedidos: list[str] = []
    with _recording_client(pedidos) as c:
        assert resolve_photo_for_card(f"{STORAGE}/a.png", client=c, base_url=BASE, allowed_hosts=HOSTS).startswith(
            "data:image/png"
        )
        assert resolve_photo_for_card("/fotos/a.png", client=c, base_url=BASE, allowed_hosts=HOSTS).startswith(
            "data:image/png"
        )
    assert pedidos == ["firebasestorage.googleapis.com", "censo.igreja.test"]


def test_proxy_em_host_nao_permitido_nao_e_usado():
    pedidos: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        pedidos.append(request.url.host)
        return httpx.Response(500)

    with httpx.Client(transport=httpx.MockTransport(handler)) as c:
        foto = resolve_photo_for_card(
            f"{STORAGE}/a.png",
            client=c,
            base_url=BASE,
            proxy_url="http://10.0.0.5/card-photo",
            allowed_hosts=HOSTS,
        )
    assert foto == f"{STORAGE}/a.png"
    assert pedidos == ["firebasestorage.googleapis.com"]
