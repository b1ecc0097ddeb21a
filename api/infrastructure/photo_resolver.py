# api/infrastructure/photo_resolver.py
#
# Photo resolution for the card, plus the upstream side of the same-origin
# photo proxy (GET /api/card-photo).
#
# Design decisions:
#   - The card is rasterized in the browser; a cross-origin photo taints the
#     canvas. Embedding the photo as a data: URI removes the problem, so the
#     resolver downloads it server side.
#   - Order: direct fetch -> proxy fetch (http(s) sources only) -> raw safe
#     reference. Only image/* responses are accepted at each step.
#   - httpx.HTTPError is caught per attempt and logged; the resolver itself
#     never raises. The caller always gets something renderable or "".
#   - Both the resolver and the proxy only fetch from the allow-list of
#     storage hosts (plus the public host for relative paths), so neither can
#     be pointed at internal addresses. A disallowed host is never requested;
#     the raw reference goes back to the card.
from __future__ import annotations

import base64
from dataclasses import dataclass
from urllib.parse import quote, urljoin, urlparse

import httpx

from api.domain.membro.value_objects import FotoRef

from .config import DEFAULT_ALLOWED_HOSTS
from .log import log

DEFAULT_TIMEOUT = 10.0


class PhotoProxyError(Exception):
    """Falha do proxy de fotos com o status HTTP que a rota deve devolver."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


@dataclass(frozen=True)
class FetchedImage:
    content: bytes
    content_type: str

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


def _image_content_type(response: httpx.Response) -> str | None:
    content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
    return content_type if content_type.startswith("image/") else None


def _fetch_image(client: httpx.Client, url: str, timeout: float) -> FetchedImage | None:
    try:
        response = client.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as err:
        log(f"foto: falha ao buscar {url}: {err.__class__.__name__}")
        return None
    content_type = _image_content_type(response)
    if content_type is None:
        log(f"foto: resposta de {url} nao e imagem")
        return None
    return FetchedImage(content=response.content, content_type=content_type)


def _host(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def _absolute(url: str, base_url: str) -> str:
    if url.startswith(("http://", "https://")):
        return url
    return urljoin(base_url + "/", url.lstrip("/")) if base_url else ""


def resolve_photo_for_card(
    photo: str,
    *,
    client: httpx.Client | None = None,
    base_url: str = "",
    proxy_url: str = "/api/card-photo",
    timeout: float = DEFAULT_TIMEOUT,
    allowed_hosts: tuple[str, ...] = DEFAULT_ALLOWED_HOSTS,
) -> str:
    """Converte a referencia de foto em data: URI para embutir na carteira.

    Only hosts in allowed_hosts, or the host of base_url, are fetched.

    Returns:
        "" para referencia insegura/vazia; a propria referencia se ja for
        data:, se o host nao for permitido ou se nenhuma tentativa de
        download der certo.
    """
    ref = FotoRef(photo)
    if ref.vazia or ref.is_data_uri:
        return ref.valor

    direct_url = _absolute(ref.valor, base_url)
    permitidos = ({h.lower() for h in allowed_hosts} | {_host(base_url)}) - {""}
    if direct_url and _host(direct_url) not in permitidos:
        log(f"foto: host nao permitido {_host(direct_url) or '?'}")
        return ref.valor

    owns_client = client is None
    http = client or httpx.Client()
    try:
        if direct_url:
            fetched = _fetch_image(http, direct_url, timeout)
            if fetched:
                return fetched.to_data_uri()

        if ref.is_remota and proxy_url:
            proxied = _absolute(f"{proxy_url}?url={quote(ref.valor, safe='')}", base_url)
            if proxied and _host(proxied) in permitidos:
                fetched = _fetch_image(http, proxied, timeout)
                if fetched:
                    return fetched.to_data_uri()
    finally:
        if owns_client:
            http.close()

    return ref.valor


# ---------------------------------------------------------------------------
# Proxy de fotos
# ---------------------------------------------------------------------------


def validate_proxy_target(url: str | None, allowed_hosts: tuple[str, ...]) -> str:
    """Valida a URL pedida ao proxy.

    Raises:
        PhotoProxyError: 400 para URL ausente/invalida/protocolo nao http(s),
            403 para host fora da allow-list.
    """
    if not url:
        raise PhotoProxyError(400, "Missing url")
    try:
        parsed = urlparse(url)
    except ValueError as err:
        raise PhotoProxyError(400, "Invalid url") from err
    if not parsed.scheme or not parsed.netloc:
        raise PhotoProxyError(400, "Invalid url")
    if parsed.scheme not in ("http", "https"):
        raise PhotoProxyError(400, "Invalid protocol")
    host = (parsed.hostname or "").lower()
    if host not in allowed_hosts:
        raise PhotoProxyError(403, "Host not allowed")
    return url


def fetch_proxied_photo(client: httpx.Client, url: str, *, timeout: float = DEFAULT_TIMEOUT) -> FetchedImage:
    """Busca a foto upstream para o proxy.

    Raises:
        PhotoProxyError: 502 para qualquer falha de rede ou status nao-2xx.
    """
    try:
        response = client.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as err:
        log(f"card-photo: upstream falhou para {urlparse(url).hostname}: {err.__class__.__name__}")
        raise PhotoProxyError(502, "Fetch failed") from err
    content_type = response.headers.get("content-type") or "application/octet-stream"
    return FetchedImage(content=response.content, content_type=content_type)
