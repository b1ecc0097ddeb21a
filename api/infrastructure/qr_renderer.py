# api/infrastructure/qr_renderer.py
#
# QR image rendering: payload string -> PNG data URI.
#
# Design decisions:
#   - qrcode builds the matrix; Pillow resizes to the exact pixel width the
#     card expects (nearest-neighbour, so modules stay sharp).
#   - Error-correction defaults to "L": the payload is dense JSON and the code
#     is printed at 22mm, so capacity matters more than damage tolerance.
#   - Raises ValueError for an unknown level or empty payload; the caller
#     (DocumentoService) decides to omit the QR area.
from __future__ import annotations

import base64
from io import BytesIO

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

ERROR_CORRECTION_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

DEFAULT_WIDTH = 240
DEFAULT_MARGIN = 1


def render_qr_data_url(
    payload: str,
    *,
    width: int = DEFAULT_WIDTH,
    margin: int = DEFAULT_MARGIN,
    error_correction: str = "L",
) -> str:
    if not payload:
        raise ValueError("payload vazio")
    level = ERROR_CORRECTION_LEVELS.get(error_correction.upper())
    if level is None:
        raise ValueError(f"nivel de correcao invalido: {error_correction}")
    if width <= 0:
        raise ValueError(f"largura invalida: {width}")

    qr = qrcode.QRCode(version=None, error_correction=level, box_size=10, border=margin)
    qr.add_data(payload)
    qr.make(fit=True)
    image = qr.make_image(fill_color="black", back_color="white").convert("RGB")
    image = image.resize((width, width), Image.Resampling.NEAREST)

    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return f"data:image/png;base64,{base64.b64encode(buffer.getvalue()).decode('ascii')}"
