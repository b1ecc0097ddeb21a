# api/interfaces/api/main.py
from __future__ import annotations

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from api.infrastructure.config import get_settings
from api.interfaces.api.middleware.rate_limit import RateLimitMiddleware

app = FastAPI(
    title="Carteira de Membro API",
    debug=get_settings().debug,
    docs_url="/api/docs",
    redoc_url=None,
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next: object) -> Response:
    response = await call_next(request)  # type: ignore[misc]
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response  # type: ignore[return-value]


app.add_middleware(RateLimitMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins) or ["http://localhost:3000"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

from api.interfaces.api.routes.card_photo_routes import router as card_photo_router  # noqa: E402
from api.interfaces.api.routes.carteira_routes import router as carteira_router  # noqa: E402
from api.interfaces.api.routes.ficha_routes import router as ficha_router  # noqa: E402
from api.interfaces.api.routes.qr_routes import router as qr_router  # noqa: E402

app.include_router(carteira_router, prefix="/api")
app.include_router(ficha_router, prefix="/api")
app.include_router(qr_router, prefix="/api")
app.include_router(card_photo_router, prefix="/api")
