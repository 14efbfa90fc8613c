"""
api/main.py — punkt wejścia FastAPI.

Adaptery są bezstanowe poza kursorem jednego parsowania, więc ewaluator
tworzony jest raz, a lekser i parser per żądanie (pipeline.parse).
Każdy CalcError mapowany jest na 400 z polem "error" = CalcError.kind.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from adapters.evaluator.ast_evaluator import ASTEvaluator
from api.routers import evaluate, parse
from api.schemas import HealthResponse
from config import Settings
from contracts import CalcError

logger = logging.getLogger("intcalc.api")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
    )
    app.state.settings = settings
    app.state.evaluator = ASTEvaluator()

    # Routers
    app.include_router(evaluate.router)
    app.include_router(parse.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health():
        return HealthResponse(status="ok", version=settings.app_version)

    # Globalny handler błędów
    @app.exception_handler(CalcError)
    async def calc_error_handler(request: Request, exc: CalcError):
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=400,
            content={"error": exc.kind, "detail": str(exc)},
        )

    logger.info("%s API ready.", settings.app_title)
    return app


app = create_app()
