"""
Ponto de entrada principal da API do LegalX.

Este módulo configura a aplicação FastAPI com todas as rotas,
middlewares e handlers de exceção.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from legalx.api.v1.router import api_router
from legalx.core.config import settings
from legalx.core.logging import setup_logging
from legalx.core.middleware import RequestContextMiddleware, setup_exception_handlers

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia o ciclo de vida da aplicação."""
    # Startup
    setup_logging()
    logger.info(
        "Iniciando LegalX API",
        version=settings.VERSION,
        backend=settings.DOCUMENT_BACKEND,
    )

    yield

    # Shutdown
    logger.info("Encerrando LegalX API")


def create_application() -> FastAPI:
    """Factory para criar a aplicação FastAPI."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Back-office de escritórios de advocacia: processos, agenda, "
        "finanças, documentos e equipes",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url=f"{settings.API_V1_PREFIX}/docs",
        redoc_url=f"{settings.API_V1_PREFIX}/redoc",
        lifespan=lifespan,
    )

    # Erros no formato {"success": false, "error": {...}}
    setup_exception_handlers(app)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    # Rotas
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    return app


app = create_application()


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Endpoint de health check para Cloud Run."""
    return {"status": "healthy", "version": settings.VERSION}
