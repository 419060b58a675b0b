"""
Health check endpoints.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from legalx.core.config import settings
from legalx.core.dependencies import Backend
from legalx.core.exceptions import BackendUnavailableError

router = APIRouter()


@router.get("")
async def health_check() -> dict:
    """Health check básico."""
    return {
        "status": "healthy",
        "version": settings.VERSION,
    }


@router.get("/ready")
async def readiness_check(backend: Backend):
    """
    Readiness check para Cloud Run.

    Verifica se o backend de documentos responde.
    """
    try:
        ok = await backend.ping()
    except BackendUnavailableError:
        ok = False

    content = {
        "status": "ready" if ok else "unavailable",
        "checks": {
            "documents": "ok" if ok else "error",
            "backend": settings.DOCUMENT_BACKEND,
        },
    }
    if not ok:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=content)
    return content
