"""
Middleware de tratamento de exceções.

Converte exceções em respostas HTTP padronizadas; o corpo de erro é o
aviso exibido ao usuário.
"""

import traceback
import uuid

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from legalx.core.config import settings
from legalx.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendUnavailableError,
    BusinessRuleError,
    InvalidStatusTransitionError,
    LegalXException,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    StorageError,
    ValidationError,
    WriteFailedError,
)

logger = structlog.get_logger()

# Ordem importa: subclasses antes das classes base
STATUS_MAP: list[tuple[type[LegalXException], int]] = [
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (ResourceNotFoundError, status.HTTP_404_NOT_FOUND),
    (ResourceAlreadyExistsError, status.HTTP_409_CONFLICT),
    (InvalidStatusTransitionError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (BusinessRuleError, status.HTTP_400_BAD_REQUEST),
    (BackendUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (WriteFailedError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: LegalXException) -> int:
    for exc_type, http_status in STATUS_MAP:
        if isinstance(exc, exc_type):
            return http_status
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    field: str | None = None,
    details: dict | None = None,
) -> JSONResponse:
    """Cria resposta de erro padronizada."""
    content: dict = {
        "success": False,
        "error": {
            "code": code,
            "message": message,
        },
    }
    if field:
        content["error"]["field"] = field
    if details:
        content["error"]["details"] = details

    return JSONResponse(status_code=status_code, content=content)


async def legalx_exception_handler(request: Request, exc: LegalXException) -> JSONResponse:
    """Handler para exceções do LegalX."""
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "LegalX exception",
        code=exc.code,
        message=exc.message,
        path=request.url.path,
        details=exc.details,
    )

    # Detalhes de validação e permissão orientam o aviso na interface
    details = exc.details
    publicos = (ValidationError, AuthorizationError, BusinessRuleError)
    if not settings.DEBUG and not isinstance(exc, publicos):
        details = None

    return create_error_response(
        status_code=status_code,
        code=exc.code,
        message=exc.message,
        field=getattr(exc, "field", None),
        details=details,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler para exceções não tratadas."""
    logger.error(
        "Unhandled exception",
        exc_type=type(exc).__name__,
        message=str(exc),
        path=request.url.path,
        traceback=traceback.format_exc() if settings.DEBUG else None,
    )

    message = "Erro interno do servidor"
    details = None

    if settings.DEBUG:
        message = str(exc)
        details = {"traceback": traceback.format_exc()}

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="INTERNAL_ERROR",
        message=message,
        details=details,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Registra handlers de exceção na aplicação."""
    app.add_exception_handler(LegalXException, legalx_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)


class RequestContextMiddleware:
    """
    Middleware para adicionar contexto às requisições.

    Adiciona request_id e o contexto de equipe (X-Team-Id) ao log.
    """

    def __init__(self, app: FastAPI):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())[:8]
        headers = dict(scope.get("headers") or [])
        team_id = headers.get(b"x-team-id", b"").decode() or None

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=scope.get("path", ""),
            method=scope.get("method", ""),
            team_id=team_id,
        )

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode()))
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_wrapper)
