"""
Dependências injetáveis do FastAPI.

Define dependências reutilizáveis para autenticação, contexto ativo
(cabeçalho X-Team-Id), Store e Permission Gate.
"""

from typing import Annotated

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from legalx.core.config import settings
from legalx.core.exceptions import AuthenticationError, InvalidTokenError
from legalx.core.permissions import Acao, Modulo, PermissionGate
from legalx.core.security import Ator, verify_token
from legalx.db.base import DocumentBackend
from legalx.db.session import get_document_backend
from legalx.services.equipe_service import EquipeService
from legalx.services.record_store import ScopedStore

security = HTTPBearer(auto_error=False)


def get_backend() -> DocumentBackend:
    """
    Dependency que fornece o backend de documentos.

    Uso:
        @router.get("/items")
        async def get_items(backend: Backend):
            ...
    """
    return get_document_backend()


async def get_current_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Ator:
    """
    Dependency que retorna o usuário autenticado.

    Em desenvolvimento aceita JWT local; o token Firebase é aceito em
    qualquer ambiente.

    Raises:
        AuthenticationError: token ausente ou inválido
    """
    from legalx.core.firebase_auth import firebase_auth_service

    if credentials is None:
        raise AuthenticationError("Token de autenticação não fornecido")

    # Tenta primeiro como JWT local (desenvolvimento)
    if settings.ENVIRONMENT == "development":
        payload = verify_token(credentials.credentials)
        if payload is not None:
            ator = Ator.from_claims(payload)
            if ator is not None:
                return ator

    claims = await firebase_auth_service.verify_token(credentials.credentials)
    ator = Ator.from_claims(claims)
    if ator is None:
        raise InvalidTokenError()
    return ator


async def get_team_id(
    x_team_id: Annotated[str | None, Header()] = None,
) -> str | None:
    """Contexto ativo da requisição; ausente significa modo solo."""
    if x_team_id is None:
        return None
    return x_team_id.strip() or None


async def get_equipe_service(
    backend: Annotated[DocumentBackend, Depends(get_backend)],
    ator: Annotated[Ator, Depends(get_current_actor)],
) -> EquipeService:
    return EquipeService(backend, ator)


async def get_permission_gate(
    team_id: Annotated[str | None, Depends(get_team_id)],
    service: Annotated[EquipeService, Depends(get_equipe_service)],
) -> PermissionGate:
    """
    Gate do usuário no contexto ativo.

    Raises:
        TenantAccessError: usuário sem vínculo ativo com a equipe
    """
    return await service.resolver_gate(team_id)


async def get_store(
    backend: Annotated[DocumentBackend, Depends(get_backend)],
    ator: Annotated[Ator, Depends(get_current_actor)],
    team_id: Annotated[str | None, Depends(get_team_id)],
    gate: Annotated[PermissionGate, Depends(get_permission_gate)],
) -> ScopedStore:
    """Store da requisição, criado depois da checagem de vínculo com a equipe."""
    return ScopedStore(backend, ator, team_id=team_id)


def require_permission(modulo: Modulo, acao: Acao | None = None):
    """
    Factory para criar dependency que exige permissão no módulo.

    Sem `acao`, exige qualquer permissão no módulo.

    Uso:
        @router.post("", dependencies=[Depends(require_permission(Modulo.EQUIPE))])
        async def create_item(...):
            ...
    """
    async def permission_checker(
        gate: Annotated[PermissionGate, Depends(get_permission_gate)],
    ) -> PermissionGate:
        gate.check(modulo, acao)
        return gate

    return permission_checker


# Type aliases para facilitar uso nas rotas
Backend = Annotated[DocumentBackend, Depends(get_backend)]
CurrentActor = Annotated[Ator, Depends(get_current_actor)]
TeamID = Annotated[str | None, Depends(get_team_id)]
Gate = Annotated[PermissionGate, Depends(get_permission_gate)]
Store = Annotated[ScopedStore, Depends(get_store)]
Equipes = Annotated[EquipeService, Depends(get_equipe_service)]

# Permissões por módulo
ConfiguracoesAdmin = Annotated[
    PermissionGate, Depends(require_permission(Modulo.CONFIGURACOES))
]
