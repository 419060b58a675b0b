"""
Endpoints de Autenticação.

A identidade vem do Firebase; em desenvolvimento há emissão de JWT local
para testar a API sem o frontend.
"""

from datetime import timedelta

from fastapi import APIRouter
from pydantic import BaseModel, EmailStr, Field

from legalx.core.config import settings
from legalx.core.dependencies import CurrentActor
from legalx.core.exceptions import AuthorizationError
from legalx.core.security import create_access_token
from legalx.schemas.base import APIResponse

router = APIRouter(prefix="/auth", tags=["Autenticação"])


class AtorResponse(BaseModel):
    uid: str
    email: str | None = None
    nome: str | None = None


class DevTokenRequest(BaseModel):
    """Identidade simulada para o token local."""

    uid: str = Field(..., min_length=1)
    email: EmailStr | None = None
    nome: str | None = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


@router.get("/me", response_model=APIResponse[AtorResponse])
async def get_me(ator: CurrentActor):
    """Retorna o usuário autenticado."""
    return APIResponse(
        success=True,
        data=AtorResponse(uid=ator.uid, email=ator.email, nome=ator.nome),
    )


@router.post("/dev-token", response_model=APIResponse[TokenResponse])
async def dev_token(request: DevTokenRequest):
    """
    Emite JWT local. Disponível apenas em development.
    """
    if settings.ENVIRONMENT != "development":
        raise AuthorizationError("Tokens locais só são emitidos em desenvolvimento")

    claims = {"email": request.email, "name": request.nome}
    token = create_access_token(
        request.uid,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        additional_claims={k: v for k, v in claims.items() if v},
    )
    return APIResponse(
        success=True,
        data=TokenResponse(
            access_token=token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        ),
    )
