"""
Módulo de segurança: identidade do usuário e JWT de desenvolvimento.

Em produção a identidade vem do token Firebase; em desenvolvimento um JWT
local assinado com SECRET_KEY substitui o Firebase.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from legalx.core.config import settings


@dataclass(frozen=True)
class Ator:
    """Usuário autenticado que executa a operação."""

    uid: str
    email: str | None = None
    nome: str | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Ator | None":
        """Monta o ator a partir das claims do token (Firebase ou local)."""
        uid = claims.get("uid") or claims.get("sub")
        if not uid:
            return None
        email = claims.get("email")
        return cls(
            uid=str(uid),
            email=email.strip().lower() if email else None,
            nome=claims.get("name"),
        )


def create_access_token(
    subject: str | Any,
    expires_delta: timedelta | None = None,
    additional_claims: dict[str, Any] | None = None,
) -> str:
    """
    Cria um token JWT de acesso para desenvolvimento.

    Args:
        subject: UID do usuário
        expires_delta: Tempo de expiração customizado
        additional_claims: Claims adicionais (ex: email, name)

    Returns:
        Token JWT codificado
    """
    agora = datetime.now(timezone.utc)
    expire = agora + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    to_encode: dict[str, Any] = {
        "sub": str(subject),
        "exp": expire,
        "iat": agora,
    }

    if additional_claims:
        to_encode.update(additional_claims)

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> dict[str, Any] | None:
    """
    Verifica e decodifica um token JWT local.

    Returns:
        Payload do token ou None se inválido
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
