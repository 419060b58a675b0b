"""
Modelos de Equipe, Membro e Convite.

Ficam em coleções globais (teams, teamMembers, invitations), fora do
namespace solo/equipe dos registros do escritório.
"""

import enum
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from legalx.models.base import DocumentModel


class Papel(str, enum.Enum):
    """Papéis de um usuário dentro da equipe."""

    OWNER = "owner"  # Dono; também é o papel implícito no modo solo
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"  # Somente leitura


class StatusMembro(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class StatusConvite(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    REVOKED = "revoked"


class ConfiguracoesEquipe(DocumentModel):
    permitir_convites: bool = True
    papel_padrao: Papel = Papel.VIEWER
    max_membros: int | None = Field(None, ge=1)


class Equipe(DocumentModel):
    """Escritório compartilhado entre membros."""

    id: str
    nome: str = Field(..., min_length=2, max_length=255)
    owner_uid: str
    email: EmailStr | None = None
    cpf_cnpj: str | None = None
    oab: str | None = None
    area_atuacao: str | None = None
    configuracoes: ConfiguracoesEquipe = Field(default_factory=ConfiguracoesEquipe)
    created_at: datetime
    updated_at: datetime | None = None


class MembroEquipe(DocumentModel):
    """Vínculo de um usuário com uma equipe."""

    id: str
    uid: str
    email: str
    team_id: str
    papel: Papel
    # Sobrescreve a tabela de papéis por módulo (módulo -> liberado)
    permissoes: dict[str, bool] = Field(default_factory=dict)
    status: StatusMembro = StatusMembro.ACTIVE
    added_at: datetime
    added_by: str
    last_active_at: datetime | None = None


class ConviteEquipe(DocumentModel):
    """Convite com token de uso único (só o hash é gravado)."""

    id: str
    email: str
    team_id: str
    papel: Papel
    token_hash: str
    status: StatusConvite = StatusConvite.PENDING
    expires_at: datetime
    created_at: datetime
    created_by: str
    used_at: datetime | None = None
    accepted_by: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v
