"""
Schemas de Equipe, Membro, Convite e contexto.
"""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from legalx.models.equipe import ConfiguracoesEquipe, Papel, StatusConvite, StatusMembro
from legalx.schemas.base import BaseSchema


# ==================== EQUIPE ====================

class EquipeCreate(BaseSchema):
    """Schema para criação de equipe."""

    nome: str = Field(..., min_length=2, max_length=255)
    email: EmailStr | None = None
    cpf_cnpj: str | None = None
    oab: str | None = None
    area_atuacao: str | None = None
    configuracoes: ConfiguracoesEquipe | None = None


class EquipeUpdate(BaseSchema):
    """Schema para atualização parcial de equipe."""

    nome: str | None = Field(None, min_length=2, max_length=255)
    email: EmailStr | None = None
    cpf_cnpj: str | None = None
    oab: str | None = None
    area_atuacao: str | None = None
    configuracoes: ConfiguracoesEquipe | None = None


# ==================== MEMBRO ====================

class MembroPermissoesUpdate(BaseSchema):
    """Troca de papel e/ou permissões por módulo (módulo -> liberado)."""

    permissoes: dict[str, bool] = Field(default_factory=dict)
    papel: Papel | None = None

    @field_validator("papel")
    @classmethod
    def papel_atribuivel(cls, v: Papel | None) -> Papel | None:
        if v is Papel.OWNER:
            raise ValueError("Não é possível promover a proprietário")
        return v


class MembroResponse(BaseSchema):
    id: str
    uid: str
    email: str
    team_id: str
    papel: Papel
    permissoes: dict[str, bool]
    status: StatusMembro
    added_at: datetime


# ==================== CONVITE ====================

class ConviteCreate(BaseSchema):
    """Schema para envio de convite."""

    email: EmailStr
    papel: Papel = Papel.VIEWER

    @field_validator("papel")
    @classmethod
    def papel_convidavel(cls, v: Papel) -> Papel:
        if v is Papel.OWNER:
            raise ValueError("Não é possível convidar como proprietário")
        return v


class ConviteResponse(BaseSchema):
    """Convite sem o hash do token."""

    id: str
    email: str
    team_id: str
    papel: Papel
    status: StatusConvite
    expires_at: datetime
    created_at: datetime
    created_by: str
    used_at: datetime | None = None
    accepted_by: str | None = None


class ConviteCriadoResponse(BaseSchema):
    """Retorno da criação: o token só é exibido aqui."""

    convite: ConviteResponse
    token: str
    link: str


class ConviteToken(BaseSchema):
    token: str = Field(..., min_length=1)


class ValidacaoConviteResponse(BaseSchema):
    valido: bool
    resultado: str
    convite: ConviteResponse | None = None


# ==================== CONTEXTO ====================

class ContextoDisponivel(BaseSchema):
    """Um contexto que o usuário pode ativar (solo ou equipe)."""

    tipo: str  # "solo" | "equipe"
    team_id: str | None = None
    nome: str
    papel: Papel


class PermissoesModulo(BaseSchema):
    modulo: str
    pode_visualizar: bool
    pode_criar: bool
    pode_editar: bool
    pode_excluir: bool


class PermissoesContexto(BaseSchema):
    team_id: str | None
    papel: Papel
    modulos: list[PermissoesModulo]
