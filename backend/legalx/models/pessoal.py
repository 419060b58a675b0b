"""
Modelos do quadro de pessoal: Advogado e Funcionário.
"""

import enum

from pydantic import EmailStr, Field

from legalx.models.base import CPF, DocumentModel, RegistroMixin


class StatusPessoa(str, enum.Enum):
    ATIVO = "ativo"
    INATIVO = "inativo"


class AdvogadoBase(DocumentModel):
    """Campos editáveis do advogado."""

    nome_completo: str = Field(..., min_length=2, max_length=255)
    cpf: CPF
    oab: str = Field(..., min_length=3, max_length=20, description="Ex.: 123456/SP")
    comissao: float = Field(0, ge=0, le=100, description="Percentual de comissão")
    status: StatusPessoa = StatusPessoa.ATIVO
    email: EmailStr | None = None
    telefone: str | None = None
    endereco: str | None = None
    foto: str | None = None
    especialidades: list[str] = Field(default_factory=list)


class Advogado(AdvogadoBase, RegistroMixin):
    """Advogado gravado."""


class FuncionarioBase(DocumentModel):
    """Campos editáveis do funcionário."""

    nome_completo: str = Field(..., min_length=2, max_length=255)
    cpf: CPF
    cargo: str = Field(..., min_length=1)
    salario: float = Field(..., ge=0)
    status: StatusPessoa = StatusPessoa.ATIVO
    email: EmailStr | None = None
    telefone: str | None = None
    endereco: str | None = None
    foto: str | None = None


class Funcionario(FuncionarioBase, RegistroMixin):
    """Funcionário gravado."""
