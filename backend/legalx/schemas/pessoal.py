"""
Schemas de Advogado e Funcionário.
"""

from pydantic import EmailStr

from legalx.models.pessoal import AdvogadoBase, FuncionarioBase, StatusPessoa
from legalx.schemas.base import BaseSchema


class AdvogadoCreate(AdvogadoBase):
    """Schema para cadastro de advogado."""


class AdvogadoUpdate(BaseSchema):
    nome_completo: str | None = None
    cpf: str | None = None
    oab: str | None = None
    comissao: float | None = None
    status: StatusPessoa | None = None
    email: EmailStr | None = None
    telefone: str | None = None
    endereco: str | None = None
    foto: str | None = None
    especialidades: list[str] | None = None


class FuncionarioCreate(FuncionarioBase):
    """Schema para cadastro de funcionário."""


class FuncionarioUpdate(BaseSchema):
    nome_completo: str | None = None
    cpf: str | None = None
    cargo: str | None = None
    salario: float | None = None
    status: StatusPessoa | None = None
    email: EmailStr | None = None
    telefone: str | None = None
    endereco: str | None = None
    foto: str | None = None
