"""
Modelos financeiros: Receita e Despesa.

Valores são sempre positivos; o sinal vem do tipo de lançamento.
"""

import enum
from datetime import date

from pydantic import Field

from legalx.models.base import DocumentModel, NomesResponsaveis, RegistroMixin


class CategoriaReceita(str, enum.Enum):
    HONORARIO = "honorario"
    CONSULTORIA = "consultoria"
    OUTRO = "outro"


class CategoriaDespesa(str, enum.Enum):
    ALUGUEL = "aluguel"
    INTERNET = "internet"
    MATERIAL = "material"
    OUTRO = "outro"


class ReceitaBase(DocumentModel):
    """Campos editáveis da receita."""

    data: date
    valor: float = Field(..., gt=0)
    origem: str = Field(..., min_length=1)
    categoria: CategoriaReceita = CategoriaReceita.HONORARIO
    cliente: str | None = None
    responsaveis: NomesResponsaveis = Field(default_factory=list)
    descricao: str | None = None


class Receita(ReceitaBase, RegistroMixin):
    """Receita gravada."""


class DespesaBase(DocumentModel):
    """Campos editáveis da despesa."""

    data: date
    valor: float = Field(..., gt=0)
    tipo: str = Field(..., min_length=1)
    categoria: CategoriaDespesa = CategoriaDespesa.OUTRO
    responsaveis: NomesResponsaveis = Field(default_factory=list)
    comprovante: str | None = None
    descricao: str | None = None


class Despesa(DespesaBase, RegistroMixin):
    """Despesa gravada."""
