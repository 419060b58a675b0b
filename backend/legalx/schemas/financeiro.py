"""
Schemas financeiros: Receita, Despesa e resumo mensal.
"""

from datetime import date

from pydantic import BaseModel

from legalx.models.financeiro import (
    CategoriaDespesa,
    CategoriaReceita,
    DespesaBase,
    ReceitaBase,
)
from legalx.schemas.base import BaseSchema


# ==================== RECEITA ====================

class ReceitaCreate(ReceitaBase):
    """Schema para criação de receita."""


class ReceitaUpdate(BaseSchema):
    data: date | None = None
    valor: float | None = None
    origem: str | None = None
    categoria: CategoriaReceita | None = None
    cliente: str | None = None
    responsaveis: list[str] | None = None
    descricao: str | None = None


# ==================== DESPESA ====================

class DespesaCreate(DespesaBase):
    """Schema para criação de despesa."""


class DespesaUpdate(BaseSchema):
    data: date | None = None
    valor: float | None = None
    tipo: str | None = None
    categoria: CategoriaDespesa | None = None
    responsaveis: list[str] | None = None
    comprovante: str | None = None
    descricao: str | None = None


# ==================== RESUMO ====================

class DadosMensais(BaseModel):
    """Totais de um mês do resumo."""

    mes: str  # "Jan".."Dez"
    chave: str  # "YYYY-MM"
    receitas: float = 0.0
    despesas: float = 0.0


class ResumoFinanceiro(BaseModel):
    total_receitas: float
    total_despesas: float
    saldo: float
    dados_mensais: list[DadosMensais]
