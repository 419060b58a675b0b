"""
Endpoints financeiros: receitas, despesas e resumo mensal.
"""

from datetime import date

from fastapi import APIRouter, Query

from legalx.api.v1.crud import crud_router
from legalx.core.dependencies import Store
from legalx.core.permissions import Modulo
from legalx.models.financeiro import Despesa, Receita
from legalx.schemas.base import APIResponse
from legalx.schemas.financeiro import (
    DespesaCreate,
    DespesaUpdate,
    ReceitaCreate,
    ReceitaUpdate,
    ResumoFinanceiro,
)

router = APIRouter(prefix="/financeiro", tags=["Financeiro"])


@router.get("/resumo", response_model=APIResponse[ResumoFinanceiro])
async def resumo_financeiro(
    store: Store,
    referencia: date | None = Query(None, description="Mês final da série (padrão: hoje)"),
) -> APIResponse[ResumoFinanceiro]:
    """
    Totais do contexto ativo e a série dos últimos meses.

    Saldo = total de receitas - total de despesas.
    """
    resumo = await store.financial_summary(referencia)
    return APIResponse(success=True, data=resumo)


router.include_router(
    crud_router(
        prefix="/receitas",
        tag="Financeiro",
        modulo=Modulo.FINANCAS,
        repositorio=lambda store: store.receitas,
        model=Receita,
        create_schema=ReceitaCreate,
        update_schema=ReceitaUpdate,
        recurso="Receita",
        artigo="a",
    )
)

router.include_router(
    crud_router(
        prefix="/despesas",
        tag="Financeiro",
        modulo=Modulo.FINANCAS,
        repositorio=lambda store: store.despesas,
        model=Despesa,
        create_schema=DespesaCreate,
        update_schema=DespesaUpdate,
        recurso="Despesa",
        artigo="a",
    )
)
