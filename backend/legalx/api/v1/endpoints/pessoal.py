"""
Endpoints do quadro de pessoal.

Cadastro de advogados e funcionários pertence ao módulo equipe.
"""

from fastapi import APIRouter

from legalx.api.v1.crud import crud_router
from legalx.core.permissions import Modulo
from legalx.models.pessoal import Advogado, Funcionario
from legalx.schemas.pessoal import (
    AdvogadoCreate,
    AdvogadoUpdate,
    FuncionarioCreate,
    FuncionarioUpdate,
)

router = APIRouter()

router.include_router(
    crud_router(
        prefix="/advogados",
        tag="Advogados",
        modulo=Modulo.EQUIPE,
        repositorio=lambda store: store.advogados,
        model=Advogado,
        create_schema=AdvogadoCreate,
        update_schema=AdvogadoUpdate,
        recurso="Advogado",
    )
)

router.include_router(
    crud_router(
        prefix="/funcionarios",
        tag="Funcionários",
        modulo=Modulo.EQUIPE,
        repositorio=lambda store: store.funcionarios,
        model=Funcionario,
        create_schema=FuncionarioCreate,
        update_schema=FuncionarioUpdate,
        recurso="Funcionário",
    )
)
