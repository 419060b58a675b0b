"""
Endpoints de Processos.
"""

from legalx.api.v1.crud import crud_router
from legalx.core.permissions import Modulo
from legalx.models.processo import Processo
from legalx.schemas.processo import ProcessoCreate, ProcessoUpdate

router = crud_router(
    prefix="/processos",
    tag="Processos",
    modulo=Modulo.PROCESSOS,
    repositorio=lambda store: store.processos,
    model=Processo,
    create_schema=ProcessoCreate,
    update_schema=ProcessoUpdate,
    recurso="Processo",
)
