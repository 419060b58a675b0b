"""
Endpoints do painel inicial.
"""

from fastapi import APIRouter

from legalx.core.dependencies import Store
from legalx.schemas.base import APIResponse
from legalx.schemas.dashboard import EstatisticasGerais

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/estatisticas", response_model=APIResponse[EstatisticasGerais])
async def estatisticas_gerais(store: Store) -> APIResponse[EstatisticasGerais]:
    """Contagens de processos, eventos, documentos e pessoal."""
    estatisticas = await store.general_stats()
    return APIResponse(success=True, data=estatisticas)
