"""
Endpoints de Backup: exportação, importação e integridade.
"""

from typing import Any

from fastapi import APIRouter

from legalx.core.dependencies import ConfiguracoesAdmin, Store
from legalx.schemas.backup import ImportacaoRequest, ImportacaoResultado, RelatorioIntegridade
from legalx.schemas.base import APIResponse
from legalx.services.backup_service import BackupService

router = APIRouter(prefix="/backup", tags=["Backup"])


@router.get("/exportar", response_model=APIResponse[dict[str, Any]])
async def exportar_backup(store: Store):
    """Arquivo JSON com todas as coleções do contexto ativo."""
    dados = await BackupService(store).exportar()
    return APIResponse(success=True, data=dados)


@router.post("/importar", response_model=APIResponse[ImportacaoResultado])
async def importar_backup(
    request: ImportacaoRequest,
    store: Store,
    gate: ConfiguracoesAdmin,
):
    """
    Substitui as coleções presentes no arquivo.

    Exige `confirmar=true`. A resposta traz a cópia dos dados anteriores.
    """
    resultado = await BackupService(store).importar(request.dados, confirmar=request.confirmar)
    return APIResponse(
        success=not resultado.falhas,
        data=resultado,
        message="Dados importados com sucesso" if not resultado.falhas else None,
    )


@router.get("/integridade", response_model=APIResponse[RelatorioIntegridade])
async def verificar_integridade(store: Store):
    """Registros incompletos ou inválidos do contexto ativo."""
    relatorio = await BackupService(store).verificar_integridade()
    return APIResponse(success=True, data=relatorio)
