"""
Repository de Processos.
"""

from typing import Any

from pydantic import BaseModel

from legalx.core.exceptions import InvalidStatusTransitionError
from legalx.models.processo import Processo, ProcessoBase, StatusProcesso
from legalx.repositories.base import ScopedRepository


class ProcessoRepository(ScopedRepository[Processo]):
    """Processos mais recentes primeiro."""

    collection = "processes"
    model = Processo
    base_model = ProcessoBase
    order_by = "created_at"
    descending = True
    resource_name = "Processo"

    def validar_atualizacao(self, atual: dict[str, Any], novo: BaseModel) -> None:
        # Processo concluído não volta para andamento
        if (
            atual.get("status") == StatusProcesso.CONCLUIDO.value
            and novo.status is StatusProcesso.EM_ANDAMENTO
        ):
            raise InvalidStatusTransitionError(
                StatusProcesso.CONCLUIDO.value,
                StatusProcesso.EM_ANDAMENTO.value,
            )
