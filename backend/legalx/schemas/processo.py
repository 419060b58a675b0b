"""
Schemas de Processo.
"""

from datetime import date

from legalx.models.processo import ProcessoBase, StatusProcesso
from legalx.schemas.base import BaseSchema


class ProcessoCreate(ProcessoBase):
    """Schema para criação de processo."""


class ProcessoUpdate(BaseSchema):
    """
    Schema para atualização parcial de processo.

    A validação completa ocorre sobre o registro já mesclado.
    """

    nome: str | None = None
    numero_processo: str | None = None
    cliente: str | None = None
    parte_contraria: str | None = None
    tribunal: str | None = None
    advogados_responsaveis: list[str] | None = None
    data_inicio: date | None = None
    status: StatusProcesso | None = None
    descricao: str | None = None
    observacoes: str | None = None
    anexos: list[str] | None = None
