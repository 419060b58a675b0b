"""
Modelo de Processo (caso) do escritório.
"""

import enum
from datetime import date

from pydantic import Field

from legalx.models.base import DocumentModel, NomesObrigatorios, RegistroMixin


class StatusProcesso(str, enum.Enum):
    """Situação do processo. Só avança de EM_ANDAMENTO para CONCLUIDO."""

    EM_ANDAMENTO = "em_andamento"
    CONCLUIDO = "concluido"


class ProcessoBase(DocumentModel):
    """Campos editáveis do processo."""

    nome: str = Field(..., min_length=1, max_length=255)
    numero_processo: str = Field(..., min_length=1, max_length=50)
    cliente: str = Field(..., min_length=1)
    parte_contraria: str | None = None
    tribunal: str = Field(..., min_length=1)
    advogados_responsaveis: NomesObrigatorios
    data_inicio: date
    status: StatusProcesso = StatusProcesso.EM_ANDAMENTO
    descricao: str = ""
    observacoes: str | None = None
    anexos: list[str] = Field(default_factory=list)


class Processo(ProcessoBase, RegistroMixin):
    """Processo gravado."""
