"""
Modelo de Evento da agenda.
"""

import enum
from datetime import date

from pydantic import Field

from legalx.models.base import DocumentModel, NomesObrigatorios, RegistroMixin


class TipoEvento(str, enum.Enum):
    """Categorias de compromisso."""

    AUDIENCIA = "audiencia"
    REUNIAO_CLIENTE = "reuniao_cliente"
    PRAZO_PROCESSUAL = "prazo_processual"
    PRAZO_INTERNO = "prazo_interno"
    LIGACAO_IMPORTANTE = "ligacao_importante"
    OUTRO = "outro"


class PrioridadeEvento(str, enum.Enum):
    BAIXA = "baixa"
    MEDIA = "media"
    ALTA = "alta"
    URGENTE = "urgente"


class StatusEvento(str, enum.Enum):
    PENDENTE = "pendente"
    CONCLUIDO = "concluido"


class EventoAgendaBase(DocumentModel):
    """Campos editáveis do evento."""

    titulo: str = Field(..., min_length=1, max_length=255)
    data: date
    hora: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    numero_processo: str | None = None
    cliente: str | None = None
    tipo: TipoEvento = TipoEvento.OUTRO
    prioridade: PrioridadeEvento = PrioridadeEvento.MEDIA
    advogados: NomesObrigatorios
    status: StatusEvento = StatusEvento.PENDENTE
    local: str | None = None
    observacoes: str | None = None


class EventoAgenda(EventoAgendaBase, RegistroMixin):
    """Evento gravado."""
