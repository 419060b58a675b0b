"""
Schemas de Evento da agenda.
"""

from datetime import date

from legalx.models.agenda import (
    EventoAgendaBase,
    PrioridadeEvento,
    StatusEvento,
    TipoEvento,
)
from legalx.schemas.base import BaseSchema


class EventoAgendaCreate(EventoAgendaBase):
    """Schema para criação de evento."""


class EventoAgendaUpdate(BaseSchema):
    """Schema para atualização parcial de evento."""

    titulo: str | None = None
    data: date | None = None
    hora: str | None = None
    numero_processo: str | None = None
    cliente: str | None = None
    tipo: TipoEvento | None = None
    prioridade: PrioridadeEvento | None = None
    advogados: list[str] | None = None
    status: StatusEvento | None = None
    local: str | None = None
    observacoes: str | None = None
