"""
Repository de Eventos da agenda.
"""

from legalx.models.agenda import EventoAgenda, EventoAgendaBase
from legalx.repositories.base import ScopedRepository


class EventoAgendaRepository(ScopedRepository[EventoAgenda]):
    collection = "events"
    model = EventoAgenda
    base_model = EventoAgendaBase
    order_by = "data"
    descending = True
    resource_name = "Evento"
