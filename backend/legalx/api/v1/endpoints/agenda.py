"""
Endpoints da Agenda.
"""

from legalx.api.v1.crud import crud_router
from legalx.core.permissions import Modulo
from legalx.models.agenda import EventoAgenda
from legalx.schemas.agenda import EventoAgendaCreate, EventoAgendaUpdate

router = crud_router(
    prefix="/agenda",
    tag="Agenda",
    modulo=Modulo.AGENDA,
    repositorio=lambda store: store.eventos,
    model=EventoAgenda,
    create_schema=EventoAgendaCreate,
    update_schema=EventoAgendaUpdate,
    recurso="Evento",
)
