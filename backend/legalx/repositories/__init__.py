"""Repositories para acesso ao backend de documentos."""

from legalx.repositories.agenda_repository import EventoAgendaRepository
from legalx.repositories.base import Contexto, ScopedRepository
from legalx.repositories.documento_repository import DocumentoRepository
from legalx.repositories.equipe_repository import (
    ConviteRepository,
    EquipeRepository,
    MembroRepository,
)
from legalx.repositories.financeiro_repository import DespesaRepository, ReceitaRepository
from legalx.repositories.pessoal_repository import AdvogadoRepository, FuncionarioRepository
from legalx.repositories.processo_repository import ProcessoRepository

__all__ = [
    "Contexto",
    "ScopedRepository",
    "ProcessoRepository",
    "EventoAgendaRepository",
    "ReceitaRepository",
    "DespesaRepository",
    "AdvogadoRepository",
    "FuncionarioRepository",
    "DocumentoRepository",
    "EquipeRepository",
    "MembroRepository",
    "ConviteRepository",
]
