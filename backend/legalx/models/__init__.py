"""
Modelos de documento do LegalX.

Registros do escritório (gravados no namespace do contexto ativo) e
entidades de equipe (coleções globais).
"""

from legalx.models.agenda import (
    EventoAgenda,
    PrioridadeEvento,
    StatusEvento,
    TipoEvento,
)
from legalx.models.documento import Documento, TipoDocumento
from legalx.models.equipe import (
    ConviteEquipe,
    Equipe,
    MembroEquipe,
    Papel,
    StatusConvite,
    StatusMembro,
)
from legalx.models.financeiro import (
    CategoriaDespesa,
    CategoriaReceita,
    Despesa,
    Receita,
)
from legalx.models.pessoal import Advogado, Funcionario, StatusPessoa
from legalx.models.processo import Processo, StatusProcesso

__all__ = [
    # Processo
    "Processo",
    "StatusProcesso",
    # Agenda
    "EventoAgenda",
    "TipoEvento",
    "PrioridadeEvento",
    "StatusEvento",
    # Financeiro
    "Receita",
    "Despesa",
    "CategoriaReceita",
    "CategoriaDespesa",
    # Pessoal
    "Advogado",
    "Funcionario",
    "StatusPessoa",
    # Documento
    "Documento",
    "TipoDocumento",
    # Equipe
    "Equipe",
    "MembroEquipe",
    "ConviteEquipe",
    "Papel",
    "StatusMembro",
    "StatusConvite",
]
