"""Schemas Pydantic para validação de request/response."""

from legalx.schemas.agenda import EventoAgendaCreate, EventoAgendaUpdate
from legalx.schemas.backup import (
    BackupPayload,
    ImportacaoRequest,
    ImportacaoResultado,
    RelatorioIntegridade,
)
from legalx.schemas.base import (
    APIResponse,
    BaseSchema,
    ErrorDetail,
    ErrorResponse,
    ListResponse,
)
from legalx.schemas.dashboard import EstatisticasGerais
from legalx.schemas.documento import DocumentoCreate, DocumentoUpdate
from legalx.schemas.equipe import (
    ConviteCreate,
    ConviteCriadoResponse,
    ConviteResponse,
    ConviteToken,
    EquipeCreate,
    EquipeUpdate,
    MembroPermissoesUpdate,
    MembroResponse,
    PermissoesContexto,
    ValidacaoConviteResponse,
)
from legalx.schemas.financeiro import (
    DadosMensais,
    DespesaCreate,
    DespesaUpdate,
    ReceitaCreate,
    ReceitaUpdate,
    ResumoFinanceiro,
)
from legalx.schemas.pessoal import (
    AdvogadoCreate,
    AdvogadoUpdate,
    FuncionarioCreate,
    FuncionarioUpdate,
)
from legalx.schemas.processo import ProcessoCreate, ProcessoUpdate

__all__ = [
    # Base
    "APIResponse",
    "BaseSchema",
    "ErrorDetail",
    "ErrorResponse",
    "ListResponse",
    # Processo
    "ProcessoCreate",
    "ProcessoUpdate",
    # Agenda
    "EventoAgendaCreate",
    "EventoAgendaUpdate",
    # Financeiro
    "ReceitaCreate",
    "ReceitaUpdate",
    "DespesaCreate",
    "DespesaUpdate",
    "DadosMensais",
    "ResumoFinanceiro",
    # Pessoal
    "AdvogadoCreate",
    "AdvogadoUpdate",
    "FuncionarioCreate",
    "FuncionarioUpdate",
    # Documento
    "DocumentoCreate",
    "DocumentoUpdate",
    # Painel
    "EstatisticasGerais",
    # Equipe
    "EquipeCreate",
    "EquipeUpdate",
    "MembroPermissoesUpdate",
    "MembroResponse",
    "ConviteCreate",
    "ConviteResponse",
    "ConviteCriadoResponse",
    "ConviteToken",
    "ValidacaoConviteResponse",
    "PermissoesContexto",
    # Backup
    "BackupPayload",
    "ImportacaoRequest",
    "ImportacaoResultado",
    "RelatorioIntegridade",
]
