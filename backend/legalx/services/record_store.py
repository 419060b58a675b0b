"""
Store de registros com escopo de contexto.

Fachada única de acesso aos dados do escritório: agrupa os repositories
por entidade, mantém o contexto ativo (solo ou equipe) e calcula os
agregados do painel.
"""

import asyncio
from datetime import date

import structlog

from legalx.core.config import settings
from legalx.core.security import Ator
from legalx.db.base import DocumentBackend
from legalx.models.agenda import StatusEvento
from legalx.models.pessoal import StatusPessoa
from legalx.models.processo import StatusProcesso
from legalx.repositories import (
    AdvogadoRepository,
    Contexto,
    DespesaRepository,
    DocumentoRepository,
    EventoAgendaRepository,
    FuncionarioRepository,
    ProcessoRepository,
    ReceitaRepository,
    ScopedRepository,
)
from legalx.schemas.dashboard import (
    ContagemEventos,
    ContagemPessoas,
    ContagemProcessos,
    EstatisticasGerais,
)
from legalx.schemas.financeiro import DadosMensais, ResumoFinanceiro

logger = structlog.get_logger()

MESES = ("Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez")


def meses_anteriores(referencia: date, quantidade: int) -> list[tuple[int, int]]:
    """(ano, mês) dos últimos `quantidade` meses até a referência, do mais antigo."""
    meses = []
    for recuo in range(quantidade - 1, -1, -1):
        total = referencia.year * 12 + (referencia.month - 1) - recuo
        meses.append((total // 12, total % 12 + 1))
    return meses


class ScopedStore:
    """
    Store do usuário autenticado no contexto ativo.

    Uso:
        store = ScopedStore(backend, ator, team_id=None)
        processos = await store.processos.get_all()
        store.set_active_context("team-123")
    """

    def __init__(
        self,
        backend: DocumentBackend,
        ator: Ator | None,
        team_id: str | None = None,
    ):
        self._backend = backend
        self._ator = ator
        self._team_id = team_id

        self.processos = ProcessoRepository(backend, self.contexto)
        self.eventos = EventoAgendaRepository(backend, self.contexto)
        self.receitas = ReceitaRepository(backend, self.contexto)
        self.despesas = DespesaRepository(backend, self.contexto)
        self.documentos = DocumentoRepository(backend, self.contexto)
        self.advogados = AdvogadoRepository(backend, self.contexto)
        self.funcionarios = FuncionarioRepository(backend, self.contexto)

    @property
    def ator(self) -> Ator | None:
        return self._ator

    @property
    def active_team_id(self) -> str | None:
        return self._team_id

    def contexto(self) -> Contexto:
        """Captura o contexto ativo no momento da chamada."""
        return Contexto(
            uid=self._ator.uid if self._ator else None,
            team_id=self._team_id,
        )

    def set_active_context(self, team_id: str | None) -> None:
        """
        Troca o contexto ativo (None = solo).

        Operações já iniciadas mantêm o contexto que capturaram.
        """
        self._team_id = team_id
        logger.info(
            "Contexto alterado",
            uid=self._ator.uid if self._ator else None,
            team_id=team_id,
        )

    def repositorios(self) -> dict[str, ScopedRepository]:
        """Repositories pelo nome usado no arquivo de backup."""
        return {
            "processos": self.processos,
            "eventos": self.eventos,
            "receitas": self.receitas,
            "despesas": self.despesas,
            "documentos": self.documentos,
            "advogados": self.advogados,
            "funcionarios": self.funcionarios,
        }

    # === AGREGADOS ===

    async def financial_summary(self, referencia: date | None = None) -> ResumoFinanceiro:
        """
        Totais de receitas e despesas e a série dos últimos meses.

        Os meses são agrupados pelo prefixo YYYY-MM da data do lançamento.
        """
        contexto = self.contexto()
        referencia = referencia or date.today()

        receitas, despesas = await asyncio.gather(
            self.receitas.get_all(contexto),
            self.despesas.get_all(contexto),
        )

        total_receitas = sum(r.valor for r in receitas)
        total_despesas = sum(d.valor for d in despesas)

        mensais: dict[str, DadosMensais] = {}
        for ano, mes in meses_anteriores(referencia, settings.MONTHLY_SUMMARY_MONTHS):
            chave = f"{ano:04d}-{mes:02d}"
            mensais[chave] = DadosMensais(mes=MESES[mes - 1], chave=chave)
        for receita in receitas:
            bucket = mensais.get(receita.data.isoformat()[:7])
            if bucket:
                bucket.receitas += receita.valor
        for despesa in despesas:
            bucket = mensais.get(despesa.data.isoformat()[:7])
            if bucket:
                bucket.despesas += despesa.valor

        return ResumoFinanceiro(
            total_receitas=total_receitas,
            total_despesas=total_despesas,
            saldo=total_receitas - total_despesas,
            dados_mensais=list(mensais.values()),
        )

    async def general_stats(self) -> EstatisticasGerais:
        """Contagens do painel no contexto ativo."""
        contexto = self.contexto()
        processos, eventos, documentos, advogados, funcionarios = await asyncio.gather(
            self.processos.get_all(contexto),
            self.eventos.get_all(contexto),
            self.documentos.get_all(contexto),
            self.advogados.get_all(contexto),
            self.funcionarios.get_all(contexto),
        )

        def contar(registros, status) -> int:
            return sum(1 for r in registros if r.status is status)

        def pessoas(registros) -> ContagemPessoas:
            ativos = contar(registros, StatusPessoa.ATIVO)
            return ContagemPessoas(
                total=len(registros), ativos=ativos, inativos=len(registros) - ativos
            )

        return EstatisticasGerais(
            processos=ContagemProcessos(
                total=len(processos),
                em_andamento=contar(processos, StatusProcesso.EM_ANDAMENTO),
                concluidos=contar(processos, StatusProcesso.CONCLUIDO),
            ),
            eventos=ContagemEventos(
                total=len(eventos),
                pendentes=contar(eventos, StatusEvento.PENDENTE),
                concluidos=contar(eventos, StatusEvento.CONCLUIDO),
            ),
            documentos=len(documentos),
            advogados=pessoas(advogados),
            funcionarios=pessoas(funcionarios),
        )
