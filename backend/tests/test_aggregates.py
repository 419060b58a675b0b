"""
Testes dos agregados do painel (resumo financeiro e estatísticas).
"""
from datetime import date

import pytest

from legalx.services.record_store import ScopedStore, meses_anteriores


def test_meses_anteriores_crosses_year_boundary():
    assert meses_anteriores(date(2024, 2, 15), 4) == [
        (2023, 11),
        (2023, 12),
        (2024, 1),
        (2024, 2),
    ]


@pytest.mark.asyncio
async def test_financial_summary_buckets_by_month(store: ScopedStore):
    await store.receitas.save({"data": "2024-03-05", "valor": 1000, "origem": "Honorários"})
    await store.receitas.save({"data": "2024-03-20", "valor": 500, "origem": "Consultoria"})
    await store.despesas.save({"data": "2024-04-01", "valor": 300, "tipo": "Aluguel"})
    # Fora da janela de seis meses
    await store.receitas.save({"data": "2023-01-10", "valor": 200, "origem": "Honorários"})

    resumo = await store.financial_summary(referencia=date(2024, 6, 30))

    assert resumo.total_receitas == 1700
    assert resumo.total_despesas == 300
    assert resumo.saldo == 1400

    chaves = [m.chave for m in resumo.dados_mensais]
    assert chaves == ["2024-01", "2024-02", "2024-03", "2024-04", "2024-05", "2024-06"]

    marco = resumo.dados_mensais[2]
    assert marco.mes == "Mar"
    assert marco.receitas == 1500
    assert marco.despesas == 0
    assert resumo.dados_mensais[3].despesas == 300


@pytest.mark.asyncio
async def test_financial_summary_empty_context(store: ScopedStore):
    resumo = await store.financial_summary(referencia=date(2024, 6, 30))

    assert resumo.saldo == 0
    assert len(resumo.dados_mensais) == 6
    assert all(m.receitas == 0 and m.despesas == 0 for m in resumo.dados_mensais)


@pytest.mark.asyncio
async def test_financial_summary_degrades_on_backend_failure(failing_backend, ator):
    resumo = await ScopedStore(failing_backend, ator).financial_summary(
        referencia=date(2024, 6, 30)
    )

    assert resumo.total_receitas == 0
    assert resumo.total_despesas == 0


@pytest.mark.asyncio
async def test_general_stats_counts_by_status(
    store: ScopedStore, processo_data, evento_data, advogado_data
):
    processo = await store.processos.save(processo_data)
    await store.processos.save({**processo_data, "nome": "Ação trabalhista"})
    await store.processos.update(processo.id, {"status": "concluido"})

    await store.eventos.save(evento_data)
    await store.eventos.save({**evento_data, "status": "concluido"})
    await store.eventos.save({**evento_data, "titulo": "Prazo de contestação"})

    await store.advogados.save(advogado_data)
    await store.documentos.save(
        {"tipo": "procuracao", "cliente": "Maria Oliveira", "dados": {"poderes": "gerais"}}
    )

    stats = await store.general_stats()

    assert stats.processos.total == 2
    assert stats.processos.em_andamento == 1
    assert stats.processos.concluidos == 1
    assert stats.eventos.total == 3
    assert stats.eventos.pendentes == 2
    assert stats.eventos.concluidos == 1
    assert stats.documentos == 1
    assert stats.advogados.total == 1
    assert stats.advogados.ativos == 1
    assert stats.funcionarios.total == 0


@pytest.mark.asyncio
async def test_general_stats_only_counts_active_context(store: ScopedStore, processo_data):
    await store.processos.save(processo_data)
    store.set_active_context("team-1")

    stats = await store.general_stats()

    assert stats.processos.total == 0
