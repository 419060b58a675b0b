"""
Testes do Permission Gate e da ação protegida.
"""
from datetime import datetime, timezone

import pytest

from legalx.core.exceptions import PermissionDeniedError, WriteFailedError
from legalx.core.middleware import status_for
from legalx.core.permissions import (
    AcaoProtegida,
    Acao,
    EstadoAcao,
    Modulo,
    PermissionGate,
    permissoes_padrao,
)
from legalx.models.equipe import MembroEquipe, Papel


def _membro(papel: Papel, permissoes: dict[str, bool] | None = None) -> MembroEquipe:
    return MembroEquipe(
        id="m-1",
        uid="user-bruno",
        email="bruno@escritorio.com",
        team_id="team-1",
        papel=papel,
        permissoes=permissoes or {},
        added_at=datetime.now(timezone.utc),
        added_by="user-ana",
    )


# === RESOLUÇÃO ===

def test_solo_gate_allows_everything():
    gate = PermissionGate.solo()

    assert gate.is_owner
    for modulo in Modulo:
        for acao in Acao:
            assert gate.can(modulo, acao)


def test_owner_allows_unknown_module():
    assert PermissionGate(Papel.OWNER).has_permission("relatorios_avancados")


def test_admin_has_everything_but_settings():
    gate = PermissionGate(Papel.ADMIN)

    assert gate.can(Modulo.FINANCAS, Acao.EXCLUIR)
    assert gate.can(Modulo.EQUIPE, Acao.CRIAR)
    assert not gate.has_permission(Modulo.CONFIGURACOES)


def test_editor_limited_to_operational_modules():
    gate = PermissionGate(Papel.EDITOR)

    assert gate.can(Modulo.PROCESSOS, Acao.CRIAR)
    assert gate.can(Modulo.AGENDA, Acao.EDITAR)
    assert gate.can(Modulo.DOCUMENTOS, Acao.EXCLUIR)
    assert not gate.can(Modulo.FINANCAS, Acao.CRIAR)
    assert not gate.can(Modulo.EQUIPE, Acao.EDITAR)


def test_viewer_can_only_view():
    gate = PermissionGate(Papel.VIEWER)

    for modulo in Modulo:
        assert gate.can(modulo, Acao.VISUALIZAR)
        assert not gate.has_permission(modulo)
        assert not gate.can(modulo, Acao.CRIAR)


@pytest.mark.parametrize("papel", [Papel.ADMIN, Papel.EDITOR, Papel.VIEWER])
def test_unknown_module_is_denied(papel):
    gate = PermissionGate(papel)

    assert not gate.has_permission("modulo_inexistente")
    with pytest.raises(PermissionDeniedError):
        gate.check("modulo_inexistente")


def test_member_overrides_take_precedence():
    gate = PermissionGate.para_membro(
        _membro(Papel.EDITOR, {"financas": True, "processos": False})
    )

    assert gate.can(Modulo.FINANCAS, Acao.CRIAR)
    assert not gate.can(Modulo.PROCESSOS, Acao.CRIAR)
    assert gate.can(Modulo.AGENDA, Acao.CRIAR)


def test_owner_ignores_overrides():
    gate = PermissionGate.para_membro(_membro(Papel.OWNER, {"processos": False}))

    assert gate.can(Modulo.PROCESSOS, Acao.EXCLUIR)


def test_custom_role_table():
    tabela = {Papel.VIEWER: {Modulo.AGENDA: frozenset({Acao.CRIAR})}}
    gate = PermissionGate(Papel.VIEWER, tabela=tabela)

    assert gate.can(Modulo.AGENDA, Acao.CRIAR)
    assert not gate.can(Modulo.AGENDA, Acao.EXCLUIR)


def test_capabilities():
    caps = PermissionGate(Papel.EDITOR).capabilities(Modulo.PROCESSOS)
    assert caps.pode_criar and caps.pode_editar and caps.pode_excluir
    assert caps.pode_visualizar

    caps = PermissionGate(Papel.VIEWER).capabilities(Modulo.PROCESSOS)
    assert not caps.pode_criar
    assert caps.pode_visualizar


def test_check_error_carries_module_and_action():
    with pytest.raises(PermissionDeniedError) as exc_info:
        PermissionGate(Papel.VIEWER).check(Modulo.FINANCAS, Acao.CRIAR)

    assert status_for(exc_info.value) == 403
    assert exc_info.value.details == {"modulo": "financas", "acao": "criar"}


def test_default_permissions_follow_role_table():
    assert permissoes_padrao(Papel.EDITOR) == {
        "processos": True,
        "agenda": True,
        "financas": False,
        "documentos": True,
        "relatorios": False,
        "equipe": False,
        "configuracoes": False,
    }
    assert all(permissoes_padrao(Papel.OWNER).values())


# === GUARD ===

async def _listar():
    return ["convite"]


@pytest.mark.asyncio
async def test_guard_runs_when_allowed():
    resultado = await PermissionGate(Papel.ADMIN).guard(_listar, Modulo.EQUIPE)()
    assert resultado == ["convite"]


@pytest.mark.asyncio
async def test_guard_raises_by_default():
    with pytest.raises(PermissionDeniedError):
        await PermissionGate(Papel.VIEWER).guard(_listar, Modulo.EQUIPE)()


@pytest.mark.asyncio
async def test_guard_fallback_and_silent_modes():
    gate = PermissionGate(Papel.VIEWER)

    assert await gate.guard(_listar, Modulo.EQUIPE, fallback=[])() == []
    assert await gate.guard(_listar, Modulo.EQUIPE, mostrar_mensagem=False)() is None


# === AÇÃO PROTEGIDA ===

@pytest.mark.asyncio
async def test_blocked_action_never_calls_operation():
    chamadas = []

    async def operacao():
        chamadas.append(1)
        return "ok"

    acao = AcaoProtegida(PermissionGate(Papel.VIEWER), Modulo.PROCESSOS, Acao.CRIAR)
    resultado = await acao.executar(operacao)

    assert resultado.bloqueado
    assert not resultado.sucesso
    assert resultado.aviso
    assert chamadas == []
    assert acao.estado is EstadoAcao.BLOCKED


@pytest.mark.asyncio
async def test_allowed_action_is_pending_while_running():
    acao = AcaoProtegida(PermissionGate(Papel.EDITOR), Modulo.PROCESSOS, Acao.CRIAR)
    estados = []

    async def operacao():
        estados.append(acao.estado)
        return {"id": "p-1"}

    resultado = await acao.executar(operacao)

    assert estados == [EstadoAcao.PENDING]
    assert resultado.sucesso
    assert resultado.valor == {"id": "p-1"}
    assert acao.estado is EstadoAcao.IDLE


@pytest.mark.asyncio
async def test_failed_operation_returns_warning():
    async def operacao():
        return None

    acao = AcaoProtegida(PermissionGate.solo(), Modulo.AGENDA, Acao.EDITAR)
    resultado = await acao.executar(operacao)

    assert not resultado.sucesso
    assert resultado.aviso == AcaoProtegida.AVISO_FALHA
    assert acao.estado is EstadoAcao.IDLE


@pytest.mark.asyncio
async def test_executar_ou_falhar_raises():
    async def operacao():
        return False

    bloqueada = AcaoProtegida(PermissionGate(Papel.VIEWER), Modulo.AGENDA, Acao.EXCLUIR)
    with pytest.raises(PermissionDeniedError):
        await bloqueada.executar_ou_falhar(operacao, WriteFailedError("Evento", "delete"))

    liberada = AcaoProtegida(PermissionGate.solo(), Modulo.AGENDA, Acao.EXCLUIR)
    with pytest.raises(WriteFailedError):
        await liberada.executar_ou_falhar(operacao, WriteFailedError("Evento", "delete"))
