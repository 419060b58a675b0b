"""
Testes dos endpoints HTTP: CRUD, contexto de equipe e permissões.
"""
from datetime import timedelta

import pytest
from httpx import AsyncClient

from legalx.core.dependencies import get_current_actor
from legalx.main import app
from legalx.models.base import utcnow
from legalx.models.equipe import Papel
from legalx.schemas.equipe import ConviteCreate, EquipeCreate
from legalx.services.equipe_service import EquipeService

API = "/api/v1"


def _autenticar_como(ator):
    """Troca o usuário autenticado do client."""

    async def override():
        return ator

    app.dependency_overrides[get_current_actor] = override


@pytest.fixture
def como_bruno(client, outro_ator):
    _autenticar_como(outro_ator)


async def _equipe_com_membro(equipe_service, outro_ator, backend, papel: Papel) -> str:
    equipe = await equipe_service.criar_equipe(EquipeCreate(nome="Souza Advogados"))
    convite, token = await equipe_service.criar_convite(
        equipe.id, ConviteCreate(email=outro_ator.email, papel=papel)
    )
    await EquipeService(backend, outro_ator).aceitar_convite(convite.id, token)
    return equipe.id


# === PROCESSOS ===

@pytest.mark.asyncio
async def test_create_and_list_processos(client: AsyncClient, processo_data):
    response = await client.post(f"{API}/processos", json=processo_data)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Processo criado com sucesso"
    processo_id = body["data"]["id"]

    response = await client.get(f"{API}/processos")
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["data"][0]["id"] == processo_id
    assert body["data"][0]["user_id"] == "user-ana"


@pytest.mark.asyncio
async def test_get_update_delete_processo(client: AsyncClient, processo_data):
    criado = (await client.post(f"{API}/processos", json=processo_data)).json()["data"]

    response = await client.get(f"{API}/processos/{criado['id']}")
    assert response.status_code == 200

    response = await client.patch(
        f"{API}/processos/{criado['id']}", json={"status": "concluido"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "concluido"

    response = await client.delete(f"{API}/processos/{criado['id']}")
    assert response.status_code == 200

    response = await client.get(f"{API}/processos/{criado['id']}")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_update_missing_processo_returns_404(client: AsyncClient):
    response = await client.patch(f"{API}/processos/nao-existe", json={"tribunal": "TRF3"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_processo_without_lawyer_rejected(client: AsyncClient, processo_data):
    response = await client.post(
        f"{API}/processos", json={**processo_data, "advogados_responsaveis": []}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_reopen_concluded_processo_rejected(client: AsyncClient, processo_data):
    criado = (await client.post(f"{API}/processos", json=processo_data)).json()["data"]
    await client.patch(f"{API}/processos/{criado['id']}", json={"status": "concluido"})

    response = await client.patch(
        f"{API}/processos/{criado['id']}", json={"status": "em_andamento"}
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"


@pytest.mark.asyncio
async def test_requires_authentication(unauthenticated_client: AsyncClient):
    response = await unauthenticated_client.get(f"{API}/processos")

    assert response.status_code == 401
    assert response.json()["success"] is False


# === OUTRAS COLEÇÕES ===

@pytest.mark.asyncio
async def test_financeiro_resumo(client: AsyncClient):
    await client.post(
        f"{API}/financeiro/receitas",
        json={"data": "2024-03-05", "valor": 1500, "origem": "Honorários"},
    )
    await client.post(
        f"{API}/financeiro/despesas",
        json={"data": "2024-03-10", "valor": 400, "tipo": "Aluguel"},
    )

    response = await client.get(f"{API}/financeiro/resumo", params={"referencia": "2024-03-31"})

    assert response.status_code == 200
    resumo = response.json()["data"]
    assert resumo["saldo"] == 1100
    assert resumo["dados_mensais"][-1] == {
        "mes": "Mar",
        "chave": "2024-03",
        "receitas": 1500,
        "despesas": 400,
    }


@pytest.mark.asyncio
async def test_advogados_and_dashboard(client: AsyncClient, advogado_data, evento_data):
    response = await client.post(f"{API}/advogados", json=advogado_data)
    assert response.status_code == 201
    await client.post(f"{API}/agenda", json=evento_data)

    response = await client.get(f"{API}/dashboard/estatisticas")

    assert response.status_code == 200
    stats = response.json()["data"]
    assert stats["advogados"]["total"] == 1
    assert stats["eventos"]["pendentes"] == 1


# === CONTEXTO DE EQUIPE ===

@pytest.mark.asyncio
async def test_team_owner_writes_in_team_namespace(
    client: AsyncClient, equipe_service, processo_data
):
    equipe = await equipe_service.criar_equipe(EquipeCreate(nome="Souza Advogados"))
    headers = {"X-Team-Id": equipe.id}

    response = await client.post(f"{API}/processos", json=processo_data, headers=headers)
    assert response.status_code == 201
    assert response.json()["data"]["team_id"] == equipe.id

    solo = await client.get(f"{API}/processos")
    assert solo.json()["total"] == 0


@pytest.mark.asyncio
async def test_viewer_can_read_but_not_write(
    client: AsyncClient, equipe_service, outro_ator, backend, processo_data
):
    team_id = await _equipe_com_membro(equipe_service, outro_ator, backend, Papel.VIEWER)
    headers = {"X-Team-Id": team_id}
    await client.post(f"{API}/processos", json=processo_data, headers=headers)

    _autenticar_como(outro_ator)

    response = await client.get(f"{API}/processos", headers=headers)
    assert response.status_code == 200
    assert response.json()["total"] == 1

    response = await client.post(f"{API}/processos", json=processo_data, headers=headers)
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "PERMISSION_DENIED"

    response = await client.get(f"{API}/processos", headers=headers)
    assert response.json()["total"] == 1


@pytest.mark.asyncio
async def test_non_member_gets_403(client: AsyncClient, equipe_service, como_bruno):
    equipe = await equipe_service.criar_equipe(EquipeCreate(nome="Souza Advogados"))

    response = await client.get(f"{API}/processos", headers={"X-Team-Id": equipe.id})

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "TEAM_ACCESS_DENIED"


@pytest.mark.asyncio
async def test_context_permissions(
    client: AsyncClient, equipe_service, outro_ator, backend, como_bruno
):
    team_id = await _equipe_com_membro(equipe_service, outro_ator, backend, Papel.EDITOR)

    response = await client.get(f"{API}/contexto/permissoes", headers={"X-Team-Id": team_id})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["papel"] == "editor"
    modulos = {m["modulo"]: m for m in data["modulos"]}
    assert modulos["processos"]["pode_criar"] is True
    assert modulos["financas"]["pode_criar"] is False
    assert modulos["financas"]["pode_visualizar"] is True

    response = await client.get(f"{API}/contexto")
    assert [c["tipo"] for c in response.json()["data"]] == ["solo", "equipe"]


@pytest.mark.asyncio
async def test_solo_context_permissions(client: AsyncClient):
    response = await client.get(f"{API}/contexto/permissoes")

    data = response.json()["data"]
    assert data["papel"] == "owner"
    assert data["team_id"] is None
    assert all(m["pode_excluir"] for m in data["modulos"])


# === EQUIPES E CONVITES ===

@pytest.mark.asyncio
async def test_invite_flow_over_http(client: AsyncClient, outro_ator):
    equipe = (await client.post(f"{API}/equipes", json={"nome": "Souza Advogados"})).json()
    team_id = equipe["data"]["id"]

    response = await client.post(
        f"{API}/equipes/{team_id}/convites",
        json={"email": outro_ator.email, "papel": "editor"},
    )
    assert response.status_code == 201
    criado = response.json()["data"]
    convite_id = criado["convite"]["id"]
    assert "token_hash" not in criado["convite"]
    assert f"inviteId={convite_id}" in criado["link"]

    response = await client.get(
        f"{API}/convites/{convite_id}/validar", params={"token": criado["token"]}
    )
    assert response.json()["data"]["resultado"] == "valido"

    _autenticar_como(outro_ator)

    response = await client.post(
        f"{API}/convites/{convite_id}/aceitar", json={"token": "token-errado"}
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVITATION_TOKEN_INVALIDO"

    response = await client.post(
        f"{API}/convites/{convite_id}/aceitar", json={"token": criado["token"]}
    )
    assert response.status_code == 200
    assert response.json()["data"]["papel"] == "editor"

    # Editor vê a equipe mas não a administra
    response = await client.get(f"{API}/equipes/{team_id}/membros")
    assert response.status_code == 200
    assert len(response.json()["data"]) == 2

    response = await client.post(
        f"{API}/equipes/{team_id}/convites",
        json={"email": "carla@escritorio.com", "papel": "viewer"},
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_accept_expired_invite_over_http(
    client: AsyncClient, equipe_service, outro_ator, backend, como_bruno
):
    equipe = await equipe_service.criar_equipe(EquipeCreate(nome="Souza Advogados"))
    convite, token = await equipe_service.criar_convite(
        equipe.id, ConviteCreate(email=outro_ator.email, papel=Papel.EDITOR)
    )
    await backend.update(
        "invitations", convite.id, {"expires_at": utcnow() - timedelta(hours=1)}
    )

    response = await client.post(f"{API}/convites/{convite.id}/aceitar", json={"token": token})

    assert response.status_code == 400
    erro = response.json()["error"]
    assert erro["code"] == "INVITATION_EXPIRADO"
    assert erro["details"]["resultado"] == "expirado"
    membros = await equipe_service.listar_membros(equipe.id)
    assert [m.uid for m in membros] == ["user-ana"]


@pytest.mark.asyncio
async def test_viewer_lists_members_and_invites(
    client: AsyncClient, equipe_service, outro_ator, backend
):
    team_id = await _equipe_com_membro(equipe_service, outro_ator, backend, Papel.VIEWER)
    _autenticar_como(outro_ator)

    response = await client.get(f"{API}/equipes/{team_id}/membros")
    assert response.status_code == 200
    assert {m["papel"] for m in response.json()["data"]} == {"owner", "viewer"}

    response = await client.get(f"{API}/equipes/{team_id}/convites")
    assert response.status_code == 200
    assert response.json()["data"][0]["status"] == "accepted"


@pytest.mark.asyncio
async def test_update_team_requires_settings_permission(
    client: AsyncClient, equipe_service, outro_ator, backend
):
    team_id = await _equipe_com_membro(equipe_service, outro_ator, backend, Papel.ADMIN)

    response = await client.patch(
        f"{API}/equipes/{team_id}",
        json={"nome": "Souza & Lima", "configuracoes": {"permitir_convites": False}},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["nome"] == "Souza & Lima"
    assert data["configuracoes"]["permitir_convites"] is False

    _autenticar_como(outro_ator)
    response = await client.patch(f"{API}/equipes/{team_id}", json={"nome": "Outro Nome"})
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "PERMISSION_DENIED"


@pytest.mark.asyncio
async def test_owner_changes_member_role(
    client: AsyncClient, equipe_service, outro_ator, backend
):
    team_id = await _equipe_com_membro(equipe_service, outro_ator, backend, Papel.VIEWER)
    membros = (await client.get(f"{API}/equipes/{team_id}/membros")).json()["data"]
    membro_id = next(m["id"] for m in membros if m["uid"] == outro_ator.uid)
    url = f"{API}/equipes/{team_id}/membros/{membro_id}/permissoes"

    response = await client.patch(url, json={"papel": "owner"})
    assert response.status_code == 422

    response = await client.patch(url, json={"papel": "editor", "permissoes": {"financas": True}})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["papel"] == "editor"
    assert data["permissoes"]["processos"] is True
    assert data["permissoes"]["financas"] is True


@pytest.mark.asyncio
async def test_admin_cannot_grant_itself_settings(
    client: AsyncClient, equipe_service, outro_ator, backend, processo_data
):
    team_id = await _equipe_com_membro(equipe_service, outro_ator, backend, Papel.ADMIN)
    headers = {"X-Team-Id": team_id}
    await client.post(f"{API}/processos", json=processo_data, headers=headers)
    _autenticar_como(outro_ator)

    membros = (await client.get(f"{API}/equipes/{team_id}/membros")).json()["data"]
    proprio_id = next(m["id"] for m in membros if m["uid"] == outro_ator.uid)
    response = await client.patch(
        f"{API}/equipes/{team_id}/membros/{proprio_id}/permissoes",
        json={"permissoes": {"configuracoes": True}},
    )
    assert response.status_code == 403

    response = await client.post(
        f"{API}/backup/importar",
        json={"dados": {"processos": []}, "confirmar": True},
        headers=headers,
    )
    assert response.status_code == 403

    response = await client.get(f"{API}/processos", headers=headers)
    assert response.json()["total"] == 1


# === AUTENTICAÇÃO ===

@pytest.mark.asyncio
async def test_dev_token_authenticates(unauthenticated_client: AsyncClient):
    response = await unauthenticated_client.post(
        f"{API}/auth/dev-token",
        json={"uid": "user-dev", "email": "Dev@Escritorio.com"},
    )
    token = response.json()["data"]["access_token"]

    response = await unauthenticated_client.get(
        f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200
    assert response.json()["data"] == {
        "uid": "user-dev",
        "email": "dev@escritorio.com",
        "nome": None,
    }


# === BACKUP ===

@pytest.mark.asyncio
async def test_backup_roundtrip_over_http(client: AsyncClient, processo_data):
    await client.post(f"{API}/processos", json=processo_data)
    exportado = (await client.get(f"{API}/backup/exportar")).json()["data"]

    response = await client.post(f"{API}/backup/importar", json={"dados": exportado})
    assert response.status_code == 422
    assert response.json()["error"]["field"] == "confirmar"

    exportado["processos"] = []
    response = await client.post(
        f"{API}/backup/importar", json={"dados": exportado, "confirmar": True}
    )
    assert response.status_code == 200
    assert len(response.json()["data"]["backup_anterior"]["processos"]) == 1
    assert (await client.get(f"{API}/processos")).json()["total"] == 0


@pytest.mark.asyncio
async def test_backup_import_requires_settings_permission(
    client: AsyncClient, equipe_service, outro_ator, backend
):
    team_id = await _equipe_com_membro(equipe_service, outro_ator, backend, Papel.ADMIN)
    _autenticar_como(outro_ator)

    response = await client.post(
        f"{API}/backup/importar",
        json={"dados": {"processos": []}, "confirmar": True},
        headers={"X-Team-Id": team_id},
    )

    assert response.status_code == 403
