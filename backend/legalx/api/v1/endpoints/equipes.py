"""
Endpoints de Equipes, Membros e Convites.

A administração de uma equipe exige permissão no módulo equipe dentro
daquela equipe; listar membros e convites basta ser membro ativo. Aceitar
ou validar um convite não depende de papel.
"""

from fastapi import APIRouter, Query, status

from legalx.core.dependencies import Backend, Equipes
from legalx.core.exceptions import InvitationError
from legalx.core.permissions import Acao, Modulo
from legalx.models.equipe import ConviteEquipe, Equipe
from legalx.schemas.base import APIResponse
from legalx.schemas.equipe import (
    ConviteCreate,
    ConviteCriadoResponse,
    ConviteResponse,
    ConviteToken,
    EquipeCreate,
    EquipeUpdate,
    MembroPermissoesUpdate,
    MembroResponse,
    ValidacaoConviteResponse,
)
from legalx.services.equipe_service import (
    EquipeService,
    ResultadoConvite,
    gerar_link_convite,
)

router = APIRouter(prefix="/equipes", tags=["Equipes"])
convites_router = APIRouter(prefix="/convites", tags=["Convites"])


def _convite_response(convite: ConviteEquipe) -> ConviteResponse:
    return ConviteResponse.model_validate(convite)


# === EQUIPES ===

@router.post("", response_model=APIResponse[Equipe], status_code=status.HTTP_201_CREATED)
async def criar_equipe(dados: EquipeCreate, service: Equipes):
    """Cria equipe; o criador passa a ser o proprietário."""
    equipe = await service.criar_equipe(dados)
    return APIResponse(success=True, data=equipe, message="Equipe criada com sucesso")


@router.get("", response_model=APIResponse[list[Equipe]])
async def listar_equipes(service: Equipes):
    """Equipes do usuário autenticado."""
    equipes = await service.listar_equipes_do_usuario()
    return APIResponse(success=True, data=equipes)


@router.patch("/{team_id}", response_model=APIResponse[Equipe])
async def atualizar_equipe(team_id: str, dados: EquipeUpdate, service: Equipes):
    """Dados cadastrais e configurações da equipe."""
    gate = await service.resolver_gate(team_id)
    gate.check(Modulo.CONFIGURACOES, Acao.EDITAR)
    equipe = await service.atualizar_equipe(team_id, dados)
    return APIResponse(success=True, data=equipe, message="Equipe atualizada com sucesso")


# === MEMBROS ===

@router.get("/{team_id}/membros", response_model=APIResponse[list[MembroResponse]])
async def listar_membros(team_id: str, service: Equipes):
    gate = await service.resolver_gate(team_id)
    membros = await gate.guard(
        service.listar_membros, Modulo.EQUIPE, Acao.VISUALIZAR
    )(team_id)
    return APIResponse(
        success=True,
        data=[MembroResponse.model_validate(m) for m in membros],
    )


@router.patch(
    "/{team_id}/membros/{membro_id}/permissoes",
    response_model=APIResponse[MembroResponse],
)
async def atualizar_permissoes(
    team_id: str,
    membro_id: str,
    dados: MembroPermissoesUpdate,
    service: Equipes,
):
    """
    Troca o papel ou libera/bloqueia módulos para um membro.

    Só é possível liberar módulos que o próprio usuário possui.
    """
    gate = await service.resolver_gate(team_id)
    gate.check(Modulo.EQUIPE, Acao.EDITAR)
    membro = await service.atualizar_permissoes_membro(
        team_id, membro_id, dados.permissoes, papel=dados.papel, gate=gate
    )
    return APIResponse(
        success=True,
        data=MembroResponse.model_validate(membro),
        message="Permissões atualizadas",
    )


@router.delete("/{team_id}/membros/{membro_id}", response_model=APIResponse[None])
async def remover_membro(team_id: str, membro_id: str, service: Equipes):
    gate = await service.resolver_gate(team_id)
    gate.check(Modulo.EQUIPE, Acao.EXCLUIR)
    await service.remover_membro(team_id, membro_id)
    return APIResponse(success=True, message="Membro removido da equipe")


# === CONVITES (administração) ===

@router.post(
    "/{team_id}/convites",
    response_model=APIResponse[ConviteCriadoResponse],
    status_code=status.HTTP_201_CREATED,
)
async def criar_convite(team_id: str, dados: ConviteCreate, service: Equipes):
    """
    Cria convite e devolve o link de aceite.

    O token só aparece nesta resposta; apenas o hash fica gravado.
    """
    gate = await service.resolver_gate(team_id)
    gate.check(Modulo.EQUIPE, Acao.CRIAR)
    convite, token = await service.criar_convite(team_id, dados)
    return APIResponse(
        success=True,
        data=ConviteCriadoResponse(
            convite=_convite_response(convite),
            token=token,
            link=gerar_link_convite(convite.id, token),
        ),
        message="Convite criado com sucesso",
    )


@router.get("/{team_id}/convites", response_model=APIResponse[list[ConviteResponse]])
async def listar_convites(team_id: str, service: Equipes):
    gate = await service.resolver_gate(team_id)
    convites = await gate.guard(
        service.listar_convites, Modulo.EQUIPE, Acao.VISUALIZAR
    )(team_id)
    return APIResponse(success=True, data=[_convite_response(c) for c in convites])


@router.post(
    "/{team_id}/convites/{invite_id}/cancelar",
    response_model=APIResponse[ConviteResponse],
)
async def cancelar_convite(team_id: str, invite_id: str, service: Equipes):
    gate = await service.resolver_gate(team_id)
    gate.check(Modulo.EQUIPE, Acao.EDITAR)
    convite = await service.cancelar_convite(team_id, invite_id)
    return APIResponse(
        success=True, data=_convite_response(convite), message="Convite cancelado"
    )


@router.post(
    "/{team_id}/convites/{invite_id}/revogar",
    response_model=APIResponse[ConviteResponse],
)
async def revogar_convite(team_id: str, invite_id: str, service: Equipes):
    gate = await service.resolver_gate(team_id)
    gate.check(Modulo.EQUIPE, Acao.EXCLUIR)
    convite = await service.revogar_convite(team_id, invite_id)
    return APIResponse(
        success=True, data=_convite_response(convite), message="Convite revogado"
    )


# === CONVITES (convidado) ===

@convites_router.get(
    "/{invite_id}/validar",
    response_model=APIResponse[ValidacaoConviteResponse],
)
async def validar_convite(
    invite_id: str,
    backend: Backend,
    token: str = Query(..., min_length=1),
):
    """Valida o link antes do login; convite expirado é marcado como tal."""
    validacao = await EquipeService(backend, None).validar_convite(invite_id, token)
    return APIResponse(
        success=validacao.valido,
        data=ValidacaoConviteResponse(
            valido=validacao.valido,
            resultado=validacao.resultado.value,
            convite=_convite_response(validacao.convite) if validacao.valido else None,
        ),
        message=validacao.mensagem,
    )


@convites_router.post("/{invite_id}/aceitar", response_model=APIResponse[MembroResponse])
async def aceitar_convite(invite_id: str, dados: ConviteToken, service: Equipes):
    """Vincula o usuário autenticado à equipe do convite."""
    validacao = await service.aceitar_convite(invite_id, dados.token)
    if validacao.resultado is not ResultadoConvite.ACEITO:
        raise InvitationError(validacao.mensagem, validacao.resultado.value)

    return APIResponse(
        success=True,
        data=MembroResponse.model_validate(validacao.membro),
        message=validacao.mensagem,
    )
