"""
Endpoints de contexto: contextos disponíveis e permissões no contexto ativo.
"""

from fastapi import APIRouter

from legalx.core.dependencies import Equipes, Gate, TeamID
from legalx.core.permissions import Modulo
from legalx.schemas.base import APIResponse
from legalx.schemas.equipe import ContextoDisponivel, PermissoesContexto, PermissoesModulo

router = APIRouter(prefix="/contexto", tags=["Contexto"])


@router.get("", response_model=APIResponse[list[ContextoDisponivel]])
async def listar_contextos(service: Equipes):
    """Modo solo e equipes em que o usuário é proprietário ou membro ativo."""
    contextos = await service.contextos_disponiveis()
    return APIResponse(success=True, data=contextos)


@router.get("/permissoes", response_model=APIResponse[PermissoesContexto])
async def permissoes_do_contexto(team_id: TeamID, gate: Gate):
    """
    Papel e capacidades por módulo no contexto do cabeçalho X-Team-Id.

    A interface usa a resposta para esconder ações não permitidas.
    """
    modulos = []
    for modulo in Modulo:
        caps = gate.capabilities(modulo)
        modulos.append(
            PermissoesModulo(
                modulo=modulo.value,
                pode_visualizar=caps.pode_visualizar,
                pode_criar=caps.pode_criar,
                pode_editar=caps.pode_editar,
                pode_excluir=caps.pode_excluir,
            )
        )

    return APIResponse(
        success=True,
        data=PermissoesContexto(team_id=team_id, papel=gate.papel, modulos=modulos),
    )
