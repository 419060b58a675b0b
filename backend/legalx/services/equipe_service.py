"""
Service de Equipes.

Gerencia equipes, membros e convites, e resolve o papel do usuário no
contexto de equipe para o Permission Gate.
"""

import enum
import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import timedelta
from urllib.parse import urlencode

import structlog

from legalx.core.config import settings
from legalx.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BusinessRuleError,
    PermissionDeniedError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    TenantAccessError,
    ValidationError,
)
from legalx.core.permissions import Acao, Modulo, PermissionGate, permissoes_padrao
from legalx.core.security import Ator
from legalx.db.base import DocumentBackend
from legalx.models.base import utcnow
from legalx.models.equipe import (
    ConfiguracoesEquipe,
    ConviteEquipe,
    Equipe,
    MembroEquipe,
    Papel,
    StatusConvite,
    StatusMembro,
)
from legalx.repositories import ConviteRepository, EquipeRepository, MembroRepository
from legalx.schemas.equipe import (
    ContextoDisponivel,
    ConviteCreate,
    EquipeCreate,
    EquipeUpdate,
)

logger = structlog.get_logger()


class ResultadoConvite(str, enum.Enum):
    """Desfechos de validação e aceite de convite."""

    VALIDO = "valido"
    NAO_ENCONTRADO = "nao_encontrado"
    TOKEN_INVALIDO = "token_invalido"
    EXPIRADO = "expirado"
    INDISPONIVEL = "indisponivel"
    EMAIL_DIVERGENTE = "email_divergente"
    JA_MEMBRO = "ja_membro"
    ACEITO = "aceito"


MENSAGENS_CONVITE = {
    ResultadoConvite.NAO_ENCONTRADO: "Convite não encontrado",
    ResultadoConvite.TOKEN_INVALIDO: "Token inválido",
    ResultadoConvite.EXPIRADO: "Convite expirado",
    ResultadoConvite.INDISPONIVEL: "Convite não está disponível",
    ResultadoConvite.EMAIL_DIVERGENTE: (
        "Este convite foi enviado para outro e-mail. Faça login com o e-mail correto."
    ),
    ResultadoConvite.JA_MEMBRO: "Você já é membro desta equipe",
    ResultadoConvite.ACEITO: "Convite aceito com sucesso!",
}

MENSAGENS_STATUS = {
    StatusConvite.ACCEPTED: "Convite já foi aceito",
    StatusConvite.EXPIRED: "Convite expirado",
    StatusConvite.CANCELLED: "Convite cancelado",
    StatusConvite.REVOKED: "Convite revogado",
}


@dataclass
class ValidacaoConvite:
    resultado: ResultadoConvite
    convite: ConviteEquipe | None = None
    membro: MembroEquipe | None = None
    mensagem: str | None = None

    @property
    def valido(self) -> bool:
        return self.resultado in (ResultadoConvite.VALIDO, ResultadoConvite.ACEITO)

    def __post_init__(self):
        if self.mensagem is None:
            self.mensagem = MENSAGENS_CONVITE.get(self.resultado)


def hash_token(token: str) -> str:
    """SHA-256 do token; o token em si nunca é gravado."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def gerar_link_convite(invite_id: str, token: str) -> str:
    """Link de aceite enviado ao convidado."""
    query = urlencode({"inviteId": invite_id, "token": token})
    return f"{settings.FRONTEND_URL}/aceitar?{query}"


class EquipeService:
    """
    Service para equipes, membros e convites.

    Checagens de papel (módulo equipe) ficam na camada HTTP; aqui ficam as
    regras de negócio, inclusive o limite de concessão de permissões.
    """

    def __init__(self, backend: DocumentBackend, ator: Ator | None):
        self._ator = ator
        self._equipes = EquipeRepository(backend)
        self._membros = MembroRepository(backend)
        self._convites = ConviteRepository(backend)

    def _exigir_ator(self) -> Ator:
        if self._ator is None:
            raise AuthenticationError()
        return self._ator

    async def _get_equipe(self, team_id: str) -> Equipe:
        equipe = await self._equipes.get_by_id(team_id)
        if equipe is None:
            raise ResourceNotFoundError("Equipe", team_id)
        return equipe

    # === EQUIPES ===

    async def criar_equipe(self, dados: EquipeCreate) -> Equipe:
        """Cria a equipe e o vínculo do criador como proprietário."""
        ator = self._exigir_ator()
        agora = utcnow()
        configuracoes = dados.configuracoes or ConfiguracoesEquipe()

        equipe = await self._equipes.create(
            nome=dados.nome,
            owner_uid=ator.uid,
            email=dados.email,
            cpf_cnpj=dados.cpf_cnpj,
            oab=dados.oab,
            area_atuacao=dados.area_atuacao,
            configuracoes=configuracoes.model_dump(mode="json"),
            created_at=agora,
        )
        await self._membros.create(
            uid=ator.uid,
            email=ator.email or "",
            team_id=equipe.id,
            papel=Papel.OWNER.value,
            permissoes=permissoes_padrao(Papel.OWNER),
            status=StatusMembro.ACTIVE.value,
            added_at=agora,
            added_by=ator.uid,
        )

        logger.info("Equipe criada", team_id=equipe.id, owner_uid=ator.uid)
        return equipe

    async def listar_equipes_do_usuario(self) -> list[Equipe]:
        """Equipes em que o usuário é proprietário ou membro ativo."""
        ator = self._exigir_ator()
        proprias = await self._equipes.get_by_owner(ator.uid)
        vinculos = await self._membros.list_active_by_user(ator.uid)

        ids_proprias = {e.id for e in proprias}
        outras = await self._equipes.get_many(
            [v.team_id for v in vinculos if v.team_id not in ids_proprias]
        )
        return sorted(proprias + outras, key=lambda e: e.nome.lower())

    async def atualizar_equipe(self, team_id: str, dados: EquipeUpdate) -> Equipe:
        """Atualiza dados cadastrais e configurações; campos nulos são ignorados."""
        equipe = await self._get_equipe(team_id)
        campos = {
            k: v
            for k, v in dados.model_dump(exclude_unset=True, mode="json").items()
            if v is not None
        }
        if "configuracoes" in campos:
            campos["configuracoes"] = {
                **equipe.configuracoes.model_dump(mode="json"),
                **campos["configuracoes"],
            }

        atualizada = await self._equipes.update(team_id, **campos, updated_at=utcnow())
        if atualizada is None:
            raise ResourceNotFoundError("Equipe", team_id)

        logger.info("Equipe atualizada", team_id=team_id, campos=sorted(campos))
        return atualizada

    async def contextos_disponiveis(self) -> list[ContextoDisponivel]:
        """Contexto solo seguido das equipes acessíveis."""
        ator = self._exigir_ator()
        contextos = [
            ContextoDisponivel(
                tipo="solo", nome=ator.nome or "Meu escritório", papel=Papel.OWNER
            )
        ]
        for equipe in await self.listar_equipes_do_usuario():
            gate = await self.resolver_gate(equipe.id, equipe=equipe)
            contextos.append(
                ContextoDisponivel(
                    tipo="equipe", team_id=equipe.id, nome=equipe.nome, papel=gate.papel
                )
            )
        return contextos

    async def resolver_gate(
        self,
        team_id: str | None,
        equipe: Equipe | None = None,
    ) -> PermissionGate:
        """
        Papel do usuário no contexto.

        Solo e dono da equipe resolvem para OWNER; demais usuários precisam
        de vínculo ativo.

        Raises:
            TenantAccessError: equipe inexistente ou usuário sem vínculo ativo
        """
        ator = self._exigir_ator()
        if team_id is None:
            return PermissionGate.solo()

        equipe = equipe or await self._equipes.get_by_id(team_id)
        if equipe is None:
            raise TenantAccessError(team_id)
        if equipe.owner_uid == ator.uid:
            return PermissionGate(Papel.OWNER)

        membro = await self._membros.get_active_member(team_id, ator.uid)
        if membro is None:
            logger.warning("Acesso negado à equipe", team_id=team_id, uid=ator.uid)
            raise TenantAccessError(team_id)

        await self._membros.touch(membro.id)
        return PermissionGate.para_membro(membro)

    # === MEMBROS ===

    async def listar_membros(self, team_id: str) -> list[MembroEquipe]:
        await self._get_equipe(team_id)
        return await self._membros.list_by_team(team_id)

    async def _get_membro(self, team_id: str, membro_id: str) -> MembroEquipe:
        membro = await self._membros.get_by_id(membro_id)
        if membro is None or membro.team_id != team_id:
            raise ResourceNotFoundError("Membro", membro_id)
        return membro

    async def atualizar_permissoes_membro(
        self,
        team_id: str,
        membro_id: str,
        permissoes: dict[str, bool],
        papel: Papel | None = None,
        gate: PermissionGate | None = None,
    ) -> MembroEquipe:
        """
        Troca o papel do membro e/ou sobrescreve a tabela de papéis por módulo.

        Com troca de papel, as permissões voltam ao padrão do novo papel antes
        de aplicar `permissoes`.

        Raises:
            AuthorizationError: o usuário tenta alterar o próprio vínculo
            PermissionDeniedError: libera módulo que o próprio usuário não possui
        """
        ator = self._exigir_ator()
        validos = {m.value for m in Modulo}
        desconhecidos = sorted(set(permissoes) - validos)
        if desconhecidos:
            raise ValidationError(
                f"Módulo desconhecido: {', '.join(desconhecidos)}",
                field="permissoes",
            )
        if papel is Papel.OWNER:
            raise ValidationError("Não é possível promover a proprietário", field="papel")

        gate = gate or await self.resolver_gate(team_id)
        membro = await self._get_membro(team_id, membro_id)
        if membro.papel is Papel.OWNER:
            raise BusinessRuleError("Permissões do proprietário não podem ser alteradas")
        if membro.uid == ator.uid:
            logger.warning(
                "Tentativa de alterar o próprio vínculo", team_id=team_id, uid=ator.uid
            )
            raise AuthorizationError("Você não pode alterar as próprias permissões")

        base = permissoes_padrao(papel) if papel is not None else membro.permissoes
        liberados = {m for m, v in permissoes.items() if v}
        if papel is not None:
            liberados |= {m for m, v in base.items() if v}
        for modulo in sorted(liberados):
            if not gate.has_permission(modulo):
                logger.warning(
                    "Concessão acima do próprio papel",
                    team_id=team_id,
                    uid=ator.uid,
                    modulo=modulo,
                )
                raise PermissionDeniedError(modulo, Acao.EDITAR.value)

        campos: dict = {"permissoes": {**base, **permissoes}}
        if papel is not None:
            campos["papel"] = papel.value

        atualizado = await self._membros.update(membro_id, **campos)
        if atualizado is None:
            raise ResourceNotFoundError("Membro", membro_id)

        logger.info(
            "Permissões do membro atualizadas",
            team_id=team_id,
            membro_id=membro_id,
            papel=atualizado.papel.value,
        )
        return atualizado

    async def remover_membro(self, team_id: str, membro_id: str) -> None:
        membro = await self._get_membro(team_id, membro_id)
        if membro.papel is Papel.OWNER:
            raise BusinessRuleError("O proprietário não pode ser removido da equipe")

        await self._membros.delete(membro_id)
        logger.info("Membro removido", team_id=team_id, membro_id=membro_id, uid=membro.uid)

    # === CONVITES ===

    async def criar_convite(
        self,
        team_id: str,
        dados: ConviteCreate,
    ) -> tuple[ConviteEquipe, str]:
        """
        Cria convite de uso único.

        Returns:
            Convite gravado e o token em texto puro (exibido uma única vez)
        """
        ator = self._exigir_ator()
        equipe = await self._get_equipe(team_id)
        email = dados.email.strip().lower()

        if not equipe.configuracoes.permitir_convites:
            raise BusinessRuleError("Esta equipe não aceita novos convites")

        membros = await self._membros.list_by_team(team_id)
        if equipe.configuracoes.max_membros is not None:
            ativos = [m for m in membros if m.status is StatusMembro.ACTIVE]
            if len(ativos) >= equipe.configuracoes.max_membros:
                raise BusinessRuleError("Limite de membros da equipe atingido")

        if any(m.email.lower() == email for m in membros):
            raise ResourceAlreadyExistsError("Este e-mail já pertence a um membro da equipe")
        if await self._convites.find_pending(team_id, email):
            raise ResourceAlreadyExistsError("Já existe um convite pendente para este e-mail")

        token = secrets.token_urlsafe(32)
        agora = utcnow()
        convite = await self._convites.create(
            email=email,
            team_id=team_id,
            papel=dados.papel.value,
            token_hash=hash_token(token),
            status=StatusConvite.PENDING.value,
            expires_at=agora + timedelta(hours=settings.INVITE_EXPIRATION_HOURS),
            created_at=agora,
            created_by=ator.uid,
        )

        logger.info(
            "Convite criado", team_id=team_id, convite_id=convite.id, papel=dados.papel.value
        )
        return convite, token

    async def listar_convites(self, team_id: str) -> list[ConviteEquipe]:
        await self._get_equipe(team_id)
        return await self._convites.list_by_team(team_id)

    async def validar_convite(self, invite_id: str, token: str) -> ValidacaoConvite:
        """Verifica existência, token, validade e status, nessa ordem."""
        convite = await self._convites.get_by_id(invite_id)
        if convite is None:
            return ValidacaoConvite(ResultadoConvite.NAO_ENCONTRADO)

        if not hmac.compare_digest(hash_token(token), convite.token_hash):
            logger.warning("Token de convite inválido", convite_id=invite_id)
            return ValidacaoConvite(ResultadoConvite.TOKEN_INVALIDO)

        if utcnow() > convite.expires_at:
            if convite.status is StatusConvite.PENDING:
                expirado = await self._convites.set_status(invite_id, StatusConvite.EXPIRED)
                convite = expirado or convite
            return ValidacaoConvite(ResultadoConvite.EXPIRADO, convite=convite)

        if convite.status is not StatusConvite.PENDING:
            return ValidacaoConvite(
                ResultadoConvite.INDISPONIVEL,
                convite=convite,
                mensagem=MENSAGENS_STATUS.get(convite.status),
            )

        return ValidacaoConvite(ResultadoConvite.VALIDO, convite=convite)

    async def aceitar_convite(self, invite_id: str, token: str) -> ValidacaoConvite:
        """Valida o convite e vincula o usuário à equipe com o papel convidado."""
        ator = self._exigir_ator()
        validacao = await self.validar_convite(invite_id, token)
        if not validacao.valido:
            return validacao

        convite = validacao.convite
        if not ator.email or ator.email.lower() != convite.email:
            return ValidacaoConvite(ResultadoConvite.EMAIL_DIVERGENTE, convite=convite)

        if await self._membros.get_member(convite.team_id, ator.uid):
            return ValidacaoConvite(ResultadoConvite.JA_MEMBRO, convite=convite)

        agora = utcnow()
        membro = await self._membros.create(
            uid=ator.uid,
            email=ator.email,
            team_id=convite.team_id,
            papel=convite.papel.value,
            permissoes=permissoes_padrao(convite.papel),
            status=StatusMembro.ACTIVE.value,
            added_at=agora,
            added_by=convite.created_by,
            last_active_at=agora,
        )
        convite = await self._convites.set_status(
            invite_id, StatusConvite.ACCEPTED, used_at=agora, accepted_by=ator.uid
        ) or convite

        logger.info(
            "Convite aceito", convite_id=invite_id, team_id=convite.team_id, uid=ator.uid
        )
        return ValidacaoConvite(ResultadoConvite.ACEITO, convite=convite, membro=membro)

    async def _alterar_status(
        self,
        team_id: str,
        invite_id: str,
        novo: StatusConvite,
        permitidos: tuple[StatusConvite, ...],
    ) -> ConviteEquipe:
        convite = await self._convites.get_by_id(invite_id)
        if convite is None or convite.team_id != team_id:
            raise ResourceNotFoundError("Convite", invite_id)
        if convite.status not in permitidos:
            raise BusinessRuleError(
                MENSAGENS_STATUS.get(convite.status, "Convite não está disponível"),
                rule="INVITATION_STATUS",
            )

        atualizado = await self._convites.set_status(invite_id, novo)
        logger.info("Status do convite alterado", convite_id=invite_id, status=novo.value)
        return atualizado or convite

    async def cancelar_convite(self, team_id: str, invite_id: str) -> ConviteEquipe:
        """Cancela convite ainda pendente."""
        return await self._alterar_status(
            team_id, invite_id, StatusConvite.CANCELLED, (StatusConvite.PENDING,)
        )

    async def revogar_convite(self, team_id: str, invite_id: str) -> ConviteEquipe:
        """Revoga definitivamente um convite pendente ou expirado."""
        return await self._alterar_status(
            team_id,
            invite_id,
            StatusConvite.REVOKED,
            (StatusConvite.PENDING, StatusConvite.EXPIRED),
        )
