"""
Controle de acesso por papel (Permission Gate).

Cada papel de equipe recebe, por módulo, o conjunto de ações de escrita
liberadas. Visualizar nunca é bloqueado dentro de um contexto que o
usuário já alcança; módulos desconhecidos são negados.

O modo solo usa o papel OWNER, que tem todas as ações em qualquer módulo,
de modo que solo e equipe passam pelo mesmo caminho de verificação.

Dois padrões de uso:
    # Envolver uma operação inteira
    listar = gate.guard(service.listar_convites, Modulo.EQUIPE)

    # Consultar dentro da operação
    caps = gate.capabilities(Modulo.PROCESSOS)
    if caps.pode_excluir: ...
"""

import enum
import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Mapping, TypeVar

import structlog

from legalx.core.exceptions import LegalXException, PermissionDeniedError
from legalx.models.equipe import MembroEquipe, Papel

logger = structlog.get_logger()

T = TypeVar("T")


class Modulo(str, enum.Enum):
    """Áreas funcionais; unidade de granularidade das permissões."""

    PROCESSOS = "processos"
    AGENDA = "agenda"
    FINANCAS = "financas"
    DOCUMENTOS = "documentos"
    RELATORIOS = "relatorios"
    EQUIPE = "equipe"
    CONFIGURACOES = "configuracoes"


class Acao(str, enum.Enum):
    VISUALIZAR = "visualizar"
    CRIAR = "criar"
    EDITAR = "editar"
    EXCLUIR = "excluir"


ESCRITA: frozenset[Acao] = frozenset({Acao.CRIAR, Acao.EDITAR, Acao.EXCLUIR})
NENHUMA: frozenset[Acao] = frozenset()

TabelaPapeis = Mapping[Papel, Mapping[Modulo, frozenset[Acao]]]

# OWNER não consta da tabela: tem todas as ações por definição
TABELA_PAPEIS: TabelaPapeis = {
    Papel.ADMIN: {m: ESCRITA for m in Modulo if m is not Modulo.CONFIGURACOES},
    Papel.EDITOR: {
        Modulo.PROCESSOS: ESCRITA,
        Modulo.AGENDA: ESCRITA,
        Modulo.DOCUMENTOS: ESCRITA,
    },
    Papel.VIEWER: {},
}


def permissoes_padrao(papel: Papel) -> dict[str, bool]:
    """Mapa módulo -> liberado, gravado no membro ao entrar na equipe."""
    if papel is Papel.OWNER:
        return {m.value: True for m in Modulo}
    liberados = TABELA_PAPEIS.get(papel, {})
    return {m.value: bool(liberados.get(m)) for m in Modulo}


def _parse_modulo(modulo: "Modulo | str") -> Modulo | None:
    if isinstance(modulo, Modulo):
        return modulo
    try:
        return Modulo(modulo)
    except ValueError:
        return None


@dataclass(frozen=True)
class Capacidades:
    """Capacidades de um módulo, derivadas uma vez por requisição."""

    pode_criar: bool
    pode_editar: bool
    pode_excluir: bool
    pode_visualizar: bool = True


class PermissionGate:
    """Resolve permissões do usuário no contexto ativo."""

    def __init__(
        self,
        papel: Papel,
        tabela: TabelaPapeis | None = None,
        overrides: Mapping[str, bool] | None = None,
    ):
        self.papel = papel
        tabela = TABELA_PAPEIS if tabela is None else tabela
        overrides = overrides or {}

        self._resolvido: dict[Modulo, frozenset[Acao]] = {}
        for modulo in Modulo:
            if papel is Papel.OWNER:
                self._resolvido[modulo] = ESCRITA
            elif modulo.value in overrides:
                self._resolvido[modulo] = ESCRITA if overrides[modulo.value] else NENHUMA
            else:
                self._resolvido[modulo] = tabela.get(papel, {}).get(modulo, NENHUMA)

    @classmethod
    def solo(cls) -> "PermissionGate":
        """Gate do modo solo: o usuário é dono do próprio namespace."""
        return cls(Papel.OWNER)

    @classmethod
    def para_membro(
        cls,
        membro: MembroEquipe,
        tabela: TabelaPapeis | None = None,
    ) -> "PermissionGate":
        return cls(membro.papel, tabela=tabela, overrides=membro.permissoes)

    @property
    def is_owner(self) -> bool:
        return self.papel is Papel.OWNER

    def acoes(self, modulo: Modulo | str) -> frozenset[Acao]:
        """Ações de escrita liberadas no módulo."""
        if self.is_owner:
            return ESCRITA
        parsed = _parse_modulo(modulo)
        if parsed is None:
            return NENHUMA
        return self._resolvido[parsed]

    def has_permission(self, modulo: Modulo | str) -> bool:
        """Verdadeiro se o papel concede ao menos uma ação no módulo."""
        return bool(self.acoes(modulo))

    def can(self, modulo: Modulo | str, acao: Acao) -> bool:
        if acao is Acao.VISUALIZAR:
            return True
        return acao in self.acoes(modulo)

    def check(self, modulo: Modulo | str, acao: Acao | None = None) -> None:
        """Levanta PermissionDeniedError se a ação não for permitida."""
        permitido = self.has_permission(modulo) if acao is None else self.can(modulo, acao)
        if not permitido:
            nome = modulo.value if isinstance(modulo, Modulo) else str(modulo)
            logger.info(
                "Permissão negada",
                papel=self.papel.value,
                modulo=nome,
                acao=acao.value if acao else None,
            )
            raise PermissionDeniedError(nome, acao.value if acao else None)

    def capabilities(self, modulo: Modulo | str) -> Capacidades:
        acoes = self.acoes(modulo)
        return Capacidades(
            pode_criar=Acao.CRIAR in acoes,
            pode_editar=Acao.EDITAR in acoes,
            pode_excluir=Acao.EXCLUIR in acoes,
        )

    def guard(
        self,
        fn: Callable[..., Awaitable[T]],
        modulo: Modulo | str,
        nivel: Acao | None = None,
        *,
        mostrar_mensagem: bool = True,
        fallback: Any = None,
    ) -> Callable[..., Awaitable[T | Any]]:
        """
        Envolve uma operação assíncrona com a verificação de permissão.

        Sem `nivel`, exige qualquer permissão no módulo. Quando negado:
        retorna `fallback` se informado; senão levanta PermissionDeniedError
        (exibido como aviso) se `mostrar_mensagem`; senão retorna None.
        """

        @functools.wraps(fn)
        async def guarded(*args: Any, **kwargs: Any) -> T | Any:
            try:
                self.check(modulo, nivel)
            except PermissionDeniedError:
                if fallback is not None:
                    return fallback
                if mostrar_mensagem:
                    raise
                return None
            return await fn(*args, **kwargs)

        return guarded


# ==================== AÇÃO PROTEGIDA ====================

class EstadoAcao(str, enum.Enum):
    IDLE = "idle"
    BLOCKED = "blocked"
    PENDING = "pending"


@dataclass
class ResultadoAcao(Generic[T]):
    estado: EstadoAcao
    sucesso: bool
    valor: T | None = None
    aviso: str | None = None

    @property
    def bloqueado(self) -> bool:
        return self.estado is EstadoAcao.BLOCKED


class AcaoProtegida:
    """
    Máquina de estados de uma escrita protegida.

    IDLE -> BLOCKED quando o papel não permite (nenhuma chamada ao Store);
    IDLE -> PENDING -> IDLE caso contrário, com sucesso ou aviso de erro.
    Não há nova tentativa automática.
    """

    AVISO_FALHA = "Não foi possível concluir a operação. Tente novamente."

    def __init__(self, gate: PermissionGate, modulo: Modulo, acao: Acao):
        self._gate = gate
        self.modulo = modulo
        self.acao = acao
        self.estado = EstadoAcao.IDLE

    async def executar(
        self,
        operacao: Callable[[], Awaitable[T | None]],
    ) -> ResultadoAcao[T]:
        if not self._gate.can(self.modulo, self.acao):
            self.estado = EstadoAcao.BLOCKED
            aviso = PermissionDeniedError(self.modulo.value, self.acao.value).message
            logger.info(
                "Ação bloqueada",
                modulo=self.modulo.value,
                acao=self.acao.value,
                papel=self._gate.papel.value,
            )
            return ResultadoAcao(estado=self.estado, sucesso=False, aviso=aviso)

        self.estado = EstadoAcao.PENDING
        try:
            valor = await operacao()
        finally:
            self.estado = EstadoAcao.IDLE

        if valor is None or valor is False:
            return ResultadoAcao(estado=self.estado, sucesso=False, aviso=self.AVISO_FALHA)
        return ResultadoAcao(estado=self.estado, sucesso=True, valor=valor)

    async def executar_ou_falhar(
        self,
        operacao: Callable[[], Awaitable[T | None]],
        falha: LegalXException,
    ) -> T:
        """Executa e converte bloqueio/falha em exceção para a camada HTTP."""
        resultado = await self.executar(operacao)
        if resultado.bloqueado:
            raise PermissionDeniedError(self.modulo.value, self.acao.value)
        if not resultado.sucesso:
            raise falha
        return resultado.valor
