"""
Service de Backup.

Exporta o contexto ativo para um arquivo JSON, importa um arquivo
substituindo as coleções presentes e verifica a integridade dos dados.
"""

from datetime import datetime, timezone
from typing import Any

import structlog

from legalx.core.config import settings
from legalx.core.exceptions import (
    AuthenticationError,
    BackendUnavailableError,
    ValidationError,
)
from legalx.repositories import Contexto
from legalx.schemas.backup import (
    ENTIDADES_BACKUP,
    BackupPayload,
    ImportacaoResultado,
    ProblemaIntegridade,
    RelatorioIntegridade,
)
from legalx.services.record_store import ScopedStore

logger = structlog.get_logger()


class BackupService:
    """
    Service de exportação e importação do contexto ativo.

    A importação não mescla campos: cada coleção presente no arquivo é
    substituída por inteiro. Uma cópia do estado anterior é sempre
    devolvida ao chamador.
    """

    def __init__(self, store: ScopedStore):
        self._store = store

    async def exportar(self) -> dict[str, Any]:
        """Gera o arquivo de backup do contexto ativo."""
        return await self._exportar(self._store.contexto())

    async def _exportar(self, contexto: Contexto) -> dict[str, Any]:
        repositorios = self._store.repositorios()

        dados: dict[str, Any] = {
            "versao": settings.BACKUP_FORMAT_VERSION,
            "exportado_em": datetime.now(timezone.utc).isoformat(),
        }
        for nome in ENTIDADES_BACKUP:
            registros = await repositorios[nome].get_all(contexto)
            dados[nome] = [r.model_dump(mode="json") for r in registros]

        logger.info(
            "Backup exportado",
            team_id=contexto.team_id,
            totais={nome: len(dados[nome]) for nome in ENTIDADES_BACKUP},
        )
        return dados

    async def importar(
        self,
        dados: BackupPayload | dict[str, Any],
        confirmar: bool = False,
    ) -> ImportacaoResultado:
        """
        Substitui as coleções presentes no arquivo.

        Raises:
            ValidationError: sem confirmação ou com registro inválido
        """
        if not confirmar:
            raise ValidationError(
                "Confirme a importação: os dados atuais serão substituídos",
                field="confirmar",
            )

        payload = (
            dados if isinstance(dados, BackupPayload) else BackupPayload.model_validate(dados)
        )
        if payload.versao != settings.BACKUP_FORMAT_VERSION:
            logger.warning(
                "Versão de backup diferente da atual",
                versao=payload.versao,
                esperada=settings.BACKUP_FORMAT_VERSION,
            )

        contexto = self._store.contexto()
        if contexto.uid is None:
            raise AuthenticationError()
        repositorios = self._store.repositorios()
        presentes = {
            nome: getattr(payload, nome)
            for nome in ENTIDADES_BACKUP
            if getattr(payload, nome) is not None
        }

        # Nada é removido se algum registro do arquivo for inválido
        for nome, registros in presentes.items():
            repositorios[nome].validar_lote(registros)

        anterior = await self._exportar(contexto)

        resultado = ImportacaoResultado(backup_anterior=anterior)
        for nome, registros in presentes.items():
            try:
                resultado.importados[nome] = await repositorios[nome].replace_all(
                    registros, contexto
                )
            except BackendUnavailableError as e:
                logger.error("Erro ao importar coleção", entidade=nome, error=e.message)
                resultado.falhas[nome] = len(registros)

        logger.info(
            "Backup importado",
            team_id=contexto.team_id,
            importados=resultado.importados,
            falhas=resultado.falhas,
        )
        return resultado

    async def verificar_integridade(self) -> RelatorioIntegridade:
        """Lista registros incompletos ou inválidos do contexto ativo."""
        contexto = self._store.contexto()
        problemas: list[ProblemaIntegridade] = []
        total = 0

        for nome, repositorio in self._store.repositorios().items():
            total += len(await repositorio.get_all(contexto))
            for doc_id, mensagens in await repositorio.verificar(contexto):
                problemas.append(
                    ProblemaIntegridade(entidade=nome, id=doc_id, problemas=mensagens)
                )

        return RelatorioIntegridade(
            valido=not problemas,
            total_registros=total + len(problemas),
            problemas=problemas,
        )
