"""
Repository base com escopo de contexto (solo ou equipe).

Cada repository conhece apenas o nome da sua coleção; o caminho completo
vem do Contexto capturado no início de cada operação. Assim uma troca de
contexto durante uma chamada em andamento não a redireciona.

Semântica de erro:
    - leitura com falha de backend ou sem usuário -> [] / None
    - escrita com falha de backend -> None / False
    - escrita sem usuário -> AuthenticationError
    - campos inválidos -> ValidationError
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, ClassVar, Generic, Mapping, TypeVar

import structlog
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from legalx.core.exceptions import (
    AuthenticationError,
    BackendUnavailableError,
    ValidationError,
)
from legalx.db.base import DocumentBackend, with_id
from legalx.models.base import RegistroMixin, to_document, utcnow

logger = structlog.get_logger()

ModelType = TypeVar("ModelType", bound=RegistroMixin)

# Definidos na criação; não podem mudar em update
CAMPOS_IMUTAVEIS = frozenset({"id", "user_id", "team_id", "created_at"})

_timestamp = TypeAdapter(datetime)


@dataclass(frozen=True)
class Contexto:
    """Namespace ativo: dados do usuário (solo) ou da equipe."""

    uid: str | None
    team_id: str | None = None

    @property
    def is_equipe(self) -> bool:
        return self.team_id is not None

    def path(self, collection: str) -> str:
        if self.team_id is not None:
            return f"teamData/{self.team_id}/{collection}"
        return f"userData/{self.uid}/{collection}"


def erros_pydantic(exc: PydanticValidationError) -> list[dict[str, Any]]:
    """Converte erros do Pydantic no formato da API."""
    return [
        {
            "field": ".".join(str(p) for p in err["loc"]) or None,
            "message": err["msg"],
        }
        for err in exc.errors()
    ]


class ScopedRepository(Generic[ModelType]):
    """
    Repository CRUD de uma coleção do escritório.

    Uso:
        class ProcessoRepository(ScopedRepository[Processo]):
            collection = "processes"
            model = Processo
            base_model = ProcessoBase
            order_by = "created_at"
            descending = True
    """

    collection: ClassVar[str]
    model: ClassVar[type[RegistroMixin]]
    base_model: ClassVar[type[BaseModel]]
    order_by: ClassVar[str] = "created_at"
    descending: ClassVar[bool] = True
    resource_name: ClassVar[str] = "Registro"

    def __init__(self, backend: DocumentBackend, contexto: Callable[[], Contexto]):
        self.backend = backend
        self._contexto = contexto

    # ---------- contexto ----------

    def _resolver(self, contexto: Contexto | None) -> Contexto:
        return contexto if contexto is not None else self._contexto()

    def _exigir_usuario(self, contexto: Contexto | None) -> Contexto:
        contexto = self._resolver(contexto)
        if contexto.uid is None:
            raise AuthenticationError()
        return contexto

    # ---------- conversão ----------

    def _validar(self, dados: Mapping[str, Any] | BaseModel) -> BaseModel:
        if isinstance(dados, BaseModel):
            dados = dados.model_dump()
        try:
            return self.base_model.model_validate(dados)
        except PydanticValidationError as e:
            erros = erros_pydantic(e)
            raise ValidationError(
                f"Dados inválidos para {self.resource_name}",
                field=erros[0]["field"] if erros else None,
                errors=erros,
            ) from e

    def _parse(self, doc: dict[str, Any], path: str) -> ModelType | None:
        try:
            return self.model.model_validate(doc)
        except PydanticValidationError as e:
            logger.warning(
                "Documento ignorado por formato inválido",
                path=path,
                doc_id=doc.get("id"),
                errors=len(e.errors()),
            )
            return None

    def _carimbar(self, contexto: Contexto, dados: BaseModel) -> dict[str, Any]:
        doc = to_document(dados)
        doc["user_id"] = contexto.uid
        doc["created_at"] = utcnow()
        if contexto.is_equipe:
            doc["team_id"] = contexto.team_id
        return doc

    # ---------- leitura ----------

    async def get_all(self, contexto: Contexto | None = None) -> list[ModelType]:
        """Lista os registros do contexto na ordem da coleção."""
        contexto = self._resolver(contexto)
        if contexto.uid is None:
            logger.warning("Listagem sem usuário autenticado", collection=self.collection)
            return []

        path = contexto.path(self.collection)
        try:
            docs = await self.backend.list_documents(
                path, order_by=self.order_by, descending=self.descending
            )
        except BackendUnavailableError as e:
            logger.error("Erro ao listar registros", path=path, error=e.message)
            return []

        registros = (self._parse(doc, path) for doc in docs)
        return [r for r in registros if r is not None]

    async def get_by_id(
        self,
        id: str,
        contexto: Contexto | None = None,
    ) -> ModelType | None:
        """Busca registro por ID no contexto ativo."""
        contexto = self._resolver(contexto)
        if contexto.uid is None:
            return None

        path = contexto.path(self.collection)
        try:
            doc = await self.backend.get(path, id)
        except BackendUnavailableError as e:
            logger.error("Erro ao buscar registro", path=path, id=id, error=e.message)
            return None
        return self._parse(doc, path) if doc else None

    # ---------- escrita ----------

    async def save(
        self,
        dados: Mapping[str, Any] | BaseModel,
        contexto: Contexto | None = None,
    ) -> ModelType | None:
        """Cria registro com ID gerado e metadados do contexto."""
        contexto = self._exigir_usuario(contexto)
        validado = self._validar(dados)
        doc = self._carimbar(contexto, validado)

        path = contexto.path(self.collection)
        try:
            doc_id = await self.backend.add(path, doc)
        except BackendUnavailableError as e:
            logger.error("Erro ao salvar registro", path=path, error=e.message)
            return None

        logger.info("Registro criado", path=path, id=doc_id)
        return self.model.model_validate(with_id(doc_id, doc))

    def validar_atualizacao(self, atual: dict[str, Any], novo: BaseModel) -> None:
        """Regras de transição; sobrescrito pelos repositories que as têm."""

    async def update(
        self,
        id: str,
        dados: Mapping[str, Any],
        contexto: Contexto | None = None,
    ) -> ModelType | None:
        """
        Atualiza campos de um registro.

        O registro mesclado é validado por inteiro; somente os campos
        enviados (normalizados) e updated_at são gravados.
        """
        contexto = self._exigir_usuario(contexto)

        imutaveis = sorted(CAMPOS_IMUTAVEIS & dados.keys())
        if imutaveis:
            raise ValidationError(
                f"Campo não pode ser alterado: {', '.join(imutaveis)}",
                field=imutaveis[0],
            )
        dados = {k: v for k, v in dados.items() if k != "updated_at"}

        path = contexto.path(self.collection)
        try:
            atual = await self.backend.get(path, id)
        except BackendUnavailableError as e:
            logger.error("Erro ao buscar registro", path=path, id=id, error=e.message)
            return None
        if atual is None:
            return None

        novo = self._validar({**atual, **dados})
        self.validar_atualizacao(atual, novo)

        normalizado = to_document(novo)
        campos = {k: normalizado[k] for k in dados if k in normalizado}
        campos["updated_at"] = utcnow()

        try:
            if not await self.backend.update(path, id, campos):
                return None
            doc = await self.backend.get(path, id)
        except BackendUnavailableError as e:
            logger.error("Erro ao atualizar registro", path=path, id=id, error=e.message)
            return None

        logger.info("Registro atualizado", path=path, id=id, fields=sorted(campos))
        return self._parse(doc, path) if doc else None

    async def delete(self, id: str, contexto: Contexto | None = None) -> bool:
        """Remove registro do contexto ativo."""
        contexto = self._exigir_usuario(contexto)
        path = contexto.path(self.collection)
        try:
            removido = await self.backend.delete(path, id)
        except BackendUnavailableError as e:
            logger.error("Erro ao remover registro", path=path, id=id, error=e.message)
            return False

        if removido:
            logger.info("Registro removido", path=path, id=id)
        return removido

    # ---------- backup ----------

    def validar_lote(self, registros: list[Mapping[str, Any]]) -> list[BaseModel]:
        """Valida todos os registros; o primeiro inválido interrompe o lote."""
        validados = []
        for posicao, registro in enumerate(registros, start=1):
            try:
                validados.append(self._validar(registro))
            except ValidationError as e:
                raise ValidationError(
                    f"{self.resource_name} {posicao}: {e.message}",
                    field=e.field,
                    errors=e.errors,
                ) from e
        return validados

    async def verificar(
        self,
        contexto: Contexto | None = None,
    ) -> list[tuple[str | None, list[str]]]:
        """
        Lista documentos gravados que não passam na validação.

        Lê os documentos brutos, sem descartar os inválidos como get_all.
        """
        contexto = self._exigir_usuario(contexto)
        docs = await self.backend.list_documents(contexto.path(self.collection))
        problemas = []
        for doc in docs:
            try:
                self.model.model_validate(doc)
            except PydanticValidationError as e:
                mensagens = [f"{err['field']}: {err['message']}" for err in erros_pydantic(e)]
                problemas.append((doc.get("id"), mensagens))
        return problemas

    async def replace_all(
        self,
        registros: list[Mapping[str, Any]],
        contexto: Contexto | None = None,
    ) -> int:
        """
        Substitui todo o conteúdo da coleção no contexto ativo.

        Todos os registros são validados antes de qualquer remoção. IDs e
        created_at do arquivo são preservados; user_id e team_id são
        carimbados de novo com o contexto ativo. Falhas de backend sobem
        como BackendUnavailableError.
        """
        contexto = self._exigir_usuario(contexto)
        validados = list(zip(registros, self.validar_lote(registros)))

        path = contexto.path(self.collection)
        existentes = await self.backend.list_documents(path)
        for doc in existentes:
            await self.backend.delete(path, doc["id"])

        for original, validado in validados:
            doc = self._carimbar(contexto, validado)
            for campo in ("created_at", "updated_at"):
                if original.get(campo):
                    try:
                        doc[campo] = _timestamp.validate_python(original[campo])
                    except PydanticValidationError:
                        logger.debug("Timestamp ignorado na importação", campo=campo)
            doc_id = original.get("id")
            if doc_id:
                await self.backend.set(path, str(doc_id), doc)
            else:
                await self.backend.add(path, doc)

        logger.info(
            "Coleção substituída",
            path=path,
            removidos=len(existentes),
            gravados=len(validados),
        )
        return len(validados)
