"""
Contrato do backend de documentos.

O backend é um repositório hierárquico de documentos: coleções são
endereçadas por caminhos separados por "/" (ex.: "userData/<uid>/processes")
e cada documento é um dicionário identificado por um ID gerado no servidor.

Implementações devem converter falhas de infraestrutura em
BackendUnavailableError; ausência de documento nunca é erro.
"""

from abc import ABC, abstractmethod
from typing import Any, Literal, Sequence

Operador = Literal["==", "in"]
Filtro = tuple[str, Operador, Any]


class DocumentBackend(ABC):
    """Operações primitivas sobre coleções de documentos."""

    @abstractmethod
    async def list_documents(
        self,
        path: str,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Lista documentos de uma coleção.

        Quando `order_by` é informado, documentos sem o campo ficam de fora,
        como no Firestore.
        """

    @abstractmethod
    async def query(
        self,
        path: str,
        filters: Sequence[Filtro],
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Lista documentos que atendem a todos os filtros."""

    @abstractmethod
    async def get(self, path: str, doc_id: str) -> dict[str, Any] | None:
        """Busca um documento; retorna None se não existir."""

    @abstractmethod
    async def add(self, path: str, data: dict[str, Any]) -> str:
        """Cria documento com ID gerado e retorna o ID."""

    @abstractmethod
    async def set(self, path: str, doc_id: str, data: dict[str, Any]) -> None:
        """Cria ou sobrescreve documento com ID conhecido."""

    @abstractmethod
    async def update(self, path: str, doc_id: str, fields: dict[str, Any]) -> bool:
        """Atualiza campos de um documento; False se não existir."""

    @abstractmethod
    async def delete(self, path: str, doc_id: str) -> bool:
        """Remove documento; False se não existir."""

    async def ping(self) -> bool:
        """Verifica se o backend responde."""
        return True


def with_id(doc_id: str, data: dict[str, Any]) -> dict[str, Any]:
    """Anexa o ID do documento aos seus dados."""
    return {**data, "id": doc_id}
