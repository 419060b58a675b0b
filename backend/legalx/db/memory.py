"""
Backend de documentos em memória.

Usado em desenvolvimento (DOCUMENT_BACKEND=memory) e nos testes. Reproduz a
semântica relevante do Firestore: IDs gerados, ordenação que exclui
documentos sem o campo e cópias independentes a cada leitura.
"""

import copy
import uuid
from collections import defaultdict
from typing import Any, Sequence

from legalx.db.base import DocumentBackend, Filtro, with_id


def _matches(data: dict[str, Any], filters: Sequence[Filtro]) -> bool:
    for field, op, value in filters:
        current = data.get(field)
        if op == "==" and current != value:
            return False
        if op == "in" and current not in value:
            return False
    return True


def _sorted(
    docs: list[dict[str, Any]],
    order_by: str | None,
    descending: bool,
) -> list[dict[str, Any]]:
    if order_by is None:
        return docs
    present = [d for d in docs if d.get(order_by) is not None]
    return sorted(present, key=lambda d: d[order_by], reverse=descending)


class InMemoryBackend(DocumentBackend):
    """Coleções guardadas em dicionários por caminho."""

    def __init__(self):
        self._collections: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)

    @staticmethod
    def generate_id() -> str:
        return uuid.uuid4().hex[:20]

    async def list_documents(
        self,
        path: str,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        docs = [
            with_id(doc_id, copy.deepcopy(data))
            for doc_id, data in self._collections[path].items()
        ]
        return _sorted(docs, order_by, descending)

    async def query(
        self,
        path: str,
        filters: Sequence[Filtro],
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        docs = [
            with_id(doc_id, copy.deepcopy(data))
            for doc_id, data in self._collections[path].items()
            if _matches(data, filters)
        ]
        return _sorted(docs, order_by, descending)

    async def get(self, path: str, doc_id: str) -> dict[str, Any] | None:
        data = self._collections[path].get(doc_id)
        if data is None:
            return None
        return with_id(doc_id, copy.deepcopy(data))

    async def add(self, path: str, data: dict[str, Any]) -> str:
        doc_id = self.generate_id()
        self._collections[path][doc_id] = copy.deepcopy(data)
        return doc_id

    async def set(self, path: str, doc_id: str, data: dict[str, Any]) -> None:
        self._collections[path][doc_id] = copy.deepcopy(data)

    async def update(self, path: str, doc_id: str, fields: dict[str, Any]) -> bool:
        current = self._collections[path].get(doc_id)
        if current is None:
            return False
        current.update(copy.deepcopy(fields))
        return True

    async def delete(self, path: str, doc_id: str) -> bool:
        return self._collections[path].pop(doc_id, None) is not None

    def clear(self) -> None:
        """Remove todas as coleções."""
        self._collections.clear()
