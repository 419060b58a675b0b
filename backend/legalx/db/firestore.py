"""
Backend de documentos sobre o Cloud Firestore.

Usa o cliente assíncrono do Firebase Admin SDK. Erros de API do Google
são convertidos em BackendUnavailableError.
"""

from typing import Any, Sequence

import structlog
from firebase_admin import firestore_async
from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from legalx.core.exceptions import BackendUnavailableError
from legalx.core.firebase_auth import get_firebase_app
from legalx.db.base import DocumentBackend, Filtro, with_id

logger = structlog.get_logger()

_BACKEND_ERRORS = (gcp_exceptions.GoogleAPICallError, gcp_exceptions.RetryError)


class FirestoreBackend(DocumentBackend):
    """
    DocumentBackend para Firestore.

    Uso:
        backend = FirestoreBackend()
        doc_id = await backend.add("userData/uid/processes", {...})
    """

    def __init__(self, client: firestore.AsyncClient | None = None):
        self._client = client

    @property
    def client(self) -> firestore.AsyncClient:
        """Inicializa cliente sob demanda."""
        if self._client is None:
            self._client = firestore_async.client(get_firebase_app())
        return self._client

    def _ordered(self, query, order_by: str | None, descending: bool):
        if order_by is None:
            return query
        direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
        return query.order_by(order_by, direction=direction)

    async def list_documents(
        self,
        path: str,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        query = self._ordered(self.client.collection(path), order_by, descending)
        try:
            return [with_id(snap.id, snap.to_dict()) async for snap in query.stream()]
        except _BACKEND_ERRORS as e:
            raise BackendUnavailableError("list", str(e)) from e

    async def query(
        self,
        path: str,
        filters: Sequence[Filtro],
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        query = self.client.collection(path)
        for field, op, value in filters:
            query = query.where(filter=FieldFilter(field, op, value))
        query = self._ordered(query, order_by, descending)
        try:
            return [with_id(snap.id, snap.to_dict()) async for snap in query.stream()]
        except _BACKEND_ERRORS as e:
            raise BackendUnavailableError("query", str(e)) from e

    async def get(self, path: str, doc_id: str) -> dict[str, Any] | None:
        try:
            snap = await self.client.collection(path).document(doc_id).get()
        except _BACKEND_ERRORS as e:
            raise BackendUnavailableError("get", str(e)) from e
        if not snap.exists:
            return None
        return with_id(snap.id, snap.to_dict())

    async def add(self, path: str, data: dict[str, Any]) -> str:
        try:
            _, doc_ref = await self.client.collection(path).add(data)
        except _BACKEND_ERRORS as e:
            raise BackendUnavailableError("add", str(e)) from e
        return doc_ref.id

    async def set(self, path: str, doc_id: str, data: dict[str, Any]) -> None:
        try:
            await self.client.collection(path).document(doc_id).set(data)
        except _BACKEND_ERRORS as e:
            raise BackendUnavailableError("set", str(e)) from e

    async def update(self, path: str, doc_id: str, fields: dict[str, Any]) -> bool:
        try:
            await self.client.collection(path).document(doc_id).update(fields)
        except gcp_exceptions.NotFound:
            return False
        except _BACKEND_ERRORS as e:
            raise BackendUnavailableError("update", str(e)) from e
        return True

    async def delete(self, path: str, doc_id: str) -> bool:
        # Firestore não informa se o documento existia
        doc_ref = self.client.collection(path).document(doc_id)
        try:
            snap = await doc_ref.get()
            if not snap.exists:
                return False
            await doc_ref.delete()
        except _BACKEND_ERRORS as e:
            raise BackendUnavailableError("delete", str(e)) from e
        return True

    async def ping(self) -> bool:
        try:
            async for _ in self.client.collections():
                break
        except _BACKEND_ERRORS as e:
            logger.warning("Firestore indisponível", error=str(e))
            return False
        return True
