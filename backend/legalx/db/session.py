"""
Seleção do backend de documentos.

O backend é criado uma vez por processo e compartilhado entre requisições.
"""

from functools import lru_cache

import structlog

from legalx.core.config import settings
from legalx.db.base import DocumentBackend

logger = structlog.get_logger()


@lru_cache
def get_document_backend() -> DocumentBackend:
    """Retorna o backend configurado em DOCUMENT_BACKEND."""
    if settings.DOCUMENT_BACKEND == "memory":
        from legalx.db.memory import InMemoryBackend

        logger.warning("Usando backend em memória; dados não serão persistidos")
        return InMemoryBackend()

    from legalx.db.firestore import FirestoreBackend

    return FirestoreBackend()
