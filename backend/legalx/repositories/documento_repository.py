"""
Repository de Documentos gerados.
"""

from legalx.models.documento import Documento, DocumentoBase
from legalx.repositories.base import ScopedRepository


class DocumentoRepository(ScopedRepository[Documento]):
    collection = "documents"
    model = Documento
    base_model = DocumentoBase
    resource_name = "Documento"
