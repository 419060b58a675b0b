"""
Endpoints de Documentos gerados (procurações e recibos).
"""

from legalx.api.v1.crud import crud_router
from legalx.core.permissions import Modulo
from legalx.models.documento import Documento
from legalx.schemas.documento import DocumentoCreate, DocumentoUpdate

router = crud_router(
    prefix="/documentos",
    tag="Documentos",
    modulo=Modulo.DOCUMENTOS,
    repositorio=lambda store: store.documentos,
    model=Documento,
    create_schema=DocumentoCreate,
    update_schema=DocumentoUpdate,
    recurso="Documento",
)
